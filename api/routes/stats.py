"""Statistics API endpoints."""

from fastapi import APIRouter, Depends
from typing import Annotated

from api.schemas import StatsResponse, StatsSummaryResponse
from api.session import get_player_key, get_stats
from api.stats import PlayerStats, StatsRecorder

router = APIRouter()

Recorder = Annotated[StatsRecorder, Depends(get_stats)]


def _stats_to_response(stats: PlayerStats) -> StatsResponse:
    return StatsResponse(
        games_played=stats.games_played,
        wins=stats.wins,
        losses=stats.losses,
        pushes=stats.pushes,
        blackjacks=stats.blackjacks,
        busts=stats.busts,
        win_rate=stats.win_rate,
    )


@router.get("")
async def player_stats(
    recorder: Recorder,
    player_key: Annotated[str, Depends(get_player_key)],
) -> StatsResponse:
    """Get the calling player's outcome statistics."""
    return _stats_to_response(recorder.for_player(player_key))


@router.get("/summary")
async def stats_summary(recorder: Recorder) -> StatsSummaryResponse:
    """Get outcome statistics across all players."""
    response = _stats_to_response(recorder.summary())
    return StatsSummaryResponse(**response.model_dump(), players=recorder.players)
