"""Per-player outcome statistics fed by table events."""

import threading
from dataclasses import asdict, dataclass

from blackjack.game.events import GameEvent
from blackjack.hand import Outcome


@dataclass
class PlayerStats:
    """Outcome tally for one player."""

    games_played: int = 0
    wins: int = 0
    losses: int = 0
    pushes: int = 0
    blackjacks: int = 0
    busts: int = 0

    @property
    def win_rate(self) -> float:
        """Fraction of games won."""
        if self.games_played == 0:
            return 0.0
        return self.wins / self.games_played

    def add(self, outcome: Outcome) -> None:
        """Count one finished game."""
        self.games_played += 1
        if outcome.player_won:
            self.wins += 1
        elif outcome.player_lost:
            self.losses += 1
        else:
            self.pushes += 1

        if outcome is Outcome.PLAYER_BLACKJACK:
            self.blackjacks += 1
        elif outcome is Outcome.PLAYER_BUST:
            self.busts += 1


class StatsRecorder:
    """In-memory statistics, keyed by player. Lost on restart."""

    def __init__(self) -> None:
        self._stats: dict[str, PlayerStats] = {}
        self._lock = threading.Lock()

    def record(self, event: GameEvent) -> None:
        """Handle a ROUND_ENDED event."""
        self.add(event.data["player_key"], event.data["outcome"])

    def add(self, player_key: str, outcome: Outcome) -> None:
        """Count a finished game for a player."""
        with self._lock:
            self._stats.setdefault(player_key, PlayerStats()).add(outcome)

    def for_player(self, player_key: str) -> PlayerStats:
        """Return a copy of the player's tally."""
        with self._lock:
            return PlayerStats(**asdict(self._stats.get(player_key, PlayerStats())))

    def summary(self) -> PlayerStats:
        """Totals across all players."""
        total = PlayerStats()
        with self._lock:
            for stats in self._stats.values():
                total.games_played += stats.games_played
                total.wins += stats.wins
                total.losses += stats.losses
                total.pushes += stats.pushes
                total.blackjacks += stats.blackjacks
                total.busts += stats.busts
        return total

    @property
    def players(self) -> int:
        """Number of players with at least one finished game."""
        with self._lock:
            return len(self._stats)
