"""Errors raised by the blackjack table."""


class BlackjackError(Exception):
    """Base class for blackjack table errors."""


class SessionAlreadyActive(BlackjackError):
    """The player already has a game in progress."""

    def __init__(self, player_key: str) -> None:
        super().__init__(f"Player {player_key!r} already has a game in progress")
        self.player_key = player_key


class NoActiveSession(BlackjackError):
    """The player has no game in progress."""

    def __init__(self, player_key: str) -> None:
        super().__init__(f"Player {player_key!r} has no game in progress")
        self.player_key = player_key
