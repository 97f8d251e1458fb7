"""Exception types raised by the session engine and config loader."""


class RelayError(Exception):
    """Base for all gamerelay errors."""


class GameNotJoinable(RelayError):
    """Join against a missing or full session."""

    def __init__(self, session_id: str, message: str = "Game not found or is full.") -> None:
        super().__init__(message)
        self.session_id = session_id
        self.message = message


class ConfigError(RelayError):
    """Invalid server configuration."""
