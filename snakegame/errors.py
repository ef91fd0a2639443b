class SnakeGameError(Exception):
    """Base class for game-engine errors."""


class BoardFullError(SnakeGameError):
    """No free cell could be found for a spawn."""


class InvalidModeError(SnakeGameError, ValueError):
    """Raised when a mode name is not one of the known rulesets."""
