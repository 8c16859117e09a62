"""Custom exceptions for Crowd Maze."""


class CrowdMazeException(Exception):
    """Base exception for all Crowd Maze errors."""

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self):
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(CrowdMazeException):
    """Raised when configuration is invalid (e.g. grid too small)."""

    pass


class GenerationError(CrowdMazeException):
    """Raised when map generation cannot place a goal room.

    Fatal for the generation attempt. The generator never retries on its own;
    callers decide whether to try again.
    """

    pass


class LogicError(CrowdMazeException):
    """Raised when an internal invariant is violated.

    Always a programming or contract error, never triggered by chat input.
    """

    pass
