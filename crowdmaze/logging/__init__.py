"""Structured event logging for Crowd Maze."""

from crowdmaze.logging.game_logger import GameLogger
from crowdmaze.logging.formats import LogEntry, EventType

__all__ = [
    "GameLogger",
    "LogEntry",
    "EventType",
]
