"""Core framework components for Crowd Maze."""

from crowdmaze.core.types import (
    DIRECTIONS,
    Direction,
    DoorSet,
    GameOutcome,
    RoundState,
    empty_doors,
)
from crowdmaze.core.exceptions import (
    CrowdMazeException,
    ConfigurationError,
    GenerationError,
    LogicError,
)
from crowdmaze.core.utils import generate_game_id, safe_json_dumps

__all__ = [
    "DIRECTIONS",
    "Direction",
    "DoorSet",
    "GameOutcome",
    "RoundState",
    "empty_doors",
    "CrowdMazeException",
    "ConfigurationError",
    "GenerationError",
    "LogicError",
    "generate_game_id",
    "safe_json_dumps",
]
