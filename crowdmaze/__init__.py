"""Crowd Maze - a maze game steered by chat votes."""

__version__ = "0.1.0"

from crowdmaze.core.types import Direction, RoundState
from crowdmaze.core.exceptions import (
    CrowdMazeException,
    ConfigurationError,
    GenerationError,
    LogicError,
)
from crowdmaze.maze import (
    GameConfig,
    Grid,
    MapGenerator,
    MazeConfig,
    Room,
    RoomVariant,
    RoundStateMachine,
    VoteTally,
)
from crowdmaze.chat import ChatRelay

__all__ = [
    "__version__",
    "Direction",
    "RoundState",
    "CrowdMazeException",
    "ConfigurationError",
    "GenerationError",
    "LogicError",
    "GameConfig",
    "Grid",
    "MapGenerator",
    "MazeConfig",
    "Room",
    "RoomVariant",
    "RoundStateMachine",
    "VoteTally",
    "ChatRelay",
]
