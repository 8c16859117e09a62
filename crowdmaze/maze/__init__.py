"""Crowd-controlled maze: map generation and the voting round state machine."""

from crowdmaze.maze.avatar import Avatar, RoomGeometry
from crowdmaze.maze.config import GameConfig, MazeConfig, load_config
from crowdmaze.maze.generator import MapGenerator
from crowdmaze.maze.grid import Grid
from crowdmaze.maze.machine import RoundStateMachine
from crowdmaze.maze.rooms import ROOM_BEHAVIOURS, Room, RoomBehaviour, RoomVariant
from crowdmaze.maze.rules import parse_direction, resolve_direction
from crowdmaze.maze.state import GameSummary, MazeState
from crowdmaze.maze.votes import VoteTally

__all__ = [
    "Avatar",
    "RoomGeometry",
    "GameConfig",
    "MazeConfig",
    "load_config",
    "MapGenerator",
    "Grid",
    "RoundStateMachine",
    "ROOM_BEHAVIOURS",
    "Room",
    "RoomBehaviour",
    "RoomVariant",
    "parse_direction",
    "resolve_direction",
    "GameSummary",
    "MazeState",
    "VoteTally",
]
