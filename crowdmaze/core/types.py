"""Common types and enums used across the game."""

from enum import Enum
from typing import Dict, Tuple


class Direction(Enum):
    """The four movement directions, also used as door keys."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def opposite(self) -> "Direction":
        """Direction pointing back the way this one came."""
        return _OPPOSITES[self]

    @property
    def delta(self) -> Tuple[int, int]:
        """Grid offset (dx, dy); y grows downwards."""
        return _DELTAS[self]


_OPPOSITES = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}

_DELTAS = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}

# Fixed iteration order for doors, BFS and resolution
DIRECTIONS = (Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT)


class RoundState(Enum):
    """Phases of a round, plus the absorbing game over state."""

    WAITING_FOR_VOTES = "waiting_for_votes"
    FINALIZING_VOTES = "finalizing_votes"
    PLAYER_LEAVING_ROOM = "player_leaving_room"
    PLAYER_ENTERING_ROOM = "player_entering_room"
    PLAYER_MOVING_TO_CENTER = "player_moving_to_center"
    GAME_OVER = "game_over"


class GameOutcome(Enum):
    """How a single game ended."""

    WIN = "win"
    LOSS = "loss"


# Type aliases for common patterns
DoorSet = Dict[Direction, bool]
Point = Tuple[float, float]
SenderID = str


def empty_doors() -> DoorSet:
    """Door set with all four doors closed."""
    return {direction: False for direction in DIRECTIONS}
