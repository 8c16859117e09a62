"""Room entity and per-variant entry/exit behaviour."""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Callable, Dict, List

from crowdmaze.core.types import DIRECTIONS, Direction, DoorSet, empty_doors

if TYPE_CHECKING:
    from crowdmaze.maze.machine import RoundStateMachine


class RoomVariant(Enum):
    """Behavioural category of a room."""
    BASIC = "basic_room"
    GOAL = "goal_room"
    LITTER = "litter_room"


@dataclass(eq=False)
class Room:
    """A single room on the grid.

    Rooms compare by identity: the grid owns exactly one instance per cell.
    """
    x: int
    y: int
    doors: DoorSet = field(default_factory=empty_doors)
    variant: RoomVariant = RoomVariant.BASIC
    discovered: bool = False  # Seen through a door of the player's room
    visited: bool = False  # Occupied by the player at some point

    def has_door(self, direction: Direction) -> bool:
        """Check if the room has a door in the given direction."""
        return self.doors.get(direction, False)

    @property
    def door_count(self) -> int:
        return sum(1 for d in DIRECTIONS if self.doors[d])

    def open_directions(self) -> List[Direction]:
        """Directions with a door, in fixed UP/DOWN/LEFT/RIGHT order."""
        return [d for d in DIRECTIONS if self.doors[d]]

    def with_variant(self, variant: RoomVariant) -> "Room":
        """Create a replacement room of another variant with the same doors."""
        return Room(
            x=self.x,
            y=self.y,
            doors=dict(self.doors),
            variant=variant,
            discovered=self.discovered,
            visited=self.visited,
        )

    def to_dict(self) -> dict:
        return {
            "x": self.x,
            "y": self.y,
            "doors": {d.value: open_ for d, open_ in self.doors.items()},
            "variant": self.variant.value,
            "discovered": self.discovered,
            "visited": self.visited,
        }


RoomHook = Callable[["RoundStateMachine", Room], None]


@dataclass(frozen=True)
class RoomBehaviour:
    """Pair of hooks fired when the player enters or leaves a room."""
    on_player_enter: RoomHook
    on_player_exit: RoomHook


def _no_op(machine: "RoundStateMachine", room: Room) -> None:
    pass


def _enter_goal(machine: "RoundStateMachine", room: Room) -> None:
    machine.win_game()


def _enter_litter(machine: "RoundStateMachine", room: Room) -> None:
    # The cat has to visit the litter box before heading for the centre
    machine.avatar.waypoint = machine.geometry.litter_box_point


def _exit_litter(machine: "RoundStateMachine", room: Room) -> None:
    machine.avatar.waypoint = None


ROOM_BEHAVIOURS: Dict[RoomVariant, RoomBehaviour] = {
    RoomVariant.BASIC: RoomBehaviour(on_player_enter=_no_op, on_player_exit=_no_op),
    RoomVariant.GOAL: RoomBehaviour(on_player_enter=_enter_goal, on_player_exit=_no_op),
    RoomVariant.LITTER: RoomBehaviour(on_player_enter=_enter_litter, on_player_exit=_exit_litter),
}


def behaviour_for(room: Room) -> RoomBehaviour:
    """Look up the hooks for a room's variant."""
    return ROOM_BEHAVIOURS[room.variant]
