"""Avatar movement inside a single room."""

from dataclasses import dataclass
from typing import Optional

from crowdmaze.core.types import Direction, Point


@dataclass(frozen=True)
class RoomGeometry:
    """Pixel layout of the room drawing surface.

    Attributes:
        width: Surface width
        height: Surface height
        margin_x: Distance from the left/right edge to the walls
        margin_y: Distance from the top/bottom edge to the walls
    """
    width: int = 1280
    height: int = 720
    margin_x: int = 160
    margin_y: int = 120

    @property
    def center(self) -> Point:
        return (self.width * 0.5, self.height * 0.5)

    @property
    def litter_box_point(self) -> Point:
        """Spot in the top-left quarter of the floor holding the litter box."""
        floor_w = self.width - self.margin_x * 2
        floor_h = self.height - self.margin_y * 2
        return (self.margin_x + floor_w * 0.25, self.margin_y + floor_h * 0.25)

    def door_point(self, direction: Direction) -> Point:
        """Midpoint of the wall holding the door in a direction."""
        cx, cy = self.center
        if direction == Direction.UP:
            return (cx, float(self.margin_y))
        if direction == Direction.DOWN:
            return (cx, float(self.height - self.margin_y))
        if direction == Direction.LEFT:
            return (float(self.margin_x), cy)
        return (float(self.width - self.margin_x), cy)


class Avatar:
    """The player's sprite position and velocity.

    Positions are the sprite's centre in surface pixels. Speed is in pixels
    per second; ticks pass elapsed milliseconds.
    """

    def __init__(self, geometry: RoomGeometry, speed: float = 300.0):
        self.geometry = geometry
        self.speed = speed
        self.x, self.y = geometry.center
        self.vx = 0.0
        self.vy = 0.0
        self.waypoint: Optional[Point] = None

    @property
    def position(self) -> Point:
        return (self.x, self.y)

    def step_size(self, delta_ms: float) -> float:
        """Distance covered in one tick, also used as the arrival threshold."""
        return self.speed * delta_ms / 1000

    def move_toward(self, target: Point, delta_ms: float) -> bool:
        """Advance toward a target point.

        Args:
            target: Destination in surface pixels
            delta_ms: Elapsed time for this tick

        Returns:
            True once the avatar is within one step of the target on both
            axes, in which case it snaps onto the target
        """
        step = self.step_size(delta_ms)
        dx = target[0] - self.x
        dy = target[1] - self.y

        if abs(dx) <= step and abs(dy) <= step:
            self.x, self.y = target
            self.vx = self.vy = 0.0
            return True

        self.vx = _clamp(dx, step) / step if step else 0.0
        self.vy = _clamp(dy, step) / step if step else 0.0
        self.x += _clamp(dx, step)
        self.y += _clamp(dy, step)
        return False

    def place_at(self, point: Point) -> None:
        self.x, self.y = point
        self.vx = self.vy = 0.0

    def reset(self) -> None:
        """Return to the room centre and stop."""
        self.place_at(self.geometry.center)
        self.waypoint = None

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "vx": self.vx, "vy": self.vy}


def _clamp(value: float, limit: float) -> float:
    return max(-limit, min(limit, value))
