"""Tests for room geometry and avatar movement."""

import pytest

from crowdmaze.core.types import Direction
from crowdmaze.maze.avatar import Avatar, RoomGeometry


@pytest.fixture
def geometry():
    return RoomGeometry()


def test_geometry_points(geometry):
    assert geometry.center == (640.0, 360.0)
    assert geometry.door_point(Direction.UP) == (640.0, 120.0)
    assert geometry.door_point(Direction.DOWN) == (640.0, 600.0)
    assert geometry.door_point(Direction.LEFT) == (160.0, 360.0)
    assert geometry.door_point(Direction.RIGHT) == (1120.0, 360.0)
    assert geometry.litter_box_point == (400.0, 240.0)


def test_avatar_starts_at_centre(geometry):
    avatar = Avatar(geometry)
    assert avatar.position == geometry.center
    assert avatar.waypoint is None


def test_step_size():
    avatar = Avatar(RoomGeometry(), speed=300.0)
    assert avatar.step_size(100) == pytest.approx(30.0)
    assert avatar.step_size(0) == 0


def test_move_toward_snaps_on_arrival(geometry):
    avatar = Avatar(geometry, speed=300.0)

    assert avatar.move_toward((700.0, 360.0), 100) is False
    assert avatar.position == (670.0, 360.0)
    assert avatar.vx == 1.0
    assert avatar.vy == 0.0

    assert avatar.move_toward((700.0, 360.0), 100) is True
    assert avatar.position == (700.0, 360.0)
    assert (avatar.vx, avatar.vy) == (0.0, 0.0)


def test_walk_to_door_takes_expected_ticks(geometry):
    avatar = Avatar(geometry, speed=300.0)
    target = geometry.door_point(Direction.RIGHT)

    ticks = 1
    while not avatar.move_toward(target, 100):
        ticks += 1
    assert ticks == 16
    assert avatar.position == target


def test_diagonal_movement_clamps_each_axis(geometry):
    avatar = Avatar(geometry, speed=300.0)
    avatar.move_toward((0.0, 0.0), 100)
    assert avatar.position == (610.0, 330.0)
    assert (avatar.vx, avatar.vy) == (-1.0, -1.0)


def test_reset_clears_waypoint(geometry):
    avatar = Avatar(geometry)
    avatar.place_at((10.0, 20.0))
    avatar.waypoint = geometry.litter_box_point
    avatar.reset()

    assert avatar.position == geometry.center
    assert avatar.waypoint is None
