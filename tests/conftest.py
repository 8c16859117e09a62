"""Shared fixtures for the Crowd Maze test suite."""

from typing import Iterable, Optional, Tuple

import pytest

from crowdmaze.maze.config import GameConfig
from crowdmaze.maze.grid import Grid
from crowdmaze.maze.rooms import Room, RoomVariant


def make_lattice_grid(
    grid_size_x: int = 4,
    grid_size_y: int = 3,
    start: Tuple[int, int] = (1, 1),
    goal: Optional[Tuple[int, int]] = (3, 2),
    litter: Iterable[Tuple[int, int]] = (),
) -> Grid:
    """Grid where every room has a door to each in-grid neighbour."""
    grid = Grid(grid_size_x, grid_size_y)
    litter = set(litter)
    for y in range(grid_size_y):
        for x in range(grid_size_x):
            variant = RoomVariant.BASIC
            if (x, y) == goal:
                variant = RoomVariant.GOAL
            elif (x, y) in litter:
                variant = RoomVariant.LITTER
            room = Room(x=x, y=y, variant=variant)
            for direction in grid.get_possible_directions(x, y):
                room.doors[direction] = True
            grid.set_room(room)

    grid.start_room = grid.get_room(*start)
    grid.player_room = grid.start_room
    grid.goal_room = grid.get_room(*goal) if goal else None
    return grid


@pytest.fixture
def lattice_grid():
    return make_lattice_grid()


@pytest.fixture
def fast_config():
    """Short timings so state machine tests need few ticks."""
    return GameConfig(
        voting_duration=1000,
        voting_grace_period=200,
        reset_duration=500,
        moves_per_game=10,
        player_speed=300.0,
        seed=7,
    )


@pytest.fixture
def build_lattice():
    """Factory fixture for custom lattice grids."""
    return make_lattice_grid
