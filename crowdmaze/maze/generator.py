"""Procedural map generation."""

import random
from typing import List, Optional

from crowdmaze.core.exceptions import GenerationError
from crowdmaze.core.types import DIRECTIONS, Direction
from crowdmaze.logging.formats import EventType
from crowdmaze.logging.game_logger import GameLogger
from crowdmaze.maze.config import MazeConfig, validate_grid_size
from crowdmaze.maze.grid import Grid
from crowdmaze.maze.rooms import Room, RoomVariant


class MapGenerator:
    """Builds a grid of rooms connected by doors.

    The start room sits away from the border with all four doors open. Every
    room gets at least ``min_doors`` doors, each mirrored on the neighbour,
    and the goal room is picked among the rooms whose door distance from the
    start lies in the requested band.
    """

    def __init__(self, rng: Optional[random.Random] = None, logger: Optional[GameLogger] = None):
        """Initialize generator.

        Args:
            rng: Random source (a fresh unseeded one if None)
            logger: Optional GameLogger instance
        """
        self.rng = rng or random.Random()
        self.logger = logger

    def generate_from_config(self, config: MazeConfig) -> Grid:
        """Generate a grid using the values of a MazeConfig."""
        return self.generate(
            config.grid_size_x,
            config.grid_size_y,
            config.min_goal_distance,
            config.max_goal_distance,
            min_doors=config.min_doors,
            litter_room_chance=config.litter_room_chance,
        )

    def generate(
        self,
        grid_size_x: int,
        grid_size_y: int,
        min_goal_distance: int,
        max_goal_distance: int,
        min_doors: int = 2,
        litter_room_chance: float = 0.0,
    ) -> Grid:
        """Generate a new map.

        Args:
            grid_size_x: Number of columns (4 or more)
            grid_size_y: Number of rows (3 or more)
            min_goal_distance: Smallest allowed start-to-goal door distance
            max_goal_distance: Largest allowed start-to-goal door distance
            min_doors: Doors each room must end up with where the border allows
            litter_room_chance: Probability of turning a plain room into a litter room

        Returns:
            Fully populated Grid

        Raises:
            ConfigurationError: If the grid is too small
            GenerationError: If no room lies in the goal distance band
        """
        validate_grid_size(grid_size_x, grid_size_y)

        grid = Grid(grid_size_x, grid_size_y)
        self._place_start_room(grid)
        self._fill_remaining_rooms(grid)
        self._add_doors(grid, min_doors)
        self._place_goal_room(grid, min_goal_distance, max_goal_distance)
        if litter_room_chance > 0:
            self._place_litter_rooms(grid, litter_room_chance)
        grid.update_visibility()

        if self.logger:
            self.logger.log(
                EventType.MAP_GENERATED,
                {
                    "grid_size": [grid_size_x, grid_size_y],
                    "start_room": [grid.start_room.x, grid.start_room.y],
                    "goal_room": [grid.goal_room.x, grid.goal_room.y],
                },
            )

        return grid

    def _place_start_room(self, grid: Grid) -> None:
        """Create the start room on an interior cell with every door open."""
        start_x = self.rng.randrange(1, grid.grid_size_x - 1)
        start_y = self.rng.randrange(1, grid.grid_size_y - 1)
        start_room = Room(x=start_x, y=start_y)
        for direction in DIRECTIONS:
            start_room.doors[direction] = True
        grid.set_room(start_room)
        grid.start_room = start_room
        grid.player_room = start_room

    def _fill_remaining_rooms(self, grid: Grid) -> None:
        for y in range(grid.grid_size_y):
            for x in range(grid.grid_size_x):
                if grid.get_room(x, y) is None:
                    grid.set_room(Room(x=x, y=y))

    def _add_doors(self, grid: Grid, min_doors: int) -> None:
        """Give each room its minimum doors and mirror them on the neighbours.

        Rooms are handled row by row; mirroring happens right after each room so
        later rooms count the doors they already inherited.
        """
        for room in list(grid.iter_rooms()):
            possible_directions = grid.get_possible_directions(room.x, room.y)
            doors = self._ensure_minimum_doors(room, possible_directions, min_doors)
            self._update_adjacent_rooms(grid, room, doors)

    def _ensure_minimum_doors(
        self,
        room: Room,
        possible_directions: List[Direction],
        min_doors: int,
    ) -> List[Direction]:
        """Open random doors until the room has min_doors or runs out of candidates.

        Returns:
            Every direction the room has a door in afterwards
        """
        current_doors = room.open_directions()
        remaining = [d for d in possible_directions if d not in current_doors]

        while len(current_doors) < min_doors and remaining:
            direction = self.rng.choice(remaining)
            remaining.remove(direction)
            room.doors[direction] = True
            current_doors.append(direction)

        return current_doors

    def _update_adjacent_rooms(self, grid: Grid, room: Room, doors: List[Direction]) -> None:
        for direction in doors:
            neighbour = grid.get_adjacent_room(room, direction)
            if neighbour is not None:
                neighbour.doors[direction.opposite] = True

    def _place_goal_room(self, grid: Grid, min_distance: int, max_distance: int) -> None:
        """Swap a room in the distance band for a goal room with the same doors."""
        candidates = grid.get_rooms_within_range(grid.start_room, min_distance, max_distance)
        if not candidates:
            if self.logger:
                self.logger.log_error(
                    "GenerationError",
                    "no eligible goal room",
                    {"min_goal_distance": min_distance, "max_goal_distance": max_distance},
                )
            raise GenerationError(
                "no eligible goal room",
                details={"min_goal_distance": min_distance, "max_goal_distance": max_distance},
            )

        chosen = self.rng.choice(candidates)
        goal_room = chosen.with_variant(RoomVariant.GOAL)
        grid.set_room(goal_room)
        grid.goal_room = goal_room

    def _place_litter_rooms(self, grid: Grid, chance: float) -> None:
        for room in list(grid.iter_rooms()):
            if room is grid.start_room or room is grid.goal_room:
                continue
            if self.rng.random() < chance:
                grid.set_room(room.with_variant(RoomVariant.LITTER))
