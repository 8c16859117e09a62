"""Room grid with door-based adjacency.

This module provides the spatial graph of the maze: a fixed-size 2D array of
rooms, neighbour lookup through doors, breadth-first distance queries and the
visited/discovered bookkeeping used by the minimap.
"""

from collections import deque
from typing import Dict, Iterator, List, Optional, Tuple

from crowdmaze.core.types import DIRECTIONS, Direction
from crowdmaze.maze.rooms import Room, RoomVariant


class Grid:
    """Owns every room of one generated map.

    Features:
    - Row-major room storage (``rooms[y][x]``)
    - Adjacency by grid position and by door
    - BFS distances over door edges
    - References to the start, player and goal rooms
    """

    def __init__(self, grid_size_x: int, grid_size_y: int):
        """Initialize an empty grid.

        Args:
            grid_size_x: Number of columns
            grid_size_y: Number of rows
        """
        self.grid_size_x = grid_size_x
        self.grid_size_y = grid_size_y
        self.rooms: List[List[Optional[Room]]] = [
            [None for _ in range(grid_size_x)] for _ in range(grid_size_y)
        ]
        self.start_room: Optional[Room] = None
        self.player_room: Optional[Room] = None
        self.goal_room: Optional[Room] = None

    def get_room(self, x: int, y: int) -> Optional[Room]:
        """Get the room at a cell, or None outside the grid."""
        if 0 <= x < self.grid_size_x and 0 <= y < self.grid_size_y:
            return self.rooms[y][x]
        return None

    def set_room(self, room: Room) -> None:
        """Place a room at its own coordinates, replacing whatever was there.

        Start, player and goal references follow the replacement.
        """
        previous = self.rooms[room.y][room.x]
        self.rooms[room.y][room.x] = room
        if previous is not None:
            if self.start_room is previous:
                self.start_room = room
            if self.player_room is previous:
                self.player_room = room
            if self.goal_room is previous:
                self.goal_room = room

    def iter_rooms(self) -> Iterator[Room]:
        """Iterate over all placed rooms in row-major order."""
        for row in self.rooms:
            for room in row:
                if room is not None:
                    yield room

    def is_outside_grid(self, x: int, y: int, direction: Direction) -> bool:
        """Check if the cell next to (x, y) in a direction is off the grid."""
        return (
            (direction == Direction.UP and y == 0)
            or (direction == Direction.DOWN and y == self.grid_size_y - 1)
            or (direction == Direction.LEFT and x == 0)
            or (direction == Direction.RIGHT and x == self.grid_size_x - 1)
        )

    def get_possible_directions(self, x: int, y: int) -> List[Direction]:
        """Get the directions that do not point outside the grid."""
        return [d for d in DIRECTIONS if not self.is_outside_grid(x, y, d)]

    def get_adjacent_room(self, room: Room, direction: Direction) -> Optional[Room]:
        """Get the grid neighbour of a room, ignoring doors."""
        dx, dy = direction.delta
        return self.get_room(room.x + dx, room.y + dy)

    def get_connected_rooms(self, room: Room) -> List[Tuple[Direction, Room]]:
        """Get neighbours reachable through the room's doors.

        Args:
            room: Room to look around

        Returns:
            List of (direction, neighbour) pairs
        """
        connected = []
        for direction in room.open_directions():
            neighbour = self.get_adjacent_room(room, direction)
            if neighbour is not None:
                connected.append((direction, neighbour))
        return connected

    def distances_from(self, start: Room, max_distance: Optional[int] = None) -> Dict[Room, int]:
        """Breadth-first search over door edges.

        Args:
            start: Room to measure from
            max_distance: Stop expanding beyond this depth (None explores everything)

        Returns:
            Mapping of every reached room to its shortest door distance
        """
        distances = {start: 0}
        queue = deque([start])

        while queue:
            room = queue.popleft()
            distance = distances[room]
            if max_distance is not None and distance >= max_distance:
                continue
            for _, neighbour in self.get_connected_rooms(room):
                if neighbour not in distances:
                    distances[neighbour] = distance + 1
                    queue.append(neighbour)

        return distances

    def get_rooms_within_range(self, start: Room, min_distance: int, max_distance: int) -> List[Room]:
        """Get rooms whose BFS distance from start lies in [min_distance, max_distance].

        Rooms are returned in BFS discovery order so that a seeded choice among
        them is reproducible.
        """
        distances = self.distances_from(start, max_distance=max_distance)
        return [room for room, d in distances.items() if min_distance <= d <= max_distance]

    def update_visibility(self) -> None:
        """Mark the player room visited and discover rooms behind its doors."""
        if self.player_room is None:
            return
        self.player_room.visited = True
        for _, neighbour in self.get_connected_rooms(self.player_room):
            neighbour.discovered = True

    def to_dict(self) -> dict:
        """Read-only view for renderers."""
        return {
            "grid_size_x": self.grid_size_x,
            "grid_size_y": self.grid_size_y,
            "rooms": [[room.to_dict() if room else None for room in row] for row in self.rooms],
            "player_room": (self.player_room.x, self.player_room.y) if self.player_room else None,
            "goal_room": (self.goal_room.x, self.goal_room.y) if self.goal_room else None,
        }

    def to_ascii(self, reveal: bool = True) -> str:
        """Render a text minimap.

        ``@`` is the player, ``G`` the goal, ``L`` a litter room and ``.`` a
        visited room. With ``reveal=False`` undiscovered rooms stay blank.
        """
        lines = []
        for y in range(self.grid_size_y):
            top = ""
            middle = ""
            for x in range(self.grid_size_x):
                room = self.rooms[y][x]
                top += "+" + ("  " if room and room.has_door(Direction.UP) else "--")
                middle += (" " if room and room.has_door(Direction.LEFT) else "|")
                middle += self._symbol(room, reveal)
            lines.append(top + "+")
            last = self.rooms[y][self.grid_size_x - 1]
            lines.append(middle + (" " if last and last.has_door(Direction.RIGHT) else "|"))
        lines.append("+--" * self.grid_size_x + "+")
        return "\n".join(lines)

    def _symbol(self, room: Optional[Room], reveal: bool) -> str:
        if room is None:
            return "??"
        if room is self.player_room:
            return "@ "
        if not reveal and not (room.visited or room.discovered):
            return "  "
        if room.variant == RoomVariant.GOAL:
            return "G "
        if room.variant == RoomVariant.LITTER:
            return "L "
        if room.visited:
            return ". "
        return "  "

    def __str__(self) -> str:
        return f"Grid({self.grid_size_x}x{self.grid_size_y})"
