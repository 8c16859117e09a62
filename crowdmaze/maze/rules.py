"""Vote resolution and chat parsing rules."""

import random
import re
from typing import Dict, List, Optional

from crowdmaze.core.exceptions import LogicError
from crowdmaze.core.types import DIRECTIONS, Direction, DoorSet

DIRECTION_PATTERN = re.compile(r"\b(up|down|left|right)\b", re.IGNORECASE)


def parse_direction(message: str) -> Optional[Direction]:
    """Extract the first direction keyword from a chat message.

    Args:
        message: Raw chat text

    Returns:
        The first whole-word match of up/down/left/right, or None
    """
    match = DIRECTION_PATTERN.search(message or "")
    if not match:
        return None
    return Direction(match.group(1).lower())


def available_directions(doors: DoorSet) -> List[Direction]:
    """Directions that have a door, in fixed order."""
    return [d for d in DIRECTIONS if doors.get(d, False)]


def get_top_directions(counts: Dict[Direction, int], directions: List[Direction]) -> List[Direction]:
    """Get all directions sharing the highest count.

    Args:
        counts: Vote count per direction
        directions: Directions to consider

    Returns:
        Directions with the max count (empty if none given)
    """
    if not directions:
        return []

    max_count = max(counts.get(d, 0) for d in directions)
    return [d for d in directions if counts.get(d, 0) == max_count]


def resolve_direction(
    counts: Dict[Direction, int],
    doors: DoorSet,
    last_voted_direction: Optional[Direction],
    rng: random.Random,
) -> Direction:
    """Decide which way the player moves.

    Only directions with a door take part. With no votes on any of them the
    pick is uniform. A single leader wins outright; a tie goes to the most
    recently voted direction if it is among the leaders, otherwise to a
    uniform pick among them.

    Args:
        counts: Vote count per direction
        doors: Door set of the player's room
        last_voted_direction: Direction of the most recent accepted vote
        rng: Random source for the uniform picks

    Returns:
        Chosen direction

    Raises:
        LogicError: If the room has no doors
    """
    available = available_directions(doors)
    if not available:
        raise LogicError("Room has no doors to resolve a direction from")

    top_directions = get_top_directions(counts, available)
    if counts.get(top_directions[0], 0) == 0:
        return rng.choice(available)

    if len(top_directions) == 1:
        return top_directions[0]

    if last_voted_direction in top_directions:
        return last_voted_direction

    return rng.choice(top_directions)
