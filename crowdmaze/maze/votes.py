"""Per-round vote tally."""

import random
from typing import Dict, Optional, Union

from crowdmaze.core.types import DIRECTIONS, Direction, DoorSet
from crowdmaze.maze.rules import resolve_direction


class VoteTally:
    """Counts directional votes for one round.

    Remembers the direction of the latest accepted vote, which settles ties
    in favour of the most recent contributor.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        """Initialize tally.

        Args:
            rng: Random source for uniform picks (a fresh one if None)
        """
        self.rng = rng or random.Random()
        self.counts: Dict[Direction, int] = {d: 0 for d in DIRECTIONS}
        self.last_voted_direction: Optional[Direction] = None

    def add_vote(self, direction: Union[Direction, str], doors: Optional[DoorSet] = None) -> bool:
        """Count a vote.

        Args:
            direction: Direction voted for (enum or its string value)
            doors: Door set of the player's room; votes for a missing door are ignored

        Returns:
            True if the tally changed
        """
        direction = Direction(direction)
        if doors is not None and not doors.get(direction, False):
            return False

        self.counts[direction] += 1
        self.last_voted_direction = direction
        return True

    def resolve(self, doors: DoorSet) -> Direction:
        """Pick the winning direction among the doors of the player's room.

        Raises:
            LogicError: If the door set is empty
        """
        return resolve_direction(self.counts, doors, self.last_voted_direction, self.rng)

    def reset(self) -> None:
        """Clear all counts for a new round."""
        for direction in DIRECTIONS:
            self.counts[direction] = 0
        self.last_voted_direction = None

    @property
    def total_votes(self) -> int:
        return sum(self.counts.values())

    def to_dict(self) -> Dict[str, int]:
        return {d.value: count for d, count in self.counts.items()}

    def __str__(self) -> str:
        counts = ", ".join(f"{d.value}={c}" for d, c in self.counts.items())
        return f"VoteTally({counts})"
