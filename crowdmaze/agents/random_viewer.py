"""Viewer that chats and votes at random."""

import random
from typing import Any, Dict, Optional

from crowdmaze.agents.base_viewer import BaseViewer
from crowdmaze.core.types import DIRECTIONS, SenderID

CHATTER = [
    "hi chat",
    "what a cute cat",
    "where are the treats??",
    "lol",
    "this maze is huge",
]

VOTE_TEMPLATES = [
    "{direction}",
    "go {direction}!",
    "{DIRECTION} {DIRECTION} {DIRECTION}",
    "I think {direction} is the way",
]


class RandomViewer(BaseViewer):
    """Viewer that types at random.

    Useful as a baseline audience for headless sessions.
    """

    def __init__(
        self,
        viewer_id: SenderID,
        name: Optional[str] = None,
        seed: Optional[int] = None,
        chat_chance: float = 0.02,
        vote_chance: float = 0.8,
        misvote_chance: float = 0.1,
        config: Optional[Dict[str, Any]] = None,
    ):
        """Initialize random viewer.

        Args:
            viewer_id: Stable sender identifier
            name: Display name
            seed: Random seed for reproducibility
            chat_chance: Probability of typing anything on a given tick
            vote_chance: Probability that a message names a direction
            misvote_chance: Probability that a vote ignores the room's doors
            config: Additional configuration
        """
        super().__init__(viewer_id=viewer_id, name=name, config=config)
        self.rng = random.Random(seed)
        self.chat_chance = chat_chance
        self.vote_chance = vote_chance
        self.misvote_chance = misvote_chance

    def chat(self, observation: Dict[str, Any]) -> Optional[str]:
        if self.rng.random() >= self.chat_chance:
            return None

        if self.rng.random() >= self.vote_chance:
            return self.rng.choice(CHATTER)

        open_directions = observation.get("open_directions") or list(DIRECTIONS)
        if self.rng.random() < self.misvote_chance:
            direction = self.rng.choice(DIRECTIONS)
        else:
            direction = self.rng.choice(open_directions)

        template = self.rng.choice(VOTE_TEMPLATES)
        return template.format(direction=direction.value, DIRECTION=direction.value.upper())
