"""Headless game sessions driven by simulated viewers."""

import random
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from tenacity import retry, retry_if_exception_type, stop_after_attempt

from crowdmaze.agents.base_viewer import BaseViewer
from crowdmaze.chat.relay import ChatRelay
from crowdmaze.core.exceptions import GenerationError
from crowdmaze.core.types import GameOutcome
from crowdmaze.core.utils import generate_game_id
from crowdmaze.logging.formats import EventType
from crowdmaze.logging.game_logger import GameLogger
from crowdmaze.maze.config import GameConfig
from crowdmaze.maze.generator import MapGenerator
from crowdmaze.maze.grid import Grid
from crowdmaze.maze.machine import RoundStateMachine
from crowdmaze.maze.state import GameSummary

MAX_GENERATION_ATTEMPTS = 5


@dataclass
class SessionResult:
    """Outcome of a headless session."""
    session_id: str
    games: List[GameSummary] = field(default_factory=list)
    ticks: int = 0
    simulated_ms: float = 0.0
    duration_seconds: float = 0.0

    @property
    def wins(self) -> int:
        return sum(1 for g in self.games if g.outcome == GameOutcome.WIN)

    @property
    def losses(self) -> int:
        return sum(1 for g in self.games if g.outcome == GameOutcome.LOSS)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "session_id": self.session_id,
            "games": [g.to_dict() for g in self.games],
            "wins": self.wins,
            "losses": self.losses,
            "ticks": self.ticks,
            "simulated_ms": self.simulated_ms,
            "duration_seconds": self.duration_seconds,
        }


class GameSession:
    """Runs the state machine on a fixed-step clock with a simulated chat.

    This is integration code around the core: it owns the map generator (and
    retries generation when no goal room fits), the chat relay and the
    viewers.
    """

    def __init__(
        self,
        viewers: List[BaseViewer],
        config: Optional[GameConfig] = None,
        logger: Optional[GameLogger] = None,
        tick_ms: float = 50.0,
        session_id: Optional[str] = None,
    ):
        """Initialize session.

        Args:
            viewers: Simulated audience
            config: GameConfig instance
            logger: GameLogger instance (an in-memory one if None)
            tick_ms: Simulated milliseconds per tick
            session_id: Identifier for this session (auto-generated if None)
        """
        self.viewers = viewers
        self.config = config or GameConfig()
        self.session_id = session_id or generate_game_id("session")
        self.logger = logger or GameLogger(game_id=self.session_id)
        self.tick_ms = tick_ms

        self.rng = random.Random(self.config.seed)
        self.generator = MapGenerator(rng=self.rng, logger=self.logger)
        self.machine = RoundStateMachine(
            config=self.config,
            grid_factory=self._generate_grid,
            rng=self.rng,
            logger=self.logger,
        )
        self.relay = ChatRelay(self.machine, logger=self.logger)

    @retry(
        stop=stop_after_attempt(MAX_GENERATION_ATTEMPTS),
        retry=retry_if_exception_type(GenerationError),
        reraise=True,
    )
    def _generate_grid(self) -> Grid:
        """Generate a map, trying again with fresh randomness if no goal fits."""
        return self.generator.generate_from_config(self.config.maze)

    def _observation(self) -> Dict[str, Any]:
        return {
            "allow_voting": self.machine.allow_voting(),
            "open_directions": self.machine.player_room.open_directions(),
            "round_key": self.machine.round_key,
            "time_remaining": self.machine.time_remaining(),
        }

    def _feed_chat(self) -> None:
        observation = self._observation()
        for viewer in self.viewers:
            message = viewer.chat(observation)
            if message is None:
                continue
            viewer.record_message(message)
            self.relay.receive(viewer.viewer_id, message, display_name=viewer.name)

    def run(self, n_games: int = 1, max_ticks: int = 1_000_000) -> SessionResult:
        """Play until n_games more games have finished.

        Args:
            n_games: Number of games to finish
            max_ticks: Safety limit on the number of ticks

        Returns:
            SessionResult with the summaries of the games finished in this run
        """
        start_time = time.time()
        already_finished = len(self.machine.state.games)
        target = already_finished + n_games

        ticks = 0
        while len(self.machine.state.games) < target and ticks < max_ticks:
            self._feed_chat()
            self.machine.tick(self.tick_ms)
            ticks += 1

        if len(self.machine.state.games) < target:
            self.logger.log(
                EventType.WARNING,
                {"message": "Tick limit reached", "max_ticks": max_ticks},
            )

        return SessionResult(
            session_id=self.session_id,
            games=list(self.machine.state.games[already_finished:]),
            ticks=ticks,
            simulated_ms=ticks * self.tick_ms,
            duration_seconds=time.time() - start_time,
        )
