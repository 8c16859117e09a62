"""Round state machine driving the crowd maze."""

import random
import threading
from typing import Any, Callable, Dict, Optional, Tuple, Union

from crowdmaze.core.exceptions import LogicError
from crowdmaze.core.types import Direction, GameOutcome, RoundState
from crowdmaze.logging.formats import EventType
from crowdmaze.logging.game_logger import GameLogger
from crowdmaze.maze.avatar import Avatar, RoomGeometry
from crowdmaze.maze.config import GameConfig
from crowdmaze.maze.generator import MapGenerator
from crowdmaze.maze.grid import Grid
from crowdmaze.maze.rooms import Room, behaviour_for
from crowdmaze.maze.state import GameSummary, MazeState
from crowdmaze.maze.votes import VoteTally

VOTING_STATES = (RoundState.WAITING_FOR_VOTES, RoundState.FINALIZING_VOTES)
RoundKey = Tuple[int, int]


class RoundStateMachine:
    """Timed voting rounds that move the player from room to room.

    Each call to ``tick`` advances the phase timer and the avatar and performs
    at most one phase transition. Votes may arrive from other threads between
    ticks; a single re-entrant lock serialises them with the tick so that a
    resolution never sees a half-applied vote.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        grid: Optional[Grid] = None,
        grid_factory: Optional[Callable[[], Grid]] = None,
        rng: Optional[random.Random] = None,
        logger: Optional[GameLogger] = None,
    ):
        """Initialize the state machine and start the first round.

        Args:
            config: GameConfig instance
            grid: Pre-built map for the first game (generated if None)
            grid_factory: Builds a fresh map on every reset (defaults to a
                MapGenerator fed with ``config.maze``)
            rng: Random source shared by generation and vote resolution
            logger: Optional GameLogger instance
        """
        self.config = config or GameConfig()
        self.rng = rng or random.Random(self.config.seed)
        self.logger = logger

        if grid_factory is None:
            generator = MapGenerator(rng=self.rng, logger=logger)

            def grid_factory() -> Grid:
                return generator.generate_from_config(self.config.maze)

        self.grid_factory = grid_factory

        self.geometry = RoomGeometry(
            width=self.config.room_width,
            height=self.config.room_height,
            margin_x=self.config.margin_x,
            margin_y=self.config.margin_y,
        )
        self.avatar = Avatar(self.geometry, speed=self.config.player_speed)
        self.tally = VoteTally(rng=self.rng)
        self.state = MazeState(moves_remaining=self.config.moves_per_game)
        self._lock = threading.RLock()

        self.grid = grid if grid is not None else self.grid_factory()
        self.grid.update_visibility()

        if self.logger:
            self.logger.log_game_start(self.config.to_dict())

        self.start_round()

    # ------------------------------------------------------------------
    # Read-only accessors for renderers and the chat relay

    @property
    def current_state(self) -> RoundState:
        return self.state.current_state

    @property
    def round_timer(self) -> float:
        return self.state.round_timer

    @property
    def moves_remaining(self) -> int:
        return self.state.moves_remaining

    @property
    def wins(self) -> int:
        return self.state.wins

    @property
    def losses(self) -> int:
        return self.state.losses

    @property
    def game_over(self) -> bool:
        return self.state.game_over

    @property
    def player_room(self) -> Room:
        return self.grid.player_room

    @property
    def lock(self):
        """Re-entrant lock serialising votes with ticks."""
        return self._lock

    @property
    def round_key(self) -> RoundKey:
        """Identifies the current round across games."""
        return (self.state.game_number, self.state.round_number)

    def allow_voting(self) -> bool:
        """Whether votes are accepted right now."""
        return self.state.current_state in VOTING_STATES and not self.state.game_over

    def time_remaining(self) -> float:
        """Milliseconds left in the current timed phase (0 for untimed phases)."""
        durations = {
            RoundState.WAITING_FOR_VOTES: self.config.voting_duration,
            RoundState.FINALIZING_VOTES: self.config.voting_grace_period,
            RoundState.GAME_OVER: self.config.reset_duration,
        }
        duration = durations.get(self.state.current_state)
        if duration is None:
            return 0.0
        return max(0.0, duration - self.state.round_timer)

    def snapshot(self) -> Dict[str, Any]:
        """Consistent copy of everything a renderer needs."""
        with self._lock:
            return {
                "state": self.state.to_dict(),
                "time_remaining": self.time_remaining(),
                "votes": self.tally.to_dict(),
                "allow_voting": self.allow_voting(),
                "avatar": self.avatar.to_dict(),
                "grid": self.grid.to_dict(),
            }

    # ------------------------------------------------------------------
    # Votes

    def add_vote(self, direction: Union[Direction, str], sender_id: Optional[str] = None) -> bool:
        """Count a vote for the current round.

        Ignored while voting is closed or when the player's room has no door
        that way.

        Returns:
            True if the tally changed
        """
        direction = Direction(direction)
        with self._lock:
            accepted = self.allow_voting() and self.tally.add_vote(direction, self.grid.player_room.doors)
            if self.logger:
                self.logger.log_vote(direction.value, accepted, sender_id=sender_id)
            return accepted

    def cast_vote(
        self, direction: Union[Direction, str], sender_id: Optional[str] = None
    ) -> Tuple[bool, RoundKey]:
        """Count a vote and report the round it was counted against.

        Returns:
            Tuple of (accepted, round_key) read under the same lock
        """
        with self._lock:
            return self.add_vote(direction, sender_id=sender_id), self.round_key

    def add_count(self, direction: Union[Direction, str]) -> bool:
        """Manual vote from the operator's keyboard; same gating as add_vote."""
        return self.add_vote(direction, sender_id="operator")

    # ------------------------------------------------------------------
    # Game lifecycle

    def start_round(self) -> None:
        """Open a fresh voting round."""
        with self._lock:
            self.tally.reset()
            self.state.round_number += 1
            self.state.player_direction = None
            self._set_phase(RoundState.WAITING_FOR_VOTES)
            if self.logger:
                self.logger.log_round_start(self.state.round_number)

    def win_game(self, reason: str = "Reached the goal room") -> None:
        with self._lock:
            if self.state.game_over:
                return
            self.state.wins += 1
            self._end_game(GameOutcome.WIN, reason)

    def lose_game(self, reason: str = "Ran out of moves") -> None:
        with self._lock:
            if self.state.game_over:
                return
            self.state.losses += 1
            self._end_game(GameOutcome.LOSS, reason)

    def reset_game(self) -> None:
        """Generate a new map and start the next game.

        Raises:
            ConfigurationError: Propagated from the grid factory
            GenerationError: Propagated from the grid factory
        """
        with self._lock:
            self.grid = self.grid_factory()
            self.grid.update_visibility()
            self.state.moves_remaining = self.config.moves_per_game
            self.state.game_number += 1
            self.state.round_number = 0
            self.state.phase_history.clear()
            self.avatar.reset()
            if self.logger:
                self.logger.log_game_start(self.config.to_dict())
            self.start_round()

    def _end_game(self, outcome: GameOutcome, reason: str) -> None:
        summary = GameSummary(
            game_number=self.state.game_number,
            outcome=outcome,
            reason=reason,
            rounds_played=self.state.round_number,
            moves_used=self.config.moves_per_game - self.state.moves_remaining,
        )
        self.state.games.append(summary)
        self.state.player_direction = None
        self.avatar.reset()
        self._set_phase(RoundState.GAME_OVER)

        if self.logger:
            self.logger.log_game_end(outcome.value, reason, summary.to_dict())

    def _set_phase(self, phase: RoundState) -> None:
        old_phase = self.state.current_state
        self.state.set_phase(phase)
        if self.logger and old_phase != phase:
            self.logger.log_phase_change(old_phase.value, phase.value)

    # ------------------------------------------------------------------
    # Tick

    def tick(self, delta_ms: float) -> RoundState:
        """Advance time by one frame.

        Args:
            delta_ms: Milliseconds since the previous tick

        Returns:
            Phase after the tick

        Raises:
            LogicError: If a room transition cannot be carried out
        """
        with self._lock:
            self.state.round_timer += delta_ms
            phase = self.state.current_state

            if phase == RoundState.WAITING_FOR_VOTES:
                if self.state.round_timer >= self.config.voting_duration:
                    self._set_phase(RoundState.FINALIZING_VOTES)
            elif phase == RoundState.FINALIZING_VOTES:
                if self.state.round_timer >= self.config.voting_grace_period:
                    self._finalize_votes()
            elif phase == RoundState.PLAYER_LEAVING_ROOM:
                self._update_leaving(delta_ms)
            elif phase == RoundState.PLAYER_ENTERING_ROOM:
                self._update_entering(delta_ms)
            elif phase == RoundState.PLAYER_MOVING_TO_CENTER:
                if self.avatar.move_toward(self.geometry.center, delta_ms):
                    self.start_round()
            elif phase == RoundState.GAME_OVER:
                if self.state.round_timer >= self.config.reset_duration:
                    self.reset_game()

            return self.state.current_state

    def _finalize_votes(self) -> None:
        """Fix the move direction and start leaving the room."""
        direction = self.tally.resolve(self.grid.player_room.doors)
        self.state.player_direction = direction
        if self.logger:
            self.logger.log(
                EventType.DIRECTION_RESOLVED,
                {"direction": direction.value, "votes": self.tally.to_dict()},
            )

        self._set_phase(RoundState.PLAYER_LEAVING_ROOM)
        self.state.moves_remaining -= 1
        if self.state.moves_remaining <= 0:
            self.lose_game()

    def _update_leaving(self, delta_ms: float) -> None:
        direction = self.state.player_direction
        if direction is None:
            raise LogicError("No player direction while leaving the room")

        if self.avatar.move_toward(self.geometry.door_point(direction), delta_ms):
            self._change_room(direction)

    def _change_room(self, direction: Direction) -> None:
        """Walk through the door into the neighbouring room."""
        current = self.grid.player_room
        neighbour = self.grid.get_adjacent_room(current, direction)
        if neighbour is None or not current.has_door(direction):
            raise LogicError(
                "Resolved direction has no neighbouring room",
                details={"room": (current.x, current.y), "direction": direction.value},
            )

        behaviour_for(current).on_player_exit(self, current)
        self.grid.player_room = neighbour
        self.grid.update_visibility()
        self.avatar.place_at(self.geometry.door_point(direction.opposite))

        if self.logger:
            self.logger.log(
                EventType.PLAYER_MOVED,
                {"from": [current.x, current.y], "to": [neighbour.x, neighbour.y],
                 "direction": direction.value},
            )
            self.logger.log(
                EventType.ROOM_ENTERED,
                {"room": [neighbour.x, neighbour.y], "variant": neighbour.variant.value},
            )

        behaviour_for(neighbour).on_player_enter(self, neighbour)
        if not self.state.game_over:
            self._set_phase(RoundState.PLAYER_ENTERING_ROOM)

    def _update_entering(self, delta_ms: float) -> None:
        waypoint = self.avatar.waypoint
        if waypoint is not None:
            if not self.avatar.move_toward(waypoint, delta_ms):
                return
            self.avatar.waypoint = None
        self._set_phase(RoundState.PLAYER_MOVING_TO_CENTER)

    def __str__(self) -> str:
        return f"{self.__class__.__name__}({self.state})"
