"""Round state for the crowd maze."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from crowdmaze.core.types import Direction, GameOutcome, RoundState


@dataclass
class GameSummary:
    """Result of one finished game."""
    game_number: int
    outcome: GameOutcome
    reason: str
    rounds_played: int
    moves_used: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "game_number": self.game_number,
            "outcome": self.outcome.value,
            "reason": self.reason,
            "rounds_played": self.rounds_played,
            "moves_used": self.moves_used,
        }


@dataclass
class MazeState:
    """Mutable counters of the round state machine.

    Attributes:
        current_state: Active phase
        round_timer: Milliseconds since the active phase was entered
        moves_remaining: Moves left before the game is lost
        wins: Games won since start-up
        losses: Games lost since start-up
        game_number: Current game (1-indexed)
        round_number: Current round within the game (1-indexed)
        player_direction: Direction resolved for the move in progress
        phase_history: Phases entered so far in the current game
        games: Summaries of every finished game
    """
    current_state: RoundState = RoundState.WAITING_FOR_VOTES
    round_timer: float = 0.0
    moves_remaining: int = 0
    wins: int = 0
    losses: int = 0
    game_number: int = 1
    round_number: int = 0
    player_direction: Optional[Direction] = None
    phase_history: List[RoundState] = field(default_factory=list)
    games: List[GameSummary] = field(default_factory=list)

    @property
    def game_over(self) -> bool:
        return self.current_state == RoundState.GAME_OVER

    def set_phase(self, phase: RoundState) -> None:
        """Enter a phase and restart the phase timer."""
        self.phase_history.append(self.current_state)
        self.current_state = phase
        self.round_timer = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "current_state": self.current_state.value,
            "round_timer": self.round_timer,
            "moves_remaining": self.moves_remaining,
            "wins": self.wins,
            "losses": self.losses,
            "game_number": self.game_number,
            "round_number": self.round_number,
            "player_direction": self.player_direction.value if self.player_direction else None,
        }

    def __str__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"phase={self.current_state.name}, "
            f"game={self.game_number}, "
            f"round={self.round_number}, "
            f"moves_left={self.moves_remaining})"
        )
