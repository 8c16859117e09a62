"""Log formats and data structures."""

from enum import Enum, auto
from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from datetime import datetime

from crowdmaze.core.utils import safe_json_dumps


class EventType(Enum):
    """Types of loggable events."""

    # Game lifecycle
    GAME_START = auto()
    GAME_END = auto()
    MAP_GENERATED = auto()
    PHASE_CHANGE = auto()
    ROUND_START = auto()

    # Audience
    CHAT_MESSAGE = auto()
    VOTE_CAST = auto()
    VOTE_REJECTED = auto()
    DIRECTION_RESOLVED = auto()

    # Player progression
    PLAYER_MOVED = auto()
    ROOM_ENTERED = auto()

    # System events
    ERROR = auto()
    WARNING = auto()


@dataclass
class LogEntry:
    """Single log entry."""

    timestamp: datetime
    event_type: EventType
    game_id: str
    round_number: int
    data: Dict[str, Any] = field(default_factory=dict)
    sender_id: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.name,
            "game_id": self.game_id,
            "round_number": self.round_number,
            "data": self.data,
            "sender_id": self.sender_id,
            "metadata": self.metadata,
        }

    def to_json(self) -> str:
        """Convert to JSON string."""
        return safe_json_dumps(self.to_dict())

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LogEntry":
        """Create from dictionary."""
        data = data.copy()
        data["timestamp"] = datetime.fromisoformat(data["timestamp"])
        data["event_type"] = EventType[data["event_type"]]
        return cls(**data)
