"""Base class for simulated chat viewers."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from crowdmaze.core.types import SenderID


class BaseViewer(ABC):
    """Abstract base class for simulated audience members.

    Viewers stand in for a live chat when running headless sessions. Every
    tick they may produce one chat message.
    """

    def __init__(
        self,
        viewer_id: SenderID,
        name: Optional[str] = None,
        config: Optional[Dict[str, Any]] = None,
    ):
        """Initialize viewer.

        Args:
            viewer_id: Stable sender identifier
            name: Display name shown next to messages
            config: Configuration dictionary for the viewer
        """
        self.viewer_id = viewer_id
        self.name = name or f"Viewer_{viewer_id}"
        self.config = config or {}

        self.message_history: List[str] = []

    @abstractmethod
    def chat(self, observation: Dict[str, Any]) -> Optional[str]:
        """Decide what to type this tick.

        Args:
            observation: Public game info (``allow_voting``,
                ``open_directions``, ``round_key``, ``time_remaining``)

        Returns:
            Message text, or None to stay quiet
        """
        pass

    def record_message(self, message: str) -> None:
        self.message_history.append(message)

    def reset(self) -> None:
        """Clear history for a new session."""
        self.message_history.clear()

    def get_stats(self) -> Dict[str, Any]:
        return {
            "viewer_id": self.viewer_id,
            "name": self.name,
            "total_messages": len(self.message_history),
        }

    def __str__(self) -> str:
        return f"{self.__class__.__name__}(id={self.viewer_id}, name={self.name})"

    def __repr__(self) -> str:
        return self.__str__()
