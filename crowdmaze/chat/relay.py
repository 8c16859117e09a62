"""Turns raw chat messages into at most one vote per sender and round."""

from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Set

from crowdmaze.core.types import Direction, SenderID
from crowdmaze.logging.formats import EventType
from crowdmaze.logging.game_logger import GameLogger
from crowdmaze.maze.machine import RoundKey, RoundStateMachine
from crowdmaze.maze.rules import parse_direction


@dataclass
class ChatMessage:
    """A chat line as shown in the overlay.

    ``accepted`` tells whether the message counted toward this round's vote.
    """
    sender_id: SenderID
    message: str
    display_name: Optional[str] = None
    direction: Optional[Direction] = None
    accepted: bool = False
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sender_id": self.sender_id,
            "display_name": self.display_name,
            "message": self.message,
            "direction": self.direction.value if self.direction else None,
            "accepted": self.accepted,
            "timestamp": self.timestamp.isoformat(),
        }


class ChatRelay:
    """Feeds chat messages into a RoundStateMachine.

    Each sender gets one accepted vote per round; acceptance re-arms for
    everyone as soon as the machine starts a new round. A bounded history of
    recent messages is kept for display.
    """

    def __init__(
        self,
        machine: RoundStateMachine,
        max_chats: int = 20,
        logger: Optional[GameLogger] = None,
    ):
        """Initialize relay.

        Args:
            machine: State machine receiving the votes
            max_chats: Number of recent messages to keep
            logger: Optional GameLogger instance
        """
        self.machine = machine
        self.logger = logger
        self.chats: deque = deque(maxlen=max_chats)
        self._accepted_senders: Set[SenderID] = set()
        self._round_key = machine.round_key

    def receive(
        self,
        sender_id: SenderID,
        message: str,
        display_name: Optional[str] = None,
    ) -> ChatMessage:
        """Handle one incoming chat message.

        Args:
            sender_id: Stable identifier of the sender
            message: Raw chat text
            display_name: Name to show in the overlay

        Returns:
            The recorded ChatMessage
        """
        # No round can start between the sender check and the count
        with self.machine.lock:
            self._sync_round(self.machine.round_key)

            direction = parse_direction(message)
            accepted = False
            if direction is not None and sender_id not in self._accepted_senders:
                accepted, round_key = self.machine.cast_vote(direction, sender_id=sender_id)
                self._sync_round(round_key)
            if accepted:
                self._accepted_senders.add(sender_id)

            chat = ChatMessage(
                sender_id=sender_id,
                message=message,
                display_name=display_name,
                direction=direction,
                accepted=accepted,
            )
            self.chats.append(chat)

        if self.logger:
            self.logger.log(EventType.CHAT_MESSAGE, chat.to_dict(), sender_id=sender_id)

        return chat

    def has_voted(self, sender_id: SenderID) -> bool:
        """Check if a sender already has an accepted vote this round."""
        with self.machine.lock:
            self._sync_round(self.machine.round_key)
            return sender_id in self._accepted_senders

    def recent_chats(self) -> List[ChatMessage]:
        return list(self.chats)

    def reset(self) -> None:
        """Forget every accepted sender."""
        with self.machine.lock:
            self._accepted_senders.clear()
            self._round_key = self.machine.round_key

    def _sync_round(self, round_key: RoundKey) -> None:
        if round_key != self._round_key:
            self._accepted_senders.clear()
            self._round_key = round_key
