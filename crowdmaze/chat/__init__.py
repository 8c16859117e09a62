"""Chat ingestion for audience votes."""

from crowdmaze.chat.relay import ChatMessage, ChatRelay

__all__ = [
    "ChatMessage",
    "ChatRelay",
]
