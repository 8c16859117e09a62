"""Game logger for tracking maze events and votes."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional
from datetime import datetime

from crowdmaze.logging.formats import LogEntry, EventType
from crowdmaze.core.utils import generate_game_id


class GameLogger:
    """Logger for game events and votes.

    Keeps every entry in memory and, when an output directory is given,
    appends them to a JSON lines file named after the game ID.
    """

    def __init__(
        self,
        game_id: Optional[str] = None,
        output_dir: Optional[Path] = None,
        log_chat: bool = True,
        enabled: bool = True,
    ):
        """Initialize game logger.

        Args:
            game_id: Unique game identifier
            output_dir: Directory to save logs (None for memory-only)
            log_chat: Whether to log raw chat messages (default: True)
            enabled: Whether logging is enabled
        """
        self.game_id = game_id or generate_game_id()
        self.output_dir = Path(output_dir) if output_dir else None
        self.log_chat = log_chat
        self.enabled = enabled

        # In-memory log
        self.entries: List[LogEntry] = []

        # Current round number
        self.current_round = 0

        # Create output directory if needed
        if self.output_dir:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            self.log_file = self.output_dir / f"{self.game_id}.jsonl"
        else:
            self.log_file = None

    def log(
        self,
        event_type: EventType,
        data: Dict[str, Any],
        sender_id: Optional[str] = None,
        **metadata
    ) -> None:
        """Log an event.

        Args:
            event_type: Type of event
            data: Event data
            sender_id: Chat sender associated with event (if any)
            **metadata: Additional metadata
        """
        if not self.enabled:
            return

        if event_type == EventType.CHAT_MESSAGE and not self.log_chat:
            return

        entry = LogEntry(
            timestamp=datetime.now(),
            event_type=event_type,
            game_id=self.game_id,
            round_number=self.current_round,
            data=data,
            sender_id=sender_id,
            metadata=metadata
        )

        # Store in memory
        self.entries.append(entry)

        # Write to file if configured
        if self.log_file:
            self._write_to_file(entry)

    def _write_to_file(self, entry: LogEntry) -> None:
        """Append entry to the log file."""
        try:
            with open(self.log_file, 'a') as f:
                f.write(entry.to_json() + '\n')
        except OSError as e:
            print(f"Warning: Failed to write log entry: {e}")

    def log_game_start(self, config: Dict[str, Any]) -> None:
        """Log game start.

        Args:
            config: Game configuration
        """
        self.log(EventType.GAME_START, {"config": config})

    def log_game_end(self, outcome: str, reason: str, stats: Dict[str, Any]) -> None:
        """Log game end.

        Args:
            outcome: "win" or "loss"
            reason: Why the game ended
            stats: Game statistics
        """
        self.log(
            EventType.GAME_END,
            {"outcome": outcome, "reason": reason, "stats": stats}
        )

    def log_phase_change(self, old_phase: str, new_phase: str) -> None:
        """Log phase change.

        Args:
            old_phase: Previous phase
            new_phase: New phase
        """
        self.log(
            EventType.PHASE_CHANGE,
            {"old_phase": old_phase, "new_phase": new_phase}
        )

    def log_round_start(self, round_number: int) -> None:
        """Log round start and tag subsequent entries with it.

        Args:
            round_number: Round number
        """
        self.current_round = round_number
        self.log(EventType.ROUND_START, {"round": round_number})

    def log_vote(self, direction: str, accepted: bool, sender_id: Optional[str] = None) -> None:
        """Log a vote that was cast or rejected.

        Args:
            direction: Direction voted for
            accepted: Whether it changed the tally
            sender_id: Chat sender, if known
        """
        event_type = EventType.VOTE_CAST if accepted else EventType.VOTE_REJECTED
        self.log(event_type, {"direction": direction}, sender_id=sender_id)

    def log_error(self, error_type: str, message: str, details: Optional[Dict] = None) -> None:
        """Log error.

        Args:
            error_type: Type of error
            message: Error message
            details: Additional details
        """
        self.log(
            EventType.ERROR,
            {
                "error_type": error_type,
                "message": message,
                "details": details or {}
            }
        )

    def get_entries(
        self,
        event_type: Optional[EventType] = None,
        sender_id: Optional[str] = None,
    ) -> List[LogEntry]:
        """Get log entries with optional filtering.

        Args:
            event_type: Filter by event type
            sender_id: Filter by chat sender

        Returns:
            Filtered list of log entries
        """
        entries = self.entries

        if event_type:
            entries = [e for e in entries if e.event_type == event_type]

        if sender_id is not None:
            entries = [e for e in entries if e.sender_id == sender_id]

        return entries

    def export_to_json(self, filepath: Path) -> None:
        """Export logs to a JSON file.

        Args:
            filepath: Output file path
        """
        data = [entry.to_dict() for entry in self.entries]

        with open(filepath, 'w') as f:
            json.dump(data, f, indent=2)

    def get_stats(self) -> Dict[str, Any]:
        """Get logging statistics.

        Returns:
            Dictionary of statistics
        """
        return {
            "game_id": self.game_id,
            "total_entries": len(self.entries),
            "current_round": self.current_round,
            "event_type_counts": self._count_event_types(),
        }

    def _count_event_types(self) -> Dict[str, int]:
        """Count entries by event type."""
        counts = {}
        for entry in self.entries:
            event_name = entry.event_type.name
            counts[event_name] = counts.get(event_name, 0) + 1
        return counts
