"""Shared utility functions for Crowd Maze."""

import hashlib
import json
import time
from datetime import datetime
from enum import Enum
from typing import Any


def generate_game_id(prefix: str = "maze") -> str:
    """Generate a unique game ID."""
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    random_suffix = hashlib.md5(str(time.time()).encode()).hexdigest()[:8]
    return f"{prefix}_{timestamp}_{random_suffix}"


def safe_json_dumps(obj: Any, **kwargs) -> str:
    """Safely dump object to JSON, handling datetime, enums and other non-serializable types."""

    def default_handler(o):
        if isinstance(o, datetime):
            return o.isoformat()
        if isinstance(o, Enum):
            return o.value
        if hasattr(o, "to_dict"):
            return o.to_dict()
        if hasattr(o, "__dict__"):
            return o.__dict__
        return str(o)

    return json.dumps(obj, default=default_handler, **kwargs)


def percentage(numerator: float, denominator: float, decimals: int = 2) -> float:
    """Calculate percentage with safe division."""
    if denominator == 0:
        return 0.0
    return round((numerator / denominator) * 100, decimals)


def format_duration(milliseconds: float) -> str:
    """Format a duration in milliseconds to a human-readable string."""
    seconds = milliseconds / 1000
    if seconds < 60:
        return f"{seconds:.1f}s"
    elif seconds < 3600:
        return f"{seconds / 60:.1f}m"
    else:
        return f"{seconds / 3600:.1f}h"
