"""Analysis tools for finished sessions."""

from crowdmaze.analysis.stats import (
    direction_counts,
    direction_uniformity,
    games_to_frame,
    format_uniformity,
    resolved_directions,
    summarize_games,
)

__all__ = [
    "direction_counts",
    "direction_uniformity",
    "games_to_frame",
    "format_uniformity",
    "resolved_directions",
    "summarize_games",
]
