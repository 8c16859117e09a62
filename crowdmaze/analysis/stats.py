"""Statistical analysis of finished games and vote resolutions."""

from typing import Any, Dict, List, Optional, Sequence

import numpy as np
import pandas as pd
from scipy import stats as scipy_stats

from crowdmaze.core.types import DIRECTIONS, Direction
from crowdmaze.logging.formats import EventType, LogEntry
from crowdmaze.maze.state import GameSummary


def games_to_frame(games: Sequence[GameSummary]) -> pd.DataFrame:
    """Build a DataFrame with one row per finished game."""
    rows = [game.to_dict() for game in games]
    return pd.DataFrame(rows, columns=["game_number", "outcome", "reason", "rounds_played", "moves_used"])


def summarize_games(games: Sequence[GameSummary]) -> Dict[str, Any]:
    """Aggregate win rate and game length statistics.

    Args:
        games: Summaries of finished games

    Returns:
        Dictionary of summary statistics
    """
    df = games_to_frame(games)
    if df.empty:
        return {
            "games_played": 0,
            "wins": 0,
            "losses": 0,
            "win_rate": 0.0,
            "mean_rounds": 0.0,
            "mean_moves_used": 0.0,
            "mean_moves_to_win": None,
        }

    won = df["outcome"] == "win"
    moves_to_win = df.loc[won, "moves_used"]

    return {
        "games_played": int(len(df)),
        "wins": int(won.sum()),
        "losses": int((~won).sum()),
        "win_rate": float(np.mean(won)),
        "mean_rounds": float(np.mean(df["rounds_played"])),
        "mean_moves_used": float(np.mean(df["moves_used"])),
        "mean_moves_to_win": float(np.mean(moves_to_win)) if len(moves_to_win) else None,
    }


def resolved_directions(entries: Sequence[LogEntry]) -> List[Direction]:
    """Pull the resolved move directions out of a game log."""
    return [
        Direction(entry.data["direction"])
        for entry in entries
        if entry.event_type == EventType.DIRECTION_RESOLVED
    ]


def direction_counts(directions: Sequence[Direction]) -> pd.Series:
    """Count how often each direction occurs, with zero rows for missing ones."""
    counts = pd.Series([d.value for d in directions], dtype="object").value_counts()
    return counts.reindex([d.value for d in DIRECTIONS], fill_value=0).astype(int)


def direction_uniformity(
    directions: Sequence[Direction],
    candidates: Optional[Sequence[Direction]] = None,
    confidence_level: float = 0.95,
) -> Dict[str, Any]:
    """Chi-square test that directions were picked uniformly.

    Args:
        directions: Observed picks
        candidates: Directions that could have been picked (all four if None)
        confidence_level: Confidence level for the test

    Returns:
        Observed frequencies, test statistic, p-value and whether the
        uniform hypothesis is rejected
    """
    candidates = list(candidates or DIRECTIONS)
    counts = direction_counts(directions)
    observed = np.array([counts[d.value] for d in candidates], dtype=float)
    total = observed.sum()

    if total == 0 or len(candidates) < 2:
        return {
            "frequencies": {d.value: 0.0 for d in candidates},
            "statistic": 0.0,
            "p_value": 1.0,
            "uniform_rejected": False,
        }

    statistic, p_value = scipy_stats.chisquare(observed)

    return {
        "frequencies": {d.value: float(n / total) for d, n in zip(candidates, observed)},
        "statistic": float(statistic),
        "p_value": float(p_value),
        "uniform_rejected": bool(p_value < (1 - confidence_level)),
    }


def format_uniformity(result: Dict[str, Any]) -> str:
    """One-line report of a direction_uniformity result."""
    frequencies = ", ".join(f"{d}={f:.0%}" for d, f in result["frequencies"].items())
    verdict = "not uniform" if result["uniform_rejected"] else "consistent with uniform"
    return (
        f"{frequencies} (chi2={result['statistic']:.2f}, "
        f"p={result['p_value']:.3f}, {verdict})"
    )
