"""Tests for session statistics."""

import pytest

from crowdmaze.analysis.stats import (
    direction_counts,
    direction_uniformity,
    format_uniformity,
    games_to_frame,
    resolved_directions,
    summarize_games,
)
from crowdmaze.core.types import Direction, GameOutcome
from crowdmaze.logging import EventType, GameLogger
from crowdmaze.maze.state import GameSummary


def make_games():
    return [
        GameSummary(1, GameOutcome.WIN, "Reached the goal room", rounds_played=4, moves_used=4),
        GameSummary(2, GameOutcome.LOSS, "Ran out of moves", rounds_played=10, moves_used=10),
        GameSummary(3, GameOutcome.WIN, "Reached the goal room", rounds_played=6, moves_used=6),
    ]


def test_games_to_frame():
    df = games_to_frame(make_games())
    assert list(df["outcome"]) == ["win", "loss", "win"]
    assert len(df) == 3


def test_summarize_games():
    summary = summarize_games(make_games())
    assert summary["games_played"] == 3
    assert summary["wins"] == 2
    assert summary["losses"] == 1
    assert summary["win_rate"] == pytest.approx(2 / 3)
    assert summary["mean_rounds"] == pytest.approx(20 / 3)
    assert summary["mean_moves_to_win"] == pytest.approx(5.0)


def test_summarize_no_games():
    summary = summarize_games([])
    assert summary["games_played"] == 0
    assert summary["mean_moves_to_win"] is None


def test_resolved_directions_from_log():
    logger = GameLogger()
    logger.log(EventType.DIRECTION_RESOLVED, {"direction": "up", "votes": {}})
    logger.log_vote("down", True)
    logger.log(EventType.DIRECTION_RESOLVED, {"direction": "left", "votes": {}})

    assert resolved_directions(logger.entries) == [Direction.UP, Direction.LEFT]


def test_direction_counts_include_missing_directions():
    counts = direction_counts([Direction.UP, Direction.UP, Direction.RIGHT])
    assert counts.to_dict() == {"up": 2, "down": 0, "left": 0, "right": 1}


def test_uniform_directions_not_rejected():
    directions = [Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT] * 50
    result = direction_uniformity(directions)

    assert result["p_value"] == pytest.approx(1.0)
    assert not result["uniform_rejected"]
    assert result["frequencies"]["left"] == pytest.approx(0.25)


def test_skewed_directions_rejected():
    directions = [Direction.UP] * 90 + [Direction.DOWN] * 10
    result = direction_uniformity(directions, candidates=[Direction.UP, Direction.DOWN])

    assert result["uniform_rejected"]
    assert result["frequencies"] == {"up": 0.9, "down": 0.1}


def test_uniformity_without_data():
    result = direction_uniformity([])
    assert result["p_value"] == 1.0
    assert not result["uniform_rejected"]


def test_format_uniformity_reports_test_result():
    skewed = direction_uniformity([Direction.UP] * 90 + [Direction.DOWN] * 10,
                                  candidates=[Direction.UP, Direction.DOWN])
    text = format_uniformity(skewed)
    assert text.startswith("up=90%, down=10%")
    assert "chi2=64.00" in text
    assert "p=0.000" in text
    assert text.endswith("not uniform)")

    balanced = direction_uniformity([Direction.LEFT, Direction.RIGHT] * 20,
                                    candidates=[Direction.LEFT, Direction.RIGHT])
    assert "p=1.000, consistent with uniform" in format_uniformity(balanced)
