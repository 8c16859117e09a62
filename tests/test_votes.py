"""Tests for the vote tally, resolution rules and chat parsing."""

import random

import pytest

from crowdmaze.core.exceptions import LogicError
from crowdmaze.core.types import DIRECTIONS, Direction, empty_doors
from crowdmaze.maze.rules import get_top_directions, parse_direction, resolve_direction
from crowdmaze.maze.votes import VoteTally

UP, DOWN, LEFT, RIGHT = Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT


def doors(*open_directions):
    door_set = empty_doors()
    for direction in open_directions:
        door_set[direction] = True
    return door_set


ALL_DOORS = doors(*DIRECTIONS)


def test_tie_goes_to_last_voted_direction():
    counts = {UP: 2, DOWN: 2, LEFT: 0, RIGHT: 1}
    for seed in range(20):
        assert resolve_direction(counts, ALL_DOORS, DOWN, random.Random(seed)) == DOWN


def test_tally_tie_break_through_votes():
    tally = VoteTally(rng=random.Random(0))
    for direction in [UP, RIGHT, DOWN, UP, DOWN]:
        tally.add_vote(direction)
    assert tally.counts == {UP: 2, DOWN: 2, LEFT: 0, RIGHT: 1}
    assert tally.last_voted_direction == DOWN
    assert tally.resolve(ALL_DOORS) == DOWN


def test_single_leader_wins():
    counts = {UP: 1, DOWN: 0, LEFT: 4, RIGHT: 3}
    assert resolve_direction(counts, ALL_DOORS, RIGHT, random.Random(0)) == LEFT


def test_tie_without_recent_vote_picks_among_leaders():
    counts = {UP: 3, DOWN: 3, LEFT: 1, RIGHT: 0}
    rng = random.Random(99)
    picks = {resolve_direction(counts, ALL_DOORS, LEFT, rng) for _ in range(200)}
    assert picks == {UP, DOWN}


def test_no_votes_is_uniform_over_doors():
    rng = random.Random(2024)
    available = doors(UP, RIGHT)
    zero = {d: 0 for d in DIRECTIONS}
    trials = 4000
    picks = [resolve_direction(zero, available, None, rng) for _ in range(trials)]

    assert set(picks) == {UP, RIGHT}
    up_share = picks.count(UP) / trials
    assert 0.45 < up_share < 0.55


def test_votes_for_missing_doors_do_not_count():
    counts = {UP: 0, DOWN: 0, LEFT: 9, RIGHT: 0}
    rng = random.Random(1)
    picks = {resolve_direction(counts, doors(UP, DOWN), LEFT, rng) for _ in range(100)}
    assert picks == {UP, DOWN}


def test_doorless_room_is_a_logic_error():
    with pytest.raises(LogicError):
        VoteTally(rng=random.Random(0)).resolve(empty_doors())


def test_add_vote_without_door_is_ignored():
    tally = VoteTally()
    tally.add_vote(UP)

    assert tally.add_vote("left", doors(UP, DOWN)) is False
    assert tally.counts == {UP: 1, DOWN: 0, LEFT: 0, RIGHT: 0}
    assert tally.last_voted_direction == UP


def test_add_vote_accepts_string_values():
    tally = VoteTally()
    assert tally.add_vote("right", ALL_DOORS) is True
    assert tally.counts[RIGHT] == 1
    assert tally.last_voted_direction == RIGHT
    assert tally.total_votes == 1


def test_reset_clears_counts_and_memory():
    tally = VoteTally()
    tally.add_vote(LEFT)
    tally.add_vote(LEFT)
    tally.reset()

    assert tally.total_votes == 0
    assert tally.last_voted_direction is None
    assert set(tally.counts) == set(DIRECTIONS)


def test_get_top_directions():
    counts = {UP: 2, DOWN: 5, LEFT: 5, RIGHT: 1}
    assert get_top_directions(counts, list(DIRECTIONS)) == [DOWN, LEFT]
    assert get_top_directions(counts, [UP, RIGHT]) == [UP]
    assert get_top_directions(counts, []) == []


@pytest.mark.parametrize("message, expected", [
    ("left", LEFT),
    ("Go LEFT now!", LEFT),
    ("down then up", DOWN),
    ("UP UP UP", UP),
    ("right.", RIGHT),
    ("upstairs is scary", None),
    ("alright", None),
    ("hello chat", None),
    ("", None),
])
def test_parse_direction(message, expected):
    assert parse_direction(message) == expected
