"""Tests for the chat relay."""

import random
import threading
from collections import Counter

import pytest

from crowdmaze.chat.relay import ChatRelay
from crowdmaze.core.types import Direction, RoundState
from crowdmaze.logging import EventType, GameLogger
from crowdmaze.maze.machine import RoundStateMachine


@pytest.fixture
def machine(build_lattice, fast_config):
    return RoundStateMachine(config=fast_config, grid=build_lattice(), rng=random.Random(5))


@pytest.fixture
def relay(machine):
    return ChatRelay(machine)


def test_first_vote_is_accepted(relay, machine):
    chat = relay.receive("alice", "go up!", display_name="Alice")

    assert chat.accepted
    assert chat.direction == Direction.UP
    assert machine.tally.counts[Direction.UP] == 1
    assert relay.has_voted("alice")


def test_second_vote_same_round_is_ignored(relay, machine):
    relay.receive("alice", "up")
    chat = relay.receive("alice", "down")

    assert not chat.accepted
    assert machine.tally.counts[Direction.DOWN] == 0
    assert machine.tally.total_votes == 1


def test_sender_can_vote_again_next_round(relay, machine):
    relay.receive("alice", "up")
    machine.start_round()

    assert not relay.has_voted("alice")
    assert relay.receive("alice", "down").accepted
    assert machine.tally.counts == {
        Direction.UP: 0, Direction.DOWN: 1, Direction.LEFT: 0, Direction.RIGHT: 0,
    }


def test_message_without_direction_keeps_vote_available(relay, machine):
    chat = relay.receive("alice", "hello chat")

    assert chat.direction is None
    assert not chat.accepted
    assert relay.receive("alice", "left").accepted


def test_vote_for_missing_door_keeps_vote_available(build_lattice, fast_config):
    machine = RoundStateMachine(config=fast_config, grid=build_lattice(start=(0, 0)))
    relay = ChatRelay(machine)

    assert not relay.receive("bob", "up").accepted
    assert relay.receive("bob", "right").accepted


def test_votes_rejected_while_moving(relay, machine, fast_config):
    machine.tick(fast_config.voting_duration)
    machine.tick(fast_config.voting_grace_period)
    assert machine.current_state == RoundState.PLAYER_LEAVING_ROOM

    chat = relay.receive("carol", "up")
    assert not chat.accepted
    assert not relay.has_voted("carol")


def test_history_is_bounded(machine):
    relay = ChatRelay(machine, max_chats=3)
    for i in range(5):
        relay.receive(f"viewer_{i}", f"message {i}")

    assert [c.message for c in relay.recent_chats()] == ["message 2", "message 3", "message 4"]


def test_direction_is_case_insensitive(relay):
    assert relay.receive("dave", "RIGHT RIGHT RIGHT").direction == Direction.RIGHT


def test_reset_forgets_senders(relay):
    relay.receive("erin", "up")
    relay.reset()
    assert not relay.has_voted("erin")


def test_chat_is_logged(machine):
    logger = GameLogger()
    relay = ChatRelay(machine, logger=logger)
    relay.receive("frank", "left please", display_name="Frank")

    entries = logger.get_entries(EventType.CHAT_MESSAGE, sender_id="frank")
    assert len(entries) == 1
    assert entries[0].data["direction"] == "left"
    assert entries[0].data["accepted"] is True


def test_vote_counted_in_new_round_locks_sender_there(relay, machine):
    add_vote = machine.add_vote
    rounds_started = []

    def add_vote_after_round_change(direction, sender_id=None):
        # A tick finishing the round right before the vote is counted
        if not rounds_started:
            rounds_started.append(True)
            machine.start_round()
        return add_vote(direction, sender_id=sender_id)

    machine.add_vote = add_vote_after_round_change

    assert relay.receive("alice", "up").accepted
    assert machine.round_key == (1, 2)
    assert not relay.receive("alice", "down").accepted
    assert machine.tally.total_votes == 1
    assert relay.has_voted("alice")


def test_one_vote_per_sender_per_round_under_threads(build_lattice):
    machine = RoundStateMachine(grid=build_lattice(), rng=random.Random(8), logger=GameLogger())
    relay = ChatRelay(machine)

    def chat(sender_id):
        for _ in range(300):
            relay.receive(sender_id, "up")

    threads = [threading.Thread(target=chat, args=(s,)) for s in ["alice", "bob", "carol"]]
    for thread in threads:
        thread.start()
    while any(thread.is_alive() for thread in threads):
        machine.start_round()
    for thread in threads:
        thread.join()

    votes = machine.logger.get_entries(EventType.VOTE_CAST)
    per_round = Counter((entry.round_number, entry.sender_id) for entry in votes)
    assert votes
    assert max(per_round.values()) == 1


def test_votes_after_game_over_are_ignored(relay, machine):
    machine.lose_game()

    chat = relay.receive("alice", "up")
    assert not chat.accepted
    assert not relay.has_voted("alice")
    assert machine.tally.total_votes == 0
