"""Example: Watch one Crowd Maze game steered by a simulated chat."""

import random
from pathlib import Path

from crowdmaze.agents.random_viewer import RandomViewer
from crowdmaze.chat.relay import ChatRelay
from crowdmaze.core.exceptions import GenerationError
from crowdmaze.core.types import RoundState
from crowdmaze.logging.game_logger import GameLogger
from crowdmaze.maze.config import load_config, load_settings
from crowdmaze.maze.machine import RoundStateMachine


def main():
    """Play a single game and print the minimap after every move."""

    print("🐱 Crowd Maze")
    print("=" * 70)

    config_path = Path(__file__).parent.parent / "configs" / "crowdmaze.yaml"
    config = load_config(config_path)
    _, session_settings, logging_settings = load_settings(config_path)
    print("✅ Loaded config from crowdmaze.yaml")

    print("\n⚙️  Configuration:")
    print(f"  • Grid: {config.maze.grid_size_x}x{config.maze.grid_size_y}")
    print(f"  • Goal distance: {config.maze.min_goal_distance}-{config.maze.max_goal_distance}")
    print(f"  • Moves per game: {config.moves_per_game}")
    print(f"  • Voting window: {config.voting_duration / 1000:.0f}s "
          f"(+{config.voting_grace_period / 1000:.0f}s grace)")

    n_viewers = session_settings.get("viewers", 25)
    tick_ms = session_settings.get("tick_ms", 50)
    viewers = [
        RandomViewer(viewer_id=f"viewer_{i}", seed=i,
                     chat_chance=session_settings.get("chat_chance", 0.02))
        for i in range(n_viewers)
    ]
    print(f"\n👥 {n_viewers} simulated viewers joined the chat")

    output_dir = Path(logging_settings.get("output_dir", "experiments/crowdmaze"))
    logger = GameLogger(output_dir=output_dir)

    try:
        machine = RoundStateMachine(config=config, rng=random.Random(config.seed), logger=logger)
    except GenerationError as e:
        print(f"❌ Error generating map: {e}")
        return
    relay = ChatRelay(machine, logger=logger)

    print("\n🗺️  Starting map:")
    print(machine.grid.to_ascii(reveal=False))
    print("-" * 70)

    # Stop on the game over screen instead of rolling into the next game
    while not machine.game_over:
        observation = {
            "allow_voting": machine.allow_voting(),
            "open_directions": machine.player_room.open_directions(),
            "round_key": machine.round_key,
            "time_remaining": machine.time_remaining(),
        }
        for viewer in viewers:
            message = viewer.chat(observation)
            if message is not None:
                viewer.record_message(message)
                relay.receive(viewer.viewer_id, message, display_name=viewer.name)

        previous_room = machine.player_room
        phase = machine.tick(tick_ms)

        if machine.player_room is not previous_room:
            room = machine.player_room
            print(f"\n➡️  Entered room ({room.x}, {room.y}) "
                  f"({machine.moves_remaining} moves left)")
            print(machine.grid.to_ascii(reveal=False))
        elif phase == RoundState.PLAYER_LEAVING_ROOM and machine.round_timer == 0:
            print(f"  🗳️  Votes: {machine.tally}")

    summary = machine.state.games[-1]

    print("\n" + "=" * 70)
    print("🏁 GAME OVER!")
    print("=" * 70)
    print(f"\n🏆 Outcome: {summary.outcome.value.upper()}")
    print(f"📝 Reason: {summary.reason}")
    print("\n📊 Final Stats:")
    print(f"  • Rounds played: {summary.rounds_played}")
    print(f"  • Moves used: {summary.moves_used}")
    print(f"  • Chat messages: {len(relay.recent_chats())} shown of "
          f"{sum(len(v.message_history) for v in viewers)} sent")

    print(f"\n📁 Game log: {logger.log_file}")
    print(f"  ({len(logger.entries)} events logged)")


if __name__ == "__main__":
    main()
