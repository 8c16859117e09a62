"""Configuration for the maze and the round timings."""

import inspect
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from crowdmaze.core.exceptions import ConfigurationError

MIN_GRID_SIZE_X = 4
MIN_GRID_SIZE_Y = 3


def validate_grid_size(grid_size_x: int, grid_size_y: int) -> None:
    """Raise ConfigurationError unless the grid can hold an interior start room."""
    if grid_size_x < MIN_GRID_SIZE_X:
        raise ConfigurationError(
            f"grid_size_x must be {MIN_GRID_SIZE_X} or more",
            details={"grid_size_x": grid_size_x},
        )
    if grid_size_y < MIN_GRID_SIZE_Y:
        raise ConfigurationError(
            f"grid_size_y must be {MIN_GRID_SIZE_Y} or more",
            details={"grid_size_y": grid_size_y},
        )


@dataclass
class MazeConfig:
    """Configuration for map generation.

    Attributes:
        grid_size_x: Number of room columns (4 or more)
        grid_size_y: Number of room rows (3 or more)
        min_goal_distance: Smallest BFS distance from the start to the goal
        max_goal_distance: Largest BFS distance from the start to the goal
        min_doors: Doors every room is guaranteed after generation
        litter_room_chance: Probability that a plain room becomes a litter room
    """
    grid_size_x: int = 5
    grid_size_y: int = 4
    min_goal_distance: int = 3
    max_goal_distance: int = 4
    min_doors: int = 2
    litter_room_chance: float = 0.15

    def __post_init__(self):
        """Validate configuration."""
        validate_grid_size(self.grid_size_x, self.grid_size_y)

        if self.min_goal_distance < 0:
            raise ConfigurationError("min_goal_distance cannot be negative")
        if self.max_goal_distance < self.min_goal_distance:
            raise ConfigurationError(
                "max_goal_distance must be at least min_goal_distance",
                details={
                    "min_goal_distance": self.min_goal_distance,
                    "max_goal_distance": self.max_goal_distance,
                },
            )

        if not 1 <= self.min_doors <= 4:
            raise ConfigurationError("min_doors must be between 1 and 4")

        if not 0.0 <= self.litter_room_chance <= 1.0:
            raise ConfigurationError("litter_room_chance must be between 0 and 1")


@dataclass
class GameConfig:
    """Configuration for a crowd maze game.

    Durations are in milliseconds, distances in room pixels.

    Attributes:
        maze: Map generation settings
        voting_duration: Length of the open voting window
        voting_grace_period: Extra window for votes still in transit
        reset_duration: Pause on the game over screen before a new map
        moves_per_game: Moves the audience gets before the game is lost
        room_width: Width of the room drawing surface
        room_height: Height of the room drawing surface
        margin_x: Horizontal distance from the surface edge to the walls
        margin_y: Vertical distance from the surface edge to the walls
        player_speed: Avatar speed in pixels per second
        seed: Random seed for reproducible games
    """
    maze: MazeConfig = field(default_factory=MazeConfig)
    voting_duration: int = 10000
    voting_grace_period: int = 2000
    reset_duration: int = 5000
    moves_per_game: int = 10
    room_width: int = 1280
    room_height: int = 720
    margin_x: int = 160
    margin_y: int = 120
    player_speed: float = 300.0
    seed: Optional[int] = None

    def __post_init__(self):
        """Validate configuration."""
        if isinstance(self.maze, dict):
            self.maze = MazeConfig(**_filter_kwargs(MazeConfig, self.maze))

        for name in ("voting_duration", "voting_grace_period", "reset_duration"):
            if getattr(self, name) < 0:
                raise ConfigurationError(f"{name} cannot be negative")

        if self.moves_per_game < 1:
            raise ConfigurationError("moves_per_game must be at least 1")

        if self.player_speed <= 0:
            raise ConfigurationError("player_speed must be positive")

        if self.margin_x * 2 >= self.room_width or self.margin_y * 2 >= self.room_height:
            raise ConfigurationError("Room margins leave no floor space")

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to a plain dictionary."""
        return asdict(self)


def _filter_kwargs(config_class, values: Dict[str, Any]) -> Dict[str, Any]:
    """Keep only keys the config class accepts."""
    valid_params = inspect.signature(config_class.__init__).parameters.keys()
    return {k: v for k, v in values.items() if k in valid_params}


def load_settings(path: Path) -> Tuple[Dict[str, Any], Dict[str, Any], Dict[str, Any]]:
    """Read a YAML config file and split it into sections.

    Args:
        path: Path to the YAML file

    Returns:
        Tuple of (game_settings, session_settings, logging_settings)
    """
    with open(path) as f:
        yaml_config = yaml.safe_load(f) or {}

    game_settings = {k: v for k, v in yaml_config.items()
                     if k not in ['session', 'logging']}
    session_settings = yaml_config.get('session', {}) or {}
    logging_settings = yaml_config.get('logging', {}) or {}

    return game_settings, session_settings, logging_settings


def load_config(path: Optional[Path] = None, overrides: Optional[Dict[str, Any]] = None) -> GameConfig:
    """Load a GameConfig from YAML, falling back to defaults.

    Args:
        path: Path to a YAML file (None or a missing file uses defaults)
        overrides: Top-level values that win over the file

    Returns:
        Validated GameConfig
    """
    game_settings: Dict[str, Any] = {}
    if path is not None and Path(path).exists():
        game_settings, _, _ = load_settings(Path(path))

    if overrides:
        maze_overrides = overrides.get("maze")
        game_settings.update({k: v for k, v in overrides.items() if k != "maze"})
        if maze_overrides:
            merged = dict(game_settings.get("maze") or {})
            merged.update(maze_overrides)
            game_settings["maze"] = merged

    return GameConfig(**_filter_kwargs(GameConfig, game_settings))
