"""Game configuration and named presets."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path

from snake_arcade.grid import Board

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameConfig:
    """Full configuration for one game.

    Supports JSON serialization so a setup can be shared or replayed.
    """

    # Board
    board_width: int = 200
    board_height: int = 300
    cell_length: int = 10

    # Speed, in frames per simulation step
    initial_tick_rate: int = 20
    min_tick_rate: int = 5

    # Initial snake
    start_x: int = 100
    start_y: int = 100
    initial_length: int = 3

    # Input modalities
    keyboard: bool = True
    touch: bool = False
    swipe_dead_zone: float = 4.0

    # Frame driver
    frame_rate: int = 60

    seed: int | None = None

    def __post_init__(self) -> None:
        board = self.board()
        if self.initial_tick_rate < 1 or self.min_tick_rate < 1:
            raise ValueError("Tick rates must be at least 1.")
        if self.min_tick_rate > self.initial_tick_rate:
            raise ValueError("min_tick_rate cannot exceed initial_tick_rate.")
        # A one-cell snake would land its grown tail on its own head.
        if self.initial_length < 2:
            raise ValueError("initial_length must be at least 2.")
        if not board.in_bounds(self.start_x, self.start_y):
            raise ValueError("Start position lies outside the board.")
        if not board.is_aligned(self.start_x, self.start_y):
            raise ValueError("Start position is not aligned to the cell grid.")
        tail_x = self.start_x - (self.initial_length - 1) * self.cell_length
        if tail_x < 0:
            raise ValueError(
                "initial_length does not fit to the left of the start position.",
            )
        if board.capacity <= self.initial_length:
            raise ValueError("Board is too small for the initial snake.")
        if not (self.keyboard or self.touch):
            raise ValueError("At least one input modality must be enabled.")
        if self.swipe_dead_zone < 0:
            raise ValueError("swipe_dead_zone must be non-negative.")
        if self.frame_rate < 1:
            raise ValueError("frame_rate must be at least 1.")

    def board(self) -> Board:
        """Build the board this configuration describes."""
        return Board(self.board_width, self.board_height, self.cell_length)

    @classmethod
    def preset(cls, name: str, **overrides) -> GameConfig:
        """Return a named variant, optionally with some fields overridden."""
        try:
            base = VARIANTS[name]
        except KeyError:
            raise ValueError(
                f"Unknown variant {name!r}; choose from {sorted(VARIANTS)}.",
            ) from None
        return replace(base, **overrides) if overrides else base

    def replace(self, **changes) -> GameConfig:
        return replace(self, **changes)

    def to_dict(self) -> dict:
        return asdict(self)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file."""
        raw = json.loads(Path(path).read_text())
        if not isinstance(raw, dict):
            raise ValueError(f"Config file {path} must hold a JSON object.")
        unknown = set(raw) - {f.name for f in fields(cls)}
        if unknown:
            raise ValueError(
                f"Unknown config keys in {path}: {sorted(unknown)}.",
            )
        return cls(**raw)


VARIANTS: dict[str, GameConfig] = {
    "classic": GameConfig(initial_tick_rate=20),
    "mobile": GameConfig(initial_tick_rate=10, touch=True),
}
