"""Board geometry and cell values for the snake game."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class CellType(enum.IntEnum):
    """Integer codes describing what occupies a cell."""

    EMPTY = 0
    SNAKE = 1
    FOOD = 2


_COLORS: dict[CellType, tuple[int, int, int, int]] = {
    CellType.EMPTY: (0, 0, 0, 255),
    CellType.SNAKE: (34, 139, 34, 255),
    CellType.FOOD: (255, 255, 255, 255),
}


@dataclass(frozen=True, eq=False)
class Cell:
    """A grid-aligned position tagged with what occupies it.

    Two cells are equal when their coordinates match; the type tag is
    ignored so a food cell compares equal to a snake segment on top of it.
    """

    x: int
    y: int
    type: CellType = CellType.EMPTY

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cell):
            return NotImplemented
        return self.x == other.x and self.y == other.y

    def __hash__(self) -> int:
        return hash((self.x, self.y))

    @property
    def position(self) -> tuple[int, int]:
        return self.x, self.y

    @property
    def color(self) -> tuple[int, int, int, int]:
        """RGBA color a renderer should fill this cell with."""
        return _COLORS[self.type]

    def with_type(self, cell_type: CellType) -> Cell:
        return Cell(self.x, self.y, cell_type)

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "type": self.type.name.lower()}


class Board:
    """Pixel-space board divided into square cells of ``cell_length``.

    Width and height must be exact multiples of the cell length; both
    wrap-around and food placement rely on it.
    """

    def __init__(
        self,
        width: int = 200,
        height: int = 300,
        cell_length: int = 10,
    ) -> None:
        if cell_length < 1:
            raise ValueError("cell_length must be at least 1.")
        if width <= 0 or height <= 0:
            raise ValueError("Board dimensions must be positive.")
        if width % cell_length or height % cell_length:
            raise ValueError(
                f"Board size {width}x{height} is not aligned to "
                f"cell length {cell_length}.",
            )
        if width // cell_length < 4 or height // cell_length < 4:
            raise ValueError("Board must be at least 4×4 cells.")
        self.width = width
        self.height = height
        self.cell_length = cell_length

    @property
    def columns(self) -> int:
        return self.width // self.cell_length

    @property
    def rows(self) -> int:
        return self.height // self.cell_length

    @property
    def capacity(self) -> int:
        """Number of distinct cells on the board."""
        return self.columns * self.rows

    def in_bounds(self, x: int, y: int) -> bool:
        """Check whether a coordinate lies within the board."""
        return 0 <= x < self.width and 0 <= y < self.height

    def is_aligned(self, x: int, y: int) -> bool:
        """Check whether a coordinate sits on a cell boundary."""
        return x % self.cell_length == 0 and y % self.cell_length == 0

    def wrap(self, x: int, y: int) -> tuple[int, int]:
        """Wrap a coordinate that stepped off one edge onto the opposite one."""
        return (
            wrap_axis(x, self.width, self.cell_length),
            wrap_axis(y, self.height, self.cell_length),
        )

    def to_dict(self) -> dict:
        return {
            "width": self.width,
            "height": self.height,
            "cell_length": self.cell_length,
        }


def wrap_axis(value: int, dimension: int, cell_length: int) -> int:
    if value < 0:
        return dimension - cell_length
    if value >= dimension:
        return 0
    return value
