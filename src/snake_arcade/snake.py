"""Snake representation and movement logic."""

from __future__ import annotations

import enum

from snake_arcade.grid import Cell, CellType, wrap_axis


class Direction(enum.Enum):
    """Cardinal headings with (dx, dy) values in grid units.

    Screen coordinates grow downwards, so ``UP`` decreases ``y``.
    """

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]


# Pairs that would cause an instant 180° reversal.
_OPPOSITES: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


class Snake:
    """A snake represented as an ordered list of cells.

    The head is ``cells[0]``; the tail is ``cells[-1]``. Every movement
    replaces the list rather than mutating cells in place.
    """

    def __init__(
        self,
        cells: list[Cell],
        direction: Direction = Direction.RIGHT,
        cell_length: int = 10,
    ) -> None:
        if not cells:
            raise ValueError("Snake must have at least 1 cell.")
        if cell_length < 1:
            raise ValueError("cell_length must be at least 1.")
        self.cells = [cell.with_type(CellType.SNAKE) for cell in cells]
        self.direction = direction
        self.cell_length = cell_length

    @classmethod
    def initial(
        cls,
        x: int,
        y: int,
        length: int = 3,
        direction: Direction = Direction.RIGHT,
        cell_length: int = 10,
    ) -> Snake:
        """Build a straight snake whose body trails behind the head."""
        if length < 1:
            raise ValueError("Snake length must be at least 1.")
        dx, dy = direction.value
        cells = [
            Cell(x - dx * i * cell_length, y - dy * i * cell_length, CellType.SNAKE)
            for i in range(length)
        ]
        return cls(cells, direction, cell_length)

    def __len__(self) -> int:
        return len(self.cells)

    @property
    def head(self) -> Cell:
        """Return the head cell."""
        return self.cells[0]

    @property
    def tail(self) -> Cell:
        return self.cells[-1]

    def can_turn(self, new_direction: Direction | None) -> bool:
        """Whether *new_direction* is an acceptable heading from the current one."""
        return new_direction is not None and new_direction != self.direction.opposite

    def steer(self, new_direction: Direction | None) -> bool:
        """Change direction, ignoring 180° reversals. Returns True on change."""
        if not self.can_turn(new_direction) or new_direction == self.direction:
            return False
        self.direction = new_direction
        return True

    def next_head(self, width: int, height: int) -> Cell:
        """Compute the next head cell, wrapped onto the board, without moving."""
        dx, dy = self.direction.value
        x = self.head.x + dx * self.cell_length
        y = self.head.y + dy * self.cell_length
        return Cell(
            wrap_axis(x, width, self.cell_length),
            wrap_axis(y, height, self.cell_length),
            CellType.SNAKE,
        )

    def move(self, width: int, height: int) -> Cell:
        """Move one cell forward, keeping the length. Returns the new head."""
        new_head = self.next_head(width, height)
        self.cells = [new_head, *self.cells[:-1]]
        return new_head

    def grow(self) -> None:
        """Duplicate the tail; the copy separates on the next move."""
        self.cells = [*self.cells, self.tail]

    def occupies(self, cell: Cell) -> bool:
        """Check whether any segment sits on *cell*'s coordinates."""
        return cell in self.cells

    def self_collision(self) -> bool:
        """Check whether the head overlaps any other body segment."""
        head = self.head
        return any(seg == head for seg in self.cells[1:])

    def to_dict(self) -> dict:
        """Serialize snake state to a dictionary."""
        return {
            "cells": [[c.x, c.y] for c in self.cells],
            "direction": self.direction.name.lower(),
            "length": len(self.cells),
        }
