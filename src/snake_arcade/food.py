"""Food placement logic."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

import numpy as np

from snake_arcade.grid import Cell, CellType

if TYPE_CHECKING:
    from snake_arcade.grid import Board

logger = logging.getLogger(__name__)


class FoodSpawner:
    """Places food on a random free cell by rejection sampling.

    Uses an injectable NumPy RNG so placement is reproducible under a seed.
    """

    def __init__(
        self,
        board: Board,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.board = board
        self.rng = rng if rng is not None else np.random.default_rng()

    def spawn(self, occupied: Iterable[Cell]) -> Cell:
        """Return a food cell that does not coincide with any *occupied* cell.

        Candidates are drawn uniformly over the board's grid and rejected
        until a free one turns up.
        """
        taken = {cell.position for cell in occupied}
        if len(taken) >= self.board.capacity:
            raise ValueError("No free cell left on the board for food.")

        length = self.board.cell_length
        attempts = 0
        while True:
            attempts += 1
            x = int(self.rng.integers(self.board.columns)) * length
            y = int(self.rng.integers(self.board.rows)) * length
            if (x, y) not in taken:
                break

        if attempts > 1:
            logger.debug("Food placed at (%d, %d) after %d draws.", x, y, attempts)
        return Cell(x, y, CellType.FOOD)
