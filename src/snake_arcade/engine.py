"""Frame-driven game engine composing board, snake, food and input."""

from __future__ import annotations

import logging

import numpy as np

from snake_arcade.config import GameConfig
from snake_arcade.food import FoodSpawner
from snake_arcade.grid import Cell
from snake_arcade.input import InputFrame, InputMapper
from snake_arcade.snake import Direction, Snake

logger = logging.getLogger(__name__)


class GameEngine:
    """Single-snake game state advanced once per rendered frame.

    The engine owns the board, snake, food and scores. Each call to
    :meth:`update` consumes one frame of input; every ``tick_rate`` frames
    the snake takes one step. Self-collision resets the game in place and
    keeps the high score.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.config = config if config is not None else GameConfig()
        self.board = self.config.board()
        self.rng = rng if rng is not None else np.random.default_rng(self.config.seed)
        self.food_spawner = FoodSpawner(self.board, rng=self.rng)
        self.input = InputMapper(
            keyboard=self.config.keyboard,
            touch=self.config.touch,
            dead_zone=self.config.swipe_dead_zone,
        )

        self.high_score = 0
        self.frame = 0
        self.steps = 0
        self.games_played = 0

        self.snake: Snake
        self.food: Cell
        self.score = 0
        self.ticks = 0
        self.tick_rate = self.config.initial_tick_rate
        self._pending_direction: Direction | None = None
        self._new_game()

    def _new_game(self) -> None:
        self.score = 0
        self.ticks = 0
        self.tick_rate = self.config.initial_tick_rate
        self._pending_direction = None
        self.snake = Snake.initial(
            self.config.start_x,
            self.config.start_y,
            length=self.config.initial_length,
            direction=Direction.RIGHT,
            cell_length=self.config.cell_length,
        )
        self.food = self.food_spawner.spawn(self.snake.cells)

    def update(self, frame: InputFrame | None = None) -> bool:
        """Advance by one frame. Returns True if the snake stepped."""
        self.ticks += 1
        self.frame += 1
        self.set_direction(self.input.resolve(frame))
        if self.ticks < self.tick_rate:
            return False
        self.step()
        return True

    def set_direction(self, direction: Direction | None) -> None:
        """Request a turn for the next step.

        The request is checked against the heading the snake last moved
        with, so several inputs within one tick can never add up to a
        reversal. The latest acceptable request wins.
        """
        if self.snake.can_turn(direction):
            self._pending_direction = direction

    def step(self) -> None:
        """Run one simulation step: turn, move, eat, collide."""
        self.ticks = 0
        if self._pending_direction is not None:
            self.snake.steer(self._pending_direction)
            self._pending_direction = None
        self.snake.move(self.board.width, self.board.height)
        self.steps += 1
        self.check_eat()
        self.check_collision()

    def check_eat(self) -> bool:
        """Consume the food if the head is on it."""
        if self.snake.head != self.food:
            return False
        self.score += 1
        self.food = self.food_spawner.spawn(self.snake.cells)
        self.snake.grow()
        self.tick_rate = max(self.config.min_tick_rate, self.tick_rate - 1)
        logger.debug(
            "Food eaten at step %d; score %d, tick rate %d.",
            self.steps, self.score, self.tick_rate,
        )
        return True

    def check_collision(self) -> bool:
        """Reset the game if the head ran into the body."""
        if not self.snake.self_collision():
            return False
        self.high_score = max(self.high_score, self.score)
        logger.info(
            "Snake collided with itself at step %d with score %d (high score %d).",
            self.steps, self.score, self.high_score,
        )
        self.reset()
        return True

    def reset(self) -> None:
        """Start a new game, keeping the high score."""
        self.games_played += 1
        self._new_game()

    @property
    def pending_direction(self) -> Direction | None:
        return self._pending_direction

    def get_state(self) -> dict:
        """Return the full, serializable game state."""
        return {
            "frame": self.frame,
            "steps": self.steps,
            "ticks": self.ticks,
            "tick_rate": self.tick_rate,
            "score": self.score,
            "high_score": self.high_score,
            "games_played": self.games_played,
            "board": self.board.to_dict(),
            "snake": self.snake.to_dict(),
            "food": self.food.to_dict(),
        }
