"""Tests for the GameEngine module."""

import json

import numpy as np
import pytest

from snake_arcade.config import GameConfig
from snake_arcade.engine import GameEngine
from snake_arcade.grid import Cell, CellType
from snake_arcade.input import InputFrame, Key, Touch
from snake_arcade.snake import Direction, Snake


def _keys(*keys: Key) -> InputFrame:
    return InputFrame(keys=frozenset(keys))


def _run_frames(engine: GameEngine, frames: int, frame=None) -> None:
    for _ in range(frames):
        engine.update(frame)


class TestEngineInit:
    def test_default_init(self):
        engine = GameEngine(GameConfig(seed=0))
        assert engine.score == 0
        assert engine.high_score == 0
        assert engine.ticks == 0
        assert engine.tick_rate == 20
        assert len(engine.snake) == 3

    def test_snake_starts_at_fixed_position(self):
        engine = GameEngine(GameConfig(seed=0))
        assert engine.snake.head.position == (100, 100)
        assert engine.snake.direction == Direction.RIGHT

    def test_food_spawned_on_init(self):
        engine = GameEngine(GameConfig(seed=0))
        assert engine.food.type == CellType.FOOD
        assert not engine.snake.occupies(engine.food)

    def test_injected_rng(self):
        a = GameEngine(rng=np.random.default_rng(5))
        b = GameEngine(rng=np.random.default_rng(5))
        assert a.food == b.food


class TestEngineFrameLoop:
    def test_no_step_before_tick_rate(self):
        engine = GameEngine(GameConfig(seed=0))
        for _ in range(19):
            assert not engine.update()
        assert engine.snake.head.position == (100, 100)
        assert engine.ticks == 19

    def test_step_on_tick_rate(self):
        engine = GameEngine(GameConfig(seed=0))
        _run_frames(engine, 19)
        assert engine.update()
        assert engine.ticks == 0
        assert engine.steps == 1
        assert engine.frame == 20
        assert engine.snake.head.position == (110, 100)

    def test_mobile_variant_is_faster(self):
        engine = GameEngine(GameConfig.preset("mobile", seed=0))
        _run_frames(engine, 10)
        assert engine.steps == 1


class TestEngineTurning:
    def test_key_turns_snake(self):
        engine = GameEngine(GameConfig(seed=0))
        _run_frames(engine, 20, _keys(Key.UP))
        assert engine.snake.direction == Direction.UP
        assert engine.snake.head.position == (100, 90)

    def test_no_keys_keeps_heading(self):
        engine = GameEngine(GameConfig(seed=0))
        _run_frames(engine, 20, InputFrame())
        assert engine.snake.direction == Direction.RIGHT

    def test_reversal_ignored(self):
        engine = GameEngine(GameConfig(seed=0))
        _run_frames(engine, 20, _keys(Key.LEFT))
        assert engine.snake.direction == Direction.RIGHT
        assert engine.snake.head.position == (110, 100)

    def test_down_while_up_ignored(self):
        engine = GameEngine(GameConfig(seed=0))
        engine.snake.direction = Direction.UP
        engine.set_direction(Direction.DOWN)
        assert engine.pending_direction is None
        engine.set_direction(Direction.LEFT)
        assert engine.pending_direction == Direction.LEFT

    def test_rapid_inputs_cannot_reverse_within_one_tick(self):
        """Up then Left inside one tick must not turn a right-moving snake back."""
        engine = GameEngine(GameConfig(seed=0))
        engine.update(_keys(Key.UP))
        _run_frames(engine, 19, _keys(Key.LEFT))
        assert engine.steps == 1
        assert engine.snake.direction == Direction.UP
        assert engine.snake.head.position == (100, 90)
        assert not engine.snake.self_collision()

    def test_latest_valid_request_wins(self):
        engine = GameEngine(GameConfig(seed=0))
        engine.set_direction(Direction.UP)
        engine.set_direction(Direction.DOWN)
        engine.step()
        assert engine.snake.direction == Direction.DOWN

    def test_swipe_turns_snake(self):
        engine = GameEngine(GameConfig.preset("mobile", seed=0))
        engine.update(InputFrame(touches=(Touch(1, 50.0, 50.0),)))
        engine.update(InputFrame(touches=(Touch(1, 52.0, 20.0),)))
        _run_frames(engine, 8)
        assert engine.steps == 1
        assert engine.snake.direction == Direction.UP

    def test_touch_ignored_when_disabled(self):
        engine = GameEngine(GameConfig(seed=0))
        engine.update(InputFrame(touches=(Touch(1, 50.0, 50.0),)))
        engine.update(InputFrame(touches=(Touch(1, 50.0, 10.0),)))
        assert engine.pending_direction is None


class TestEngineEating:
    def test_score_increases_on_food(self):
        engine = GameEngine(GameConfig(seed=0))
        engine.food = Cell(110, 100, CellType.FOOD)
        engine.step()
        assert engine.score == 1
        assert len(engine.snake) == 4
        assert engine.tick_rate == 19
        assert not engine.snake.occupies(engine.food)
        assert engine.food.type == CellType.FOOD

    def test_no_eat_elsewhere(self):
        engine = GameEngine(GameConfig(seed=0))
        engine.food = Cell(0, 290, CellType.FOOD)
        engine.step()
        assert engine.score == 0
        assert len(engine.snake) == 3
        assert not engine.check_eat()

    def test_tick_rate_floor(self):
        engine = GameEngine(GameConfig(board_width=1000, seed=0))
        for _ in range(30):
            engine.food = engine.snake.next_head(
                engine.board.width, engine.board.height,
            ).with_type(CellType.FOOD)
            engine.step()
            assert engine.tick_rate >= 5
        assert engine.score == 30
        assert engine.tick_rate == 5
        assert len(engine.snake) == 33

    def test_two_cell_snake_grows_without_reset(self):
        engine = GameEngine(GameConfig(initial_length=2, seed=0))
        engine.food = Cell(110, 100, CellType.FOOD)
        engine.step()
        assert engine.score == 1
        assert len(engine.snake) == 3
        assert engine.games_played == 0
        assert engine.high_score == 0

    def test_one_cell_snake_not_configurable(self):
        with pytest.raises(ValueError, match="at least 2"):
            GameEngine(GameConfig(initial_length=1, seed=0))


class TestEngineCollision:
    def test_collision_resets_game(self):
        engine = GameEngine(GameConfig(seed=0))
        engine.score = 7
        engine.tick_rate = 9
        engine.snake = Snake(
            [Cell(50, 50), Cell(60, 50), Cell(50, 50)], Direction.UP,
        )
        assert engine.check_collision()
        assert engine.score == 0
        assert engine.high_score == 7
        assert engine.tick_rate == 20
        assert engine.games_played == 1
        assert len(engine.snake) == 3
        assert engine.snake.direction == Direction.RIGHT
        assert engine.snake.head.position == (100, 100)
        assert not engine.snake.occupies(engine.food)

    def test_no_collision_on_fresh_snake(self):
        engine = GameEngine(GameConfig(seed=0))
        assert not engine.check_collision()

    def test_dies_by_turning_into_itself(self):
        engine = GameEngine(GameConfig(seed=0))
        engine.snake = Snake.initial(100, 100, length=5)
        engine.food = Cell(0, 290, CellType.FOOD)
        engine.score = 4
        for direction in (Direction.DOWN, Direction.LEFT, Direction.UP):
            engine.set_direction(direction)
            engine.step()
        assert engine.high_score == 4
        assert engine.score == 0
        assert len(engine.snake) == 3

    def test_high_score_monotonic(self):
        engine = GameEngine(GameConfig(seed=0))
        seen = []
        for score in (3, 1, 5, 2):
            engine.score = score
            engine.snake = Snake([Cell(0, 0), Cell(0, 0)])
            engine.check_collision()
            seen.append(engine.high_score)
        assert seen == [3, 3, 5, 5]

    def test_reset_keeps_high_score(self):
        engine = GameEngine(GameConfig(seed=0))
        engine.high_score = 12
        engine.score = 3
        engine.reset()
        assert engine.high_score == 12
        assert engine.score == 0


class TestEngineSerialization:
    def test_state_is_json_serializable(self):
        engine = GameEngine(GameConfig(seed=42))
        _run_frames(engine, 25)
        serialized = json.dumps(engine.get_state())
        assert isinstance(serialized, str)

    def test_state_structure(self):
        state = GameEngine(GameConfig(seed=0)).get_state()
        for key in (
            "frame", "steps", "ticks", "tick_rate", "score",
            "high_score", "games_played", "board", "snake", "food",
        ):
            assert key in state
        assert state["food"]["type"] == "food"


class TestEngineDeterminism:
    def test_same_seed_same_outcome(self):
        """Two games with the same seed and inputs produce identical states."""
        inputs = [_keys(Key.DOWN)] * 40 + [_keys(Key.LEFT)] * 40 + [None] * 200
        assert self._run(123, inputs) == self._run(123, inputs)

    def test_different_seeds_differ(self):
        # Food positions should differ at minimum.
        assert self._run(1, [])["food"] != self._run(2, [])["food"]

    @staticmethod
    def _run(seed: int, inputs: list) -> dict:
        engine = GameEngine(GameConfig(seed=seed))
        for frame in inputs:
            engine.update(frame)
        return engine.get_state()
