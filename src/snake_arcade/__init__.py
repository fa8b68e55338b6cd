"""Snake Arcade — frame-driven snake game core."""

from snake_arcade.config import VARIANTS, GameConfig
from snake_arcade.engine import GameEngine
from snake_arcade.food import FoodSpawner
from snake_arcade.grid import Board, Cell, CellType
from snake_arcade.input import InputFrame, InputMapper, Key, SwipeTracker, Touch
from snake_arcade.render import build_draw_list
from snake_arcade.snake import Direction, Snake

__all__ = [
    "Board",
    "Cell",
    "CellType",
    "Direction",
    "FoodSpawner",
    "GameConfig",
    "GameEngine",
    "InputFrame",
    "InputMapper",
    "Key",
    "Snake",
    "SwipeTracker",
    "Touch",
    "VARIANTS",
    "build_draw_list",
]
