"""Draw lists for an external renderer."""

from __future__ import annotations

from snake_arcade.grid import Cell, CellType

TEXT_COLOR = (255, 255, 255, 255)
_SCORE_POSITION = (10, 20)
_HIGH_SCORE_POSITION = (10, 40)


def _rect(cell: Cell, length: int) -> dict:
    return {
        "x": cell.x,
        "y": cell.y,
        "w": length,
        "h": length,
        "color": list(cell.color),
    }


def build_draw_list(state: dict) -> dict:
    """Translate a state snapshot into filled rectangles and text lines.

    The result is everything needed to paint one frame: the snake, then
    the food, then the score lines.
    """
    board = state["board"]
    length = board["cell_length"]
    rects = [
        _rect(Cell(x, y, CellType.SNAKE), length)
        for x, y in state["snake"]["cells"]
    ]
    food = state["food"]
    rects.append(_rect(Cell(food["x"], food["y"], CellType.FOOD), length))
    return {
        "width": board["width"],
        "height": board["height"],
        "background": list(Cell(0, 0).color),
        "rects": rects,
        "text": [
            {
                "text": f"Score: {state['score']}",
                "x": _SCORE_POSITION[0],
                "y": _SCORE_POSITION[1],
                "color": list(TEXT_COLOR),
            },
            {
                "text": f"High Score: {state['high_score']}",
                "x": _HIGH_SCORE_POSITION[0],
                "y": _HIGH_SCORE_POSITION[1],
                "color": list(TEXT_COLOR),
            },
        ],
    }
