"""Mapping of keyboard and touch-swipe input onto snake headings."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from snake_arcade.snake import Direction

# Displacement below which a swipe is not yet a gesture, in pointer units.
DEFAULT_DEAD_ZONE = 4.0


class Key(str, enum.Enum):
    """Directional keys the input collaborator can report as pressed."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


# Checked in this order when several keys are held at once.
_KEY_PRIORITY: list[tuple[Key, Direction]] = [
    (Key.UP, Direction.UP),
    (Key.RIGHT, Direction.RIGHT),
    (Key.LEFT, Direction.LEFT),
    (Key.DOWN, Direction.DOWN),
]


@dataclass(frozen=True)
class Touch:
    """An active pointer and its current position."""

    touch_id: int
    x: float
    y: float


@dataclass(frozen=True)
class InputFrame:
    """Everything the input collaborator reports for one frame."""

    keys: frozenset[Key] = field(default_factory=frozenset)
    touches: tuple[Touch, ...] = ()


def direction_from_keys(keys: frozenset[Key] | set[Key]) -> Direction | None:
    """Return the heading requested by the pressed keys, if any."""
    for key, direction in _KEY_PRIORITY:
        if key in keys:
            return direction
    return None


def vector_to_direction(
    dx: float, dy: float, dead_zone: float = DEFAULT_DEAD_ZONE,
) -> Direction | None:
    """Classify a pointer displacement as a heading.

    Returns ``None`` while both components are inside the dead zone. The
    dominant axis decides; ties resolve horizontally.
    """
    if abs(dx) < dead_zone and abs(dy) < dead_zone:
        return None
    if abs(dx) < abs(dy):
        return Direction.UP if dy < 0 else Direction.DOWN
    return Direction.LEFT if dx < 0 else Direction.RIGHT


class SwipeState(enum.Enum):
    IDLE = "idle"
    TRACKING = "tracking"
    SETTLED = "settled"
    INVALID = "invalid"


class SwipeTracker:
    """Turns a single continuous touch into at most one swipe heading.

    A second simultaneous touch invalidates the gesture; nothing more is
    reported until every pointer has been lifted.
    """

    def __init__(self, dead_zone: float = DEFAULT_DEAD_ZONE) -> None:
        if dead_zone < 0:
            raise ValueError("dead_zone must be non-negative.")
        self.dead_zone = dead_zone
        self.state = SwipeState.IDLE
        self.touch_id: int | None = None
        self.origin: tuple[float, float] = (0.0, 0.0)

    def update(self, touches: tuple[Touch, ...] | list[Touch]) -> Direction | None:
        """Advance the state machine by one frame."""
        if self.state == SwipeState.IDLE:
            if len(touches) == 1:
                touch = touches[0]
                self.touch_id = touch.touch_id
                self.origin = (touch.x, touch.y)
                self.state = SwipeState.TRACKING
            return None

        if not touches:
            self._release()
            return None

        if self.state != SwipeState.TRACKING:
            return None

        if len(touches) > 1 or touches[0].touch_id != self.touch_id:
            self.state = SwipeState.INVALID
            return None

        touch = touches[0]
        direction = vector_to_direction(
            touch.x - self.origin[0], touch.y - self.origin[1], self.dead_zone,
        )
        if direction is not None:
            self.state = SwipeState.SETTLED
        return direction

    def _release(self) -> None:
        self.state = SwipeState.IDLE
        self.touch_id = None


class InputMapper:
    """Resolves one requested heading per frame from the enabled modalities.

    A swipe, when touch input is enabled, takes precedence over keys.
    """

    def __init__(
        self,
        keyboard: bool = True,
        touch: bool = False,
        dead_zone: float = DEFAULT_DEAD_ZONE,
    ) -> None:
        self.keyboard = keyboard
        self.touch = touch
        self.swipe = SwipeTracker(dead_zone) if touch else None

    def resolve(self, frame: InputFrame | None) -> Direction | None:
        if frame is None:
            frame = InputFrame()
        direction = direction_from_keys(frame.keys) if self.keyboard else None
        if self.swipe is not None:
            swiped = self.swipe.update(frame.touches)
            if swiped is not None:
                direction = swiped
        return direction
