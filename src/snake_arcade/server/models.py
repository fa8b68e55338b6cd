"""Pydantic models for API request/response schemas."""

from __future__ import annotations

import enum

from pydantic import BaseModel, Field

from snake_arcade.input import Key


class GameStatus(str, enum.Enum):
    """Lifecycle states for a game session."""

    ACTIVE = "active"
    FAILED = "failed"


class CreateGameRequest(BaseModel):
    """Request body for POST /games.

    Unset fields fall back to the chosen variant.
    """

    variant: str = "default"
    board_width: int | None = Field(default=None, ge=40, le=2000)
    board_height: int | None = Field(default=None, ge=40, le=2000)
    cell_length: int | None = Field(default=None, ge=1, le=100)
    initial_tick_rate: int | None = Field(default=None, ge=1, le=120)
    touch: bool | None = None
    frame_rate: int | None = Field(default=None, ge=1, le=240)
    seed: int | None = None


class TouchPoint(BaseModel):
    id: int
    x: float
    y: float


class InputMessage(BaseModel):
    """Input state a client sends over the play socket.

    Each message replaces the previous one until the next arrives.
    """

    keys: list[Key] = Field(default_factory=list)
    touches: list[TouchPoint] = Field(default_factory=list, max_length=10)


class GameSummary(BaseModel):
    """Compact game info for list endpoints."""

    game_id: str
    variant: str
    status: GameStatus
    score: int
    high_score: int
    frame_rate: int
    viewers: int
