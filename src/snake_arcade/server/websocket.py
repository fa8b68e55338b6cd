"""WebSocket handler for real-time play."""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from snake_arcade.input import InputFrame, Touch
from snake_arcade.server.models import InputMessage
from snake_arcade.server.session_manager import SessionManager

logger = logging.getLogger(__name__)

ws_router = APIRouter()


def _get_manager(ws: WebSocket) -> SessionManager:
    return ws.app.state.session_manager


def parse_input(raw: str) -> InputFrame | None:
    """Decode a client input message, or None if it is malformed."""
    try:
        msg = InputMessage.model_validate_json(raw)
    except ValidationError:
        return None
    return InputFrame(
        keys=frozenset(msg.keys),
        touches=tuple(Touch(t.id, t.x, t.y) for t in msg.touches),
    )


@ws_router.websocket("/games/{game_id}/play")
async def play(websocket: WebSocket, game_id: str) -> None:
    """Player WebSocket: send input state, receive game state each step."""
    manager = _get_manager(websocket)
    session = manager.get_session(game_id)
    if session is None:
        await websocket.close(code=4004, reason="Game not found.")
        return

    await websocket.accept()
    session.sockets.append(websocket)
    logger.info("Client connected to game %s.", game_id)

    # Send initial state snapshot so the client can draw immediately.
    async with session.lock:
        state = session.engine.get_state()
    await websocket.send_text(json.dumps(state, separators=(",", ":")))

    try:
        while True:
            raw = await websocket.receive_text()
            frame = parse_input(raw)
            if frame is None:
                continue
            session.latest_input = frame
    except WebSocketDisconnect:
        logger.info("Client disconnected from game %s.", game_id)
    finally:
        if websocket in session.sockets:
            session.sockets.remove(websocket)
