"""REST API route handlers for game session management."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request, Response

from snake_arcade.render import build_draw_list
from snake_arcade.server.models import CreateGameRequest, GameSummary
from snake_arcade.server.session_manager import GameSession, SessionManager

router = APIRouter(prefix="/games", tags=["games"])


def _get_manager(request: Request) -> SessionManager:
    return request.app.state.session_manager


def _get_session(request: Request, game_id: str) -> GameSession:
    session = _get_manager(request).get_session(game_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Game not found.")
    return session


@router.post("", status_code=201)
async def create_game(body: CreateGameRequest, request: Request) -> GameSummary:
    """Create a game and start its frame loop."""
    manager = _get_manager(request)
    try:
        session = manager.create_session(
            variant=body.variant,
            **body.model_dump(exclude={"variant"}),
        )
    except OverflowError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return session.summary()


@router.get("")
async def list_games(request: Request) -> list[GameSummary]:
    """List running games."""
    return _get_manager(request).list_sessions()


@router.get("/{game_id}")
async def get_game(game_id: str, request: Request) -> dict:
    """Get game metadata and the current state snapshot."""
    session = _get_session(request, game_id)
    async with session.lock:
        state = session.engine.get_state()
    return {
        "game_id": session.game_id,
        "variant": session.variant,
        "status": session.status.value,
        "config": session.config.to_dict(),
        "viewers": len(session.sockets),
        "state": state,
    }


@router.get("/{game_id}/frame")
async def get_frame(game_id: str, request: Request) -> dict:
    """Get the draw list for the current state."""
    session = _get_session(request, game_id)
    async with session.lock:
        state = session.engine.get_state()
    return build_draw_list(state)


@router.post("/{game_id}/reset")
async def reset_game(game_id: str, request: Request) -> GameSummary:
    """Start a new game in this session; the high score is kept."""
    try:
        session = await _get_manager(request).reset_session(game_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Game not found.") from exc
    except ValueError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return session.summary()


@router.delete("/{game_id}", status_code=204)
async def delete_game(game_id: str, request: Request) -> Response:
    """Stop the game and discard it."""
    try:
        await _get_manager(request).close_session(game_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Game not found.") from exc
    return Response(status_code=204)
