"""In-memory session registry and the async frame loops that drive it."""

from __future__ import annotations

import asyncio
import json
import logging
import uuid
from dataclasses import dataclass, field

from starlette.websockets import WebSocket, WebSocketState

from snake_arcade.config import GameConfig
from snake_arcade.engine import GameEngine
from snake_arcade.input import InputFrame
from snake_arcade.server.models import GameStatus, GameSummary

logger = logging.getLogger(__name__)

_MAX_SESSIONS = 100


@dataclass
class GameSession:
    """All state for one running game."""

    game_id: str
    variant: str
    config: GameConfig
    engine: GameEngine
    latest_input: InputFrame = field(default_factory=InputFrame)
    sockets: list[WebSocket] = field(default_factory=list)
    status: GameStatus = GameStatus.ACTIVE
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    _task: asyncio.Task | None = field(default=None, repr=False)

    def summary(self) -> GameSummary:
        return GameSummary(
            game_id=self.game_id,
            variant=self.variant,
            status=self.status,
            score=self.engine.score,
            high_score=self.engine.high_score,
            frame_rate=self.config.frame_rate,
            viewers=len(self.sockets),
        )


class SessionManager:
    """Central registry managing all game sessions.

    Each session runs its own frame loop, which stands in for the display
    refresh: it feeds the latest client input to the engine once per frame
    and pushes the state out after every simulation step.
    """

    def __init__(
        self,
        default_config: GameConfig | None = None,
        max_sessions: int = _MAX_SESSIONS,
    ) -> None:
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1.")
        self.default_config = default_config
        self._sessions: dict[str, GameSession] = {}
        self._max_sessions = max_sessions

    def create_session(
        self, variant: str = "default", **overrides,
    ) -> GameSession:
        """Create a game and start its frame loop."""
        if len(self._sessions) >= self._max_sessions:
            raise OverflowError("Too many active games. Try again later.")

        overrides = {k: v for k, v in overrides.items() if v is not None}
        if variant == "default":
            base = self.default_config or GameConfig()
            config = base.replace(**overrides) if overrides else base
        else:
            config = GameConfig.preset(variant, **overrides)

        game_id = uuid.uuid4().hex[:12]
        session = GameSession(
            game_id=game_id,
            variant=variant,
            config=config,
            engine=GameEngine(config),
        )
        self._sessions[game_id] = session
        session._task = asyncio.create_task(self._frame_loop(session))
        logger.info("Game %s created (variant=%s).", game_id, variant)
        return session

    def get_session(self, game_id: str) -> GameSession | None:
        return self._sessions.get(game_id)

    def _require(self, game_id: str) -> GameSession:
        session = self._sessions.get(game_id)
        if session is None:
            raise KeyError(f"Game {game_id} not found.")
        return session

    def list_sessions(self) -> list[GameSummary]:
        return [s.summary() for s in self._sessions.values()]

    async def reset_session(self, game_id: str) -> GameSession:
        """Start a new game in an existing session, keeping its high score."""
        session = self._require(game_id)
        if session.status == GameStatus.FAILED:
            raise ValueError("Game loop has stopped; create a new game.")
        async with session.lock:
            session.engine.reset()
            state = session.engine.get_state()
        await self._broadcast(session, state)
        return session

    async def close_session(self, game_id: str) -> None:
        """Stop a session's frame loop and drop it from the registry."""
        session = self._sessions.pop(game_id, None)
        if session is None:
            raise KeyError(f"Game {game_id} not found.")
        await self._stop(session)
        await self._close_connections(session)
        logger.info("Game %s closed.", game_id)

    async def _frame_loop(self, session: GameSession) -> None:
        """Update the engine once per frame, broadcasting after each step."""
        frame_interval = 1.0 / session.config.frame_rate
        try:
            while True:
                await asyncio.sleep(frame_interval)
                async with session.lock:
                    stepped = session.engine.update(session.latest_input)
                    state = session.engine.get_state() if stepped else None
                if state is not None:
                    await self._broadcast(session, state)
        except asyncio.CancelledError:
            logger.info("Frame loop cancelled for game %s.", session.game_id)
        except Exception:
            logger.exception("Frame loop error in game %s.", session.game_id)
            session.status = GameStatus.FAILED
            await self._close_connections(session)

    async def _stop(self, session: GameSession) -> None:
        task = session._task
        if task is not None and not task.done():
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)

    async def _close_connections(self, session: GameSession) -> None:
        for ws in list(session.sockets):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.close(code=1000, reason="Game closed.")
            except Exception:
                logger.warning("Failed closing socket in game %s.", session.game_id)
        session.sockets.clear()

    async def _broadcast(self, session: GameSession, state: dict) -> None:
        """Send game state to every connected socket."""
        payload = json.dumps(state, separators=(",", ":"))
        dead: list[WebSocket] = []

        # Iterate over a snapshot so disconnect handlers can mutate the list.
        for ws in list(session.sockets):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.send_text(payload)
            except Exception:
                dead.append(ws)

        for ws in dead:
            if ws in session.sockets:
                session.sockets.remove(ws)

    async def cleanup(self) -> None:
        """Cancel all running frame loops."""
        for session in list(self._sessions.values()):
            await self._stop(session)
        logger.info("SessionManager cleanup complete.")
