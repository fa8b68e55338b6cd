"""Command-line launcher for Snake Arcade."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from dataclasses import dataclass

import numpy as np

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="snake-arcade",
        description="Snake Arcade game server and headless simulator.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- serve ---
    serve_p = sub.add_parser("serve", help="Run the game server.")
    serve_p.add_argument("--host", type=str, default="127.0.0.1")
    serve_p.add_argument("--port", type=int, default=8000)
    serve_p.add_argument(
        "--variant", type=str, default="classic",
        help="Preset used for games created with the default variant.",
    )
    serve_p.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON config file (overrides --variant).",
    )

    # --- simulate ---
    sim_p = sub.add_parser(
        "simulate", help="Run the engine headless with random key presses.",
    )
    sim_p.add_argument("--variant", type=str, default="classic")
    sim_p.add_argument("--config", type=str, default=None)
    sim_p.add_argument("--frames", type=_positive_int, default=10_000)
    sim_p.add_argument("--seed", type=int, default=None)

    return parser


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"{value} is not a positive integer")
    return number


def _load_config(args: argparse.Namespace, **overrides):
    from snake_arcade.config import GameConfig

    if args.config:
        config = GameConfig.load(args.config)
        return config.replace(**overrides) if overrides else config
    return GameConfig.preset(args.variant, **overrides)


@dataclass
class SimulationResult:
    """Outcome of a headless simulation run."""

    frames: int
    steps: int
    games: int
    score: int
    high_score: int
    wall_time_seconds: float

    def summary(self) -> str:
        return (
            f"Simulated {self.frames} frames ({self.steps} steps, "
            f"{self.games} resets) in {self.wall_time_seconds:.2f}s | "
            f"score {self.score}, high score {self.high_score}"
        )


def simulate(config, frames: int, seed: int | None = None) -> SimulationResult:
    """Drive an engine for *frames* frames, pressing a random key now and then."""
    from snake_arcade.engine import GameEngine
    from snake_arcade.input import InputFrame, Key

    engine = GameEngine(config, rng=np.random.default_rng(seed))
    input_rng = np.random.default_rng(None if seed is None else seed + 1)
    keys = list(Key)
    start = time.perf_counter()

    for _ in range(frames):
        frame = None
        if input_rng.random() < 0.05:
            frame = InputFrame(keys=frozenset({keys[input_rng.integers(len(keys))]}))
        engine.update(frame)

    elapsed = time.perf_counter() - start
    result = SimulationResult(
        frames=engine.frame,
        steps=engine.steps,
        games=engine.games_played,
        score=engine.score,
        high_score=engine.high_score,
        wall_time_seconds=elapsed,
    )
    logger.info(result.summary())
    return result


def _run_serve(args: argparse.Namespace) -> int:
    import uvicorn

    from snake_arcade.server.app import create_app

    app = create_app(_load_config(args))
    uvicorn.run(app, host=args.host, port=args.port)
    return 0


def _run_simulate(args: argparse.Namespace) -> int:
    overrides = {"seed": args.seed} if args.seed is not None else {}
    config = _load_config(args, **overrides)
    result = simulate(config, args.frames, seed=config.seed)
    print(result.summary())  # noqa: T201
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``snake-arcade`` CLI."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    handlers = {
        "serve": _run_serve,
        "simulate": _run_simulate,
    }
    try:
        return handlers[args.command](args)
    except ValueError as exc:
        parser.error(str(exc))


if __name__ == "__main__":
    sys.exit(main())
