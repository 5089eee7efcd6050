"""Command-line tools for headless simulation and configuration."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import dataclass

import numpy as np

from grid_snake.config import GameConfig
from grid_snake.direction import Direction
from grid_snake.engine import GameEngine
from grid_snake.state import Phase

logger = logging.getLogger(__name__)

_DIRECTIONS = list(Direction)


@dataclass
class SimulationResult:
    """Outcome of a batch of headless games."""

    games: int
    scores: list[int]
    ticks: list[int]
    phases: dict[str, int]

    def summary(self) -> str:
        return json.dumps({
            "games": self.games,
            "mean_score": float(np.mean(self.scores)) if self.scores else 0.0,
            "max_score": max(self.scores, default=0),
            "mean_ticks": float(np.mean(self.ticks)) if self.ticks else 0.0,
            "phases": self.phases,
        }, indent=2)


def simulate(
    config: GameConfig,
    num_games: int = 1,
    max_ticks: int = 1_000,
    turn_probability: float = 0.2,
) -> SimulationResult:
    """Play *num_games* games with randomly turning input.

    The same seeded generator drives food placement and turns, so a fixed
    ``config.seed`` reproduces the whole batch.
    """
    rng = np.random.default_rng(config.seed)
    engine = GameEngine(config, rng=rng)
    scores: list[int] = []
    ticks: list[int] = []
    phases: dict[str, int] = {}

    for _ in range(num_games):
        state = engine.start(engine.reset(engine.initial_state()))
        while state.is_running and state.ticks < max_ticks:
            if rng.random() < turn_probability:
                turn = _DIRECTIONS[int(rng.integers(0, len(_DIRECTIONS)))]
                state = engine.request_direction(state, turn)
            state = engine.tick(state)
        scores.append(state.score)
        ticks.append(state.ticks)
        label = state.phase.value if state.phase is not Phase.RUNNING else "tick_limit"
        phases[label] = phases.get(label, 0) + 1

    return SimulationResult(
        games=num_games, scores=scores, ticks=ticks, phases=phases,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="grid-snake",
        description="Grid Snake headless simulation and configuration tools.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- simulate ---
    sim_p = sub.add_parser("simulate", help="Play random games headlessly.")
    sim_p.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON config file (other flags override it).",
    )
    sim_p.add_argument("--games", type=int, default=1)
    sim_p.add_argument("--max-ticks", type=int, default=1_000)
    sim_p.add_argument("--turn-probability", type=float, default=0.2)
    sim_p.add_argument("--grid-width", type=int, default=None)
    sim_p.add_argument("--grid-height", type=int, default=None)
    sim_p.add_argument("--seed", type=int, default=None)

    # --- config ---
    cfg_p = sub.add_parser("config", help="Print or save the default config.")
    cfg_p.add_argument(
        "--output", type=str, default=None,
        help="Write the config to this path instead of printing it.",
    )

    return parser


def _load_config(args: argparse.Namespace) -> GameConfig:
    config = GameConfig.load(args.config) if args.config else GameConfig()

    overrides: dict = {}
    flag_map = {
        "grid_width": "grid_width",
        "grid_height": "grid_height",
        "seed": "seed",
    }
    for cli_name, cfg_name in flag_map.items():
        val = getattr(args, cli_name, None)
        if val is not None:
            overrides[cfg_name] = val

    if overrides:
        d = config.to_dict()
        d.update(overrides)
        x, y = d["start_cell"]
        if not (0 <= x < d["grid_width"] and 0 <= y < d["grid_height"]):
            # Keep the spawn on the board when the grid shrank past it.
            d["start_cell"] = [d["grid_width"] // 2, d["grid_height"] // 2]
        config = GameConfig.from_dict(d)
    return config


def _run_simulate(args: argparse.Namespace) -> int:
    try:
        config = _load_config(args)
    except ValueError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 2

    result = simulate(
        config,
        num_games=args.games,
        max_ticks=args.max_ticks,
        turn_probability=args.turn_probability,
    )
    print(result.summary())  # noqa: T201
    return 0


def _run_config(args: argparse.Namespace) -> int:
    config = GameConfig()
    if args.output:
        config.save(args.output)
    else:
        print(json.dumps(config.to_dict(), indent=2))  # noqa: T201
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``grid-snake`` CLI."""
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
        "simulate": _run_simulate,
        "config": _run_config,
    }
    return handlers[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
