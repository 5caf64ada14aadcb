from __future__ import annotations

import argparse
import json
import logging
import random
import sys
from pathlib import Path

from .config import Config, default_config, load_config
from .dungeon import Dungeon, DungeonBuilder
from .evaluation import score_layout
from .logging_utils import setup_logging
from .rooms import RoomType

logger = logging.getLogger(__name__)


def _render_ascii(dungeon: Dungeon) -> str:
    lines = ["".join(room_type.glyph for room_type in row) for row in dungeon.grid.rows()]
    present = {room_type for row in dungeon.grid.rows() for room_type in row}
    legend = [
        f"  {room_type.glyph}  {room_type.description}"
        for room_type in RoomType
        if room_type in present and room_type is not RoomType.EMPTY
    ]
    return "\n".join(lines + ["", "Legend:"] + legend)


def _select_best_dungeon(config: Config, candidate_count: int, rng: random.Random):
    builder = DungeonBuilder(config.generation, config.rooms)
    best_dungeon = None
    best_score = float("-inf")
    best_metrics = None

    for _ in range(max(candidate_count, 1)):
        seed = rng.getrandbits(32)
        candidate = builder.build(seed)
        score, metrics = score_layout(candidate, config.evaluation)
        logger.debug("Candidate seed=%d score=%.3f rooms=%d", seed, score, metrics.raw_room_count)
        if score > best_score:
            best_score = score
            best_dungeon = candidate
            best_metrics = metrics

    if best_dungeon is None:
        raise RuntimeError("Failed to generate any dungeon candidates.")
    return best_dungeon, best_score, best_metrics


def build_dungeon(config: Config, seed: int | None = None, candidate_count: int | None = None):
    """Build a dungeon; a single candidate uses ``seed`` directly, several are drawn from it."""
    effective_seed = seed if seed is not None else config.generation.seed
    if effective_seed is None:
        effective_seed = random.Random().getrandbits(32)
    effective_candidates = candidate_count if candidate_count is not None else config.evaluation.candidate_count
    if effective_candidates <= 1:
        dungeon = DungeonBuilder(config.generation, config.rooms).build(effective_seed)
        score, metrics = score_layout(dungeon, config.evaluation)
        return dungeon, score, metrics
    return _select_best_dungeon(config, effective_candidates, random.Random(effective_seed))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Generate a grid dungeon layout with typed rooms.")
    parser.add_argument("--config", type=Path, default=None,
                        help="Path to a TOML config file. Built-in defaults are used when omitted.")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed; the same seed and config always give the same layout.")
    parser.add_argument("--candidates", type=int, default=None,
                        help="Number of layouts to sample before keeping the best scoring one.")
    parser.add_argument("--format", choices=("json", "ascii"), default="ascii",
                        help="Choose the output format.")
    parser.add_argument("--log-level", default="WARNING",
                        help="Logging level for diagnostics written to stderr.")
    args = parser.parse_args(argv)

    try:
        setup_logging(args.log_level)
        config = load_config(args.config) if args.config is not None else default_config()
    except (FileNotFoundError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    dungeon, best_score, best_metrics = build_dungeon(config, args.seed, args.candidates)

    if args.format == "json":
        payload = dungeon.to_dict()
        payload["evaluation"] = {
            "score": best_score,
            "fill_ratio": best_metrics.fill_ratio,
            "branching_factor": best_metrics.branching_factor,
            "dead_end_ratio": best_metrics.dead_end_ratio,
            "hostile_ratio": best_metrics.hostile_ratio,
            "rare_diversity": best_metrics.rare_diversity,
            "room_count": best_metrics.raw_room_count,
        }
        print(json.dumps(payload, indent=2))
    else:
        print(_render_ascii(dungeon))
        generation = dungeon.expansion
        print(f"\nRooms: {generation.placed_count}/{generation.target_count} (stopped: {generation.halt_reason})")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
