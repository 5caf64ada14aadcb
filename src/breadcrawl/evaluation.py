from __future__ import annotations

from dataclasses import dataclass

from .config import EvaluationConfig
from .dungeon import Dungeon
from .rooms import RARITY_TIER_ORDER, RoomType


@dataclass
class LayoutMetrics:
    fill_ratio: float
    branching_factor: float
    dead_end_ratio: float
    hostile_ratio: float
    rare_diversity: float
    raw_room_count: int


def _compute_metrics(dungeon: Dungeon) -> LayoutMetrics:
    grid = dungeon.grid
    occupied = [(coord, room_type) for coord, room_type in grid.cells() if room_type is not RoomType.EMPTY]
    total_rooms = max(len(occupied), 1)

    branching_rooms = 0
    dead_ends = 0
    hostile_rooms = 0
    rare_types = set()

    for coord, room_type in occupied:
        degree = sum(1 for n in coord.neighbors4() if grid.is_occupied(n.row, n.col))
        if coord != dungeon.start and degree <= 1:
            dead_ends += 1
        if degree >= 3:
            branching_rooms += 1
        if room_type.is_hostile:
            hostile_rooms += 1
        if room_type in RARITY_TIER_ORDER:
            rare_types.add(room_type)

    return LayoutMetrics(
        fill_ratio=min(dungeon.expansion.placed_count, dungeon.expansion.target_count) / dungeon.expansion.target_count,
        branching_factor=branching_rooms / total_rooms,
        dead_end_ratio=dead_ends / total_rooms,
        hostile_ratio=hostile_rooms / total_rooms,
        rare_diversity=len(rare_types) / len(RARITY_TIER_ORDER),
        raw_room_count=len(occupied),
    )


def score_layout(dungeon: Dungeon, evaluation: EvaluationConfig) -> tuple[float, LayoutMetrics]:
    metrics = _compute_metrics(dungeon)
    weights = evaluation.weights

    score = 0.0
    score += weights.get("fill_ratio", 0.0) * metrics.fill_ratio
    score += weights.get("branching_factor", 0.0) * metrics.branching_factor
    score += weights.get("dead_end_penalty", 0.0) * metrics.dead_end_ratio
    score += weights.get("hostile_ratio", 0.0) * metrics.hostile_ratio
    score += weights.get("rare_diversity", 0.0) * metrics.rare_diversity

    return score, metrics
