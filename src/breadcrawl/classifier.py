from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Dict, List, Mapping

from .grid import Grid
from .rooms import RARITY_TIER_ORDER, Coordinate, RoomType
from .settings import RoomSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClassificationResult:
    placed: Mapping[RoomType, int]
    budgets: Mapping[RoomType, int]
    adjacent_count: int
    general_count: int


class RoomClassifier:
    """Turns every corridor cell into a final room type.

    Corridor cells touching the start (all 8 neighbours) are held back and
    become plain rooms. The rest are shuffled and handed out to the rarity
    tiers rarest first. Every tier budget is
    ``min(max_count, len(general) // count_divisor)`` over the whole general
    pool; a tier stops early only when the shuffled pool runs out. Whatever is left
    rolls once against the enemy spawn chance.
    """

    def __init__(self, settings: RoomSettings) -> None:
        self.settings = settings

    def run(self, grid: Grid, rng: random.Random, start: Coordinate) -> ClassificationResult:
        pool = grid.coordinates_of(RoomType.CORRIDOR)
        safe_zone = set(start.neighbors8())
        adjacent = [coord for coord in pool if coord in safe_zone]
        general = [coord for coord in pool if coord not in safe_zone]
        general_count = len(general)

        rng.shuffle(general)
        placed: Dict[RoomType, int] = {}
        budgets: Dict[RoomType, int] = {}

        remaining: List[Coordinate] = list(general)
        for tier in RARITY_TIER_ORDER:
            entry = self.settings.lookup(tier)
            budget = min(entry.max_count, general_count // entry.count_divisor)
            budgets[tier] = budget
            count = 0
            while count < budget and remaining:
                coord = remaining.pop()
                if grid.get(coord.row, coord.col) is RoomType.CORRIDOR:
                    grid.set(coord.row, coord.col, tier)
                    count += 1
            placed[tier] = count
            logger.debug("Placed %d/%d %s", count, budget, tier.name)

        enemy_chance = self.settings.lookup(RoomType.ENEMY_ROOM).spawn_chance_percent
        enemies = plains = 0
        for coord in remaining:
            if grid.get(coord.row, coord.col) is not RoomType.CORRIDOR:
                continue
            if rng.randrange(100) < enemy_chance:
                grid.set(coord.row, coord.col, RoomType.ENEMY_ROOM)
                enemies += 1
            else:
                grid.set(coord.row, coord.col, RoomType.PLAIN_ROOM)
                plains += 1

        for coord in adjacent:
            grid.set(coord.row, coord.col, RoomType.PLAIN_ROOM)
        grid.set(start.row, start.col, RoomType.START)

        placed[RoomType.ENEMY_ROOM] = enemies
        placed[RoomType.PLAIN_ROOM] = plains + len(adjacent)
        logger.info(
            "Classified %d cells (%d reserved beside start): %s",
            len(pool),
            len(adjacent),
            ", ".join(f"{room_type.name}={count}" for room_type, count in placed.items() if count),
        )
        return ClassificationResult(
            placed=placed,
            budgets=budgets,
            adjacent_count=len(adjacent),
            general_count=general_count,
        )
