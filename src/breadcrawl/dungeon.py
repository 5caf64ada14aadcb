from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Dict, Optional

from .classifier import ClassificationResult, RoomClassifier
from .config import GenerationConfig
from .expansion import ExpansionGenerator, ExpansionResult
from .grid import Grid
from .rooms import Coordinate, RoomType
from .settings import RoomSettings

logger = logging.getLogger(__name__)


@dataclass
class Dungeon:
    grid: Grid
    start: Coordinate
    seed: Optional[int]
    expansion: ExpansionResult
    classification: ClassificationResult

    def room_at(self, row: int, col: int) -> Optional[RoomType]:
        return self.grid.get(row, col)

    def type_counts(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for _, room_type in self.grid.cells():
            if room_type is not RoomType.EMPTY:
                counts[room_type.name] = counts.get(room_type.name, 0) + 1
        return counts

    def to_dict(self) -> Dict[str, object]:
        return {
            "height": self.grid.height,
            "width": self.grid.width,
            "seed": self.seed,
            "start": list(self.start),
            "rows": [[room_type.name for room_type in row] for row in self.grid.rows()],
            "counts": self.type_counts(),
            "generation": {
                "placed": self.expansion.placed_count,
                "target": self.expansion.target_count,
                "ceiling": self.expansion.ceiling,
                "halt_reason": self.expansion.halt_reason,
                "reached_target": self.expansion.reached_target,
            },
        }


class DungeonBuilder:
    """Runs expansion then classification on a fresh grid.

    Both phases draw from the same ``random.Random(seed)``, so one seed fixes
    the whole layout. The grid is handed out only once both phases are done.
    """

    def __init__(self, generation: GenerationConfig, settings: RoomSettings) -> None:
        self.generation = generation
        self.settings = settings
        self._expander = ExpansionGenerator(generation.target_rooms, generation.density_ceiling)
        self._classifier = RoomClassifier(settings)

    def build(self, seed: Optional[int] = None, start: Optional[Coordinate] = None) -> Dungeon:
        rng = random.Random(seed)
        grid = Grid(self.generation.height, self.generation.width)
        expansion = self._expander.run(grid, rng, start)
        classification = self._classifier.run(grid, rng, expansion.start)
        logger.info(
            "Built %dx%d dungeon (seed=%s) with %d rooms",
            grid.height,
            grid.width,
            seed,
            expansion.placed_count,
        )
        return Dungeon(
            grid=grid,
            start=expansion.start,
            seed=seed,
            expansion=expansion,
            classification=classification,
        )
