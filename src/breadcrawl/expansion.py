from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from .grid import Grid
from .rooms import Coordinate, RoomType

logger = logging.getLogger(__name__)

DEFAULT_DENSITY_CEILING = 0.75

HALT_TARGET = "target"
HALT_FRONTIER = "frontier"
HALT_CEILING = "ceiling"

# (orthogonal, orthogonal, diagonal) offsets of the four 2x2 squares a cell can complete: NW, NE, SW, SE.
_SQUARE_CORNERS: Tuple[Tuple[Tuple[int, int], Tuple[int, int], Tuple[int, int]], ...] = (
    ((-1, 0), (0, -1), (-1, -1)),
    ((-1, 0), (0, 1), (-1, 1)),
    ((1, 0), (0, -1), (1, -1)),
    ((1, 0), (0, 1), (1, 1)),
)


class FrontierSet:
    """Placed cells that may still grow.

    Picking is uniform over the live entries and removal swaps the last entry
    into the hole, so both are constant time. Order is not meaningful.
    """

    def __init__(self) -> None:
        self._items: List[Coordinate] = []

    def append(self, coord: Coordinate) -> None:
        self._items.append(coord)

    def pick_index(self, rng: random.Random) -> int:
        return rng.randrange(len(self._items))

    def remove_at(self, index: int) -> Coordinate:
        items = self._items
        removed = items[index]
        last = items.pop()
        if index < len(items):
            items[index] = last
        return removed

    def __getitem__(self, index: int) -> Coordinate:
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Coordinate]:
        return iter(self._items)


@dataclass(frozen=True)
class ExpansionResult:
    start: Coordinate
    placed_count: int
    target_count: int
    ceiling: int
    halt_reason: str

    @property
    def reached_target(self) -> bool:
        return self.placed_count >= self.target_count


class ExpansionGenerator:
    """Grows one connected network of corridor cells around a start cell.

    Each step picks a uniformly random frontier cell (not the newest, not the
    oldest) and extends it into a random valid neighbour. A neighbour is valid
    when it is empty, stays off the one-cell border, and does not close a 2x2
    block of occupied cells. Frontier cells with no valid neighbour are
    dropped for good, since the grid only ever fills up.
    """

    def __init__(self, target_count: int, density_ceiling: float = DEFAULT_DENSITY_CEILING) -> None:
        if target_count < 1:
            raise ValueError(f"target_count must be at least 1, got {target_count}.")
        if not 0 < density_ceiling <= 1:
            raise ValueError(f"density_ceiling must be in (0, 1], got {density_ceiling}.")
        self.target_count = target_count
        self.density_ceiling = density_ceiling

    def ceiling_for(self, grid: Grid) -> int:
        return max(1, int(grid.height * grid.width * self.density_ceiling))

    def run(self, grid: Grid, rng: random.Random, start: Optional[Coordinate] = None) -> ExpansionResult:
        if start is None:
            start = Coordinate(grid.height // 2, grid.width // 2)
        if not self._inside_border(grid, start):
            raise ValueError(f"Start {tuple(start)} must lie strictly inside the border of a {grid.height}x{grid.width} grid.")

        grid.reset()
        grid.set(start.row, start.col, RoomType.START)
        frontier = FrontierSet()
        frontier.append(start)
        placed_count = 1
        ceiling = self.ceiling_for(grid)
        halt_reason = HALT_TARGET

        while placed_count < self.target_count:
            if not frontier:
                halt_reason = HALT_FRONTIER
                break
            if placed_count >= ceiling:
                halt_reason = HALT_CEILING
                break
            index = frontier.pick_index(rng)
            candidates = self.valid_targets(grid, frontier[index])
            if candidates:
                chosen = candidates[rng.randrange(len(candidates))]
                grid.set(chosen.row, chosen.col, RoomType.CORRIDOR)
                frontier.append(chosen)
                placed_count += 1
            else:
                frontier.remove_at(index)

        result = ExpansionResult(
            start=start,
            placed_count=placed_count,
            target_count=self.target_count,
            ceiling=ceiling,
            halt_reason=halt_reason,
        )
        if result.reached_target:
            logger.info("Expansion placed %d/%d cells", placed_count, self.target_count)
        else:
            logger.warning(
                "Expansion stopped early (%s): placed %d/%d cells, ceiling %d",
                halt_reason,
                placed_count,
                self.target_count,
                ceiling,
            )
        return result

    def valid_targets(self, grid: Grid, coord: Coordinate) -> List[Coordinate]:
        return [
            neighbor
            for neighbor in coord.neighbors4()
            if self._inside_border(grid, neighbor)
            and grid.get(neighbor.row, neighbor.col) is RoomType.EMPTY
            and not completes_square(grid, neighbor)
        ]

    @staticmethod
    def _inside_border(grid: Grid, coord: Coordinate) -> bool:
        return 1 <= coord.row <= grid.height - 2 and 1 <= coord.col <= grid.width - 2


def completes_square(grid: Grid, coord: Coordinate) -> bool:
    """True when occupying ``coord`` would fill a 2x2 block.

    Cells outside the grid count as unoccupied, so the map edge never helps
    close a square.
    """
    for corner in _SQUARE_CORNERS:
        if all(grid.is_occupied(coord.row + d_row, coord.col + d_col) for d_row, d_col in corner):
            return True
    return False
