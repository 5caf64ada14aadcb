from __future__ import annotations

from typing import Iterator, List, Optional, Tuple

from .rooms import Coordinate, RoomType


class Grid:
    """Fixed-size store of room types addressed by (row, col).

    Out-of-range coordinates are an ordinary negative result: ``get`` returns
    ``None`` and ``set`` returns ``False``. Generation probes the edges all
    the time, so nothing here raises for a bad coordinate.
    """

    def __init__(self, height: int, width: int) -> None:
        if height <= 0 or width <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {height}x{width}.")
        self.height = height
        self.width = width
        self._cells: List[List[RoomType]] = [[RoomType.EMPTY] * width for _ in range(height)]

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def get(self, row: int, col: int) -> Optional[RoomType]:
        if not self.in_bounds(row, col):
            return None
        return self._cells[row][col]

    def set(self, row: int, col: int, room_type: RoomType) -> bool:
        if not self.in_bounds(row, col):
            return False
        self._cells[row][col] = room_type
        return True

    def is_occupied(self, row: int, col: int) -> bool:
        # Outside the grid reads as empty space, not as a wall.
        room_type = self.get(row, col)
        return room_type is not None and room_type is not RoomType.EMPTY

    def reset(self) -> None:
        for row in self._cells:
            for col in range(self.width):
                row[col] = RoomType.EMPTY

    def cells(self) -> Iterator[Tuple[Coordinate, RoomType]]:
        for row_idx, row in enumerate(self._cells):
            for col_idx, room_type in enumerate(row):
                yield Coordinate(row_idx, col_idx), room_type

    def coordinates_of(self, room_type: RoomType) -> List[Coordinate]:
        return [coord for coord, value in self.cells() if value is room_type]

    def count(self, room_type: RoomType) -> int:
        return sum(row.count(room_type) for row in self._cells)

    def occupied_count(self) -> int:
        return self.height * self.width - self.count(RoomType.EMPTY)

    def rows(self) -> Tuple[Tuple[RoomType, ...], ...]:
        return tuple(tuple(row) for row in self._cells)

    def copy(self) -> "Grid":
        clone = Grid(self.height, self.width)
        clone._cells = [list(row) for row in self._cells]
        return clone

    def __repr__(self) -> str:
        return f"Grid(height={self.height}, width={self.width}, occupied={self.occupied_count()})"
