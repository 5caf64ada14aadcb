from __future__ import annotations

from enum import Enum
from typing import NamedTuple, Optional, Tuple


class Coordinate(NamedTuple):
    row: int
    col: int

    def offset(self, d_row: int, d_col: int) -> "Coordinate":
        return Coordinate(self.row + d_row, self.col + d_col)

    def neighbors4(self) -> Tuple["Coordinate", ...]:
        """Orthogonal neighbors in N, S, E, W order."""
        return tuple(self.offset(d_row, d_col) for d_row, d_col in ORTHOGONAL_STEPS)

    def neighbors8(self) -> Tuple["Coordinate", ...]:
        return tuple(
            self.offset(d_row, d_col)
            for d_row in (-1, 0, 1)
            for d_col in (-1, 0, 1)
            if d_row or d_col
        )


ORTHOGONAL_STEPS: Tuple[Tuple[int, int], ...] = ((-1, 0), (1, 0), (0, 1), (0, -1))


class RoomType(Enum):
    # name = (code, description, traversable, glyph, default colour)
    EMPTY = (0, "Empty Space", False, " ", "#000000")
    CORRIDOR = (1, "Corridor", True, "+", "#D3D3D3")
    START = (2, "Starting Room", True, "S", "#00FFFF")
    ENEMY_ROOM = (3, "Enemy Room", True, "e", "#FF0000")
    DIFFICULT_ENEMY_ROOM = (4, "Difficult Enemy Room", True, "E", "#8B0000")
    SHOP = (5, "Shop", True, "$", "#FFFF00")
    SMITHY = (6, "Smithy", True, "A", "#FFA500")
    TREASURE_ROOM = (7, "Treasure Room", True, "T", "#00FF00")
    PLAIN_ROOM = (8, "Plain Room", True, ".", "#FFFFFF")
    SHRINE = (9, "Shrine", True, "^", "#0000FF")
    BOSS_ROOM = (10, "Boss Room", True, "B", "#FF00FF")

    def __init__(self, code: int, description: str, traversable: bool, glyph: str, color: str) -> None:
        self.code = code
        self.description = description
        self.traversable = traversable
        self.glyph = glyph
        self.default_color = color

    @property
    def is_hostile(self) -> bool:
        return self in HOSTILE_TYPES

    @classmethod
    def from_name(cls, name: str) -> Optional["RoomType"]:
        key = name.strip().upper()
        return cls.__members__.get(_NAME_ALIASES.get(key, key))


# Older settings files key the start room as START_ROOM.
_NAME_ALIASES = {"START_ROOM": "START"}

HOSTILE_TYPES = frozenset({RoomType.ENEMY_ROOM, RoomType.DIFFICULT_ENEMY_ROOM, RoomType.BOSS_ROOM})

# Rarest first. Classification hands out the shuffled pool in this order.
RARITY_TIER_ORDER: Tuple[RoomType, ...] = (
    RoomType.BOSS_ROOM,
    RoomType.SHOP,
    RoomType.SHRINE,
    RoomType.TREASURE_ROOM,
    RoomType.SMITHY,
    RoomType.DIFFICULT_ENEMY_ROOM,
)
