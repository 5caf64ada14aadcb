from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Optional

from .rooms import RoomType

# Large enough that pool_size // SUPPRESS_DIVISOR is 0 for any real grid.
SUPPRESS_DIVISOR = 1_000_000_000


@dataclass(frozen=True)
class SettingsEntry:
    spawn_chance_percent: int = 0
    count_divisor: int = SUPPRESS_DIVISOR
    max_count: int = 0

    def sanitized(self) -> "SettingsEntry":
        return SettingsEntry(
            spawn_chance_percent=min(100, max(0, self.spawn_chance_percent)),
            count_divisor=self.count_divisor if self.count_divisor > 0 else SUPPRESS_DIVISOR,
            max_count=max(0, self.max_count),
        )


CONSERVATIVE_ENTRY = SettingsEntry()


@dataclass(frozen=True)
class RoomSettings:
    """Resolved per-room-type settings consumed by the classifier."""

    entries: Mapping[RoomType, SettingsEntry] = field(default_factory=dict)
    colors: Mapping[RoomType, str] = field(default_factory=dict)

    def lookup(self, room_type: RoomType) -> SettingsEntry:
        entry = self.entries.get(room_type)
        if entry is None:
            return CONSERVATIVE_ENTRY
        return entry.sanitized()

    def color(self, room_type: RoomType) -> str:
        return self.colors.get(room_type, room_type.default_color)

    def replace_entries(self, overrides: Mapping[RoomType, SettingsEntry], color_overrides: Optional[Mapping[RoomType, str]] = None) -> "RoomSettings":
        entries = dict(self.entries)
        entries.update(overrides)
        colors = dict(self.colors)
        if color_overrides:
            colors.update(color_overrides)
        return RoomSettings(entries=entries, colors=colors)


DEFAULT_ROOM_SETTINGS = RoomSettings(
    entries={
        RoomType.ENEMY_ROOM: SettingsEntry(spawn_chance_percent=30),
        RoomType.DIFFICULT_ENEMY_ROOM: SettingsEntry(count_divisor=12, max_count=20),
        RoomType.SHOP: SettingsEntry(count_divisor=25, max_count=6),
        RoomType.SMITHY: SettingsEntry(count_divisor=30, max_count=4),
        RoomType.TREASURE_ROOM: SettingsEntry(count_divisor=18, max_count=10),
        RoomType.SHRINE: SettingsEntry(count_divisor=20, max_count=8),
        RoomType.BOSS_ROOM: SettingsEntry(count_divisor=60, max_count=3),
    },
)
