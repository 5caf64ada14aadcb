"""Procedural grid dungeon layouts: randomized frontier growth plus rarity-tiered room typing."""

from .classifier import ClassificationResult, RoomClassifier
from .config import Config, default_config, load_config
from .dungeon import Dungeon, DungeonBuilder
from .expansion import ExpansionGenerator, ExpansionResult, FrontierSet
from .grid import Grid
from .rooms import RARITY_TIER_ORDER, Coordinate, RoomType
from .settings import DEFAULT_ROOM_SETTINGS, RoomSettings, SettingsEntry

__all__ = [
    "ClassificationResult",
    "Config",
    "Coordinate",
    "DEFAULT_ROOM_SETTINGS",
    "Dungeon",
    "DungeonBuilder",
    "ExpansionGenerator",
    "ExpansionResult",
    "FrontierSet",
    "Grid",
    "RARITY_TIER_ORDER",
    "RoomClassifier",
    "RoomSettings",
    "RoomType",
    "SettingsEntry",
    "default_config",
    "load_config",
]
