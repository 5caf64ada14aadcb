import logging
import random

import pytest

from breadcrawl.config import GenerationConfig
from breadcrawl.rooms import RoomType
from breadcrawl.settings import DEFAULT_ROOM_SETTINGS, RoomSettings, SettingsEntry


@pytest.fixture(autouse=True)
def _restore_logging():
    root = logging.getLogger()
    handlers = list(root.handlers)
    yield
    root.handlers[:] = handlers
    logging.getLogger("breadcrawl").setLevel(logging.NOTSET)


@pytest.fixture()
def rng():
    return random.Random(20250415)


@pytest.fixture()
def default_settings():
    return DEFAULT_ROOM_SETTINGS


@pytest.fixture()
def enemy_only_settings():
    """Every general cell turns hostile; no rare tier gets a budget."""
    return RoomSettings(entries={RoomType.ENEMY_ROOM: SettingsEntry(spawn_chance_percent=100)})


@pytest.fixture()
def generous_settings():
    """Divisor 1 for every tier so small layouts still receive rare rooms."""
    entries = {
        tier: SettingsEntry(count_divisor=1, max_count=2)
        for tier in (
            RoomType.BOSS_ROOM,
            RoomType.SHOP,
            RoomType.SHRINE,
            RoomType.TREASURE_ROOM,
            RoomType.SMITHY,
            RoomType.DIFFICULT_ENEMY_ROOM,
        )
    }
    entries[RoomType.ENEMY_ROOM] = SettingsEntry(spawn_chance_percent=50)
    return RoomSettings(entries=entries)


@pytest.fixture()
def small_generation():
    return GenerationConfig(height=15, width=15, target_rooms=40)
