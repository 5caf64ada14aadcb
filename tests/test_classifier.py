import random

from breadcrawl.classifier import RoomClassifier
from breadcrawl.expansion import ExpansionGenerator
from breadcrawl.grid import Grid
from breadcrawl.rooms import HOSTILE_TYPES, RARITY_TIER_ORDER, Coordinate, RoomType
from breadcrawl.settings import SUPPRESS_DIVISOR, RoomSettings, SettingsEntry

from layout_test_utils import occupied_cells


def generate(settings, height=10, width=10, target=20, seed=77):
    rng = random.Random(seed)
    grid = Grid(height, width)
    expansion = ExpansionGenerator(target).run(grid, rng)
    corridors = set(grid.coordinates_of(RoomType.CORRIDOR))
    result = RoomClassifier(settings).run(grid, rng, expansion.start)
    return grid, expansion, result, corridors


def test_enemy_only_scenario(enemy_only_settings):
    grid, expansion, result, corridors = generate(enemy_only_settings)
    ring = set(expansion.start.neighbors8())
    for coord in corridors:
        expected = RoomType.PLAIN_ROOM if coord in ring else RoomType.ENEMY_ROOM
        assert grid.get(coord.row, coord.col) is expected, f"{coord} is {grid.get(coord.row, coord.col)}"
    assert expansion.placed_count <= 20
    assert len(occupied_cells(grid)) == expansion.placed_count
    assert all(count == 0 for tier, count in result.placed.items() if tier in RARITY_TIER_ORDER)


def test_zero_divisor_suppresses_boss_rooms():
    settings = RoomSettings(entries={RoomType.BOSS_ROOM: SettingsEntry(count_divisor=0, max_count=5)})
    for seed in range(5):
        grid, _, result, _ = generate(settings, height=25, width=25, target=150, seed=seed)
        assert grid.count(RoomType.BOSS_ROOM) == 0
        assert result.budgets[RoomType.BOSS_ROOM] == 0


def test_no_corridor_survives(default_settings, generous_settings):
    for settings in (default_settings, generous_settings):
        for seed in range(8):
            grid, _, _, _ = generate(settings, height=21, width=21, target=90, seed=seed)
            assert grid.count(RoomType.CORRIDOR) == 0, f"Seed {seed} left corridor cells behind"


def test_safety_zone_never_hostile(generous_settings):
    for seed in range(10):
        grid, expansion, _, _ = generate(generous_settings, height=15, width=15, target=60, seed=seed)
        start = expansion.start
        assert grid.get(start.row, start.col) is RoomType.START
        for coord in start.neighbors8():
            room_type = grid.get(coord.row, coord.col)
            assert room_type in (RoomType.EMPTY, RoomType.PLAIN_ROOM), f"Seed {seed}: {room_type} beside start"
            assert room_type not in HOSTILE_TYPES


def test_rarity_budgets_respected(default_settings, generous_settings):
    for settings in (default_settings, generous_settings):
        for seed in range(6):
            grid, _, result, _ = generate(settings, height=25, width=25, target=200, seed=seed)
            for tier in RARITY_TIER_ORDER:
                entry = settings.lookup(tier)
                budget = result.budgets[tier]
                assert budget == min(entry.max_count, result.general_count // entry.count_divisor)
                assert grid.count(tier) == result.placed[tier] <= budget


def test_generous_budget_is_filled_rarest_first(generous_settings):
    grid, _, result, _ = generate(generous_settings, height=21, width=21, target=80, seed=5)
    assert result.general_count >= 12
    for tier in RARITY_TIER_ORDER:
        assert grid.count(tier) == 2, f"{tier.name} placed {grid.count(tier)}"


def test_every_tier_budget_uses_whole_general_pool():
    # 24 general cells, far from the start ring.
    grid = Grid(10, 10)
    start = Coordinate(1, 1)
    grid.set(start.row, start.col, RoomType.START)
    for row in range(4, 8):
        for col in range(6):
            grid.set(row, col, RoomType.CORRIDOR)
    settings = RoomSettings(
        entries={
            RoomType.BOSS_ROOM: SettingsEntry(count_divisor=12, max_count=1),
            RoomType.SHOP: SettingsEntry(count_divisor=12, max_count=5),
        }
    )
    result = RoomClassifier(settings).run(grid, random.Random(1), start)
    assert result.adjacent_count == 0 and result.general_count == 24
    assert result.budgets[RoomType.BOSS_ROOM] == 1
    assert result.budgets[RoomType.SHOP] == 2
    assert grid.count(RoomType.BOSS_ROOM) == 1
    assert grid.count(RoomType.SHOP) == 2


def test_tier_stops_when_pool_runs_out():
    # Three general cells: boss takes two, shop keeps its budget of three but only one cell is left.
    grid = Grid(9, 9)
    start = Coordinate(4, 4)
    grid.set(start.row, start.col, RoomType.START)
    for coord in (Coordinate(4, 5), Coordinate(4, 6), Coordinate(4, 7), Coordinate(3, 7)):
        grid.set(coord.row, coord.col, RoomType.CORRIDOR)
    settings = RoomSettings(
        entries={
            RoomType.BOSS_ROOM: SettingsEntry(count_divisor=1, max_count=2),
            RoomType.SHOP: SettingsEntry(count_divisor=1, max_count=5),
        }
    )
    result = RoomClassifier(settings).run(grid, random.Random(1), start)
    assert result.adjacent_count == 1 and result.general_count == 3
    assert result.budgets[RoomType.BOSS_ROOM] == 2
    assert result.budgets[RoomType.SHOP] == 3
    assert grid.count(RoomType.BOSS_ROOM) == 2
    assert grid.count(RoomType.SHOP) == result.placed[RoomType.SHOP] == 1
    assert grid.get(4, 5) is RoomType.PLAIN_ROOM



def test_zero_enemy_chance_makes_plain_rooms():
    settings = RoomSettings()
    grid, _, result, corridors = generate(settings, height=15, width=15, target=50, seed=8)
    assert grid.count(RoomType.ENEMY_ROOM) == 0
    assert grid.count(RoomType.PLAIN_ROOM) == len(corridors)
    assert result.placed[RoomType.PLAIN_ROOM] == len(corridors)


def test_start_is_reasserted():
    grid = Grid(5, 5)
    start = Coordinate(2, 2)
    grid.set(start.row, start.col, RoomType.SHOP)
    RoomClassifier(RoomSettings()).run(grid, random.Random(0), start)
    assert grid.get(2, 2) is RoomType.START


def test_settings_sanitized_on_lookup():
    settings = RoomSettings(
        entries={
            RoomType.SHOP: SettingsEntry(spawn_chance_percent=150, count_divisor=-4, max_count=-1),
            RoomType.ENEMY_ROOM: SettingsEntry(spawn_chance_percent=-10),
        }
    )
    shop = settings.lookup(RoomType.SHOP)
    assert shop == SettingsEntry(spawn_chance_percent=100, count_divisor=SUPPRESS_DIVISOR, max_count=0)
    assert settings.lookup(RoomType.ENEMY_ROOM).spawn_chance_percent == 0
    missing = settings.lookup(RoomType.SMITHY)
    assert missing == SettingsEntry(spawn_chance_percent=0, count_divisor=SUPPRESS_DIVISOR, max_count=0)


def test_same_seed_same_classification(default_settings):
    first, _, _, _ = generate(default_settings, height=25, width=25, target=120, seed=2024)
    second, _, _, _ = generate(default_settings, height=25, width=25, target=120, seed=2024)
    assert first.rows() == second.rows()
