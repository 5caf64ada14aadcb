import pytest

from breadcrawl.grid import Grid
from breadcrawl.rooms import Coordinate, RoomType


def test_new_grid_is_empty():
    g = Grid(4, 7)
    assert (g.height, g.width) == (4, 7)
    assert all(room_type is RoomType.EMPTY for _, room_type in g.cells())
    assert g.count(RoomType.EMPTY) == 28
    assert g.occupied_count() == 0


@pytest.mark.parametrize("height,width", [(0, 5), (5, 0), (-1, 3)])
def test_non_positive_dimensions_rejected(height, width):
    with pytest.raises(ValueError):
        Grid(height, width)


def test_out_of_range_access_is_a_negative_result():
    g = Grid(3, 3)
    for row, col in ((-1, 0), (0, -1), (3, 0), (0, 3), (99, 99)):
        assert g.get(row, col) is None
        assert g.set(row, col, RoomType.SHOP) is False
        assert g.is_occupied(row, col) is False
    assert g.occupied_count() == 0


def test_set_mutates_exactly_one_cell():
    g = Grid(3, 4)
    assert g.set(1, 2, RoomType.SHRINE) is True
    assert g.get(1, 2) is RoomType.SHRINE
    assert g.is_occupied(1, 2)
    assert g.occupied_count() == 1
    assert g.coordinates_of(RoomType.SHRINE) == [Coordinate(1, 2)]


def test_reset_and_copy_are_independent():
    g = Grid(3, 3)
    g.set(1, 1, RoomType.START)
    clone = g.copy()
    g.reset()
    assert g.occupied_count() == 0
    assert clone.get(1, 1) is RoomType.START


def test_rows_snapshot_is_read_only_view():
    g = Grid(2, 2)
    g.set(0, 1, RoomType.CORRIDOR)
    rows = g.rows()
    assert rows == ((RoomType.EMPTY, RoomType.CORRIDOR), (RoomType.EMPTY, RoomType.EMPTY))
    g.set(0, 1, RoomType.PLAIN_ROOM)
    assert rows[0][1] is RoomType.CORRIDOR


def test_room_type_lookup_by_config_name():
    assert RoomType.from_name("boss_room") is RoomType.BOSS_ROOM
    assert RoomType.from_name(" SHOP ") is RoomType.SHOP
    assert RoomType.from_name("start_room") is RoomType.START
    assert RoomType.from_name("DRAGON_LAIR") is None


def test_coordinate_neighbors():
    c = Coordinate(2, 3)
    assert c.neighbors4() == (Coordinate(1, 3), Coordinate(3, 3), Coordinate(2, 4), Coordinate(2, 2))
    ring = c.neighbors8()
    assert len(ring) == 8 and c not in ring
    assert Coordinate(1, 2) in ring and Coordinate(3, 4) in ring
