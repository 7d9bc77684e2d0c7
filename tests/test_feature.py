import pytest

from delve.dungeon.feature import Bounds, Feature, HorizontalAlignment, VerticalAlignment
from delve.dungeon.tiles import Location, Terrain, Tile


def shape(*cells, terrain=Terrain.WALL):
    """Build a feature from (x, y) pairs sharing one terrain."""
    return Feature(Tile(Location(x, y), terrain) for x, y in cells)


def cells(feature):
    return [(t.loc.x, t.loc.y) for t in feature]


def test_feature_must_not_be_empty():
    with pytest.raises(ValueError):
        Feature([])


def test_place_top_left():
    # .##.
    # .##.
    # .#..
    f = shape((1, 1), (2, 1), (1, 2), (2, 2), (1, 3))
    placed = f.place(VerticalAlignment.TOP, HorizontalAlignment.LEFT, Location(2, 3))
    assert cells(placed) == [(2, 3), (3, 3), (2, 4), (3, 4), (2, 5)]


def test_place_bottom_right():
    f = shape((1, 1), (2, 1), (1, 2), (2, 2), (1, 3))
    placed = f.place(VerticalAlignment.BOTTOM, HorizontalAlignment.RIGHT, Location(5, 2))
    assert cells(placed) == [(4, 0), (5, 0), (4, 1), (5, 1), (4, 2)]


def test_place_center_square():
    square = shape(*[(x, y) for y in range(3) for x in range(3)])
    placed = square.place(VerticalAlignment.CENTER, HorizontalAlignment.CENTER, Location(4, 1))
    assert cells(placed) == [(x, y) for y in range(3) for x in range(3, 6)]


def test_center_rounds_toward_far_side_on_even_spans():
    # Span 0..3: midpoint is 0 + 4 // 2 = 2
    f = Feature.room(4, 4)
    placed = f.place(VerticalAlignment.CENTER, HorizontalAlignment.CENTER, Location(10, 10))
    assert placed.bounds() == Bounds(8, 11, 8, 11)


def test_place_is_idempotent_at_same_anchor():
    f = Feature.diamond_room(3).translate(7, -2)
    for v in VerticalAlignment:
        for h in HorizontalAlignment:
            once = f.place(v, h, Location(5, 5))
            twice = once.place(v, h, Location(5, 5))
            assert set(once) == set(twice)


def test_translate_is_pure():
    f = shape((0, 0), (1, 0))
    moved = f.translate(3, 4)
    assert cells(f) == [(0, 0), (1, 0)]
    assert cells(moved) == [(3, 4), (4, 4)]


def test_overlaps_is_symmetric_and_terrain_aware():
    a = shape((0, 0), (1, 0))
    b = shape((1, 0), (2, 0))
    c = shape((5, 5))
    d = shape((1, 0), terrain=Terrain.FLOOR)
    assert a.overlaps(b) and b.overlaps(a)
    assert not a.overlaps(c) and not c.overlaps(a)
    # Same location, different terrain: not the same tile
    assert not a.overlaps(d) and not d.overlaps(a)


def test_bounding_box_check_is_coarser_than_overlaps():
    # Two L-shapes whose boxes intersect but whose tiles do not
    a = shape((0, 0), (0, 1), (1, 1))
    b = shape((1, 0))
    assert a.intersects_bounds(b)
    assert not a.overlaps(b)


def test_room_is_all_floor():
    room = Feature.room(4, 3)
    assert len(room) == 12
    assert room.walls() == []
    assert len(room.floors()) == 12
    assert room.bounds() == Bounds(0, 3, 0, 2)

    with pytest.raises(ValueError):
        Feature.room(0, 3)


def test_diamond_room_has_manhattan_wall_ring():
    diamond = Feature.diamond_room(2)
    center = Location(0, 0)
    for t in diamond:
        d = t.loc.manhattan(center)
        assert d <= 2
        assert t.terrain is (Terrain.FLOOR if d < 2 else Terrain.WALL)
    assert len(diamond.floors()) == 5
    assert len(diamond.walls()) == 8


def test_circle_room_uses_euclidean_distance():
    circle = Feature.circle_room(3)
    center = Location(0, 0)
    for t in circle:
        d = t.loc.euclidean(center)
        assert t.terrain is (Terrain.FLOOR if d < 3 else Terrain.WALL)
    assert Location(2, 2) in circle.floors()  # sqrt(8) floors to 2
    assert Location(3, 0) in circle.walls()

    with pytest.raises(ValueError):
        Feature.circle_room(0)


def test_hallway_orientation():
    assert cells(Feature.hallway(3, horizontal=True)) == [(0, 0), (1, 0), (2, 0)]
    assert cells(Feature.hallway(3, horizontal=False)) == [(0, 0), (0, 1), (0, 2)]
    with pytest.raises(ValueError):
        Feature.hallway(0, horizontal=True)


def test_walls_and_floors_preserve_order():
    f = Feature(
        [
            Tile(Location(0, 0), Terrain.WALL),
            Tile(Location(1, 0), Terrain.FLOOR),
            Tile(Location(2, 0), Terrain.WALL),
            Tile(Location(3, 0), Terrain.FLOOR),
        ]
    )
    assert f.walls() == [Location(0, 0), Location(2, 0)]
    assert f.floors() == [Location(1, 0), Location(3, 0)]
