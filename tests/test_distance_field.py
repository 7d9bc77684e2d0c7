import pytest

from delve.dungeon.generator import generate
from delve.dungeon.grid import Grid
from delve.dungeon.tiles import Location, Terrain
from delve.pathfinding.dijkstra import DistanceField, step_toward

ROOM = [
    "#########",
    "#.......#",
    "#.......#",
    "#...#...#",
    "#.......#",
    "#########",
]


def test_layers_use_eight_connected_steps():
    grid = Grid.from_ascii(ROOM)
    field = DistanceField.build(grid, [Location(1, 1)], limit=50)
    assert field[Location(1, 1)] == 0
    assert field[Location(2, 2)] == 1  # diagonal step
    assert field[Location(7, 4)] == 6  # Chebyshev distance in open space
    assert Location(4, 3) not in field  # wall
    assert Location(0, 0) not in field
    assert len(field) == grid.count(Terrain.FLOOR)


def test_limit_leaves_far_tiles_absent():
    grid = Grid.from_ascii(ROOM)
    field = DistanceField.build(grid, [Location(1, 1)], limit=2)
    assert max(field[loc] for loc in field) == 2
    assert field.distance(Location(4, 1)) is None
    assert field.distance(Location(3, 1)) == 2

    only_goals = DistanceField.build(grid, [Location(1, 1)], limit=0)
    assert list(only_goals) == [Location(1, 1)]


def test_multiple_goals_take_nearest():
    grid = Grid.from_ascii(ROOM)
    field = DistanceField.build(grid, [Location(1, 1), Location(7, 1)], limit=50)
    assert field[Location(4, 1)] == 3
    assert field[Location(6, 2)] == 1


def test_debug_terrain_is_expanded():
    grid = Grid.from_ascii(["#####", "#.^.#", "#####"])
    field = DistanceField.build(grid, [Location(1, 1)], limit=10)
    assert field[Location(3, 1)] == 2


def test_invalid_arguments():
    grid = Grid.from_ascii(ROOM)
    with pytest.raises(ValueError):
        DistanceField.build(grid, [], limit=5)
    with pytest.raises(ValueError):
        DistanceField.build(grid, [Location(1, 1)], limit=-1)
    with pytest.raises(IndexError):
        DistanceField.build(grid, [Location(40, 1)], limit=5)


def test_sorted_neighbors_ascending_with_fixed_tie_order():
    grid = Grid.from_ascii(ROOM)
    field = DistanceField.build(grid, [Location(1, 1)], limit=50)
    neighbours = field.sorted_neighbors(Location(3, 3))
    assert neighbours[0] == Location(2, 2)
    dists = [field[n] for n in neighbours]
    assert dists == sorted(dists)
    # (2,3) W and (3,2) N are both 2 away; N comes first in adjacency order
    assert neighbours[1:3] == [Location(3, 2), Location(2, 3)]


def test_generated_level_field_properties():
    grid, start = generate(7, 40, 30)
    field = DistanceField.build(grid, [start], limit=200)
    for loc in field:
        d = field[loc]
        for n in grid.adjacent(loc, include_diagonals=True):
            if n in field:
                assert abs(field[n] - d) <= 1
        ordered = [field[n] for n in field.sorted_neighbors(loc)]
        assert ordered == sorted(ordered)


def test_step_toward_descends_to_goal():
    grid = Grid.from_ascii(ROOM)
    goal = Location(7, 4)
    pos = Location(1, 1)
    steps = 0
    while pos != goal:
        nxt = step_toward(grid, pos, [goal])
        assert nxt is not None
        assert max(abs(nxt.x - pos.x), abs(nxt.y - pos.y)) == 1
        pos = nxt
        steps += 1
        assert steps <= 10
    assert steps == 6
    assert step_toward(grid, goal, [goal]) is None


def test_step_toward_unreachable_goal():
    grid = Grid.from_ascii(["#######", "#.#.#.#", "#######"])
    assert step_toward(grid, Location(1, 1), [Location(5, 1)]) is None
