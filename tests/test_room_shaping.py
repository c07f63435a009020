import random

import dungeonforge.dungeon.rooms as rooms_module
from dungeonforge.dungeon import Cell, RandomWalkShaper, RectangularShaper, Region
from dungeonforge.dungeon.cells import RIGHT
from dungeonforge.dungeon.rooms import free_floor_for, link_to_center, shape_rooms, spoke_cells
from dungeonforge.dungeon.walks import n_step_walk, random_walk

from dungeon_test_utils import is_single_component


def test_random_walk_contains_start_and_stays_within_reach():
    start = (10, 10)
    path = random_walk(start, 15, random.Random(4))
    assert start in path
    assert len(path) <= 16
    for x, y in path:
        assert abs(x - 10) + abs(y - 10) <= 15


def test_n_step_walk_is_straight():
    assert n_step_walk((0, 0), 3, RIGHT) == {(0, 0), (1, 0), (2, 0), (3, 0)}


def test_rounded_center_uses_half_to_even():
    assert Region(0, 0, 5, 5).rounded_center() == (2, 2)
    assert Region(0, 0, 7, 7).rounded_center() == (4, 4)
    assert Region(10, 20, 10, 4).rounded_center() == (15, 22)


def test_rectangular_shaper_insets_by_offset():
    floor = RectangularShaper(1).shape(Region(0, 0, 4, 4))
    assert floor == {(1, 1), (1, 2), (2, 1), (2, 2)}


def test_random_walk_shaper_stays_inside_inset_bounds():
    region = Region(10, 10, 10, 10)
    shaper = RandomWalkShaper(offset=2, iterations=10, steps=10)
    for seed in range(10):
        floor = shaper.shape(region, random.Random(seed))
        assert region.rounded_center() in floor
        for c in floor:
            assert 12 <= c.x <= 18 and 12 <= c.y <= 18, f"Seed {seed} cell {c} outside bounds"


def test_random_restart_walks_still_bounded():
    region = Region(0, 0, 12, 12)
    shaper = RandomWalkShaper(offset=1, iterations=20, steps=8, start_randomly_each_iteration=True)
    floor = shaper.shape(region, random.Random(2))
    assert all(1 <= c.x <= 11 and 1 <= c.y <= 11 for c in floor)


def test_shaped_rooms_are_connected_to_their_center():
    leaves = [Region(0, 0, 10, 10), Region(10, 0, 10, 10), Region(0, 10, 12, 10)]
    shaper = RandomWalkShaper(offset=2, iterations=10, steps=10)
    for seed in range(15):
        rooms = shape_rooms(leaves, shaper, random.Random(seed))
        replay = random.Random(seed)
        for room in rooms:
            shaped = shaper.shape(room.region, replay)
            assert shaped <= room.floor, f"Seed {seed} room {room.index} lost shaped cells"
            assert room.center in room.floor
            assert is_single_component(room.floor), f"Seed {seed} room {room.index} is fragmented"


def test_free_floor_excludes_center_and_spokes():
    center = Cell(5, 5)
    floor = {Cell(x, y) for x in range(11) for y in range(11)}
    free = free_floor_for(center, floor, spoke_length=10)
    assert center not in free
    assert all(c.x != 5 and c.y != 5 for c in free)
    assert len(free) == 100
    assert free == sorted(free)


def test_zero_spoke_length_only_reserves_center():
    center = Cell(1, 1)
    floor = {Cell(x, y) for x in range(3) for y in range(3)}
    assert spoke_cells(center, 0) == {center}
    assert len(free_floor_for(center, floor, 0)) == 8


def test_shape_rooms_indexes_in_leaf_order():
    leaves = [Region(0, 0, 6, 6), Region(6, 0, 6, 6)]
    rooms = shape_rooms(leaves, RectangularShaper(1), random.Random(0), spoke_length=1)
    assert [r.index for r in rooms] == [0, 1]
    assert [r.region for r in rooms] == leaves
    assert rooms[1].center == (9, 3)


def test_rectangular_room_floor_is_the_inset_when_center_is_inside():
    region = Region(0, 0, 5, 5)
    (room,) = shape_rooms([region], RectangularShaper(1), random.Random(0))
    assert room.center == (2, 2)
    assert room.floor == RectangularShaper(1).shape(region)


def test_rectangular_room_keeps_inset_when_center_falls_outside():
    # A 3-wide leaf with offset 1 insets to (1, 1); half-to-even puts the center on (2, 2).
    region = Region(0, 0, 3, 3)
    (room,) = shape_rooms([region], RectangularShaper(1), random.Random(0))
    assert room.center == (2, 2)
    assert Cell(1, 1) in room.floor
    assert room.floor == {(2, 2), (2, 1), (1, 1)}
    assert is_single_component(room.floor)


def test_link_to_center_bridges_every_stray_piece():
    shaped = {Cell(0, 0), Cell(1, 0), Cell(5, 5), Cell(9, 1)}
    floor = link_to_center(Cell(4, 0), shaped)
    assert shaped <= floor
    assert Cell(4, 0) in floor
    assert is_single_component(floor)


def test_link_to_center_leaves_connected_shapes_alone():
    shaped = {Cell(x, y) for x in range(3) for y in range(3)}
    assert link_to_center(Cell(1, 1), shaped) == shaped
    assert link_to_center(Cell(3, 1), shaped) == shaped | {Cell(3, 1)}


def test_random_restart_walks_start_on_visited_cells(monkeypatch):
    walks = []

    def recording_walk(start, steps, rng):
        visited = random_walk(start, steps, rng)
        walks.append((start, visited))
        return visited

    monkeypatch.setattr(rooms_module, "random_walk", recording_walk)
    region = Region(0, 0, 20, 20)
    shaper = RandomWalkShaper(offset=1, iterations=12, steps=6, start_randomly_each_iteration=True)
    shaper.shape(region, random.Random(11))

    assert len(walks) == 12
    assert walks[0][0] == region.rounded_center()
    seen = set(walks[0][1])
    for i, (start, visited) in enumerate(walks[1:], start=1):
        assert start in seen, f"Walk {i} started off the blob at {start}"
        seen |= visited
