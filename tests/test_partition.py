import random

import pytest

from dungeonforge.dungeon import ConfigurationError, Region, partition
from dungeonforge.dungeon.partition import split_horizontally, split_vertically


def test_leaves_respect_minimums_and_do_not_overlap():
    area = Region(0, 0, 60, 45)
    for seed in range(25):
        leaves = partition(area, 6, 5, random.Random(seed))
        assert leaves, f"Seed {seed} produced no leaves"
        for leaf in leaves:
            assert leaf.width >= 6 and leaf.height >= 5, f"Seed {seed} undersized leaf {leaf}"
            assert area.x <= leaf.x and leaf.x_max <= area.x_max
            assert area.y <= leaf.y and leaf.y_max <= area.y_max
        for i, a in enumerate(leaves):
            for b in leaves[i + 1 :]:
                assert not a.overlaps(b), f"Seed {seed} overlapping leaves {a} {b}"


def test_leaves_are_not_further_splittable():
    for seed in range(10):
        for leaf in partition(Region(0, 0, 40, 40), 5, 5, random.Random(seed)):
            assert leaf.width < 10 and leaf.height < 10, f"Seed {seed} left splittable leaf {leaf}"


def test_region_below_minimums_yields_nothing():
    assert partition(Region(0, 0, 3, 20), 4, 4, random.Random(1)) == []


def test_region_exactly_minimum_is_single_leaf():
    region = Region(5, 7, 4, 4)
    assert partition(region, 4, 4, random.Random(3)) == [region]


@pytest.mark.parametrize("min_w,min_h", [(0, 4), (4, 0), (-1, -1)])
def test_non_positive_minimums_rejected(min_w, min_h):
    with pytest.raises(ConfigurationError):
        partition(Region(0, 0, 20, 20), min_w, min_h, random.Random(0))


def test_splits_cover_parent():
    rng = random.Random(9)
    parent = Region(2, 3, 11, 8)
    left, right = split_vertically(parent, rng)
    assert left.width + right.width == parent.width
    assert left.x_max == right.x and left.height == right.height == parent.height
    bottom, top = split_horizontally(parent, rng)
    assert bottom.height + top.height == parent.height
    assert bottom.y_max == top.y and bottom.width == top.width == parent.width
