"""Tests for the terrain tile grid and low-res walkability derivation."""

import pytest

from rtsmap.position import Position, Resolution
from rtsmap.terrain import GroundHeight, TileGrid


def make_grid(width: int, height: int, blocked_walk_tiles=()) -> TileGrid:
    walk_width = width * 4
    walkable = [1] * (walk_width * height * 4)
    for wx, wy in blocked_walk_tiles:
        walkable[wx + walk_width * wy] = 0
    return TileGrid(
        width,
        height,
        height_map=[GroundHeight.HIGH] * (width * height),
        buildable=[1] * (width * height),
        walkable=walkable,
    )


def test_single_unwalkable_sub_tile_blocks_build_tile():
    # Walk tile (5, 2) lives inside build tile (1, 0)
    grid = make_grid(2, 2, blocked_walk_tiles=[(5, 2)])

    assert grid.is_low_res_walkable(Position(1, 0, Resolution.BUILD)) is False
    assert grid.is_low_res_walkable(Position(0, 0, Resolution.BUILD)) is True
    assert grid.is_low_res_walkable(Position(0, 1, Resolution.BUILD)) is True
    assert grid.is_low_res_walkable(Position(1, 1, Resolution.BUILD)) is True

    # The other 15 walk tiles of that build tile stay walkable
    assert grid.is_walkable(Position(5, 2, Resolution.WALK)) is False
    assert grid.is_walkable(Position(4, 2, Resolution.WALK)) is True


def test_low_res_walkable_matches_and_of_sub_tiles():
    blocked = [(0, 0), (7, 7), (9, 3)]
    grid = make_grid(3, 2, blocked_walk_tiles=blocked)

    for ty in range(grid.height):
        for tx in range(grid.width):
            expected = all(
                grid.is_walkable(Position(tx * 4 + dx, ty * 4 + dy, Resolution.WALK))
                for dx in range(4)
                for dy in range(4)
            )
            assert grid.is_low_res_walkable(Position(tx, ty, Resolution.BUILD)) is expected


def test_queries_resolve_positions_at_any_resolution():
    grid = TileGrid(
        2,
        1,
        height_map=[GroundHeight.LOW, GroundHeight.VERY_HIGH],
        buildable=[0, 1],
        walkable=[1] * 32,
    )

    assert grid.ground_height(Position(40, 10)) == GroundHeight.VERY_HIGH
    assert grid.ground_height(Position(0, 0, Resolution.BUILD)) == GroundHeight.LOW
    assert grid.is_buildable(Position(1, 0, Resolution.BUILD)) is True
    assert grid.is_buildable(Position(3, 3, Resolution.WALK)) is False
    assert grid.size == Position(2, 1, Resolution.BUILD)
    assert (grid.walk_width, grid.walk_height) == (8, 4)


def test_out_of_bounds_queries_return_defaults():
    grid = make_grid(2, 2)

    outside = [
        Position(-1, 0, Resolution.BUILD),
        Position(2, 0, Resolution.BUILD),
        Position(0, 8, Resolution.WALK),
        Position(64, 0),
    ]
    for position in outside:
        assert grid.ground_height(position) == 0
        assert grid.is_buildable(position) is False
        assert grid.is_walkable(position) is False
        assert grid.is_low_res_walkable(position) is False


def test_bits_are_normalized_to_booleans():
    grid = TileGrid(1, 1, height_map=[0], buildable=[1], walkable=[1] * 15 + [2])

    assert grid.buildable == [True]
    # Only an exact 1 counts as walkable
    assert grid.walkable[-1] is False
    assert grid.low_res_walkable == [False]


def test_mismatched_array_lengths_raise():
    with pytest.raises(ValueError):
        TileGrid(2, 2, height_map=[0] * 3, buildable=[1] * 4, walkable=[1] * 64)
    with pytest.raises(ValueError):
        TileGrid(2, 2, height_map=[0] * 4, buildable=[1] * 4, walkable=[1] * 16)
