"""Tests for multi-resolution coordinates."""

import math

from rtsmap.position import TILE_SIZE, Position, Resolution, convert, is_valid


def test_convert_scales_between_resolutions():
    assert convert(3, Resolution.BUILD, Resolution.PIXEL) == 3 * TILE_SIZE
    assert convert(3, Resolution.BUILD, Resolution.WALK) == 12
    assert convert(12, Resolution.WALK, Resolution.BUILD) == 3
    assert convert(7, Resolution.PIXEL, Resolution.PIXEL) == 7


def test_coarser_conversion_floors():
    # Every pixel inside build tile 2 maps back to tile 2
    assert convert(64, Resolution.PIXEL, Resolution.BUILD) == 2
    assert convert(95, Resolution.PIXEL, Resolution.BUILD) == 2
    assert convert(96, Resolution.PIXEL, Resolution.BUILD) == 3
    assert convert(7, Resolution.PIXEL, Resolution.WALK) == 0


def test_round_trip_through_finer_resolution_is_exact():
    for resolution in (Resolution.WALK, Resolution.BUILD):
        for value in range(0, 40):
            finer = convert(value, resolution, Resolution.PIXEL)
            assert convert(finer, Resolution.PIXEL, resolution) == value

    original = Position(5, 9, Resolution.BUILD)
    assert original.to(Resolution.WALK).to(Resolution.BUILD) == original


def test_position_getters_convert_components():
    position = Position(100, 200)
    assert position.resolution is Resolution.PIXEL
    assert position.get_x(Resolution.BUILD) == 3
    assert position.get_y(Resolution.WALK) == 25
    assert position.to(Resolution.BUILD) == Position(3, 6, Resolution.BUILD)
    assert position.to(Resolution.PIXEL) is position


def test_is_valid_bounds_are_inclusive_zero_exclusive_extent():
    extent = Position(4, 2, Resolution.BUILD)

    assert Position(0, 0, Resolution.BUILD).is_valid(extent)
    assert Position(3, 1, Resolution.BUILD).is_valid(extent)
    assert not Position(4, 1, Resolution.BUILD).is_valid(extent)
    assert not Position(3, 2, Resolution.BUILD).is_valid(extent)
    assert not Position(-1, 0, Resolution.BUILD).is_valid(extent)

    # The extent is rescaled to the position's own resolution
    assert Position(15, 7, Resolution.WALK).is_valid(extent)
    assert not Position(16, 7, Resolution.WALK).is_valid(extent)
    assert Position(127, 63).is_valid(extent)
    assert not is_valid(Position(128, 0), extent)


def test_translated_keeps_resolution():
    moved = Position(2, 3, Resolution.WALK).translated(1, -1)
    assert moved == Position(3, 2, Resolution.WALK)


def test_distances_measured_in_pixels():
    a = Position(0, 0, Resolution.BUILD)
    b = Position(3, 4, Resolution.BUILD)
    assert math.isclose(a.distance(b), 5 * TILE_SIZE)

    assert Position(0, 0).approx_distance(Position(3, 4)) == 5
    # Mostly-straight offsets return the long axis unchanged
    assert Position(0, 0).approx_distance(Position(100, 10)) == 100
