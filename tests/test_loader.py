"""Tests for JSON map loading and the analysis cache."""

from pathlib import Path

import pytest

from rtsmap import TILE_SIZE, UNREACHABLE, Position, Resolution
from rtsmap.loader import AnalysisCache, MapLoader

MAPS_DIR = Path(__file__).resolve().parent.parent / "examples" / "maps"


def test_loader_builds_analyzed_example_map():
    loader = MapLoader(maps_dir=MAPS_DIR)
    game_map = loader.load("two_plateaus")

    assert game_map.name == "Two Plateaus"
    assert game_map.file_name == "(2)Two Plateaus.scm"
    assert game_map.is_analyzed
    assert len(game_map.get_regions()) == 3
    assert len(game_map.get_start_locations()) == 1

    home = Position(0, 0, Resolution.BUILD)
    natural = Position(3, 1, Resolution.BUILD)
    island = Position(5, 0, Resolution.BUILD)

    assert game_map.is_connected(home, natural)
    # One diagonal and two straight steps
    assert game_map.get_ground_distance(home, natural) == pytest.approx(34 * TILE_SIZE / 10)
    assert not game_map.is_connected(home, island)
    assert game_map.get_ground_distance(home, island) == UNREACHABLE

    island_base = game_map.get_base_locations()[2]
    assert island_base.island and island_base.region_id == 3


def test_list_maps_and_info():
    loader = MapLoader(maps_dir=MAPS_DIR)

    assert "two_plateaus" in loader.list_maps()
    info = loader.get_map_info("two_plateaus")
    assert info["width"] == 6
    assert info["height"] == 2
    assert info["analyzed"] is True


def test_missing_map_raises(tmp_path):
    loader = MapLoader(maps_dir=tmp_path)
    assert loader.list_maps() == []
    with pytest.raises(FileNotFoundError):
        loader.load("nowhere")


def test_analysis_cache_supplies_missing_analysis(tmp_path):
    source = MapLoader(maps_dir=MAPS_DIR).load_document("two_plateaus")
    cache = AnalysisCache(cache_dir=tmp_path / "cache")

    assert cache.get(source.grid.map_hash) is None
    cache.put(source.grid.map_hash, source.analysis)
    assert cache.has(source.grid.map_hash)

    maps_dir = tmp_path / "maps"
    maps_dir.mkdir()
    raw = source.model_copy(update={"analysis": None})
    (maps_dir / "raw.json").write_text(raw.model_dump_json())

    assert MapLoader(maps_dir=maps_dir).load("raw").is_analyzed is False

    game_map = MapLoader(maps_dir=maps_dir, cache=cache).load("raw")
    assert game_map.is_analyzed
    assert [c.id for c in game_map.get_chokepoints()] == [10]


def test_cache_requires_hash(tmp_path):
    cache = AnalysisCache(cache_dir=tmp_path)
    source = MapLoader(maps_dir=MAPS_DIR).load_document("two_plateaus")

    assert cache.has("") is False
    with pytest.raises(ValueError):
        cache.put("", source.analysis)


def test_save_and_reload(tmp_path):
    game_map = MapLoader(maps_dir=MAPS_DIR).load("two_plateaus")
    loader = MapLoader(maps_dir=tmp_path)

    path = loader.save(game_map, "copy")
    assert path.name == "copy.json"

    reloaded = loader.load("copy")
    assert reloaded.is_analyzed
    assert reloaded.grid.low_res_walkable == game_map.grid.low_res_walkable
