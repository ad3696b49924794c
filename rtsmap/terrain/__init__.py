"""Terrain model: tile grid, region graph, wire schemas and path queries."""

from .graph import BaseLocation, ChokePoint, Region, RegionGraph, parse_base_locations
from .grid import GroundHeight, TileGrid
from .schemas import (
    BaseLocationRecord,
    ChokePointRecord,
    FlatRecord,
    MapAnalysisData,
    MapDocument,
    MapGridData,
    RecordDecodeError,
    RegionRecord,
    decode_polygon,
    decode_records,
    encode_records,
)
from .helpers import (
    DIAGONAL_COST,
    STRAIGHT_COST,
    UNREACHABLE,
    connected_region_ids,
    ground_distance,
    octile_heuristic,
    regions_connected,
    walkable_neighbors,
)

__all__ = [
    "BaseLocation",
    "ChokePoint",
    "Region",
    "RegionGraph",
    "parse_base_locations",
    "GroundHeight",
    "TileGrid",
    "BaseLocationRecord",
    "ChokePointRecord",
    "FlatRecord",
    "MapAnalysisData",
    "MapDocument",
    "MapGridData",
    "RecordDecodeError",
    "RegionRecord",
    "decode_polygon",
    "decode_records",
    "encode_records",
    "DIAGONAL_COST",
    "STRAIGHT_COST",
    "UNREACHABLE",
    "connected_region_ids",
    "ground_distance",
    "octile_heuristic",
    "regions_connected",
    "walkable_neighbors",
]
