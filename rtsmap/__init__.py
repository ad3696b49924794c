"""
rtsmap - static real-time strategy map model.

Tile grids at pixel / walk-tile / build-tile resolution, the region/chokepoint
connectivity graph reported by an external terrain analyzer, and A* ground
distance queries for bots and analysis tools.
"""

__version__ = "0.1.0"

from .position import (
    TILE_SIZE,
    WALK_TILE_SIZE,
    WALK_TILES_PER_BUILD_TILE,
    Position,
    Resolution,
    convert,
    is_valid,
)
from .game_map import Analyzed, GameMap, MapState, Unanalyzed
from .terrain import (
    UNREACHABLE,
    BaseLocation,
    BaseLocationRecord,
    ChokePoint,
    ChokePointRecord,
    GroundHeight,
    MapAnalysisData,
    MapDocument,
    MapGridData,
    RecordDecodeError,
    Region,
    RegionGraph,
    RegionRecord,
    TileGrid,
    ground_distance,
)
from .loader import AnalysisCache, MapLoader, load_map

__all__ = [
    # Coordinates
    "TILE_SIZE",
    "WALK_TILE_SIZE",
    "WALK_TILES_PER_BUILD_TILE",
    "Position",
    "Resolution",
    "convert",
    "is_valid",
    # Map aggregate
    "GameMap",
    "MapState",
    "Unanalyzed",
    "Analyzed",
    # Terrain
    "UNREACHABLE",
    "BaseLocation",
    "ChokePoint",
    "GroundHeight",
    "Region",
    "RegionGraph",
    "TileGrid",
    "ground_distance",
    # Wire schemas
    "BaseLocationRecord",
    "ChokePointRecord",
    "RegionRecord",
    "MapAnalysisData",
    "MapDocument",
    "MapGridData",
    "RecordDecodeError",
    # Loading
    "AnalysisCache",
    "MapLoader",
    "load_map",
]
