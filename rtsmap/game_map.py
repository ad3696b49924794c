"""
GameMap aggregate and its two-phase lifecycle.

A map is built in two steps:
1. Raw tile arrays arrive when the game loads the map. The ``TileGrid`` is
   built and low-res walkability derived; the map is ``Unanalyzed``.
2. The external terrain analyzer reports regions, chokepoints and base
   locations. ``initialize()`` builds the ``RegionGraph`` and moves the map to
   ``Analyzed``. This happens exactly once.

Every query is safe in both states. Tile queries always work. Region,
chokepoint, base-location, connectivity and distance queries answer with
None / [] / False / -1 until the map is analyzed.

Usage:
    game_map = GameMap("Lost Temple", "(4)Lost Temple.scm", "3f2a...", 128, 128,
                       heights, buildable, walkable)
    game_map.initialize(region_map, regions, polygons, chokepoints, bases)
    if game_map.is_connected(a, b):
        pixels = game_map.get_ground_distance(a, b)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Mapping, Optional, Sequence, Union

from .logging_utils import (
    LOG_TAG_DETERMINISTIC,
    LOG_TAG_ERROR,
    LOG_TAG_SUCCESS,
    log_deterministic,
    log_error,
    log_success,
)
from .position import Position, Resolution
from .terrain import (
    UNREACHABLE,
    BaseLocation,
    ChokePoint,
    MapAnalysisData,
    MapDocument,
    MapGridData,
    Region,
    RegionGraph,
    TileGrid,
    ground_distance,
    parse_base_locations,
    regions_connected,
)


@dataclass(frozen=True)
class Unanalyzed:
    """Map state before analyzer output has been ingested."""


@dataclass(frozen=True)
class Analyzed:
    """Map state once the region graph and base locations exist."""

    graph: RegionGraph
    base_locations: List[BaseLocation] = field(default_factory=list)
    analysis: Optional[MapAnalysisData] = None


MapState = Union[Unanalyzed, Analyzed]


class GameMap:
    """Static map of a real-time strategy game.

    Holds the tile grid and, after ``initialize()``, the region graph. All
    coordinate-taking queries accept a ``Position`` at any resolution and
    return defaults for positions outside the map.
    """

    def __init__(
        self,
        name: str,
        file_name: str,
        map_hash: str,
        width: int,
        height: int,
        height_map: Sequence[int],
        buildable: Sequence[int],
        walkable: Sequence[int],
    ):
        self.name = name
        self.file_name = file_name
        self.map_hash = map_hash
        self.grid = TileGrid(width, height, height_map, buildable, walkable)
        self._state: MapState = Unanalyzed()
        log_deterministic(
            f"  {LOG_TAG_DETERMINISTIC} [Map] Loaded '{name}' ({width}x{height} build tiles)"
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def state(self) -> MapState:
        return self._state

    @property
    def is_analyzed(self) -> bool:
        return isinstance(self._state, Analyzed)

    def initialize(
        self,
        region_map: Optional[Sequence[int]],
        region_data: Optional[Sequence[int]],
        region_polygons: Optional[Mapping[int, Sequence[int]]],
        chokepoint_data: Optional[Sequence[int]],
        base_location_data: Optional[Sequence[int]],
    ) -> None:
        """Ingest analyzer output and move the map to the Analyzed state.

        Raises:
            RuntimeError: If the map has already been analyzed
            RecordDecodeError: If a record array does not match its stride
        """

        if self.is_analyzed:
            raise RuntimeError(f"Map '{self.name}' has already been analyzed")

        graph = RegionGraph.build(
            self.width,
            self.height,
            region_map,
            region_data,
            region_polygons,
            chokepoint_data,
        )
        base_locations = parse_base_locations(base_location_data, graph)
        analysis = MapAnalysisData(
            region_map=list(region_map or []),
            regions=list(region_data or []),
            region_polygons={
                region_id: list(coordinates)
                for region_id, coordinates in (region_polygons or {}).items()
            },
            chokepoints=list(chokepoint_data or []),
            base_locations=list(base_location_data or []),
        )
        self._state = Analyzed(graph=graph, base_locations=base_locations, analysis=analysis)
        log_success(
            f"  {LOG_TAG_SUCCESS} [Map] '{self.name}' analyzed: {len(base_locations)} base locations"
        )

    def initialize_from(self, analysis: MapAnalysisData) -> None:
        self.initialize(
            analysis.region_map,
            analysis.regions,
            analysis.region_polygons,
            analysis.chokepoints,
            analysis.base_locations,
        )

    # ------------------------------------------------------------------
    # Dimensions and metadata
    # ------------------------------------------------------------------

    @property
    def size(self) -> Position:
        """Map size at build-tile resolution."""
        return self.grid.size

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    @property
    def walk_width(self) -> int:
        return self.grid.walk_width

    @property
    def walk_height(self) -> int:
        return self.grid.walk_height

    # ------------------------------------------------------------------
    # Tile queries
    # ------------------------------------------------------------------

    def get_ground_height(self, position: Position) -> int:
        return self.grid.ground_height(position)

    def is_buildable(self, position: Position) -> bool:
        return self.grid.is_buildable(position)

    def is_walkable(self, position: Position) -> bool:
        return self.grid.is_walkable(position)

    def is_low_res_walkable(self, position: Position) -> bool:
        """Checks whether all 16 walk tiles in a build tile are walkable."""
        return self.grid.is_low_res_walkable(position)

    # ------------------------------------------------------------------
    # Analysis queries
    # ------------------------------------------------------------------

    def _graph(self) -> Optional[RegionGraph]:
        state = self._state
        if isinstance(state, Analyzed):
            return state.graph
        return None

    def get_regions(self) -> List[Region]:
        graph = self._graph()
        if graph is None:
            return []
        return list(graph.regions.values())

    def get_region(self, position: Position) -> Optional[Region]:
        """Region owning the build tile at ``position``; None when unavailable."""
        graph = self._graph()
        if graph is None:
            return None
        return graph.region_at(position)

    def get_region_by_id(self, region_id: int) -> Optional[Region]:
        graph = self._graph()
        if graph is None:
            return None
        return graph.region(region_id)

    def get_chokepoints(self) -> List[ChokePoint]:
        graph = self._graph()
        if graph is None:
            return []
        return list(graph.chokepoints.values())

    def get_base_locations(self) -> List[BaseLocation]:
        state = self._state
        if isinstance(state, Analyzed):
            return list(state.base_locations)
        return []

    def get_start_locations(self) -> List[BaseLocation]:
        """Base locations that are potential player start locations."""
        return [base for base in self.get_base_locations() if base.start_location]

    def is_connected(self, start: Position, end: Position) -> bool:
        """Ground connectivity from the region graph alone. Ignores buildings."""
        graph = self._graph()
        if graph is None:
            return False
        first = graph.region_at(start)
        second = graph.region_at(end)
        if first is None or second is None:
            return False
        return regions_connected(graph, first.id, second.id)

    def get_ground_distance(self, start: Position, end: Position) -> float:
        """Shortest walkable distance in pixels, or -1 if not reachable."""

        if not self.is_connected(start, end):
            return UNREACHABLE
        distance = ground_distance(self.grid, start, end)
        if distance == UNREACHABLE:
            # Regions say connected but the walk grid disagrees.
            log_error(
                f"  {LOG_TAG_ERROR} [Map] No walkable path between connected tiles "
                f"{start.to(Resolution.BUILD)} and {end.to(Resolution.BUILD)}"
            )
        return distance

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    @classmethod
    def from_document(cls, document: MapDocument) -> "GameMap":
        """Build a map from a document, initializing it if analysis is present."""
        grid = document.grid
        game_map = cls(
            grid.name,
            grid.file_name,
            grid.map_hash,
            grid.width,
            grid.height,
            grid.height_map,
            grid.buildable,
            grid.walkable,
        )
        if document.analysis is not None:
            game_map.initialize_from(document.analysis)
        return game_map

    def grid_data(self) -> MapGridData:
        return MapGridData(
            name=self.name,
            file_name=self.file_name,
            map_hash=self.map_hash,
            width=self.width,
            height=self.height,
            height_map=self.grid.height_map,
            buildable=[int(value) for value in self.grid.buildable],
            walkable=[int(value) for value in self.grid.walkable],
        )

    def to_document(self) -> MapDocument:
        """Serialize the map, including the analysis it was initialized with."""
        analysis = self._state.analysis if isinstance(self._state, Analyzed) else None
        return MapDocument(grid=self.grid_data(), analysis=analysis)

    def __repr__(self) -> str:
        status = "analyzed" if self.is_analyzed else "unanalyzed"
        return f"GameMap(name={self.name!r}, size={self.width}x{self.height}, {status})"
