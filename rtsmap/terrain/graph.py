"""Region/chokepoint connectivity graph.

Regions and chokepoints live in an arena keyed by their analyzer ids. A region
stores the ids of its neighbours and bordering chokepoints rather than object
references, so the structure has no reference cycles and can be rebuilt from
the flat analyzer records at any time.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence, Set

from ..logging_utils import LOG_TAG_DETERMINISTIC, LOG_TAG_ERROR, log_deterministic, log_error
from ..position import Position, Resolution
from .schemas import (
    BaseLocationRecord,
    ChokePointRecord,
    RegionRecord,
    decode_polygon,
    decode_records,
)


@dataclass
class Region:
    """A walkable area bounded by unwalkable terrain or chokepoints."""

    id: int
    center: Position
    polygon: List[Position] = field(default_factory=list)
    connected_region_ids: Set[int] = field(default_factory=set)
    chokepoint_ids: Set[int] = field(default_factory=set)

    @property
    def area(self) -> float:
        """Polygon area in square pixels (shoelace formula)."""
        points = self.polygon
        if len(points) < 3:
            return 0.0
        total = 0
        for index, point in enumerate(points):
            following = points[(index + 1) % len(points)]
            total += point.x * following.y - following.x * point.y
        return abs(total) / 2.0

    def contains(self, point: Position) -> bool:
        """Ray-casting point-in-polygon test in pixel space."""
        if len(self.polygon) < 3:
            return False
        target = point.to(Resolution.PIXEL)
        inside = False
        count = len(self.polygon)
        for index in range(count):
            a = self.polygon[index]
            b = self.polygon[index - 1]
            if (a.y > target.y) != (b.y > target.y):
                crossing_x = a.x + (target.y - a.y) * (b.x - a.x) / (b.y - a.y)
                if target.x < crossing_x:
                    inside = not inside
        return inside


@dataclass(frozen=True)
class ChokePoint:
    """Narrow connector between exactly two distinct regions."""

    id: int
    first_region_id: int
    second_region_id: int
    first_side: Position
    second_side: Position

    @property
    def center(self) -> Position:
        return Position(
            (self.first_side.x + self.second_side.x) // 2,
            (self.first_side.y + self.second_side.y) // 2,
            Resolution.PIXEL,
        )

    @property
    def width(self) -> float:
        return self.first_side.distance(self.second_side)

    @property
    def region_ids(self) -> tuple[int, int]:
        return self.first_region_id, self.second_region_id

    def other_region_id(self, region_id: int) -> Optional[int]:
        if region_id == self.first_region_id:
            return self.second_region_id
        if region_id == self.second_region_id:
            return self.first_region_id
        return None


@dataclass(frozen=True)
class BaseLocation:
    """Candidate expansion site near a resource cluster."""

    center: Position
    position: Position
    region_id: Optional[int]
    minerals: int
    gas: int
    island: bool
    mineral_only: bool
    start_location: bool

    @classmethod
    def from_record(
        cls, record: BaseLocationRecord, known_region_ids: Optional[Set[int]] = None
    ) -> "BaseLocation":
        """Build a base location from its wire record.

        When ``known_region_ids`` is given, a region id missing from it
        resolves to ``None`` (the analyzer assigned no region).
        """

        region_id: Optional[int] = record.region_id
        if known_region_ids is not None and region_id not in known_region_ids:
            region_id = None
        return cls(
            center=Position(record.center_x, record.center_y, Resolution.PIXEL),
            position=Position(record.tile_x, record.tile_y, Resolution.BUILD),
            region_id=region_id,
            minerals=record.minerals,
            gas=record.gas,
            island=record.island == 1,
            mineral_only=record.mineral_only == 1,
            start_location=record.start_location == 1,
        )


@dataclass
class RegionGraph:
    """Arena of regions and chokepoints plus the build-tile region index."""

    width: int
    height: int
    tile_regions: List[int] = field(default_factory=list)
    regions: Dict[int, Region] = field(default_factory=dict)
    chokepoints: Dict[int, ChokePoint] = field(default_factory=dict)

    def region(self, region_id: int) -> Optional[Region]:
        return self.regions.get(region_id)

    def chokepoint(self, chokepoint_id: int) -> Optional[ChokePoint]:
        return self.chokepoints.get(chokepoint_id)

    def has_region(self, region_id: int) -> bool:
        return region_id in self.regions

    def neighbors(self, region_id: int) -> List[int]:
        region = self.regions.get(region_id)
        if region is None:
            return []
        return sorted(region.connected_region_ids)

    def region_at(self, position: Position) -> Optional[Region]:
        """Return the region owning the build tile at ``position``, if any."""
        size = Position(self.width, self.height, Resolution.BUILD)
        if not position.is_valid(size):
            return None
        tile = position.to(Resolution.BUILD)
        index = tile.x + self.width * tile.y
        if index >= len(self.tile_regions):
            return None
        return self.regions.get(self.tile_regions[index])

    @classmethod
    def build(
        cls,
        width: int,
        height: int,
        region_map: Optional[Sequence[int]],
        region_data: Optional[Sequence[int]],
        region_polygons: Optional[Mapping[int, Sequence[int]]],
        chokepoint_data: Optional[Sequence[int]],
    ) -> "RegionGraph":
        """Assemble the graph from analyzer records.

        Regions are indexed first, then every chokepoint adds a symmetric
        adjacency edge and registers itself with both regions. Chokepoints
        that reference an unknown region or the same region twice are skipped
        and reported.
        """

        polygons = region_polygons or {}
        graph = cls(width=width, height=height, tile_regions=list(region_map or []))

        for record in decode_records(region_data, RegionRecord):
            polygon = [
                Position(x, y, Resolution.PIXEL)
                for x, y in decode_polygon(polygons.get(record.region_id))
            ]
            graph.regions[record.region_id] = Region(
                id=record.region_id,
                center=Position(record.center_x, record.center_y, Resolution.PIXEL),
                polygon=polygon,
            )

        for record in decode_records(chokepoint_data, ChokePointRecord):
            first = graph.regions.get(record.first_region_id)
            second = graph.regions.get(record.second_region_id)
            if first is None or second is None:
                log_error(
                    f"  {LOG_TAG_ERROR} [Analysis] Chokepoint {record.chokepoint_id} references "
                    f"unknown region ({record.first_region_id}, {record.second_region_id}); skipped"
                )
                continue
            if first.id == second.id:
                log_error(
                    f"  {LOG_TAG_ERROR} [Analysis] Chokepoint {record.chokepoint_id} joins "
                    f"region {first.id} to itself; skipped"
                )
                continue

            chokepoint = ChokePoint(
                id=record.chokepoint_id,
                first_region_id=first.id,
                second_region_id=second.id,
                first_side=Position(record.first_side_x, record.first_side_y, Resolution.PIXEL),
                second_side=Position(record.second_side_x, record.second_side_y, Resolution.PIXEL),
            )
            graph.chokepoints[chokepoint.id] = chokepoint
            first.chokepoint_ids.add(chokepoint.id)
            first.connected_region_ids.add(second.id)
            second.chokepoint_ids.add(chokepoint.id)
            second.connected_region_ids.add(first.id)

        log_deterministic(
            f"  {LOG_TAG_DETERMINISTIC} [Analysis] Region graph: {len(graph.regions)} regions, "
            f"{len(graph.chokepoints)} chokepoints"
        )
        return graph


def parse_base_locations(
    data: Optional[Sequence[int]], graph: Optional[RegionGraph] = None
) -> List[BaseLocation]:
    """Decode base location records, resolving region ids through ``graph``."""

    known = set(graph.regions) if graph is not None else None
    return [BaseLocation.from_record(record, known) for record in decode_records(data, BaseLocationRecord)]
