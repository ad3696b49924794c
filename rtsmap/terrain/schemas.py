"""Pydantic schemas for terrain data exchanged with the external analyzer.

The analyzer reports regions, chokepoints and base locations as flat integer
arrays in which every entity occupies a fixed number of consecutive slots.
Each record type below names those slots in wire order and declares its
stride, so decoding is a matter of slicing the array and validating each
slice. The document models (``MapGridData``, ``MapAnalysisData``,
``MapDocument``) mirror the two initialization phases of a ``GameMap`` and
keep map files serializable as JSON.
"""

from __future__ import annotations

from typing import ClassVar, Dict, List, Optional, Sequence, Type, TypeVar

from pydantic import BaseModel, Field, field_validator


class RecordDecodeError(ValueError):
    """Raised when a flat record array does not match its schema."""


class FlatRecord(BaseModel):
    """Base class for fixed-stride integer records.

    Subclasses declare their fields in wire order; ``STRIDE`` must equal the
    number of fields.
    """

    STRIDE: ClassVar[int] = 0

    @classmethod
    def from_values(cls, values: Sequence[int]) -> "FlatRecord":
        names = list(cls.model_fields)
        if len(values) != cls.STRIDE or len(names) != cls.STRIDE:
            raise RecordDecodeError(
                f"{cls.__name__} expects {cls.STRIDE} values, got {len(values)}"
            )
        return cls(**dict(zip(names, values)))

    def to_values(self) -> List[int]:
        return [getattr(self, name) for name in type(self).model_fields]


class RegionRecord(FlatRecord):
    """Region header; the polygon is looked up by ``region_id`` in a side-table."""

    STRIDE: ClassVar[int] = 3

    region_id: int
    center_x: int
    center_y: int


class ChokePointRecord(FlatRecord):
    """Chokepoint joining two regions, with its two boundary side points in pixels."""

    STRIDE: ClassVar[int] = 7

    chokepoint_id: int
    first_region_id: int
    second_region_id: int
    first_side_x: int
    first_side_y: int
    second_side_x: int
    second_side_y: int


class BaseLocationRecord(FlatRecord):
    """Base location record. The three trailing flags are 0/1 integers."""

    STRIDE: ClassVar[int] = 10

    center_x: int
    center_y: int
    tile_x: int
    tile_y: int
    region_id: int
    minerals: int
    gas: int
    island: int
    mineral_only: int
    start_location: int


RecordT = TypeVar("RecordT", bound=FlatRecord)


def decode_records(data: Optional[Sequence[int]], record_type: Type[RecordT]) -> List[RecordT]:
    """Split a flat integer array into records of ``record_type``.

    ``None`` decodes to an empty list (the analyzer reported nothing). Arrays
    whose length is not a multiple of the record stride are rejected.
    """

    if data is None:
        return []
    stride = record_type.STRIDE
    if len(data) % stride != 0:
        raise RecordDecodeError(
            f"{record_type.__name__} data length {len(data)} is not a multiple of {stride}"
        )
    return [
        record_type.from_values(data[index:index + stride])
        for index in range(0, len(data), stride)
    ]


def encode_records(records: Sequence[FlatRecord]) -> List[int]:
    """Flatten records back into the analyzer's wire layout."""
    values: List[int] = []
    for record in records:
        values.extend(record.to_values())
    return values


def decode_polygon(coordinates: Optional[Sequence[int]]) -> List[tuple[int, int]]:
    """Pair up a flat ``x0, y0, x1, y1, ...`` coordinate list."""

    if not coordinates:
        return []
    if len(coordinates) % 2 != 0:
        raise RecordDecodeError(
            f"Polygon coordinate list has odd length {len(coordinates)}"
        )
    return [
        (coordinates[index], coordinates[index + 1])
        for index in range(0, len(coordinates), 2)
    ]


class MapGridData(BaseModel):
    """Raw tile arrays delivered when the map is loaded."""

    name: str
    file_name: str = ""
    map_hash: str = Field("", description="Content hash used to cache analysis results")
    width: int = Field(..., ge=0, description="Width in build tiles")
    height: int = Field(..., ge=0, description="Height in build tiles")
    height_map: List[int] = Field(default_factory=list, description="Ground height per build tile")
    buildable: List[int] = Field(default_factory=list, description="0/1 per build tile")
    walkable: List[int] = Field(default_factory=list, description="0/1 per walk tile")


class MapAnalysisData(BaseModel):
    """Terrain analyzer output ingested by ``GameMap.initialize``."""

    region_map: List[int] = Field(
        default_factory=list,
        description="Region id per build tile, row-major",
    )
    regions: List[int] = Field(
        default_factory=list,
        description="Flat RegionRecord array",
    )
    region_polygons: Dict[int, List[int]] = Field(
        default_factory=dict,
        description="Map of region id → flat pixel coordinate list",
    )
    chokepoints: List[int] = Field(
        default_factory=list,
        description="Flat ChokePointRecord array",
    )
    base_locations: List[int] = Field(
        default_factory=list,
        description="Flat BaseLocationRecord array",
    )

    @field_validator("regions")
    @classmethod
    def _regions_aligned(cls, value: List[int]) -> List[int]:
        return _aligned(value, RegionRecord)

    @field_validator("chokepoints")
    @classmethod
    def _chokepoints_aligned(cls, value: List[int]) -> List[int]:
        return _aligned(value, ChokePointRecord)

    @field_validator("base_locations")
    @classmethod
    def _base_locations_aligned(cls, value: List[int]) -> List[int]:
        return _aligned(value, BaseLocationRecord)


class MapDocument(BaseModel):
    """A map file: grid data plus, optionally, cached analysis results."""

    grid: MapGridData
    analysis: Optional[MapAnalysisData] = None


def _aligned(value: List[int], record_type: Type[FlatRecord]) -> List[int]:
    if len(value) % record_type.STRIDE != 0:
        raise ValueError(
            f"{record_type.__name__} data length {len(value)} "
            f"is not a multiple of {record_type.STRIDE}"
        )
    return value
