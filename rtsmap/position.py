"""Multi-resolution map coordinates.

Maps are addressed at three nested resolutions:
- PIXEL: the finest unit, used for unit centers and region polygons
- WALK: 8x8 pixel tiles, used for walkability
- BUILD: 32x32 pixel tiles (4x4 walk tiles), used for height, buildability,
  region membership and pathfinding

Every flat-array index in the package is computed from a ``Position`` converted
to the resolution the array is stored at. Conversion to a coarser resolution
floors, so a pixel inside a build tile always maps to that tile.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

TILE_SIZE = 32
WALK_TILE_SIZE = 8
WALK_TILES_PER_BUILD_TILE = TILE_SIZE // WALK_TILE_SIZE


class Resolution(Enum):
    """Coordinate resolution, valued by its size in pixels."""

    PIXEL = 1
    WALK = WALK_TILE_SIZE
    BUILD = TILE_SIZE

    @property
    def scale(self) -> int:
        return self.value


def convert(value: int, from_res: Resolution, to_res: Resolution) -> int:
    """Rescale a single coordinate component between resolutions."""

    if from_res is to_res:
        return value
    return (value * from_res.scale) // to_res.scale


@dataclass(frozen=True)
class Position:
    """Integer coordinate pair tagged with its resolution."""

    x: int
    y: int
    resolution: Resolution = Resolution.PIXEL

    def to(self, resolution: Resolution) -> Position:
        if resolution is self.resolution:
            return self
        return Position(
            convert(self.x, self.resolution, resolution),
            convert(self.y, self.resolution, resolution),
            resolution,
        )

    def get_x(self, resolution: Resolution) -> int:
        return convert(self.x, self.resolution, resolution)

    def get_y(self, resolution: Resolution) -> int:
        return convert(self.y, self.resolution, resolution)

    def is_valid(self, extent: Position) -> bool:
        """Return True if this position lies inside ``extent``.

        ``extent`` is the size of the grid (typically the map size at BUILD
        resolution). It is rescaled to this position's resolution so the lower
        bound is inclusive 0 and the upper bound is the exclusive grid size.
        """

        max_x = extent.get_x(self.resolution)
        max_y = extent.get_y(self.resolution)
        return 0 <= self.x < max_x and 0 <= self.y < max_y

    def translated(self, dx: int, dy: int) -> Position:
        """Offset by ``dx``/``dy`` units of this position's own resolution."""
        return Position(self.x + dx, self.y + dy, self.resolution)

    def distance(self, other: Position) -> float:
        """Euclidean distance in pixels."""
        a = self.to(Resolution.PIXEL)
        b = other.to(Resolution.PIXEL)
        return math.hypot(a.x - b.x, a.y - b.y)

    def approx_distance(self, other: Position) -> int:
        """Integer distance approximation in pixels, as used by the game engine.

        Slightly overestimates the Euclidean distance on diagonals but avoids
        floating point entirely.
        """

        a = self.to(Resolution.PIXEL)
        b = other.to(Resolution.PIXEL)
        low = abs(a.x - b.x)
        high = abs(a.y - b.y)
        if high < low:
            low, high = high, low
        if low < (high >> 2):
            return high
        low_calc = (3 * low) >> 3
        return (low_calc >> 5) + low_calc + high - (high >> 4) - (high >> 6)

    def __str__(self) -> str:
        return f"({self.x}, {self.y}) [{self.resolution.name.lower()}]"


def is_valid(position: Position, extent: Position) -> bool:
    """Module-level alias for :meth:`Position.is_valid`."""
    return position.is_valid(extent)
