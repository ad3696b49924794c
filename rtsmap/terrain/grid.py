"""Per-tile terrain data at build-tile and walk-tile resolution.

A map ships three raw arrays: a ground height class and a buildable bit for
every build tile, and a walkable bit for every walk tile. The grid keeps them
in row-major order and derives one extra build-tile array, low-res
walkability, which is true only when all 16 walk tiles inside the build tile
are walkable. Pathfinding runs on that coarse array.
"""

from __future__ import annotations

from enum import IntEnum
from typing import List, Sequence

from ..position import WALK_TILES_PER_BUILD_TILE, Position, Resolution


class GroundHeight(IntEnum):
    """Ground height classes reported by the game engine."""

    LOW = 0
    LOW_DOODAD = 1
    HIGH = 2
    HIGH_DOODAD = 3
    VERY_HIGH = 4
    VERY_HIGH_DOODAD = 5


class TileGrid:
    """Immutable terrain grid built once at map load.

    Queries accept a ``Position`` at any resolution and convert it to the
    resolution of the backing array. Positions outside the map return the safe
    defaults (height 0, False) instead of raising.
    """

    def __init__(
        self,
        width: int,
        height: int,
        height_map: Sequence[int],
        buildable: Sequence[int],
        walkable: Sequence[int],
    ):
        if width < 0 or height < 0:
            raise ValueError(f"Grid size must be non-negative, got {width}x{height}")

        self.width = width
        self.height = height
        self.walk_width = width * WALK_TILES_PER_BUILD_TILE
        self.walk_height = height * WALK_TILES_PER_BUILD_TILE
        self.size = Position(width, height, Resolution.BUILD)

        build_count = width * height
        walk_count = self.walk_width * self.walk_height
        _check_length("height_map", height_map, build_count)
        _check_length("buildable", buildable, build_count)
        _check_length("walkable", walkable, walk_count)

        self._height_map: List[int] = [int(value) for value in height_map]
        self._buildable: List[bool] = [value == 1 for value in buildable]
        self._walkable: List[bool] = [value == 1 for value in walkable]

        # Every build tile starts walkable and each walk tile folds its own
        # walkability into the owning build tile.
        self._low_res_walkable: List[bool] = [True] * build_count
        for wy in range(self.walk_height):
            for wx in range(self.walk_width):
                tile = Position(wx, wy, Resolution.WALK).to(Resolution.BUILD)
                index = self._build_index(tile)
                self._low_res_walkable[index] &= self._walkable[wx + self.walk_width * wy]

    def _build_index(self, position: Position) -> int:
        tile = position.to(Resolution.BUILD)
        return tile.x + self.width * tile.y

    def _walk_index(self, position: Position) -> int:
        tile = position.to(Resolution.WALK)
        return tile.x + self.walk_width * tile.y

    def is_valid(self, position: Position) -> bool:
        return position.is_valid(self.size)

    def ground_height(self, position: Position) -> int:
        """Return the ground height class at ``position`` (see ``GroundHeight``)."""
        if not self.is_valid(position):
            return 0
        return self._height_map[self._build_index(position)]

    def is_buildable(self, position: Position) -> bool:
        if not self.is_valid(position):
            return False
        return self._buildable[self._build_index(position)]

    def is_walkable(self, position: Position) -> bool:
        """Walkability at walk-tile resolution.

        Coarser positions resolve to the top-left walk tile they contain.
        """
        if not self.is_valid(position):
            return False
        return self._walkable[self._walk_index(position)]

    def is_low_res_walkable(self, position: Position) -> bool:
        """Return True if every walk tile inside the build tile is walkable."""
        if not self.is_valid(position):
            return False
        return self._low_res_walkable[self._build_index(position)]

    def is_low_res_walkable_tile(self, tx: int, ty: int) -> bool:
        """Build-tile shortcut used on the pathfinding hot path."""
        return self.is_low_res_walkable(Position(tx, ty, Resolution.BUILD))

    @property
    def height_map(self) -> List[int]:
        return list(self._height_map)

    @property
    def buildable(self) -> List[bool]:
        return list(self._buildable)

    @property
    def walkable(self) -> List[bool]:
        return list(self._walkable)

    @property
    def low_res_walkable(self) -> List[bool]:
        return list(self._low_res_walkable)


def _check_length(name: str, values: Sequence[int], expected: int) -> None:
    if len(values) != expected:
        raise ValueError(
            f"{name} must contain {expected} entries for this grid, got {len(values)}"
        )
