"""
Map loading and analysis-result caching from JSON files.

A map file is a serialized ``MapDocument``: the raw grid arrays plus, when the
terrain analyzer has already run, its output. Analysis is expensive, so results
are also cached separately keyed by the map's content hash; a document without
an ``analysis`` block picks up a cached result when one exists.

Map file structure:
```json
{
  "grid": {
    "name": "Two Plateaus",
    "file_name": "(2)Two Plateaus.scm",
    "map_hash": "c0ffee",
    "width": 4, "height": 2,
    "height_map": [0, 0, 2, 2, 0, 0, 2, 2],
    "buildable": [1, 1, 1, 1, 1, 1, 1, 1],
    "walkable": [1, 1, ...]
  },
  "analysis": {
    "region_map": [1, 1, 2, 2, 1, 1, 2, 2],
    "regions": [1, 32, 32, 2, 96, 32],
    "region_polygons": {"1": [0, 0, 64, 0, 64, 64, 0, 64]},
    "chokepoints": [10, 1, 2, 64, 16, 64, 48],
    "base_locations": [48, 32, 0, 0, 1, 1500, 2500, 0, 0, 1]
  }
}
```

Usage:
    loader = MapLoader()
    game_map = loader.load("two_plateaus")
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import Config
from .game_map import GameMap
from .logging_utils import LOG_TAG_INFO, log_info
from .terrain import MapAnalysisData, MapDocument


class AnalysisCache:
    """File-based store of analyzer results keyed by map content hash.

    Directory structure:
    ```
    {cache_dir}/
      {map_hash}.json     # MapAnalysisData
    ```
    """

    def __init__(self, cache_dir: Optional[Path] = None):
        self.cache_dir = Path(cache_dir) if cache_dir is not None else Config.ANALYSIS_CACHE_DIR

    def _path(self, map_hash: str) -> Path:
        return self.cache_dir / f"{map_hash}.json"

    def has(self, map_hash: str) -> bool:
        return bool(map_hash) and self._path(map_hash).exists()

    def get(self, map_hash: str) -> Optional[MapAnalysisData]:
        """Return the cached analysis for ``map_hash`` or None if absent."""
        if not self.has(map_hash):
            return None
        return MapAnalysisData.model_validate_json(self._path(map_hash).read_text())

    def put(self, map_hash: str, analysis: MapAnalysisData) -> Path:
        if not map_hash:
            raise ValueError("Cannot cache analysis for a map without a content hash")
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        path = self._path(map_hash)
        path.write_text(json.dumps(analysis.model_dump(mode="json"), indent=2), "utf-8")
        return path


class MapLoader:
    """Load ``GameMap`` instances from JSON map documents.

    Directory structure:
    - Default: ``Config.MAPS_DIR`` ({PROJECT_ROOT}/examples/maps)
    - Override via constructor: MapLoader(Path("/custom/maps"))
    - Map files: {map_name}.json
    """

    def __init__(self, maps_dir: Optional[Path] = None, cache: Optional[AnalysisCache] = None):
        self.maps_dir = Path(maps_dir) if maps_dir is not None else Config.MAPS_DIR
        self.cache = cache

    def load(self, map_name: str) -> GameMap:
        """Load a map by name, analyzed if analysis data is available.

        Raises:
            FileNotFoundError: If the map file doesn't exist in maps_dir
            pydantic.ValidationError: If the document is malformed
        """
        document = self.load_document(map_name)

        if document.analysis is None and self.cache is not None:
            cached = self.cache.get(document.grid.map_hash)
            if cached is not None:
                log_info(
                    f"  {LOG_TAG_INFO} [Loader] Using cached analysis for '{map_name}' "
                    f"({document.grid.map_hash})"
                )
                document = document.model_copy(update={"analysis": cached})

        return GameMap.from_document(document)

    def load_document(self, map_name: str) -> MapDocument:
        map_path = self.maps_dir / f"{map_name}.json"
        if not map_path.exists():
            raise FileNotFoundError(f"Map '{map_name}' not found at {map_path}")
        return MapDocument.model_validate_json(map_path.read_text())

    def save(self, game_map: GameMap, map_name: Optional[str] = None) -> Path:
        """Write ``game_map`` back out as a map document."""
        self.maps_dir.mkdir(parents=True, exist_ok=True)
        path = self.maps_dir / f"{map_name or game_map.name}.json"
        document = game_map.to_document()
        path.write_text(json.dumps(document.model_dump(mode="json"), indent=2), "utf-8")
        return path

    def list_maps(self) -> List[str]:
        """List all available map files (names without .json extension)."""
        if not self.maps_dir.exists():
            return []

        return sorted(
            f.stem for f in self.maps_dir.glob("*.json")
            if not f.name.startswith("_")
        )

    def get_map_info(self, map_name: str) -> Dict[str, Any]:
        """Get map metadata without building the grid."""
        data = json.loads((self.maps_dir / f"{map_name}.json").read_text())
        grid = data.get("grid", {})

        return {
            "name": grid.get("name", map_name),
            "file_name": grid.get("file_name", ""),
            "width": grid.get("width", 0),
            "height": grid.get("height", 0),
            "analyzed": data.get("analysis") is not None,
        }


def load_map(map_name: str) -> GameMap:
    """Convenience function to load a map from the configured directory."""
    loader = MapLoader(cache=AnalysisCache())
    return loader.load(map_name)
