"""
rtsmap Configuration

Loads configuration from environment variables with sensible defaults.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()


class Config:
    """Application configuration loaded from environment variables."""

    # Project Paths
    PROJECT_ROOT: Path = Path(__file__).parent.parent

    # Map documents (grid data plus optional analysis) loaded by MapLoader
    MAPS_DIR: Path = Path(
        os.getenv("RTSMAP_MAPS_DIR", str(PROJECT_ROOT / "examples" / "maps"))
    )
    # Analysis results keyed by map content hash
    ANALYSIS_CACHE_DIR: Path = Path(
        os.getenv("RTSMAP_ANALYSIS_CACHE_DIR", str(PROJECT_ROOT / ".analysis_cache"))
    )

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    @classmethod
    def validate(cls) -> None:
        """Validate configuration and raise errors if paths are unusable."""
        if cls.MAPS_DIR.exists() and not cls.MAPS_DIR.is_dir():
            raise ValueError(
                f"RTSMAP_MAPS_DIR must point to a directory, got {cls.MAPS_DIR}"
            )

        if cls.ANALYSIS_CACHE_DIR.exists() and not cls.ANALYSIS_CACHE_DIR.is_dir():
            raise ValueError(
                "RTSMAP_ANALYSIS_CACHE_DIR must point to a directory, "
                f"got {cls.ANALYSIS_CACHE_DIR}"
            )

    @classmethod
    def display(cls) -> str:
        """Return a formatted string showing current configuration."""
        lines = [
            "rtsmap Configuration:",
            f"  Maps: {cls.MAPS_DIR}",
            f"  Analysis Cache: {cls.ANALYSIS_CACHE_DIR}",
            f"  Log Level: {cls.LOG_LEVEL}",
        ]
        return "\n".join(lines)
