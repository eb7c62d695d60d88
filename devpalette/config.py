"""
DevPalette Configuration
Manages environment variables and defaults for the swatch manager.
"""
import os
from typing import Literal, Optional

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Config:
    """Configuration class for DevPalette services."""

    # Logging
    LOG_LEVEL: str = os.environ.get("DEVPALETTE_LOG_LEVEL", "INFO")
    LOG_JSON: bool = bool(int(os.environ.get("DEVPALETTE_LOG_JSON", "0")))

    # Persistence
    STORAGE_BACKEND: Literal["memory", "file", "redis"] = os.environ.get("DEVPALETTE_STORAGE_BACKEND", "file")
    STORAGE_PATH: str = os.environ.get("DEVPALETTE_STORAGE_PATH", "devpalette-storage.json")
    REDIS_URL: Optional[str] = os.environ.get("DEVPALETTE_REDIS_URL")

    # Storage keys (same names the browser build used in local storage)
    COLORS_KEY: str = os.environ.get("DEVPALETTE_COLORS_KEY", "color-palette-colors")
    PALETTES_KEY: str = os.environ.get("DEVPALETTE_PALETTES_KEY", "color-palette-palettes")

    # Import / export
    EXPORT_FILENAME: str = os.environ.get("DEVPALETTE_EXPORT_FILENAME", "color-palette.json")
    EXPORT_INDENT: int = int(os.environ.get("DEVPALETTE_EXPORT_INDENT", "2"))

    # Picker defaults
    DEFAULT_HEX: str = os.environ.get("DEVPALETTE_DEFAULT_HEX", "#6366F1")
    DEFAULT_COMBINE_HEX: str = os.environ.get("DEVPALETTE_DEFAULT_COMBINE_HEX", "#FF6B9D")

    # CORS settings
    ALLOWED_ORIGINS: str = os.environ.get(
        "DEVPALETTE_ALLOWED_ORIGINS",
        "http://localhost:5173,http://localhost:3000"
    )

    SUPPORTED_BACKENDS = ["memory", "file", "redis"]

    @classmethod
    def validate_backend(cls, backend: str) -> bool:
        """Validate storage backend name."""
        return backend in cls.SUPPORTED_BACKENDS

    @classmethod
    def allowed_origins(cls) -> list:
        """CORS origins as a list."""
        return [origin.strip() for origin in cls.ALLOWED_ORIGINS.split(",") if origin.strip()]


# Global config instance
config = Config()
