"""Dashboard configuration."""

from .settings import DATA_CONFIG, REFRESH_CONFIG

__all__ = ["DATA_CONFIG", "REFRESH_CONFIG"]
