"""Environment-driven configuration."""

from .settings import DEFAULT_FREE_CHECKS, DEFAULT_QUOTA_PATH, Settings

__all__ = ["Settings", "DEFAULT_FREE_CHECKS", "DEFAULT_QUOTA_PATH"]
