"""Core: config, request context, error handling and application bootstrap.

Single place for settings and request-scoped context.
"""

from app.core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
