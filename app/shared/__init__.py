"""Shared helpers: logging setup and id generation.

Used by domain, application, and infrastructure. No business logic.
"""

from app.shared.logging import setup_logging
from app.shared.utils import generate_id

__all__ = ["generate_id", "setup_logging"]
