"""Shared utilities: id generation."""

from app.shared.utils.generators import generate_id

__all__ = ["generate_id"]
