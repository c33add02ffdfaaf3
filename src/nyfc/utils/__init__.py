"""Filesystem helpers."""

from .files import OutputPaths, slugify

__all__ = ["OutputPaths", "slugify"]
