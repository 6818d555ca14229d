"""
Data models for CleanRush.

This package provides the Pydantic models shared across the project:
- Primitives: Point2D, FieldBounds
- Progression: ProgressionRecord (persisted last/high score and level)

Usage:
    >>> from models import Point2D, FieldBounds, ProgressionRecord
"""

from .primitives import (
    Point2D,
    FieldBounds,
)
from .progression import ProgressionRecord

__all__ = [
    "Point2D",
    "FieldBounds",
    "ProgressionRecord",
]
