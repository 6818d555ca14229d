"""
Shared primitive data types for CleanRush.

Geometric types for the play-field: pointer positions and the field
bounding box supplied by the host view.
"""

import math
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class Point2D(BaseModel):
    """Immutable 2D point in play-field coordinates.

    The origin is the field's top-left corner. Pointer events, dirt
    positions and spawn positions all use this space.

    Attributes:
        x: X coordinate (horizontal)
        y: Y coordinate (vertical)

    Examples:
        >>> Point2D(x=110.0, y=105.0).distance_to(Point2D(x=100.0, y=100.0))
        11.180339887498949
    """
    x: float
    y: float

    model_config = ConfigDict(frozen=True)

    def distance_to(self, other: 'Point2D') -> float:
        """Euclidean distance to another point."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def __str__(self) -> str:
        """String representation for debugging."""
        return f"Point2D(x={self.x:.2f}, y={self.y:.2f})"


class FieldBounds(BaseModel):
    """Size of the play-field as measured by the host.

    Attributes:
        width: Field width (must be positive)
        height: Field height (must be positive)

    Examples:
        >>> bounds = FieldBounds(width=400, height=640)
        >>> bounds.spawn_area(40)
        (40.0, 40.0, 320.0, 560.0)
    """
    width: float = Field(..., gt=0)
    height: float = Field(..., gt=0)

    model_config = ConfigDict(frozen=True)

    def spawn_area(self, padding: float) -> Optional[Tuple[float, float, float, float]]:
        """Rectangle that spawned targets may occupy.

        Args:
            padding: Margin kept clear on every side

        Returns:
            (left, top, span_x, span_y), or None if the field is too small
            to keep the padding on both sides of either axis
        """
        span_x = self.width - 2 * padding
        span_y = self.height - 2 * padding
        if span_x < 0 or span_y < 0:
            return None
        return (float(padding), float(padding), float(span_x), float(span_y))

    def __str__(self) -> str:
        """String representation for debugging."""
        return f"FieldBounds({self.width:g}x{self.height:g})"
