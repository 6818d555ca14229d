"""
CleaningGame - Dirt targets.

A dirt is a passive, immutable record. The spawner creates it; the hit
resolver, the power-up burst and a session restart remove it.
"""
from dataclasses import dataclass
from enum import Enum

from models import Point2D
from games.CleaningGame import config


class DirtCategory(Enum):
    """Kinds of dirt. Purely cosmetic; points depend on size only."""
    MUD = "mud"
    DUST = "dust"
    STAIN = "stain"


def score_value_for_size(size: float) -> int:
    """Points for cleaning a dirt of the given size.

    Big dirt (strictly larger than the threshold) is worth more.
    """
    if size > config.BIG_DIRT_THRESHOLD:
        return config.BIG_DIRT_POINTS
    return config.SMALL_DIRT_POINTS


def category_for_roll(roll: float) -> DirtCategory:
    """Map one uniform draw in [0, 1) to a category."""
    if roll > config.MUD_THRESHOLD:
        return DirtCategory.MUD
    if roll > config.STAIN_THRESHOLD:
        return DirtCategory.STAIN
    return DirtCategory.DUST


@dataclass(frozen=True)
class Dirt:
    """A spawned dirt target.

    Attributes:
        id: Unique id, never reused by the spawner that made it
        x: Centre x in field coordinates
        y: Centre y in field coordinates
        size: Diameter
        category: Cosmetic kind
        score_value: Points awarded when cleaned
    """
    id: int
    x: float
    y: float
    size: float
    category: DirtCategory
    score_value: int

    @classmethod
    def create(cls, dirt_id: int, x: float, y: float, size: float,
               category: DirtCategory) -> 'Dirt':
        """Build a dirt, deriving its score value from size."""
        return cls(
            id=dirt_id,
            x=x,
            y=y,
            size=size,
            category=category,
            score_value=score_value_for_size(size),
        )

    @property
    def radius(self) -> float:
        return self.size / 2

    @property
    def position(self) -> Point2D:
        return Point2D(x=self.x, y=self.y)

    @property
    def is_big(self) -> bool:
        return self.score_value == config.BIG_DIRT_POINTS
