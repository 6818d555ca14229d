"""
CleaningGame - Dirt spawner with level-scaled spawn rate.

Each clock tick makes one spawn decision. Higher levels raise the base
chance and unlock extra spawns that ride on a successful primary spawn.
"""
import itertools
import random
from typing import List, Optional, Protocol

from cleanrush.logging import get_logger
from models import FieldBounds
from games.CleaningGame import config
from games.CleaningGame.dirt import Dirt, category_for_roll

log = get_logger('spawner')


class RandomSource(Protocol):
    """Anything with random() -> uniform float in [0, 1)."""

    def random(self) -> float: ...


def spawn_probability(level: int) -> float:
    """Chance that a tick produces a spawn.

    Not capped: from level 5 on this is >= 1.0 and every tick spawns.
    """
    return config.BASE_SPAWN_CHANCE + config.SPAWN_CHANCE_PER_LEVEL * level


class DirtSpawner:
    """Creates dirts inside the padded play-field."""

    def __init__(
        self,
        rng: Optional[RandomSource] = None,
        padding: Optional[float] = None,
    ):
        """Initialize the spawner.

        Args:
            rng: Random source (default: private random.Random)
            padding: Margin kept clear at the field edges
        """
        self.rng = rng if rng is not None else random.Random()
        self.padding = config.FIELD_PADDING if padding is None else padding
        self._ids = itertools.count(1)
        self.spawned_total = 0
        self.dropped_total = 0

    def spawn_one(self, bounds: Optional[FieldBounds]) -> Optional[Dirt]:
        """Create a single dirt.

        Draw order: size, x, y, category.

        Args:
            bounds: Current field bounds, or None before the host measured

        Returns:
            The new dirt, or None if there is no usable field
        """
        area = bounds.spawn_area(self.padding) if bounds is not None else None
        if area is None:
            self.dropped_total += 1
            log.debug("spawn dropped: no usable field (%s)", bounds)
            return None

        left, top, span_x, span_y = area
        size = config.MIN_DIRT_SIZE + config.DIRT_SIZE_RANGE * self.rng.random()
        x = left + self.rng.random() * span_x
        y = top + self.rng.random() * span_y
        category = category_for_roll(self.rng.random())

        self.spawned_total += 1
        return Dirt.create(next(self._ids), x, y, size, category)

    def spawn_batch(self, count: int, bounds: Optional[FieldBounds]) -> List[Dirt]:
        """Create up to `count` dirts (fewer only if spawns are dropped)."""
        dirts = []
        for _ in range(max(0, count)):
            dirt = self.spawn_one(bounds)
            if dirt is not None:
                dirts.append(dirt)
        return dirts

    def spawn_for_tick(self, level: int, bounds: Optional[FieldBounds]) -> List[Dirt]:
        """Make the per-tick spawn decision.

        The primary spawn happens when a draw falls under
        spawn_probability(level). Only then do the level-gated extras
        get a chance:
            level > 2: one more at SECOND_SPAWN_CHANCE
            level > 5: one more at THIRD_SPAWN_CHANCE
            level > 8: one more, always

        Args:
            level: Current level
            bounds: Current field bounds

        Returns:
            Newly created dirts (possibly empty)
        """
        if self.rng.random() >= spawn_probability(level):
            return []

        count = 1
        if level > config.SECOND_SPAWN_MIN_LEVEL and self.rng.random() < config.SECOND_SPAWN_CHANCE:
            count += 1
        if level > config.THIRD_SPAWN_MIN_LEVEL and self.rng.random() < config.THIRD_SPAWN_CHANCE:
            count += 1
        if level > config.GUARANTEED_EXTRA_MIN_LEVEL:
            count += 1

        dirts = self.spawn_batch(count, bounds)
        if dirts:
            log.debug("tick spawned %d dirt(s) at level %d", len(dirts), level)
        return dirts
