"""Shared fixtures for CleanRush tests."""
import itertools
from typing import Any, Dict, List, Optional, Sequence

import pytest

from cleanrush.logging import LogSink, close_all_sinks, register_sink
from cleanrush.progression import MemoryProgressionStore
from models import FieldBounds
from games.CleaningGame.dirt import Dirt, DirtCategory


class ScriptedRandom:
    """Random source that returns a fixed script of draws.

    Running out of draws raises IndexError, which makes tests fail
    loudly if code consumes more randomness than expected.
    """

    def __init__(self, draws: Sequence[float]):
        self.draws = list(draws)
        self.consumed = 0

    def random(self) -> float:
        value = self.draws.pop(0)
        self.consumed += 1
        return value


class StubSpawner:
    """Spawner double that hands out known dirts.

    Queued batches are returned first; otherwise it produces small dirts
    far outside any pointer used in tests.
    """

    def __init__(self):
        self._ids = itertools.count(1)
        self.queued_batches: List[List[Dirt]] = []
        self.per_tick = 0
        self.batch_requests: List[int] = []
        self.tick_requests: List[int] = []

    def dirt(self, x: float, y: float, size: float = 60.0) -> Dirt:
        return Dirt.create(next(self._ids), x, y, size, DirtCategory.MUD)

    def _far(self) -> Dirt:
        dirt_id = next(self._ids)
        return Dirt.create(dirt_id, 10000.0 + 200.0 * dirt_id, 10000.0, 40.0, DirtCategory.DUST)

    def spawn_batch(self, count: int, bounds: Optional[FieldBounds]) -> List[Dirt]:
        self.batch_requests.append(count)
        if bounds is None:
            return []
        if self.queued_batches:
            return self.queued_batches.pop(0)
        return [self._far() for _ in range(count)]

    def spawn_for_tick(self, level: int, bounds: Optional[FieldBounds]) -> List[Dirt]:
        self.tick_requests.append(level)
        if bounds is None:
            return []
        return [self._far() for _ in range(self.per_tick)]


class RecordingSink(LogSink):
    """Sink that keeps records in memory."""

    def __init__(self):
        self.records: List[Dict[str, Any]] = []
        self.closed = False

    def emit(self, module: str, record: Dict[str, Any]) -> None:
        self.records.append({'module': module, **record})

    def flush(self) -> None:
        pass

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def scripted_rng():
    """Factory for ScriptedRandom."""
    return ScriptedRandom


@pytest.fixture
def stub_spawner():
    return StubSpawner()


@pytest.fixture
def field_bounds():
    return FieldBounds(width=400, height=640)


@pytest.fixture
def memory_store():
    return MemoryProgressionStore()


@pytest.fixture
def recording_sink():
    """Register a RecordingSink for the 'session' module."""
    sink = RecordingSink()
    register_sink('session', sink)
    yield sink
    close_all_sinks()
