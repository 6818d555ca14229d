"""
Progression storage for CleanRush.

The store is a small key-value record with three integer fields:
last_score, high_score and level. It is read once when the game mounts
and written only at terminal transitions.

Usage:
    store = JsonProgressionStore(Path("~/.cleanrush/progress.json"))
    record = store.load()
    store.save(record.with_result(215).model_copy(update={'level': 2}))
"""
import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError

from cleanrush.logging import get_logger
from models.progression import ProgressionRecord

log = get_logger('progression')


class ProgressionStore(ABC):
    """Interface for loading and saving the progression record."""

    @abstractmethod
    def load(self) -> ProgressionRecord:
        """Read the stored record. Absent fields load as defaults."""

    @abstractmethod
    def save(self, record: ProgressionRecord) -> None:
        """Overwrite the stored record."""


class MemoryProgressionStore(ProgressionStore):
    """Keeps the record in memory. Used by tests and throwaway sessions."""

    def __init__(self, record: Optional[ProgressionRecord] = None):
        self._record = record or ProgressionRecord()
        self.saves = 0

    def load(self) -> ProgressionRecord:
        return self._record

    def save(self, record: ProgressionRecord) -> None:
        self._record = record
        self.saves += 1


class JsonProgressionStore(ProgressionStore):
    """Stores the record as a JSON object on disk.

    File layout:
        {"last_score": 150, "high_score": 420, "level": 3}

    A missing or unreadable file loads as a fresh record. An invalid
    field falls back to its default while valid fields are kept. Both
    cases log a warning; the game must always be able to start. Write
    errors propagate.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).expanduser()

    def load(self) -> ProgressionRecord:
        if not self.path.exists():
            return ProgressionRecord()

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            log.warning("could not read %s (%s), starting fresh", self.path, e)
            return ProgressionRecord()

        if not isinstance(data, dict):
            log.warning("ignoring %s: expected a JSON object", self.path)
            return ProgressionRecord()

        try:
            record = ProgressionRecord.from_mapping(data)
        except ValidationError as e:
            bad = {str(err['loc'][0]) for err in e.errors() if err.get('loc')}
            if not bad:
                log.warning("invalid progression in %s, starting fresh", self.path)
                return ProgressionRecord()
            log.warning("invalid %s in %s, using defaults for them",
                        ", ".join(sorted(bad)), self.path)
            record = ProgressionRecord.from_mapping(
                {key: value for key, value in data.items() if key not in bad}
            )

        log.debug("loaded progression %s", record)
        return record

    def save(self, record: ProgressionRecord) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w', encoding='utf-8') as f:
            json.dump(record.model_dump(), f, indent=2)
        log.debug("saved progression %s", record)
