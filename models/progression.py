"""
Persisted progression record for CleanRush.

The record outlives the process: it is loaded once when the host view
mounts and written back at terminal transitions (level complete, game
over).
"""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


class ProgressionRecord(BaseModel):
    """Durable cross-session memory of results and unlocked level.

    Attributes:
        last_score: Score of the most recently finished round
        high_score: Best score ever reached
        level: Level the next round starts at

    Examples:
        >>> ProgressionRecord.from_mapping({'high_score': 420})
        ProgressionRecord(last_score=0, high_score=420, level=1)
    """
    model_config = ConfigDict(frozen=True)

    last_score: int = Field(default=0, ge=0, description="Score of the last finished round")
    high_score: int = Field(default=0, ge=0, description="Best score ever reached")
    level: int = Field(default=1, ge=1, description="Level the next round starts at")

    @classmethod
    def from_mapping(cls, data: Dict[str, Any]) -> 'ProgressionRecord':
        """Build a record from stored key/values.

        Missing or null keys fall back to defaults (0, and 1 for level).
        Unknown keys are ignored.
        """
        known = {
            key: data[key]
            for key in ('last_score', 'high_score', 'level')
            if data.get(key) is not None
        }
        return cls(**known)

    def with_result(self, score: int) -> 'ProgressionRecord':
        """Record a finished round: last score always, high score if beaten."""
        return self.model_copy(update={
            'last_score': score,
            'high_score': max(self.high_score, score),
        })

    def is_new_high(self, score: int) -> bool:
        """True if score strictly beats the stored high score."""
        return score > self.high_score
