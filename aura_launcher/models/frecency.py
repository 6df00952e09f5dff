"""Frecency models for launch history persistence.

The on-disk history document is a JSON object mapping application ids
to launch counters:

    {"apps": {"firefox": {"frequency": 3, "last_accessed": 1760000000}}}
"""

from typing import Dict

from pydantic import BaseModel, Field

SECONDS_PER_DAY = 86400.0
HALF_LIFE_DAYS = 7.0


class FrecencyEntry(BaseModel):
    """Launch counter for a single application.

    Attributes:
        frequency: Number of recorded launches
        last_accessed: Unix timestamp (seconds) of the most recent launch
    """

    frequency: int = Field(default=0, ge=0)
    last_accessed: int = Field(default=0, ge=0)

    def score(self, now: float) -> float:
        """Calculate frecency score using exponential decay.

        Half-life of 7 days: score = frequency * 0.5^(age_days / 7).
        Age is clamped at zero so a timestamp in the future (clock skew)
        never inflates the score.

        Args:
            now: Current Unix timestamp in seconds

        Returns:
            Decayed score, 0.0 for an entry that was never launched
        """
        age_secs = max(0.0, now - self.last_accessed)
        age_days = age_secs / SECONDS_PER_DAY
        return self.frequency * 0.5 ** (age_days / HALF_LIFE_DAYS)


class HistoryDocument(BaseModel):
    """Serialized form of the frecency store."""

    apps: Dict[str, FrecencyEntry] = Field(default_factory=dict)
