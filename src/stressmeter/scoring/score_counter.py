"""
Score Counter
==============
Simpler sibling of the stress meter: an integer score clamped to
[minimum, maximum] with no terminal state. Hitting a bound just stops
the score there.
"""

import logging

from ..core.signals import Signal

logger = logging.getLogger(__name__)


class ScoreCounter:
    """Bounded score moved by categorised AI responses."""

    def __init__(self, minimum: int = 0, maximum: int = 100, start: int = 50):
        if minimum > maximum:
            raise ValueError(f"minimum {minimum} > maximum {maximum}")
        if not minimum <= start <= maximum:
            raise ValueError(f"start {start} outside [{minimum}, {maximum}]")
        self.minimum = minimum
        self.maximum = maximum
        self.start = start
        self._score = start
        self.changed = Signal("changed")

    @classmethod
    def from_profile(cls, profile) -> "ScoreCounter":
        return cls(minimum=profile.minimum, maximum=profile.maximum, start=profile.start)

    @property
    def score(self) -> int:
        return self._score

    @property
    def at_min(self) -> bool:
        return self._score <= self.minimum

    @property
    def at_max(self) -> bool:
        return self._score >= self.maximum

    def add(self, points: int) -> bool:
        if points < 0:
            logger.warning(f"Rejected add({points}): points must be >= 0")
            return False
        self._set(self._score + points)
        return True

    def subtract(self, points: int) -> bool:
        if points < 0:
            logger.warning(f"Rejected subtract({points}): points must be >= 0")
            return False
        self._set(self._score - points)
        return True

    def reset(self):
        self._score = self.start
        self.changed.emit(self._score)

    def _set(self, value: int):
        previous = self._score
        self._score = min(max(value, self.minimum), self.maximum)
        if self._score != previous:
            logger.debug(f"Score: {previous} -> {self._score}")
            self.changed.emit(self._score)

    def to_dict(self) -> dict:
        return {
            "score": self._score,
            "minimum": self.minimum,
            "maximum": self.maximum,
        }
