"""
Response Feeder
================
Turns AI agent responses into stress deltas.

Rules:
- Every response (chat or audio): +base_delta
- Reduce-tagged chat response ("POSITIVE"): additionally -reduce_delta
- Increase-tagged chat response ("NEGATIVE"): additionally +increase_delta
- Once the accumulator is exhausted, responses are ignored and the
  counters stay frozen
"""

import logging
from typing import Any, Optional

from ..core.signals import Signal

logger = logging.getLogger(__name__)


def _normalize_tag(tag: Optional[str]) -> str:
    if not tag:
        return ""
    return str(tag).strip().upper()


def extract_action(response: Any) -> Optional[str]:
    """Pull the category tag out of a chat response payload."""
    if response is None:
        return None
    if isinstance(response, dict):
        return response.get("action")
    return getattr(response, "action", None)


class ResponseFeeder:
    """Feeds AI agent responses into a shared StressAccumulator."""

    def __init__(self, accumulator=None, base_delta: float = 2.0,
                 reduce_delta: float = 20.0, increase_delta: float = 20.0,
                 reduce_tag: str = "POSITIVE", increase_tag: str = "NEGATIVE"):
        """
        Args:
            accumulator: The session's StressAccumulator (may be bound later)
            base_delta: Stress added by every response
            reduce_delta: Stress removed by a reduce-tagged response
            increase_delta: Stress added by an increase-tagged response
            reduce_tag / increase_tag: Recognised category literals
        """
        self.accumulator = accumulator
        self.base_delta = base_delta
        self.reduce_delta = reduce_delta
        self.increase_delta = increase_delta
        self.reduce_tag = _normalize_tag(reduce_tag)
        self.increase_tag = _normalize_tag(increase_tag)

        self.total_responses = 0
        self.total_positive = 0
        self.total_negative = 0

        self.positive = Signal("positive")
        self.negative = Signal("negative")

    @classmethod
    def from_profile(cls, profile, accumulator=None) -> "ResponseFeeder":
        return cls(
            accumulator,
            base_delta=profile.base_delta,
            reduce_delta=profile.reduce_delta,
            increase_delta=profile.increase_delta,
            reduce_tag=profile.reduce_tag,
            increase_tag=profile.increase_tag,
        )

    def bind(self, accumulator):
        self.accumulator = accumulator

    def _ready(self) -> bool:
        if self.accumulator is None:
            logger.warning("No StressAccumulator bound; response ignored")
            return False
        if self.accumulator.terminal:
            logger.debug("Game over, response ignored")
            return False
        return True

    def on_response(self, category: Optional[str] = None) -> bool:
        """
        Apply one AI agent response.

        Args:
            category: Tag extracted from the response (None/unknown = neutral)

        Returns:
            True if the response was counted
        """
        if not self._ready():
            return False

        acc = self.accumulator
        self.total_responses += 1
        acc.increase(self.base_delta)
        logger.debug(f"Response -> +{self.base_delta} stress (total responses: {self.total_responses})")

        tag = _normalize_tag(category)
        if tag and tag == self.reduce_tag:
            self.total_positive += 1
            acc.decrease(self.reduce_delta)
            self.positive.emit()
            logger.info(f"{self.reduce_tag}! -{self.reduce_delta} stress (total: {self.total_positive})")
        elif tag and tag == self.increase_tag:
            self.total_negative += 1
            acc.increase(self.increase_delta)
            self.negative.emit()
            logger.info(f"{self.increase_tag}! +{self.increase_delta} stress (total: {self.total_negative})")

        return True

    def on_chat_response(self, response: Any) -> bool:
        """Handle a chat payload (object or dict carrying an 'action' field)."""
        if response is None:
            return False
        return self.on_response(extract_action(response))

    def on_audio_response(self, clip: Any) -> bool:
        """Audio replies carry no category: base delta only."""
        if clip is None:
            return False
        return self.on_response(None)

    def reset_counters(self):
        self.total_responses = 0
        self.total_positive = 0
        self.total_negative = 0

    def stats(self) -> dict:
        return {
            "total_responses": self.total_responses,
            "total_positive": self.total_positive,
            "total_negative": self.total_negative,
        }
