"""
Relief Item Feeder
===================
Consumables (energy drink, coffee, cigarette...) that lower stress.
Each item has a finite number of uses (or unlimited) and a cooldown so a
single item cannot be spammed to zero out stress.
"""

import logging
import time
from enum import Enum
from typing import Callable, Optional

from ..config.settings import UNLIMITED_USES as UNLIMITED
from ..core.signals import Signal

logger = logging.getLogger(__name__)


class UseOutcome(Enum):
    USED = "used"
    EMPTY = "empty"
    COOLING_DOWN = "cooling_down"
    GAME_OVER = "game_over"
    NO_ACCUMULATOR = "no_accumulator"


class ReliefItemFeeder:
    """
    One relief item instance.

    remaining_uses only goes up through refill(). At zero (finite items)
    the item stays inert until refilled.
    """

    def __init__(self, name: str, accumulator=None, reduction: float = 15.0,
                 max_uses: int = 1, cooldown_sec: float = 0.0,
                 clock: Optional[Callable[[], float]] = None, interactable=None):
        """
        Args:
            name: Item name (used in logs and hints)
            accumulator: Shared StressAccumulator (may be bound later)
            reduction: Stress removed per use
            max_uses: Uses before the item is empty (negative = unlimited)
            cooldown_sec: Minimum seconds between two uses
            clock: Zero-argument time source in seconds (default time.monotonic)
            interactable: Optional Interactable whose hint/enabled state tracks this item
        """
        self.name = name
        self.accumulator = accumulator
        self.reduction = reduction
        self.max_uses = max_uses
        self.cooldown_sec = cooldown_sec
        self.clock = clock or time.monotonic
        self.interactable = interactable

        self.remaining_uses = max_uses
        self.last_use_time: Optional[float] = None
        self.use_count = 0
        self.last_outcome: Optional[UseOutcome] = None

        self.used = Signal("used")
        self.empty = Signal("empty")
        self.refilled = Signal("refilled")

        if interactable is not None:
            interactable.interacted.connect(self.use_item)
            self._update_interactable()

    @classmethod
    def from_profile(cls, profile, accumulator=None, clock=None, interactable=None):
        return cls(
            profile.name,
            accumulator,
            reduction=profile.reduction,
            max_uses=profile.max_uses,
            cooldown_sec=profile.cooldown_sec,
            clock=clock,
            interactable=interactable,
        )

    def bind(self, accumulator):
        self.accumulator = accumulator

    @property
    def unlimited(self) -> bool:
        return self.max_uses < 0

    @property
    def is_empty(self) -> bool:
        return not self.unlimited and self.remaining_uses <= 0

    def cooldown_remaining(self) -> float:
        """Seconds until the next use is allowed (0 when ready)."""
        if self.last_use_time is None:
            return 0.0
        return max(0.0, self.last_use_time + self.cooldown_sec - self.clock())

    def can_use(self) -> bool:
        if self.is_empty:
            return False
        if self.last_use_time is None:
            return True
        return self.clock() >= self.last_use_time + self.cooldown_sec

    def use_item(self) -> UseOutcome:
        """
        Consume one use and lower stress.

        Returns:
            UseOutcome.USED on success, otherwise the reason it was skipped.
            The same value is kept in last_outcome for callers that trigger
            the use indirectly (through the interactable).
        """
        self.last_outcome = self._try_use()
        return self.last_outcome

    def _try_use(self) -> UseOutcome:
        if self.is_empty:
            logger.info(f"[{self.name}] empty")
            return UseOutcome.EMPTY
        if not self.can_use():
            logger.info(f"[{self.name}] cooldown ({self.cooldown_remaining():.1f}s left)")
            return UseOutcome.COOLING_DOWN

        acc = self.accumulator
        if acc is None:
            logger.warning(f"[{self.name}] no StressAccumulator bound; use skipped")
            return UseOutcome.NO_ACCUMULATOR
        if acc.terminal:
            logger.info(f"[{self.name}] game over, cannot use")
            return UseOutcome.GAME_OVER

        acc.decrease(self.reduction)
        self.last_use_time = self.clock()
        self.use_count += 1
        if not self.unlimited:
            self.remaining_uses -= 1

        logger.info(f"[{self.name}] used: -{self.reduction} stress (now {acc.current:.0f})")
        self.used.emit()

        if not self.unlimited and self.remaining_uses == 0:
            logger.info(f"[{self.name}] used up")
            self.empty.emit()

        self._update_interactable()
        return UseOutcome.USED

    def refill(self):
        """Restore the configured number of uses. Stress is untouched."""
        self.remaining_uses = self.max_uses
        self._update_interactable()
        logger.info(f"[{self.name}] refilled: {self.remaining_uses} uses")
        self.refilled.emit()

    def _update_interactable(self):
        if self.interactable is None:
            return
        if self.is_empty:
            self.interactable.set_interactable(False)
            self.interactable.hint = "Empty"
        else:
            self.interactable.set_interactable(True)
            if self.unlimited:
                self.interactable.hint = "Use"
            else:
                self.interactable.hint = f"Use ({self.remaining_uses} left)"

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "reduction": self.reduction,
            "max_uses": self.max_uses,
            "remaining_uses": self.remaining_uses,
            "unlimited": self.unlimited,
            "cooldown_sec": self.cooldown_sec,
            "cooldown_remaining": round(self.cooldown_remaining(), 2),
            "can_use": self.can_use(),
            "use_count": self.use_count,
            "last_outcome": self.last_outcome.value if self.last_outcome else None,
        }
