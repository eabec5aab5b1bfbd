"""
Stress Accumulator
===================
The one bounded stress value of a play session.

- Clamps every delta into [0, max_stress]
- Edge-triggered danger zone (enter/exit fire once per crossing)
- Latches a terminal "exhausted" state (game over) when stress hits max

Notification order inside a single call is always:
value_changed -> zone_entered/zone_exited -> exhausted
"""

import logging
import math
import threading

from .signals import Signal

logger = logging.getLogger(__name__)


def _valid_amount(amount) -> bool:
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        return False
    return not math.isnan(amount) and amount >= 0


class StressAccumulator:
    """
    Bounded stress value with danger-zone hysteresis and a game-over latch.

    Mutated only through increase(), decrease() and reset(). Invalid
    amounts (negative, NaN, non-numeric) are rejected as no-ops; mutating
    an exhausted accumulator is a silent no-op. Neither raises.
    """

    def __init__(self, max_stress: float = 100.0, danger_threshold: float = 80.0,
                 starting: float = 0.0):
        if max_stress <= 0:
            raise ValueError(f"max_stress must be positive, got {max_stress}")
        if not 0 <= danger_threshold <= max_stress:
            raise ValueError(f"danger_threshold {danger_threshold} outside [0, {max_stress}]")
        if not 0 <= starting <= max_stress:
            raise ValueError(f"starting {starting} outside [0, {max_stress}]")

        self._max = float(max_stress)
        self._danger_threshold = float(danger_threshold)
        self._starting = float(starting)

        self._current = self._starting
        self._terminal = False
        self._zone_latch = False
        self._lock = threading.RLock()

        self.value_changed = Signal("value_changed")
        self.zone_entered = Signal("zone_entered")
        self.zone_exited = Signal("zone_exited")
        self.exhausted = Signal("exhausted")

    @classmethod
    def from_profile(cls, profile) -> "StressAccumulator":
        return cls(
            max_stress=profile.max_stress,
            danger_threshold=profile.danger_threshold,
            starting=profile.starting,
        )

    # --- Read-only state ---

    @property
    def current(self) -> float:
        return self._current

    @property
    def max(self) -> float:
        return self._max

    @property
    def danger_threshold(self) -> float:
        return self._danger_threshold

    @property
    def starting(self) -> float:
        return self._starting

    @property
    def terminal(self) -> bool:
        return self._terminal

    @property
    def in_danger_zone(self) -> bool:
        return self._current >= self._danger_threshold

    @property
    def normalized(self) -> float:
        """Current stress as a 0-1 fraction of max (for display)."""
        return self._current / self._max

    # --- Mutation ---

    def increase(self, amount: float) -> bool:
        """
        Add stress. Reaching max latches the terminal state.

        Returns:
            True if the call was applied (even if clamping left the value
            unchanged), False if it was rejected or ignored.
        """
        if not _valid_amount(amount):
            logger.warning(f"Rejected increase({amount!r}): amount must be a number >= 0")
            return False

        with self._lock:
            if self._terminal:
                logger.debug(f"increase({amount}) ignored: already exhausted")
                return False

            self._apply(amount)

            if self._current >= self._max:
                self._terminal = True
                logger.warning(f"=== EXHAUSTED === stress reached {self._max:.0f}")
                self.exhausted.emit()
        return True

    def decrease(self, amount: float) -> bool:
        """Remove stress. Never triggers the terminal state."""
        if not _valid_amount(amount):
            logger.warning(f"Rejected decrease({amount!r}): amount must be a number >= 0")
            return False

        with self._lock:
            if self._terminal:
                logger.debug(f"decrease({amount}) ignored: already exhausted")
                return False

            self._apply(-amount)
        return True

    def reset(self):
        """
        Hard reload of the starting state, allowed even after game over.
        Clears the zone latch without firing zone_exited.
        """
        with self._lock:
            self._current = self._starting
            self._terminal = False
            self._zone_latch = False
            logger.info(f"Stress reset to {self._current:.0f}")
            self.value_changed.emit(self._current)

    # --- Internals ---

    def _apply(self, delta: float):
        previous = self._current
        self._current = min(max(previous + delta, 0.0), self._max)

        logger.debug(f"Stress: {self._current:.0f}/{self._max:.0f} ({delta:+.0f})")

        if self._current != previous:
            self.value_changed.emit(self._current)
            self._check_danger_zone()

    def _check_danger_zone(self):
        in_danger = self._current >= self._danger_threshold
        if in_danger == self._zone_latch:
            return

        self._zone_latch = in_danger
        if in_danger:
            logger.info(f"Danger zone entered at {self._current:.0f}")
            self.zone_entered.emit()
        else:
            logger.info(f"Danger zone exited at {self._current:.0f}")
            self.zone_exited.emit()

    def __repr__(self):
        state = "exhausted" if self._terminal else ("danger" if self.in_danger_zone else "ok")
        return f"StressAccumulator({self._current:.1f}/{self._max:.1f}, {state})"
