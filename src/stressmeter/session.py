"""
Game Session
=============
Composition root for one play session. Builds exactly one
StressAccumulator and hands it to every feeder, wires the display and
score models, and keeps an ordered log of every notification.
"""

import logging
import time
from typing import Dict, List, Optional

from .config import settings
from .config.profiles import SessionProfile, default_session_profile
from .core.accumulator import StressAccumulator
from .display.stress_bar import StressBar
from .feeders.relief_item import ReliefItemFeeder, UseOutcome
from .feeders.response_feeder import ResponseFeeder
from .interaction.interactable import Interactable
from .scoring.score_counter import ScoreCounter

logger = logging.getLogger(__name__)


class SessionClock:
    """Monotonic clock that scripted replays can fast-forward."""

    def __init__(self, base=time.monotonic):
        self._base = base
        self.offset = 0.0

    def __call__(self) -> float:
        return self._base() + self.offset

    def advance(self, seconds: float):
        if seconds < 0:
            raise ValueError("cannot move the clock backwards")
        self.offset += seconds


class GameSession:
    """One accumulator, its feeders and their presentation models."""

    def __init__(self, profile: Optional[SessionProfile] = None, clock=None,
                 event_limit: int = settings.EVENT_LOG_LIMIT):
        self.profile = profile or default_session_profile()
        self.clock = clock or SessionClock()
        self.event_limit = event_limit
        self.events: List[dict] = []
        self.started_at = time.time()

        self.accumulator = StressAccumulator.from_profile(self.profile.stress)
        self.responses = ResponseFeeder.from_profile(self.profile.responses, self.accumulator)
        self.bar = StressBar(self.accumulator)

        self.score: Optional[ScoreCounter] = None
        if self.profile.score is not None:
            self.score = ScoreCounter.from_profile(self.profile.score)

        self.items: Dict[str, ReliefItemFeeder] = {}
        for item_profile in self.profile.items:
            interactable = Interactable(
                item_profile.name,
                interaction_distance=item_profile.interaction_distance,
            )
            self.items[item_profile.name] = ReliefItemFeeder.from_profile(
                item_profile, self.accumulator, clock=self.clock, interactable=interactable,
            )

        self._wire()
        logger.info(
            f"Session ready: stress {self.accumulator.current:.0f}/{self.accumulator.max:.0f}, "
            f"{len(self.items)} relief items"
        )

    # --- Wiring ---

    def _wire(self):
        acc = self.accumulator
        acc.value_changed.connect(lambda v: self._record("value_changed", v))
        acc.zone_entered.connect(lambda: self._record("zone_entered"))
        acc.zone_exited.connect(lambda: self._record("zone_exited"))
        acc.exhausted.connect(lambda: self._record("exhausted"))

        self.responses.positive.connect(self._on_positive)
        self.responses.negative.connect(self._on_negative)

        if self.score is not None:
            self.score.changed.connect(lambda v: self._record("score_changed", v))

        for name, item in self.items.items():
            item.used.connect(lambda n=name: self._record("item_used", n))
            item.empty.connect(lambda n=name: self._record("item_empty", n))
            item.refilled.connect(lambda n=name: self._record("item_refilled", n))
            item.interactable.exited_range.connect(lambda n=name: self._record("left_range", n))

    def _on_positive(self):
        self._record("positive")
        if self.score is not None:
            self.score.add(self.profile.score.positive_points)

    def _on_negative(self):
        self._record("negative")
        if self.score is not None:
            self.score.subtract(self.profile.score.negative_points)

    def _record(self, event_type: str, value=None):
        self.events.append({"type": event_type, "value": value, "t": time.time()})
        if len(self.events) > self.event_limit:
            self.events.pop(0)

    # --- Operations ---

    @property
    def game_over(self) -> bool:
        return self.accumulator.terminal

    def item(self, name: str) -> ReliefItemFeeder:
        """Look up a relief item. Raises KeyError for unknown names."""
        return self.items[name]

    def respond(self, action: Optional[str] = None) -> bool:
        return self.responses.on_response(action)

    def respond_chat(self, response) -> bool:
        return self.responses.on_chat_response(response)

    def respond_audio(self, clip=True) -> bool:
        return self.responses.on_audio_response(clip)

    def use_item(self, name: str) -> UseOutcome:
        return self.item(name).use_item()

    def interact(self, name: str, distance: float = 0.0) -> Optional[UseOutcome]:
        """
        Player presses 'use' on an item's interactable.

        Returns:
            the item's UseOutcome, or None when the press did not reach the
            item (out of range or the item is disabled)
        """
        item = self.item(name)
        item.last_outcome = None
        if not item.interactable.interact(distance):
            return None
        return item.last_outcome

    def leave(self, name: str, distance: float) -> bool:
        """Player walked `distance` away from an item. True once past its exit range."""
        return self.item(name).interactable.exit_range_reached(distance)

    def refill_item(self, name: str):
        self.item(name).refill()

    def reset(self):
        """Start over: stress, counters, score and items back to their initial state."""
        self._record("reset")
        self.accumulator.reset()
        self.responses.reset_counters()
        if self.score is not None:
            self.score.reset()
        for item in self.items.values():
            item.refill()
            item.last_use_time = None
            item.last_outcome = None
        logger.info("Session reset")

    def replay(self, steps: List[dict]) -> List[dict]:
        """
        Run a scripted list of steps.

        Step kinds: response {action}, audio, use_item {item},
        interact {item, distance}, leave {item, distance}, refill {item},
        advance {seconds}, reset

        Returns:
            one result dict per step
        """
        results = []
        for i, step in enumerate(steps):
            kind = step.get("kind", "")
            outcome = None
            try:
                if kind == "response":
                    outcome = self.respond(step.get("action"))
                elif kind == "audio":
                    outcome = self.respond_audio()
                elif kind == "use_item":
                    outcome = self.use_item(step["item"]).value
                elif kind == "interact":
                    used = self.interact(step["item"], step.get("distance", 0.0))
                    outcome = used.value if used is not None else None
                elif kind == "leave":
                    outcome = self.leave(step["item"], step.get("distance", 0.0))
                elif kind == "refill":
                    self.refill_item(step["item"])
                    outcome = True
                elif kind == "advance":
                    self.clock.advance(float(step.get("seconds", 0)))
                    outcome = True
                elif kind == "reset":
                    self.reset()
                    outcome = True
                else:
                    logger.warning(f"Step {i}: unknown kind '{kind}', skipped")
                    outcome = "unknown"
            except KeyError as e:
                logger.warning(f"Step {i}: unknown item {e}")
                outcome = "unknown_item"

            results.append({
                "step": i,
                "kind": kind,
                "outcome": outcome,
                "stress": round(self.accumulator.current, 2),
                "game_over": self.game_over,
            })
        return results

    def snapshot(self) -> dict:
        """Serializable view of the whole session for the API and CLI."""
        acc = self.accumulator
        return {
            "stress": {
                "current": round(acc.current, 2),
                "max": acc.max,
                "danger_threshold": acc.danger_threshold,
                "normalized": round(acc.normalized, 4),
                "in_danger_zone": acc.in_danger_zone,
                "exhausted": acc.terminal,
            },
            "bar": self.bar.to_dashboard_state(),
            "responses": self.responses.stats(),
            "score": self.score.to_dict() if self.score is not None else None,
            "items": {name: item.to_dict() for name, item in self.items.items()},
            "game_over": acc.terminal,
            "event_count": len(self.events),
        }
