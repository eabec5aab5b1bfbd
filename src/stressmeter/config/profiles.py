"""
Session Profile Definitions
============================
Tuning profiles for the stress meter, the AI response feeder, relief items
and the score counter. A SessionProfile bundles them for one play session
and can be loaded from the JSON scripts used by the CLI.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from . import settings


@dataclass
class StressProfile:
    """Bounds of the stress meter."""

    starting: float = settings.STARTING_STRESS
    max_stress: float = settings.MAX_STRESS
    danger_threshold: float = settings.DANGER_THRESHOLD

    def __post_init__(self):
        if self.max_stress <= 0:
            raise ValueError(f"max_stress must be positive, got {self.max_stress}")
        if not 0 <= self.danger_threshold <= self.max_stress:
            raise ValueError(
                f"danger_threshold {self.danger_threshold} outside [0, {self.max_stress}]"
            )
        if not 0 <= self.starting <= self.max_stress:
            raise ValueError(f"starting {self.starting} outside [0, {self.max_stress}]")


@dataclass
class ResponseProfile:
    """Stress deltas applied per AI agent response."""

    base_delta: float = settings.STRESS_PER_RESPONSE
    reduce_delta: float = settings.STRESS_POSITIVE
    increase_delta: float = settings.STRESS_NEGATIVE
    reduce_tag: str = settings.POSITIVE_TAG
    increase_tag: str = settings.NEGATIVE_TAG

    def __post_init__(self):
        for name in ("base_delta", "reduce_delta", "increase_delta"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be >= 0")
        if self.reduce_tag.strip().upper() == self.increase_tag.strip().upper():
            raise ValueError("reduce_tag and increase_tag must differ")


@dataclass
class ReliefItemProfile:
    """A consumable that lowers stress (energy drink, coffee, cigarette...)."""

    name: str
    reduction: float = settings.RELIEF_REDUCTION
    max_uses: int = settings.RELIEF_MAX_USES        # negative = unlimited
    cooldown_sec: float = settings.RELIEF_COOLDOWN_SEC
    interaction_distance: float = settings.INTERACTION_DISTANCE

    def __post_init__(self):
        if self.reduction < 0:
            raise ValueError(f"{self.name}: reduction must be >= 0")
        if self.cooldown_sec < 0:
            raise ValueError(f"{self.name}: cooldown_sec must be >= 0")

    @property
    def unlimited(self) -> bool:
        return self.max_uses < 0


@dataclass
class ScoreProfile:
    """Bounded score moved by categorised responses. No game over."""

    minimum: int = settings.SCORE_MIN
    maximum: int = settings.SCORE_MAX
    start: int = settings.SCORE_START
    positive_points: int = settings.SCORE_POSITIVE
    negative_points: int = settings.SCORE_NEGATIVE

    def __post_init__(self):
        if self.minimum > self.maximum:
            raise ValueError(f"score minimum {self.minimum} > maximum {self.maximum}")
        if not self.minimum <= self.start <= self.maximum:
            raise ValueError(f"score start {self.start} outside [{self.minimum}, {self.maximum}]")


@dataclass
class SessionProfile:
    """Everything needed to build a GameSession."""

    stress: StressProfile = field(default_factory=StressProfile)
    responses: ResponseProfile = field(default_factory=ResponseProfile)
    items: List[ReliefItemProfile] = field(default_factory=list)
    score: Optional[ScoreProfile] = field(default_factory=ScoreProfile)

    def __post_init__(self):
        names = [item.name for item in self.items]
        if len(names) != len(set(names)):
            raise ValueError(f"duplicate relief item names: {names}")

    @classmethod
    def from_dict(cls, data: dict) -> "SessionProfile":
        """Build a profile from a plain dict (JSON script "profile" section)."""
        score = data.get("score", {})
        return cls(
            stress=StressProfile(**data.get("stress", {})),
            responses=ResponseProfile(**data.get("responses", {})),
            items=[ReliefItemProfile(**item) for item in data.get("items", [])],
            score=ScoreProfile(**score) if score is not None else None,
        )


def default_session_profile() -> SessionProfile:
    """Session profile built from the global settings and default props."""
    return SessionProfile(
        items=[ReliefItemProfile(**item) for item in settings.DEFAULT_RELIEF_ITEMS],
    )
