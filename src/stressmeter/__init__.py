from .core.accumulator import StressAccumulator
from .feeders.relief_item import ReliefItemFeeder, UseOutcome
from .feeders.response_feeder import ResponseFeeder
from .scoring.score_counter import ScoreCounter
from .session import GameSession

__all__ = [
    "StressAccumulator",
    "ReliefItemFeeder",
    "UseOutcome",
    "ResponseFeeder",
    "ScoreCounter",
    "GameSession",
]
