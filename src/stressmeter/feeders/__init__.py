from .relief_item import UNLIMITED, ReliefItemFeeder, UseOutcome
from .response_feeder import ResponseFeeder, extract_action

__all__ = [
    "UNLIMITED",
    "ReliefItemFeeder",
    "UseOutcome",
    "ResponseFeeder",
    "extract_action",
]
