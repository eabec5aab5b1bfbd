from .profiles import (
    ReliefItemProfile,
    ResponseProfile,
    ScoreProfile,
    SessionProfile,
    StressProfile,
    default_session_profile,
)

__all__ = [
    "ReliefItemProfile",
    "ResponseProfile",
    "ScoreProfile",
    "SessionProfile",
    "StressProfile",
    "default_session_profile",
]
