"""
stressmeter Global Configuration
=================================
Central configuration for stress tuning, relief items and the API server.
Every value can be overridden from the environment (or a .env file in the
working directory), e.g. STRESSMETER_MAX_STRESS=120.
"""

import os

from dotenv import load_dotenv

load_dotenv()


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "")
    try:
        return float(raw) if raw else default
    except ValueError:
        return default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "")
    try:
        return int(raw) if raw else default
    except ValueError:
        return default


# --- Stress meter ---
STARTING_STRESS = _env_float("STRESSMETER_STARTING_STRESS", 0.0)
MAX_STRESS = _env_float("STRESSMETER_MAX_STRESS", 100.0)
DANGER_THRESHOLD = _env_float("STRESSMETER_DANGER_THRESHOLD", 80.0)

# --- AI agent responses ---
STRESS_PER_RESPONSE = _env_float("STRESSMETER_STRESS_PER_RESPONSE", 2.0)
STRESS_POSITIVE = _env_float("STRESSMETER_STRESS_POSITIVE", 20.0)
STRESS_NEGATIVE = _env_float("STRESSMETER_STRESS_NEGATIVE", 20.0)
POSITIVE_TAG = os.environ.get("STRESSMETER_POSITIVE_TAG", "POSITIVE")
NEGATIVE_TAG = os.environ.get("STRESSMETER_NEGATIVE_TAG", "NEGATIVE")

# --- Relief items ---
RELIEF_REDUCTION = _env_float("STRESSMETER_RELIEF_REDUCTION", 15.0)
RELIEF_MAX_USES = _env_int("STRESSMETER_RELIEF_MAX_USES", 1)   # -1 = unlimited
RELIEF_COOLDOWN_SEC = _env_float("STRESSMETER_RELIEF_COOLDOWN_SEC", 0.0)
UNLIMITED_USES = -1   # max_uses sentinel for items that never run out

# Default props placed in a session when no profile is given
DEFAULT_RELIEF_ITEMS = [
    {"name": "energy_drink", "reduction": 15.0, "max_uses": 1, "cooldown_sec": 0.0},
    {"name": "coffee", "reduction": 10.0, "max_uses": 3, "cooldown_sec": 5.0},
    {"name": "cigarette", "reduction": 20.0, "max_uses": 2, "cooldown_sec": 10.0},
]

# --- Score counter ---
SCORE_MIN = _env_int("STRESSMETER_SCORE_MIN", 0)
SCORE_MAX = _env_int("STRESSMETER_SCORE_MAX", 100)
SCORE_START = _env_int("STRESSMETER_SCORE_START", 50)
SCORE_POSITIVE = _env_int("STRESSMETER_SCORE_POSITIVE", 10)
SCORE_NEGATIVE = _env_int("STRESSMETER_SCORE_NEGATIVE", 10)

# --- Interaction ---
INTERACTION_DISTANCE = _env_float("STRESSMETER_INTERACTION_DISTANCE", 3.0)

# --- Stress bar ---
BAR_LERP_SPEED = 5.0
BAR_PULSE_SPEED = 3.0
BAR_COLORS = {
    "normal": [0.2, 0.8, 0.2],    # green
    "warning": [1.0, 0.8, 0.0],   # yellow
    "danger": [1.0, 0.15, 0.15],  # red
}

# --- API ---
API_HOST = os.environ.get("STRESSMETER_API_HOST", "0.0.0.0")
API_PORT = _env_int("STRESSMETER_API_PORT", 8000)
EVENT_LOG_LIMIT = _env_int("STRESSMETER_EVENT_LOG_LIMIT", 500)

# --- Logging ---
LOG_LEVEL = os.environ.get("STRESSMETER_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
