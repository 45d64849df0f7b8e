"""
Configuration for RingTrace.
Thresholds and limits come from environment variables; scoring weights are fixed.
"""

import os


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


# ── Logging ────────────────────────────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# ── HTTP ───────────────────────────────────────────────────────────────────────
MAX_FILE_SIZE_MB: int = int(os.getenv("MAX_FILE_SIZE_MB", "20"))
MAX_FILE_SIZE_BYTES: int = MAX_FILE_SIZE_MB * 1024 * 1024
CORS_ORIGINS: list = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "*").split(",")
    if origin.strip()
]

# ── Pattern thresholds ─────────────────────────────────────────────────────────
FAN_THRESHOLD: int = int(os.getenv("FAN_THRESHOLD", "10"))
VELOCITY_THRESHOLD: int = int(os.getenv("VELOCITY_THRESHOLD", "15"))

# ── Cycle search limits ────────────────────────────────────────────────────────
CYCLE_MIN_LEN: int = 3
CYCLE_MAX_PATHS: int = int(os.getenv("CYCLE_MAX_PATHS", "1000000"))
# 0 means no depth limit
CYCLE_MAX_DEPTH: int = int(os.getenv("CYCLE_MAX_DEPTH", "0"))
CYCLE_TIMEOUT_SECONDS: float = float(os.getenv("CYCLE_TIMEOUT_SECONDS", "10.0"))
CANONICAL_CYCLES: bool = _env_bool("CANONICAL_CYCLES", "false")

# ── Scoring ────────────────────────────────────────────────────────────────────
SCORE_CYCLE: int = 40
SCORE_FAN_IN: int = 25
SCORE_FAN_OUT: int = 25
SCORE_HIGH_VELOCITY: int = 15
SCORE_CAP: int = 100

# ── Rings ──────────────────────────────────────────────────────────────────────
RING_BASE_RISK: int = 70
RING_RISK_PER_MEMBER: int = 5
RING_ID_PREFIX: str = "RING_"
NO_RING: str = "NONE"
