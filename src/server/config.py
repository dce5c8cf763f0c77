"""Process settings, read from the environment."""

import os
from pathlib import Path

from src.draft_room.config import PLAYER_POOL_FILE, PROJECT_ROOT, RESULTS_DIR

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_DIR = Path(os.getenv("LOG_DIR", str(PROJECT_ROOT / "logs")))

POOL_FILE = Path(os.getenv("PLAYER_POOL_FILE", str(PLAYER_POOL_FILE)))
RESULTS_OUTPUT_DIR = Path(os.getenv("RESULTS_DIR", str(RESULTS_DIR)))


def get_cors_origins():
    """CORS origins for Socket.IO, defaulting to * for dev."""
    origins = os.getenv("WS_ALLOWED_ORIGINS", "")
    if not origins:
        return "*"
    return [o.strip() for o in origins.split(",") if o.strip()]
