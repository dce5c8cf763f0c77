from pathlib import Path

# Base project directory
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Data directories
DATA_DIR = PROJECT_ROOT / "data"
PLAYER_POOL_FILE = DATA_DIR / "players.json"
RESULTS_DIR = DATA_DIR / "results"

# Roster quotas per slot (WR and TE share the WR_TE slot)
ROSTER_QUOTAS = {
    "QB": 1,
    "RB": 2,
    "WR_TE": 3,
    "K": 1,
}

# Draft settings
ROUNDS = 7
MIN_TEAMS = 2
MAX_TEAMS = 8

# Only this team may pause, resume or undo
COMMISSIONER_NAME = "BD Crushers"

# Chat side-channel
CHAT_HISTORY_LIMIT = 100
CHAT_MESSAGE_MAX_LENGTH = 200
SPECTATOR_SUFFIX = " (Spectator)"
