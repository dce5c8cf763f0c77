from src.draft_room.broadcast_gateway import BroadcastGateway, build_snapshot
from src.draft_room.chat_log import ChatLog, ChatMessage
from src.draft_room.draft_engine import DraftEngine
from src.draft_room.draft_order import generate_snake_order
from src.draft_room.draft_rules import DraftRules
from src.draft_room.draft_state import (
    DraftState,
    Phase,
    Pick,
    Slot,
    Spectator,
    Team,
)
from src.draft_room.errors import ValidationError
from src.draft_room.participant_registry import ParticipantRegistry
from src.draft_room.results_export import ResultsExporter
from src.draft_room.roster_policy import RosterPolicy

__all__ = [
    "BroadcastGateway",
    "ChatLog",
    "ChatMessage",
    "DraftEngine",
    "DraftRules",
    "DraftState",
    "ParticipantRegistry",
    "Phase",
    "Pick",
    "ResultsExporter",
    "RosterPolicy",
    "Slot",
    "Spectator",
    "Team",
    "ValidationError",
    "build_snapshot",
    "generate_snake_order",
]
