"""Bounded chat history, independent of the draft phase."""

import logging
import threading
import uuid
from collections import deque
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Optional

from src.draft_room.config import (
    CHAT_HISTORY_LIMIT,
    CHAT_MESSAGE_MAX_LENGTH,
    SPECTATOR_SUFFIX,
)
from src.draft_room.participant_registry import ParticipantRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChatMessage:
    message_id: str
    sender_id: str
    sender_name: str
    is_spectator: bool
    text: str
    timestamp: str

    def to_dict(self) -> Dict:
        return {
            "message_id": self.message_id,
            "sender_id": self.sender_id,
            "sender_name": self.sender_name,
            "is_spectator": self.is_spectator,
            "text": self.text,
            "timestamp": self.timestamp,
        }


class ChatLog:
    """Keeps the most recent chat messages; oldest are evicted first."""

    def __init__(
        self,
        registry: ParticipantRegistry,
        capacity: int = CHAT_HISTORY_LIMIT,
        max_length: int = CHAT_MESSAGE_MAX_LENGTH,
        lock=None,
    ):
        self.registry = registry
        self.max_length = max_length
        self._messages: deque = deque(maxlen=capacity)
        # Usually the draft engine lock
        self._lock = lock or threading.RLock()

    def post(self, connection_id: str, text) -> Optional[ChatMessage]:
        """Append a message from whoever holds this connection.

        Returns None, without raising, when the sender is not a team or
        spectator or the text is blank.
        """
        if not isinstance(text, str) or not text.strip():
            return None

        with self._lock:
            team = self.registry.team_by_connection(connection_id)
            spectator = None
            if team is None:
                spectator = self.registry.spectator_by_connection(connection_id)
                if spectator is None:
                    logger.debug("Dropping chat from unregistered connection %s", connection_id)
                    return None

            if team is not None:
                sender_id, sender_name = team.team_id, team.name
            else:
                sender_id = spectator.spectator_id
                sender_name = spectator.name + SPECTATOR_SUFFIX

            message = ChatMessage(
                message_id=uuid.uuid4().hex[:12],
                sender_id=sender_id,
                sender_name=sender_name,
                is_spectator=spectator is not None,
                text=text.strip()[: self.max_length],
                timestamp=datetime.now().isoformat(),
            )
            self._messages.append(message)

        return message

    def history(self) -> List[ChatMessage]:
        with self._lock:
            return list(self._messages)

    def __len__(self) -> int:
        return len(self._messages)
