"""Validation error taxonomy.

Every rule violation is a ``ValidationError`` subclass. They are reported to
the acting connection only and never change state.
"""

from src.draft_room.config import MAX_TEAMS, MIN_TEAMS


class ValidationError(Exception):
    """Raised when an action violates draft rules."""

    reason = "invalid"
    default_message = "Action rejected"

    def __init__(self, message: str = None):
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class EmptyName(ValidationError):
    reason = "empty_name"
    default_message = "Name cannot be empty"


class NameTaken(ValidationError):
    reason = "name_taken"
    default_message = (
        'This name is already registered as a team. Use "Join Draft" instead.'
    )


class AlreadyStarted(ValidationError):
    reason = "already_started"
    default_message = (
        "Draft has already started. You can only rejoin with an existing team name."
    )


class Full(ValidationError):
    reason = "full"
    default_message = f"Draft is full ({MAX_TEAMS} teams maximum)"


class NotInSetup(ValidationError):
    reason = "not_in_setup"
    default_message = "Draft has already started"


class TooFewParticipants(ValidationError):
    reason = "too_few_participants"
    default_message = f"Need at least {MIN_TEAMS} teams to start the draft"


class NotDrafting(ValidationError):
    reason = "not_drafting"
    default_message = "Draft is not in progress"


class Paused(ValidationError):
    reason = "paused"
    default_message = "Draft is paused"


class NotPaused(ValidationError):
    reason = "not_paused"
    default_message = "Draft must be paused to undo picks"


class NotRegistered(ValidationError):
    reason = "not_registered"
    default_message = "You are not registered as a team"


class NotYourTurn(ValidationError):
    reason = "not_your_turn"
    default_message = "It is not your turn to pick"


class UnknownItem(ValidationError):
    reason = "unknown_item"
    default_message = "Player not found"


class AlreadyDrafted(ValidationError):
    reason = "already_drafted"
    default_message = "Player has already been drafted"


class SlotFull(ValidationError):
    reason = "slot_full"
    default_message = "That roster slot is already full"


class Unauthorized(ValidationError):
    reason = "unauthorized"
    default_message = "Unauthorized"


class PickNotFound(ValidationError):
    reason = "pick_not_found"
    default_message = "Pick not found"


class NotLatestPick(ValidationError):
    reason = "not_latest_pick"
    default_message = "Only the most recent pick can be undone"


class NotComplete(ValidationError):
    reason = "not_complete"
    default_message = "Draft is not complete"
