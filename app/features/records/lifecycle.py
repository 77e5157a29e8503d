# Disease Records Feature - Lifecycle

from app.features.records.models import RecordStatus
from app.shared.exceptions import ConflictException


# Single source of truth for status transitions
RECORD_TRANSITIONS = {
    RecordStatus.DRAFT: {RecordStatus.REGISTERED},
    RecordStatus.REGISTERED: set(),  # Terminal
}

# States in which field edits are accepted
EDITABLE_STATES = {RecordStatus.DRAFT}


def validate_transition(current: RecordStatus, target: RecordStatus) -> None:
    """Raise ConflictException unless ``current -> target`` is allowed."""
    current, target = RecordStatus(current), RecordStatus(target)
    if target not in RECORD_TRANSITIONS[current]:
        raise ConflictException(f"Invalid status transition: {current.value} -> {target.value}")


def ensure_editable(current: RecordStatus) -> None:
    if RecordStatus(current) not in EDITABLE_STATES:
        raise ConflictException("Registered records are read-only")
