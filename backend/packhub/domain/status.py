# backend/packhub/domain/status.py
from .constants import INQUIRY_STATUSES


def status_index(status: str) -> int:
    try:
        return INQUIRY_STATUSES.index(status)
    except ValueError:
        raise ValueError(f"Unknown inquiry status: '{status}'")


def can_transition(current: str, new: str) -> bool:
    """Forward-only: pending -> responded -> closed. Same status is allowed."""
    return status_index(current) <= status_index(new)
