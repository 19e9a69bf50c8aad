from enum import Enum
from typing import Any

from bubble_rsvp.rsvps.dtos import AttendanceResponse, RsvpStatus


class StatusContext(str, Enum):
    """Which store's status machine a transition belongs to."""

    PRIMARY_LOG = "primary_log"
    GUEST_ROSTER = "guest_roster"


def resolve_status(
    previous: RsvpStatus | str | None,
    attending: AttendanceResponse,
    context: StatusContext = StatusContext.PRIMARY_LOG,
) -> RsvpStatus:
    """Next status of a record after a new attendance response.

    Confirmed is kept across re-submissions that still attend, so a
    confirmed guest can edit their details. Withdrawing after confirmation
    gives Cancelled in the Primary Log and "Cancelled (Previously
    Confirmed)" in the Guest Roster. Unknown previous text counts as not
    confirmed.
    """
    if previous is None:
        return RsvpStatus.PENDING if attending.is_attending else RsvpStatus.CANCELLED

    previous = _as_status(previous)

    if context == StatusContext.GUEST_ROSTER:
        return _resolve_roster(previous, attending)

    if previous == RsvpStatus.CONFIRMED:
        if attending == AttendanceResponse.NO:
            return RsvpStatus.CANCELLED
        return RsvpStatus.CONFIRMED

    return RsvpStatus.PENDING if attending.is_attending else RsvpStatus.CANCELLED


def _resolve_roster(previous: RsvpStatus | None, attending: AttendanceResponse) -> RsvpStatus:
    if attending.is_attending:
        return RsvpStatus.CONFIRMED if previous == RsvpStatus.CONFIRMED else RsvpStatus.PENDING

    if previous in (RsvpStatus.CONFIRMED, RsvpStatus.CANCELLED_PREVIOUSLY_CONFIRMED):
        return RsvpStatus.CANCELLED_PREVIOUSLY_CONFIRMED
    return RsvpStatus.CANCELLED


def _as_status(value: Any) -> RsvpStatus | None:
    if isinstance(value, RsvpStatus):
        return value
    return RsvpStatus.from_cell(value)
