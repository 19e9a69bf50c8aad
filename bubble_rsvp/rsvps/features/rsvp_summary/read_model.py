"""Read model for the manager panel and the public invitation page.

Listings are display helpers: a missing sheet or column gives an empty
result instead of an error. Store failures still propagate.
"""

import logging
from collections.abc import Callable, Iterator
from typing import Any

from bubble_rsvp.rsvps.dtos import (
    AttendanceResponse,
    EventDetailsDTO,
    RsvpStatsDTO,
    RsvpStatus,
    RsvpSummaryDTO,
    StatusFilter,
    StoreName,
    ValidationError,
    coerce_guest_count,
    is_cancelled_value,
)
from bubble_rsvp.rsvps.layout import Col
from bubble_rsvp.rsvps.repository.workbook import SheetSnapshot, Workbook

logger = logging.getLogger(__name__)

STATUS_FILTERS: dict[StatusFilter, Callable[[RsvpSummaryDTO], bool]] = {
    StatusFilter.ALL: lambda rsvp: True,
    StatusFilter.PENDING: lambda rsvp: rsvp.status == RsvpStatus.PENDING.value,
    StatusFilter.CONFIRMED: lambda rsvp: rsvp.status == RsvpStatus.CONFIRMED.value,
    StatusFilter.CANCELLED: lambda rsvp: is_cancelled_value(rsvp.status),
    StatusFilter.MAYBE: lambda rsvp: rsvp.attending == AttendanceResponse.MAYBE.value,
}


class RsvpSummaryReadModel:
    def __init__(self, workbook: Workbook) -> None:
        self._workbook = workbook

    def stats(self) -> RsvpStatsDTO:
        counts = {"total": 0, "confirmed": 0, "pending": 0, "maybe": 0, "cancelled": 0}
        total_guests = 0

        snapshot = self._primary_log(Col.ATTENDING, Col.STATUS, Col.GUESTS)
        for rsvp in self._summaries(snapshot):
            counts["total"] += 1
            if rsvp.status == RsvpStatus.CONFIRMED.value:
                counts["confirmed"] += 1
                total_guests += rsvp.guests
            elif rsvp.status == RsvpStatus.PENDING.value:
                counts["pending"] += 1
            elif is_cancelled_value(rsvp.status):
                counts["cancelled"] += 1

            if rsvp.attending == AttendanceResponse.MAYBE.value:
                counts["maybe"] += 1

        return RsvpStatsDTO(**counts, total_guests=total_guests)

    def by_status(self, status_filter: StatusFilter | str) -> list[RsvpSummaryDTO]:
        """Primary Log rows matching `status_filter`, in sheet order."""
        try:
            status_filter = StatusFilter(status_filter)
        except ValueError:
            raise ValidationError(f"Unknown status filter: {status_filter!r}")

        matches = STATUS_FILTERS[status_filter]
        snapshot = self._primary_log(Col.ATTENDING, Col.STATUS)
        return [rsvp for rsvp in self._summaries(snapshot) if matches(rsvp)]

    def existing_rsvps(self) -> list[RsvpSummaryDTO]:
        return self.by_status(StatusFilter.ALL)

    def confirmed_names(self) -> list[str]:
        snapshot = self._primary_log(Col.STATUS)
        names = [
            rsvp.name
            for rsvp in self._summaries(snapshot)
            if rsvp.status == RsvpStatus.CONFIRMED.value
        ]
        logger.info("Found %d confirmed RSVPs", len(names))
        return names

    def event_details(self) -> EventDetailsDTO:
        return self._workbook.config.event

    def _primary_log(self, *headers: str) -> SheetSnapshot | None:
        snapshot = self._workbook.snapshot(StoreName.PRIMARY_LOG)
        missing = [
            header for header in (Col.NAME, *headers) if snapshot.columns.get(header) is None
        ]
        if missing:
            logger.warning(
                "%s is missing columns %s, listing nothing",
                snapshot.layout.sheet_name,
                ", ".join(missing),
            )
            return None
        return snapshot

    @staticmethod
    def _summaries(snapshot: SheetSnapshot | None) -> Iterator[RsvpSummaryDTO]:
        if snapshot is None:
            return
        for number, row in snapshot.data_rows():
            name: Any = snapshot.columns.value(row, Col.NAME)
            if not name:
                continue
            yield RsvpSummaryDTO(
                name=str(name),
                attending=str(snapshot.columns.value(row, Col.ATTENDING)),
                status=str(snapshot.columns.value(row, Col.STATUS)),
                guests=coerce_guest_count(snapshot.columns.value(row, Col.GUESTS, 1)),
                row=number,
            )
