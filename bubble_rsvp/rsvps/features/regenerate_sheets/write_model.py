"""Write model that rebuilds the derived rosters from the Primary Log.

Regeneration is the only point where the Guest Roster and the Dietary
Roster converge with the log: every data row of the target is cleared and
re-derived in log order, each stamped with the regeneration time.
"""

import logging
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

from bubble_rsvp.rsvps.dtos import (
    OperationResult,
    RegenerationDTO,
    RsvpError,
    RsvpStatus,
    StoreName,
    ValidationError,
    coerce_guest_count,
    is_attending_value,
)
from bubble_rsvp.rsvps.layout import Col
from bubble_rsvp.rsvps.locking import WriteLock, get_write_lock
from bubble_rsvp.rsvps.repository.workbook import SheetSnapshot, Workbook

logger = logging.getLogger(__name__)

ROSTER_STATUSES = frozenset(
    {
        RsvpStatus.CONFIRMED.value,
        RsvpStatus.CANCELLED.value,
        RsvpStatus.CANCELLED_PREVIOUSLY_CONFIRMED.value,
    }
)

SHEET_LABELS = {
    StoreName.GUEST_ROSTER: "Guest List",
    StoreName.DIETARY_ROSTER: "Dietary Information",
}


def guest_roster_entries(log: SheetSnapshot, timestamp: datetime) -> list[dict[str, Any]]:
    """Guest Roster rows derived from the Primary Log, in log order."""
    log.columns.require(Col.NAME, Col.ATTENDING, Col.STATUS)

    entries = []
    for _, row in log.data_rows():
        name = log.columns.value(row, Col.NAME)
        if not name:
            continue
        attending = log.columns.value(row, Col.ATTENDING)
        status = log.columns.value(row, Col.STATUS) or RsvpStatus.PENDING.value
        if not (is_attending_value(attending) or status in ROSTER_STATUSES):
            continue
        entries.append(
            {
                Col.NAME: name,
                Col.EMAIL: log.columns.value(row, Col.EMAIL),
                Col.PHONE: log.columns.value(row, Col.PHONE),
                Col.ATTENDING: attending,
                Col.GUESTS: coerce_guest_count(log.columns.value(row, Col.GUESTS, 1)),
                Col.GUEST_NAMES: log.columns.value(row, Col.GUEST_NAMES),
                Col.STATUS: status,
                Col.RSVP_DATE: timestamp,
            }
        )
    return entries


def dietary_roster_entries(log: SheetSnapshot, timestamp: datetime) -> list[dict[str, Any]]:
    """Dietary Roster rows derived from the Primary Log, in log order."""
    log.columns.require(Col.NAME, Col.DIETARY)

    entries = []
    for _, row in log.data_rows():
        name = log.columns.value(row, Col.NAME)
        dietary = log.columns.value(row, Col.DIETARY)
        if not name or not str(dietary).strip():
            continue
        attending = log.columns.value(row, Col.ATTENDING)
        status = log.columns.value(row, Col.STATUS)
        if not (is_attending_value(attending) or status == RsvpStatus.CONFIRMED.value):
            continue
        entries.append(
            {
                Col.NAME: name,
                Col.DIETARY: dietary,
                Col.GUESTS: coerce_guest_count(log.columns.value(row, Col.GUESTS, 1)),
                Col.LAST_UPDATED: timestamp,
            }
        )
    return entries


ENTRY_BUILDERS = {
    StoreName.GUEST_ROSTER: guest_roster_entries,
    StoreName.DIETARY_ROSTER: dietary_roster_entries,
}


class RegenerateSheetsWriteModel:
    """Regeneration engine for the derived rosters."""

    def __init__(
        self,
        workbook: Workbook,
        write_lock: WriteLock | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._workbook = workbook
        self._write_lock = write_lock or get_write_lock()
        self._clock = clock or (lambda: datetime.now(UTC))

    def regenerate(self, target: StoreName) -> OperationResult:
        try:
            with self._write_lock.hold("regeneration"):
                regenerated = self._regenerate(target)
        except RsvpError as e:
            logger.error("Error regenerating %s: %s", target.value, e)
            return OperationResult.from_error(e)

        label = SHEET_LABELS[target]
        return OperationResult.succeed(
            f"{label} updated with {regenerated.row_count} entries", data=regenerated
        )

    def regenerate_all(self) -> OperationResult:
        """Rebuild the Guest Roster, then the Dietary Roster.

        A failure of the first does not stop the second.
        """
        results = [self.regenerate(target) for target in ENTRY_BUILDERS]
        failures = [result for result in results if not result.ok]
        data = tuple(result.data for result in results if result.ok)
        if failures:
            return OperationResult.fail(
                "; ".join(result.message for result in failures),
                failures[0].error,
                data=data,
            )
        return OperationResult.succeed("All sheets have been regenerated successfully!", data=data)

    def ensure_sheets(self) -> OperationResult:
        """Write any missing header and caption rows."""
        try:
            with self._write_lock.hold("sheet setup"):
                touched = self._workbook.ensure_layout()
        except RsvpError as e:
            logger.error("Error ensuring sheets exist: %s", e)
            return OperationResult.from_error(e, prefix="Error ensuring sheets exist: ")
        return OperationResult.succeed("All sheets are in place", data=tuple(touched))

    def _regenerate(self, target: StoreName) -> RegenerationDTO:
        builder = ENTRY_BUILDERS.get(target)
        if builder is None:
            raise ValidationError(
                f"{target.value} is not a derived sheet and cannot be regenerated"
            )

        log = self._workbook.snapshot(StoreName.PRIMARY_LOG)
        # resolve log columns before touching the target
        entries = builder(log, self._clock())

        self._workbook.ensure_store_layout(target)
        snapshot = self._workbook.snapshot(target)
        start = snapshot.layout.data_start_row
        if snapshot.last_row >= start:
            snapshot.store.clear_range(start, snapshot.last_row)

        for offset, values in enumerate(entries):
            snapshot.store.write_row(start + offset, snapshot.columns.merge([], values))

        logger.info("Regenerated %s with %d entries", snapshot.layout.sheet_name, len(entries))
        return RegenerationDTO(target=target, row_count=len(entries))
