"""Write model for manager confirmations of selected RSVPs."""

import logging
from collections.abc import Sequence

from bubble_rsvp.rsvps.dtos import (
    ConfirmationDTO,
    NotFoundError,
    OperationResult,
    RowRange,
    RsvpError,
    RsvpStatus,
    StoreAction,
    StoreName,
    StoreOutcome,
    ValidationError,
    is_attending_value,
)
from bubble_rsvp.rsvps.layout import Col
from bubble_rsvp.rsvps.locking import WriteLock, get_write_lock
from bubble_rsvp.rsvps.matcher import normalize_name
from bubble_rsvp.rsvps.repository.workbook import SheetSnapshot, Workbook

logger = logging.getLogger(__name__)

PAIRED_STORES = {
    StoreName.PRIMARY_LOG: StoreName.GUEST_ROSTER,
    StoreName.GUEST_ROSTER: StoreName.PRIMARY_LOG,
}


def _set_confirmed(snapshot: SheetSnapshot, row: int) -> None:
    snapshot.store.write_row(
        row, [RsvpStatus.CONFIRMED.value], col=snapshot.columns.get(Col.STATUS)
    )


class ConfirmRsvpsWriteModel:
    """Batch confirmation engine.

    Confirms attending rows of the Primary Log or the Guest Roster and
    carries the change to the other of the two by name.
    """

    def __init__(self, workbook: Workbook, write_lock: WriteLock | None = None) -> None:
        self._workbook = workbook
        self._write_lock = write_lock or get_write_lock()

    def confirm_selection(self, store: StoreName, ranges: Sequence[RowRange]) -> OperationResult:
        try:
            with self._write_lock.hold("confirmation"):
                confirmation = self._confirm(store, ranges)
        except RsvpError as e:
            logger.error("Error confirming RSVPs in %s: %s", store.value, e)
            return OperationResult.from_error(e, prefix="Error confirming RSVPs: ")

        return OperationResult.succeed(
            f"Successfully confirmed {confirmation.confirmed_count} RSVPs.", data=confirmation
        )

    def confirm_by_row(self, row: int) -> OperationResult:
        """Confirm the single Primary Log row `row`."""
        try:
            with self._write_lock.hold("confirmation"):
                snapshot = self._workbook.snapshot(StoreName.PRIMARY_LOG)
                snapshot.columns.require(Col.NAME, Col.ATTENDING, Col.STATUS)

                name = snapshot.value(row, Col.NAME)
                if row < snapshot.layout.data_start_row or not name:
                    raise NotFoundError(f"No RSVP found at row {row}")
                if not is_attending_value(snapshot.value(row, Col.ATTENDING)):
                    raise ValidationError(f"{name} is not attending and cannot be confirmed")

                confirmation = self._confirm(StoreName.PRIMARY_LOG, [RowRange(row, row)])
        except RsvpError as e:
            logger.error("Error confirming RSVP at row %s: %s", row, e)
            return OperationResult.from_error(e, prefix="Error confirming RSVP: ")

        return OperationResult.succeed(f"{name} has been confirmed.", data=confirmation)

    def _confirm(self, store: StoreName, ranges: Sequence[RowRange]) -> ConfirmationDTO:
        other = PAIRED_STORES.get(store)
        if other is None:
            raise ValidationError(f"RSVPs cannot be confirmed in {store.value}")
        if not ranges:
            raise ValidationError("Please select at least one row to confirm")
        for selected in ranges:
            if selected.end < selected.start:
                raise ValidationError(f"Invalid row range {selected.start}-{selected.end}")

        snapshot = self._workbook.snapshot(store)
        snapshot.columns.require(Col.NAME, Col.ATTENDING, Col.STATUS)

        confirmed_names = []
        for selected in ranges:
            start = max(selected.start, snapshot.layout.data_start_row)
            end = min(selected.end, snapshot.last_row)
            for row in range(start, end + 1):
                name = snapshot.value(row, Col.NAME)
                if not name or not is_attending_value(snapshot.value(row, Col.ATTENDING)):
                    continue
                _set_confirmed(snapshot, row)
                confirmed_names.append(str(name))

        logger.info(
            "Confirmed %d RSVPs in %s", len(confirmed_names), snapshot.layout.sheet_name
        )

        propagated: list[str] = []
        unmatched: list[str] = []
        outcome = StoreOutcome(other, StoreAction.SKIPPED)
        if confirmed_names:
            try:
                self._propagate(other, confirmed_names, propagated, unmatched)
                outcome = StoreOutcome(
                    other, StoreAction.UPDATED if propagated else StoreAction.SKIPPED
                )
            except RsvpError as e:
                logger.error(
                    "Error propagating confirmations to %s, continuing: %s", other.value, e
                )
                outcome = StoreOutcome(other, StoreAction.FAILED, error=str(e))

        return ConfirmationDTO(
            confirmed_count=len(confirmed_names),
            confirmed_names=tuple(confirmed_names),
            propagated_names=tuple(propagated),
            unmatched_names=tuple(unmatched),
            outcome=outcome,
        )

    def _propagate(
        self,
        store: StoreName,
        names: Sequence[str],
        propagated: list[str],
        unmatched: list[str],
    ) -> None:
        snapshot = self._workbook.snapshot(store)
        snapshot.columns.require(Col.NAME, Col.STATUS)

        seen = set()
        for name in names:
            key = normalize_name(name)
            if key in seen:
                continue
            seen.add(key)

            row = snapshot.find(name)
            if row is None:
                logger.info("%r not found in %s, not propagated", name, snapshot.layout.sheet_name)
                unmatched.append(name)
                continue
            _set_confirmed(snapshot, row)
            propagated.append(name)
