"""Write model for RSVP submissions.

Upserts one submission into the Primary Log, then patches the Guest Roster
and the Dietary Roster. The Primary Log write is the commit point: later
steps are best effort and report their own outcome.
"""

import logging
from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from typing import Any

from bubble_rsvp.rsvps.dtos import (
    OperationResult,
    RsvpError,
    RsvpStatus,
    RsvpSubmissionDTO,
    StoreAction,
    StoreName,
    StoreOutcome,
    SubmissionResultDTO,
    ValidationError,
)
from bubble_rsvp.rsvps.layout import Col
from bubble_rsvp.rsvps.locking import WriteLock, get_write_lock
from bubble_rsvp.rsvps.repository.workbook import Workbook
from bubble_rsvp.rsvps.status import StatusContext, resolve_status

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Thank you! Your RSVP has been recorded."
ERROR_PREFIX = "There was a problem saving your RSVP: "


class SubmitRsvpWriteModel:
    """Upsert engine for RSVP submissions."""

    def __init__(
        self,
        workbook: Workbook,
        write_lock: WriteLock | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._workbook = workbook
        self._write_lock = write_lock or get_write_lock()
        self._clock = clock or (lambda: datetime.now(UTC))

    def submit_form(self, data: Mapping[str, Any]) -> OperationResult:
        """Validate raw form fields and submit them."""
        try:
            submission = RsvpSubmissionDTO.from_form(data)
        except ValidationError as e:
            logger.warning("Rejected RSVP submission: %s", e)
            return OperationResult.from_error(e, prefix=ERROR_PREFIX)
        return self.submit_rsvp(submission)

    def submit_rsvp(self, submission: RsvpSubmissionDTO) -> OperationResult:
        """Record a submission across the three stores.

        Returns an error result when the name is blank or the Primary Log
        cannot be written; roster failures only show up in the outcomes.
        """
        logger.info(
            "Received RSVP for %r (attending=%s, guests=%s)",
            submission.name,
            submission.attending.value,
            submission.guest_count,
        )
        try:
            if not submission.name.strip():
                raise ValidationError("Name is required")
            with self._write_lock.hold("RSVP submission"):
                result = self._apply(submission)
        except RsvpError as e:
            logger.error("Error saving RSVP for %r: %s", submission.name, e)
            return OperationResult.from_error(e, prefix=ERROR_PREFIX)

        return OperationResult.succeed(SUCCESS_MESSAGE, data=result)

    def _apply(self, submission: RsvpSubmissionDTO) -> SubmissionResultDTO:
        timestamp = self._clock()
        self._workbook.ensure_store_layout(StoreName.PRIMARY_LOG)

        status, log_outcome = self._update_primary_log(submission, timestamp)
        outcomes = [log_outcome]

        roster_status = None
        try:
            roster_status, roster_outcome = self._update_guest_roster(submission, timestamp)
        except RsvpError as e:
            roster_outcome = self._failed(StoreName.GUEST_ROSTER, e)
        outcomes.append(roster_outcome)

        try:
            dietary_outcome = self._update_dietary_roster(submission, status, timestamp)
        except RsvpError as e:
            dietary_outcome = self._failed(StoreName.DIETARY_ROSTER, e)
        outcomes.append(dietary_outcome)

        return SubmissionResultDTO(
            name=submission.name,
            status=status,
            roster_status=roster_status,
            outcomes=tuple(outcomes),
        )

    def _update_primary_log(
        self, submission: RsvpSubmissionDTO, timestamp: datetime
    ) -> tuple[RsvpStatus, StoreOutcome]:
        snapshot = self._workbook.snapshot(StoreName.PRIMARY_LOG)
        snapshot.columns.require(Col.NAME, Col.ATTENDING, Col.STATUS)

        row = snapshot.find(submission.name)
        previous = snapshot.value(row, Col.STATUS) if row else None
        status = resolve_status(previous, submission.attending, StatusContext.PRIMARY_LOG)

        values: dict[str, Any] = {
            Col.NAME: submission.name,
            Col.EMAIL: submission.email,
            Col.PHONE: submission.phone,
            Col.ATTENDING: submission.attending.value,
            Col.GUESTS: submission.guest_count,
            Col.GUEST_NAMES: submission.guest_names,
            Col.DIETARY: submission.dietary,
            Col.COMMENTS: submission.comments,
            Col.RSVP_DATE: timestamp,
            Col.STATUS: status.value,
        }

        if row:
            # first-submission timestamp and follow-up flag survive edits
            if not snapshot.value(row, Col.TIMESTAMP):
                values[Col.TIMESTAMP] = timestamp
            snapshot.store.write_row(row, snapshot.columns.merge(snapshot.row(row), values))
            action = StoreAction.UPDATED
        else:
            values[Col.TIMESTAMP] = timestamp
            values[Col.FOLLOW_UP_SENT] = False
            row = snapshot.layout.data_start_row
            snapshot.store.insert_row_after(snapshot.layout.caption_row)
            snapshot.store.write_row(row, snapshot.columns.merge([], values))
            action = StoreAction.INSERTED

        logger.info(
            "%s %r in %s as %s",
            action.value.capitalize(),
            submission.name,
            snapshot.layout.sheet_name,
            status.value,
        )
        return status, StoreOutcome(StoreName.PRIMARY_LOG, action, row=row)

    def _update_guest_roster(
        self, submission: RsvpSubmissionDTO, timestamp: datetime
    ) -> tuple[RsvpStatus | None, StoreOutcome]:
        self._workbook.ensure_store_layout(StoreName.GUEST_ROSTER)
        snapshot = self._workbook.snapshot(StoreName.GUEST_ROSTER)
        snapshot.columns.require(Col.NAME, Col.STATUS)

        row = snapshot.find(submission.name)
        previous = snapshot.value(row, Col.STATUS) if row else None

        if not submission.attending.is_attending:
            if not row:
                # first-time non-attendees never enter the roster
                return None, StoreOutcome(StoreName.GUEST_ROSTER, StoreAction.SKIPPED)
            status = resolve_status(previous, submission.attending, StatusContext.GUEST_ROSTER)
            values = {
                Col.ATTENDING: submission.attending.value,
                Col.STATUS: status.value,
                Col.RSVP_DATE: timestamp,
            }
            snapshot.store.write_row(row, snapshot.columns.merge(snapshot.row(row), values))
            return status, StoreOutcome(StoreName.GUEST_ROSTER, StoreAction.UPDATED, row=row)

        status = resolve_status(previous, submission.attending, StatusContext.GUEST_ROSTER)
        values = {
            Col.NAME: submission.name,
            Col.EMAIL: submission.email,
            Col.PHONE: submission.phone,
            Col.ATTENDING: submission.attending.value,
            Col.GUESTS: submission.guest_count,
            Col.GUEST_NAMES: submission.guest_names,
            Col.STATUS: status.value,
            Col.RSVP_DATE: timestamp,
        }

        if row:
            snapshot.store.write_row(row, snapshot.columns.merge(snapshot.row(row), values))
            return status, StoreOutcome(StoreName.GUEST_ROSTER, StoreAction.UPDATED, row=row)

        row = snapshot.layout.data_start_row
        snapshot.store.insert_row_after(snapshot.layout.caption_row)
        snapshot.store.write_row(row, snapshot.columns.merge([], values))
        return status, StoreOutcome(StoreName.GUEST_ROSTER, StoreAction.INSERTED, row=row)

    def _update_dietary_roster(
        self, submission: RsvpSubmissionDTO, status: RsvpStatus, timestamp: datetime
    ) -> StoreOutcome:
        qualifies = submission.attending.is_attending or status == RsvpStatus.CONFIRMED
        if not submission.has_dietary or not qualifies:
            # a withdrawn guest's old entry stays until the next regeneration
            return StoreOutcome(StoreName.DIETARY_ROSTER, StoreAction.SKIPPED)

        self._workbook.ensure_store_layout(StoreName.DIETARY_ROSTER)
        snapshot = self._workbook.snapshot(StoreName.DIETARY_ROSTER)
        snapshot.columns.require(Col.NAME, Col.DIETARY)

        values = {
            Col.NAME: submission.name,
            Col.DIETARY: submission.dietary,
            Col.GUESTS: submission.guest_count,
            Col.LAST_UPDATED: timestamp,
        }

        row = snapshot.find(submission.name)
        if row:
            snapshot.store.write_row(row, snapshot.columns.merge(snapshot.row(row), values))
            return StoreOutcome(StoreName.DIETARY_ROSTER, StoreAction.UPDATED, row=row)

        row = max(snapshot.last_row + 1, snapshot.layout.data_start_row)
        snapshot.store.write_row(row, snapshot.columns.merge([], values))
        return StoreOutcome(StoreName.DIETARY_ROSTER, StoreAction.INSERTED, row=row)

    @staticmethod
    def _failed(store: StoreName, error: RsvpError) -> StoreOutcome:
        logger.error("Error updating %s, continuing: %s", store.value, error)
        return StoreOutcome(store, StoreAction.FAILED, error=str(error))
