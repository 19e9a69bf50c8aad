"""Sheet layouts and the immutable configuration handed to every engine.

Every store starts with a header row and a caption row; data rows follow.
Columns are always found by header text, never by fixed offset, so a
sheet whose columns were reordered by hand still reads correctly.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from bubble_rsvp.config.settings import Settings
from bubble_rsvp.rsvps.dtos import EventDetailsDTO, NotFoundError, StoreName


class Col:
    """Header texts shared by the three stores."""

    TIMESTAMP = "Timestamp"
    NAME = "Name"
    EMAIL = "Email"
    PHONE = "Phone"
    ATTENDING = "Attending"
    GUESTS = "Number of Guests"
    GUEST_NAMES = "Guest Names"
    DIETARY = "Dietary Restrictions"
    COMMENTS = "Comments"
    RSVP_DATE = "RSVP Date"
    FOLLOW_UP_SENT = "Follow-up Sent"
    STATUS = "Status"
    LAST_UPDATED = "Last Updated"


PRIMARY_LOG_HEADERS = (
    Col.TIMESTAMP,
    Col.NAME,
    Col.EMAIL,
    Col.PHONE,
    Col.ATTENDING,
    Col.GUESTS,
    Col.GUEST_NAMES,
    Col.DIETARY,
    Col.COMMENTS,
    Col.RSVP_DATE,
    Col.FOLLOW_UP_SENT,
    Col.STATUS,
)

GUEST_ROSTER_HEADERS = (
    Col.NAME,
    Col.EMAIL,
    Col.PHONE,
    Col.ATTENDING,
    Col.GUESTS,
    Col.GUEST_NAMES,
    Col.STATUS,
    Col.RSVP_DATE,
)

DIETARY_ROSTER_HEADERS = (
    Col.NAME,
    Col.DIETARY,
    Col.GUESTS,
    Col.LAST_UPDATED,
)


@dataclass(frozen=True)
class SheetLayout:
    """Name, caption and column schema of one tabular store."""

    store: StoreName
    sheet_name: str
    caption: str
    headers: tuple[str, ...]
    header_row: int = 1
    caption_row: int = 2

    @property
    def data_start_row(self) -> int:
        return self.caption_row + 1

    def caption_cells(self) -> list[str]:
        return [self.caption] + [""] * (len(self.headers) - 1)


@dataclass(frozen=True)
class ColumnMap:
    """1-based column positions resolved from a store's header row."""

    sheet_name: str
    positions: Mapping[str, int]

    @classmethod
    def from_rows(cls, layout: SheetLayout, rows: Sequence[Sequence[Any]]) -> "ColumnMap":
        header: Sequence[Any] = ()
        if len(rows) >= layout.header_row:
            header = rows[layout.header_row - 1]
        positions: dict[str, int] = {}
        for index, cell in enumerate(header, start=1):
            # first occurrence wins, like a header lookup by indexOf
            positions.setdefault(str(cell), index)
        return cls(sheet_name=layout.sheet_name, positions=positions)

    def get(self, header: str) -> int | None:
        return self.positions.get(header)

    def require(self, *headers: str) -> None:
        missing = [header for header in headers if header not in self.positions]
        if missing:
            raise NotFoundError(
                f"Required columns not found in {self.sheet_name}: {', '.join(missing)}"
            )

    def value(self, row: Sequence[Any], header: str, default: Any = "") -> Any:
        position = self.positions.get(header)
        if position is None or position > len(row):
            return default
        cell = row[position - 1]
        return default if cell is None else cell

    def merge(self, row: Sequence[Any], values: Mapping[str, Any]) -> list[Any]:
        """Return a copy of `row` with the given columns replaced.

        Columns absent from this sheet's header are ignored, cells of
        columns not named in `values` are kept.
        """
        merged = list(row)
        for header, value in values.items():
            position = self.positions.get(header)
            if position is None:
                continue
            if position > len(merged):
                merged.extend([""] * (position - len(merged)))
            merged[position - 1] = value
        return merged


@dataclass(frozen=True)
class RsvpConfig:
    """Store layouts and event details; built once from settings."""

    primary_log: SheetLayout
    guest_roster: SheetLayout
    dietary_roster: SheetLayout
    event: EventDetailsDTO

    def layout(self, store: StoreName) -> SheetLayout:
        return {
            StoreName.PRIMARY_LOG: self.primary_log,
            StoreName.GUEST_ROSTER: self.guest_roster,
            StoreName.DIETARY_ROSTER: self.dietary_roster,
        }[store]

    @property
    def layouts(self) -> tuple[SheetLayout, ...]:
        return (self.primary_log, self.guest_roster, self.dietary_roster)

    @classmethod
    def from_settings(cls, settings: Settings) -> "RsvpConfig":
        return cls(
            primary_log=SheetLayout(
                store=StoreName.PRIMARY_LOG,
                sheet_name=settings.rsvp_sheet_name,
                caption=settings.rsvp_title_text,
                headers=PRIMARY_LOG_HEADERS,
            ),
            guest_roster=SheetLayout(
                store=StoreName.GUEST_ROSTER,
                sheet_name=settings.guest_list_sheet_name,
                caption=settings.guest_list_title_text,
                headers=GUEST_ROSTER_HEADERS,
            ),
            dietary_roster=SheetLayout(
                store=StoreName.DIETARY_ROSTER,
                sheet_name=settings.dietary_sheet_name,
                caption=settings.dietary_title_text,
                headers=DIETARY_ROSTER_HEADERS,
            ),
            event=EventDetailsDTO(
                title=settings.event_title,
                date=settings.event_date,
                time=settings.event_time,
                location=settings.event_location,
                location_link=settings.event_location_link,
                description=settings.event_description,
                gift_info=settings.event_gift_info,
                dress_code=settings.event_dress_code,
                additional_info=settings.event_additional_info,
            ),
        )
