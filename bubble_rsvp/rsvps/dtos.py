import re
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

# =============================================================================
# Errors
# =============================================================================


class ErrorCode(str, Enum):
    VALIDATION_FAILED = "validation_failed"
    NOT_FOUND = "not_found"
    STORE_IO = "store_io"
    STORE_BUSY = "store_busy"


class RsvpError(Exception):
    """Base class for errors surfaced to callers as an error result."""

    code: ErrorCode = ErrorCode.VALIDATION_FAILED


class ValidationError(RsvpError):
    """Raised when a required field is missing or a value is not accepted."""

    code = ErrorCode.VALIDATION_FAILED


class NotFoundError(RsvpError):
    """Raised when a referenced store, column or row does not exist."""

    code = ErrorCode.NOT_FOUND


class StoreIOError(RsvpError):
    """Raised when the underlying store fails to read or write."""

    code = ErrorCode.STORE_IO

    def __init__(self, store_name: str, detail: str) -> None:
        self.store_name = store_name
        super().__init__(f"{store_name}: {detail}")


class StoreBusyError(StoreIOError):
    """Raised when another write holds the workbook for too long."""

    code = ErrorCode.STORE_BUSY


# =============================================================================
# Enums
# =============================================================================


class StoreName(str, Enum):
    PRIMARY_LOG = "primary_log"
    GUEST_ROSTER = "guest_roster"
    DIETARY_ROSTER = "dietary_roster"


class AttendanceResponse(str, Enum):
    YES = "Y"
    NO = "N"
    MAYBE = "Maybe"
    NO_RESPONSE = "No Response"

    @property
    def is_attending(self) -> bool:
        return self in (AttendanceResponse.YES, AttendanceResponse.MAYBE)

    @classmethod
    def parse(cls, value: Any) -> "AttendanceResponse":
        """Parse a submitted attendance answer, accepting common spellings."""
        if isinstance(value, cls):
            return value
        text = str(value or "").strip().lower()
        if not text or text == "no response":
            return cls.NO_RESPONSE
        aliases = {
            "y": cls.YES,
            "yes": cls.YES,
            "n": cls.NO,
            "no": cls.NO,
            "maybe": cls.MAYBE,
        }
        if text not in aliases:
            raise ValidationError(f"Unrecognized attendance response: {value!r}")
        return aliases[text]


ATTENDING_VALUES = frozenset({AttendanceResponse.YES.value, AttendanceResponse.MAYBE.value})


def is_attending_value(value: Any) -> bool:
    """Whether a raw cell value reads as Y or Maybe."""
    return value in ATTENDING_VALUES


class RsvpStatus(str, Enum):
    PENDING = "Pending"
    CONFIRMED = "Confirmed"
    CANCELLED = "Cancelled"
    CANCELLED_PREVIOUSLY_CONFIRMED = "Cancelled (Previously Confirmed)"

    @classmethod
    def from_cell(cls, value: Any) -> "RsvpStatus | None":
        """Read a status cell; unknown or blank text gives None."""
        try:
            return cls(value)
        except ValueError:
            return None


def is_cancelled_value(value: Any) -> bool:
    return bool(value) and RsvpStatus.CANCELLED.value in str(value)


class StatusFilter(str, Enum):
    ALL = "all"
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    MAYBE = "maybe"


class StoreAction(str, Enum):
    INSERTED = "inserted"
    UPDATED = "updated"
    SKIPPED = "skipped"
    FAILED = "failed"


class ResultStatus(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def coerce_guest_count(value: Any) -> int:
    """Read a guest count the way a form field is read: leading integer, at least 1."""
    if isinstance(value, bool):
        return 1
    if isinstance(value, int):
        count = value
    elif isinstance(value, float):
        count = int(value)
    else:
        match = _LEADING_INT.match(str(value or ""))
        if not match:
            return 1
        count = int(match.group(1))
    return count if count >= 1 else 1


# =============================================================================
# DTOs
# =============================================================================


@dataclass(frozen=True)
class RsvpSubmissionDTO:
    """One incoming RSVP form submission."""

    name: str
    attending: AttendanceResponse = AttendanceResponse.NO_RESPONSE
    email: str = ""
    phone: str = ""
    guest_count: int = 1
    guest_names: str = ""
    dietary: str = ""
    comments: str = ""

    @classmethod
    def from_form(cls, data: Mapping[str, Any]) -> "RsvpSubmissionDTO":
        """Build a submission from raw form fields.

        Accepts the public page's field names (`guests`, `guestNames`) as
        well as the snake_case ones.
        """
        name = data.get("name")
        if name is None or not str(name).strip():
            raise ValidationError("Name is required")

        guests = data.get("guests", data.get("guest_count"))
        guest_names = data.get("guestNames", data.get("guest_names"))
        return cls(
            name=str(name),
            attending=AttendanceResponse.parse(data.get("attending")),
            email=str(data.get("email") or ""),
            phone=str(data.get("phone") or ""),
            guest_count=coerce_guest_count(guests),
            guest_names=str(guest_names or ""),
            dietary=str(data.get("dietary") or ""),
            comments=str(data.get("comments") or ""),
        )

    @property
    def has_dietary(self) -> bool:
        return bool(self.dietary.strip())


@dataclass(frozen=True)
class RowRange:
    """Inclusive range of 1-based sheet rows."""

    start: int
    end: int

    @property
    def num_rows(self) -> int:
        return self.end - self.start + 1


@dataclass(frozen=True)
class StoreOutcome:
    """What happened to one store during a best-effort operation."""

    store: StoreName
    action: StoreAction
    row: int | None = None
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.action != StoreAction.FAILED


@dataclass(frozen=True)
class SubmissionResultDTO:
    name: str
    status: RsvpStatus
    roster_status: RsvpStatus | None
    outcomes: tuple[StoreOutcome, ...] = ()


@dataclass(frozen=True)
class RegenerationDTO:
    target: StoreName
    row_count: int


@dataclass(frozen=True)
class ConfirmationDTO:
    confirmed_count: int
    confirmed_names: tuple[str, ...] = ()
    propagated_names: tuple[str, ...] = ()
    unmatched_names: tuple[str, ...] = ()
    outcome: StoreOutcome | None = None


@dataclass(frozen=True)
class RsvpStatsDTO:
    total: int = 0
    confirmed: int = 0
    pending: int = 0
    maybe: int = 0
    cancelled: int = 0
    total_guests: int = 0


@dataclass(frozen=True)
class RsvpSummaryDTO:
    """A Primary Log row as listed by the manager panel."""

    name: str
    attending: str
    status: str
    guests: int
    row: int


@dataclass(frozen=True)
class EventDetailsDTO:
    title: str
    date: str
    time: str
    location: str
    location_link: str = ""
    description: str = ""
    gift_info: str = ""
    dress_code: str = ""
    additional_info: str = ""


@dataclass(frozen=True)
class OperationResult:
    """Structured outcome of every public write/read operation."""

    status: ResultStatus
    message: str
    error: ErrorCode | None = None
    data: Any = None

    @property
    def ok(self) -> bool:
        return self.status == ResultStatus.SUCCESS

    @classmethod
    def succeed(cls, message: str, data: Any = None) -> "OperationResult":
        return cls(status=ResultStatus.SUCCESS, message=message, data=data)

    @classmethod
    def fail(cls, message: str, error: ErrorCode, data: Any = None) -> "OperationResult":
        return cls(status=ResultStatus.ERROR, message=message, error=error, data=data)

    @classmethod
    def from_error(cls, error: RsvpError, prefix: str = "") -> "OperationResult":
        return cls.fail(f"{prefix}{error}", error.code)
