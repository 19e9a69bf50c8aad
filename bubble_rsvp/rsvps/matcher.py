from collections.abc import Sequence
from typing import Any

from bubble_rsvp.rsvps.layout import Col, ColumnMap, SheetLayout


def normalize_name(name: Any) -> str:
    """Matching key for a participant name.

    Case-insensitive only: surrounding or inner whitespace and punctuation
    are significant.
    """
    if name is None:
        return ""
    return str(name).lower()


def find_row(
    rows: Sequence[Sequence[Any]],
    layout: SheetLayout,
    name: Any,
    columns: ColumnMap | None = None,
) -> int | None:
    """Return the 1-based sheet row of the first data row whose name matches."""
    key = normalize_name(name)
    if not key:
        return None

    columns = columns or ColumnMap.from_rows(layout, rows)
    if columns.get(Col.NAME) is None:
        return None

    for index in range(layout.data_start_row - 1, len(rows)):
        cell = columns.value(rows[index], Col.NAME)
        if cell and normalize_name(cell) == key:
            return index + 1
    return None
