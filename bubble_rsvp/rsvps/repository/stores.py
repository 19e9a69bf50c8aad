"""Tabular store adapters.

A store behaves like one spreadsheet tab: rows and columns are 1-based,
`read_all` returns rows up to the last row holding any content, writing
past the end grows the store and `insert_row_after` shifts later rows down.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from datetime import datetime
from typing import Any

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from bubble_rsvp.config.database import session_manager
from bubble_rsvp.models.sheet_row import SheetRow
from bubble_rsvp.rsvps.dtos import StoreIOError

_DATETIME_KEY = "__datetime__"


def is_blank_row(row: Sequence[Any]) -> bool:
    return all(cell is None or cell == "" for cell in row)


def trim_trailing_blank_rows(rows: list[list[Any]]) -> list[list[Any]]:
    end = len(rows)
    while end and is_blank_row(rows[end - 1]):
        end -= 1
    return rows[:end]


class TabularStore(ABC):
    """Read/write access to one named tabular store."""

    def __init__(self, name: str) -> None:
        self.name = name

    @abstractmethod
    def read_all(self) -> list[list[Any]]:
        """All rows, header and caption included, up to the last non-blank row."""
        raise NotImplementedError

    @abstractmethod
    def write_row(self, row: int, values: Sequence[Any], col: int = 1) -> None:
        """Write `values` into `row` starting at column `col`."""
        raise NotImplementedError

    @abstractmethod
    def insert_row_after(self, row: int) -> None:
        """Insert a blank row below `row`, shifting later rows down."""
        raise NotImplementedError

    @abstractmethod
    def clear_range(self, row_start: int, row_end: int) -> None:
        """Blank every cell of rows `row_start`..`row_end` inclusive."""
        raise NotImplementedError

    def last_row(self) -> int:
        return len(self.read_all())

    def read_range(self, row: int, col: int, height: int) -> list[Any]:
        """Cells of column `col` for `height` rows starting at `row`."""
        rows = self.read_all()
        cells = []
        for index in range(row - 1, row - 1 + height):
            current = rows[index] if 0 <= index < len(rows) else []
            cells.append(current[col - 1] if col - 1 < len(current) else "")
        return cells


def encode_cell(value: Any) -> Any:
    if isinstance(value, datetime):
        return {_DATETIME_KEY: value.isoformat()}
    return value


def decode_cell(value: Any) -> Any:
    if isinstance(value, dict) and _DATETIME_KEY in value:
        return datetime.fromisoformat(value[_DATETIME_KEY])
    return value


class SqlTabularStore(TabularStore):
    """Store persisted as one `sheet_rows` record per non-blank row."""

    def __init__(self, name: str, factory: sessionmaker | None = None) -> None:
        super().__init__(name)
        self._factory = factory

    def read_all(self) -> list[list[Any]]:
        try:
            with session_manager(auto_commit=False, factory=self._factory) as session:
                records = session.execute(
                    select(SheetRow)
                    .where(SheetRow.sheet_name == self.name)
                    .order_by(SheetRow.position)
                ).scalars().all()
        except SQLAlchemyError as e:
            raise StoreIOError(self.name, f"read failed: {e}") from e

        if not records:
            return []
        rows: list[list[Any]] = [[] for _ in range(records[-1].position)]
        for record in records:
            rows[record.position - 1] = [decode_cell(cell) for cell in record.cells]
        return trim_trailing_blank_rows(rows)

    def write_row(self, row: int, values: Sequence[Any], col: int = 1) -> None:
        try:
            with session_manager(factory=self._factory) as session:
                record = self._get_record(session, row)
                if record is None:
                    record = SheetRow(sheet_name=self.name, position=row, cells=[])
                    session.add(record)
                cells = list(record.cells or [])
                end = col - 1 + len(values)
                if len(cells) < end:
                    cells.extend([""] * (end - len(cells)))
                cells[col - 1 : end] = [encode_cell(value) for value in values]
                # reassign so the JSON column is flagged dirty
                record.cells = cells
        except SQLAlchemyError as e:
            raise StoreIOError(self.name, f"write to row {row} failed: {e}") from e

    def insert_row_after(self, row: int) -> None:
        try:
            with session_manager(factory=self._factory) as session:
                session.execute(
                    update(SheetRow)
                    .where(SheetRow.sheet_name == self.name, SheetRow.position > row)
                    .values(position=SheetRow.position + 1)
                )
        except SQLAlchemyError as e:
            raise StoreIOError(self.name, f"insert after row {row} failed: {e}") from e

    def clear_range(self, row_start: int, row_end: int) -> None:
        if row_end < row_start:
            return
        try:
            with session_manager(factory=self._factory) as session:
                session.execute(
                    delete(SheetRow).where(
                        SheetRow.sheet_name == self.name,
                        SheetRow.position >= row_start,
                        SheetRow.position <= row_end,
                    )
                )
        except SQLAlchemyError as e:
            raise StoreIOError(self.name, f"clear of rows {row_start}-{row_end} failed: {e}") from e

    def _get_record(self, session: Session, row: int) -> SheetRow | None:
        return session.execute(
            select(SheetRow).where(SheetRow.sheet_name == self.name, SheetRow.position == row)
        ).scalar_one_or_none()
