from typing import Any

from sqlalchemy import JSON, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from bubble_rsvp.config.table_names import TableNames
from bubble_rsvp.models.base import TimeStamp, UUIDRecord


class SheetRow(UUIDRecord, TimeStamp):
    """One row of a named tabular store.

    `position` is the 1-based sheet row; cells are kept as a JSON list in
    column order.
    """

    __tablename__ = TableNames.SHEET_ROWS.value
    __table_args__ = (Index("ix_sheet_rows_sheet_position", "sheet_name", "position"),)

    sheet_name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    cells: Mapped[list[Any]] = mapped_column(JSON, nullable=False, default=list)

    def __repr__(self) -> str:
        return f"<SheetRow {self.sheet_name}!{self.position}>"
