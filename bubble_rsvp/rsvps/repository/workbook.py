import logging
from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from sqlalchemy.orm import sessionmaker

from bubble_rsvp.rsvps.dtos import StoreName
from bubble_rsvp.rsvps.layout import ColumnMap, RsvpConfig, SheetLayout
from bubble_rsvp.rsvps.matcher import find_row
from bubble_rsvp.rsvps.repository.stores import SqlTabularStore, TabularStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SheetSnapshot:
    """Rows of one store read in a single pass, with columns resolved."""

    layout: SheetLayout
    store: TabularStore
    rows: list[list[Any]]
    columns: ColumnMap

    def find(self, name: Any) -> int | None:
        return find_row(self.rows, self.layout, name, self.columns)

    def row(self, number: int) -> list[Any]:
        if 1 <= number <= len(self.rows):
            return self.rows[number - 1]
        return []

    def value(self, number: int, header: str, default: Any = "") -> Any:
        return self.columns.value(self.row(number), header, default)

    def data_rows(self) -> Iterator[tuple[int, list[Any]]]:
        for number in range(self.layout.data_start_row, len(self.rows) + 1):
            yield number, self.rows[number - 1]

    @property
    def last_row(self) -> int:
        return len(self.rows)


class Workbook(ABC):
    """The three RSVP stores, addressed by StoreName."""

    def __init__(self, config: RsvpConfig) -> None:
        self.config = config

    @abstractmethod
    def get_store(self, store: StoreName) -> TabularStore:
        raise NotImplementedError

    def snapshot(self, store: StoreName) -> SheetSnapshot:
        layout = self.config.layout(store)
        tabular_store = self.get_store(store)
        rows = tabular_store.read_all()
        return SheetSnapshot(
            layout=layout,
            store=tabular_store,
            rows=rows,
            columns=ColumnMap.from_rows(layout, rows),
        )

    def ensure_layout(self) -> list[StoreName]:
        """Write missing header and caption rows. Returns the stores touched."""
        return [
            layout.store
            for layout in self.config.layouts
            if self.ensure_store_layout(layout.store)
        ]

    def ensure_store_layout(self, store: StoreName) -> bool:
        layout = self.config.layout(store)
        tabular_store = self.get_store(store)
        rows = tabular_store.read_all()
        changed = False

        header = rows[layout.header_row - 1] if len(rows) >= layout.header_row else []
        if len(header) < len(layout.headers):
            logger.info("Writing headers for %s", layout.sheet_name)
            tabular_store.write_row(layout.header_row, list(layout.headers))
            changed = True

        if len(rows) < layout.caption_row:
            logger.info("Writing caption row for %s", layout.sheet_name)
            tabular_store.write_row(layout.caption_row, layout.caption_cells())
            changed = True

        return changed


class SqlWorkbook(Workbook):
    def __init__(self, config: RsvpConfig, factory: sessionmaker | None = None) -> None:
        super().__init__(config)
        self._stores = {
            layout.store: SqlTabularStore(layout.sheet_name, factory=factory)
            for layout in config.layouts
        }

    def get_store(self, store: StoreName) -> TabularStore:
        return self._stores[store]
