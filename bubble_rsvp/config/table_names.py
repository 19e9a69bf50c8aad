from enum import Enum


class TableNames(str, Enum):
    SHEET_ROWS = "sheet_rows"
