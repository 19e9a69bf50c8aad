from .base import BaseModel, TimeStamp, UUIDRecord
from .sheet_row import SheetRow

__all__ = [
    "BaseModel",
    "TimeStamp",
    "UUIDRecord",
    "SheetRow",
]
