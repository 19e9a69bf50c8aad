from .settings import settings
from .database import engine, session_factory, session_manager
from .table_names import TableNames

__all__ = [
    "settings",
    "engine",
    "session_factory",
    "session_manager",
    "TableNames",
]
