"""
Scribe - Database Module
========================

SQLite ticket archive.
"""

from src.core.database.manager import (
    DatabaseManager,
    get_db,
    DATA_DIR,
    DB_PATH,
)
from src.core.database.models import ClosedTicketRecord

__all__ = [
    "DatabaseManager",
    "get_db",
    "DATA_DIR",
    "DB_PATH",
    "ClosedTicketRecord",
]
