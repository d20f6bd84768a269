"""
Scribe - Database Type Definitions
==================================

TypedDict definitions for database records.
"""

from typing import Optional, TypedDict


class ClosedTicketRecord(TypedDict, total=False):
    """Type for closed ticket rows offered to command autocomplete."""
    id: str
    number: int
    category_name: str
    created_by_id: Optional[str]
    closed_at: Optional[float]
