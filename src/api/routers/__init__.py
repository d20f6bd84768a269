"""
Scribe - API Routers
====================

Route handlers for the API.
"""

from .health import router as health_router
from .transcripts import router as transcripts_router

__all__ = [
    "health_router",
    "transcripts_router",
]
