"""
Scribe - Utils Package
======================

Helpers shared by the commands and the API.

Available Utilities:
    ErrorHandler: Error categorization, user messages and logging
"""

from .error_handler import ErrorHandler

__all__ = [
    "ErrorHandler",
]
