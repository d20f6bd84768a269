"""
Scribe - API Error System
=========================

Centralized error codes and exception handling for consistent API responses.
"""

from enum import Enum
from typing import Any, Dict, Optional

from fastapi import HTTPException
from fastapi.responses import JSONResponse
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
    HTTP_500_INTERNAL_SERVER_ERROR,
    HTTP_503_SERVICE_UNAVAILABLE,
)


# =============================================================================
# Error Codes
# =============================================================================

class ErrorCode(str, Enum):
    """
    Centralized error codes for the API.

    Format: CATEGORY_SPECIFIC_ERROR
    """

    # Ticket errors (404, 500)
    TICKET_NOT_FOUND = "TICKET_NOT_FOUND"
    TICKET_TRANSCRIPT_NOT_FOUND = "TICKET_TRANSCRIPT_NOT_FOUND"
    TICKET_TRANSCRIPT_FAILED = "TICKET_TRANSCRIPT_FAILED"

    # Service errors (503)
    SERVICE_NOT_INITIALIZED = "SERVICE_NOT_INITIALIZED"

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Server errors (500)
    SERVER_ERROR = "SERVER_ERROR"


# =============================================================================
# Error Messages
# =============================================================================

ERROR_MESSAGES: Dict[ErrorCode, str] = {
    ErrorCode.TICKET_NOT_FOUND: "Support ticket not found",
    ErrorCode.TICKET_TRANSCRIPT_NOT_FOUND: "Ticket transcript not found",
    ErrorCode.TICKET_TRANSCRIPT_FAILED: "Ticket transcript could not be generated",
    ErrorCode.SERVICE_NOT_INITIALIZED: "Transcript service is not initialized",
    ErrorCode.VALIDATION_ERROR: "Request validation failed",
    ErrorCode.SERVER_ERROR: "An internal server error occurred",
}


# =============================================================================
# Default Status Codes
# =============================================================================

ERROR_STATUS_CODES: Dict[ErrorCode, int] = {
    ErrorCode.TICKET_NOT_FOUND: HTTP_404_NOT_FOUND,
    ErrorCode.TICKET_TRANSCRIPT_NOT_FOUND: HTTP_404_NOT_FOUND,
    ErrorCode.TICKET_TRANSCRIPT_FAILED: HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.SERVICE_NOT_INITIALIZED: HTTP_503_SERVICE_UNAVAILABLE,
    ErrorCode.VALIDATION_ERROR: HTTP_400_BAD_REQUEST,
    ErrorCode.SERVER_ERROR: HTTP_500_INTERNAL_SERVER_ERROR,
}


# =============================================================================
# API Error Exception
# =============================================================================

class APIError(HTTPException):
    """
    Custom API exception with error codes.

    Usage:
        raise APIError(ErrorCode.TICKET_NOT_FOUND)
        raise APIError(ErrorCode.VALIDATION_ERROR, details={"field": "ext"})
    """

    def __init__(
        self,
        code: ErrorCode,
        status_code: Optional[int] = None,
        message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.error_code = code
        self.error_message = message or ERROR_MESSAGES.get(code, "An error occurred")
        self.error_details = details

        if status_code is None:
            status_code = ERROR_STATUS_CODES.get(code, HTTP_400_BAD_REQUEST)

        super().__init__(
            status_code=status_code,
            detail={
                "success": False,
                "error_code": code.value,
                "message": self.error_message,
                "details": details,
            },
            headers=headers,
        )


# =============================================================================
# Helper Functions
# =============================================================================

def error_response(
    code: ErrorCode,
    status_code: Optional[int] = None,
    message: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
) -> JSONResponse:
    """
    Create a JSON error response without raising an exception.

    Useful for returning errors in exception handlers.
    """
    if status_code is None:
        status_code = ERROR_STATUS_CODES.get(code, HTTP_400_BAD_REQUEST)

    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error_code": code.value,
            "message": message or ERROR_MESSAGES.get(code, "An error occurred"),
            "details": details,
        },
    )


__all__ = [
    "ErrorCode",
    "ERROR_MESSAGES",
    "ERROR_STATUS_CODES",
    "APIError",
    "error_response",
]
