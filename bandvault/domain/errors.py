"""
Error Handling Module

Defines domain exceptions and error categories for the file access subsystem.
Domain exceptions are pure and have no external dependencies.
Application errors map categories to user-facing messages and HTTP bodies.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCategory(Enum):
    """Error category enumeration for structured error handling."""

    CROSS_TENANT_VIOLATION = "cross_tenant_violation"
    INVALID_TOKEN = "invalid_token"
    FILE_NOT_FOUND = "file_not_found"
    INVALID_REQUEST = "invalid_request"
    UNAUTHORIZED = "unauthorized"
    SYSTEM_ERROR = "system_error"


# User-friendly error messages with actionable guidance
ERROR_MESSAGES: Dict[ErrorCategory, Dict[str, str]] = {
    ErrorCategory.CROSS_TENANT_VIOLATION: {
        "title": "Operation Not Permitted",
        "message": "This file does not belong to the selected band.",
        "action": "Switch to the band that owns the file and try again.",
    },
    ErrorCategory.INVALID_TOKEN: {
        "title": "Link Expired",
        "message": "This file link is invalid, expired or already used.",
        "action": "Reload the song to get a fresh link.",
    },
    ErrorCategory.FILE_NOT_FOUND: {
        "title": "File Not Found",
        "message": "The requested file could not be found or has been deleted.",
        "action": "Upload the file again.",
    },
    ErrorCategory.INVALID_REQUEST: {
        "title": "Invalid Request",
        "message": "The request is missing required information or contains invalid data.",
        "action": "Please check your input and try again.",
    },
    ErrorCategory.UNAUTHORIZED: {
        "title": "Unauthorized",
        "message": "The caller is not allowed to perform this operation.",
        "action": "Check the configured credentials.",
    },
    ErrorCategory.SYSTEM_ERROR: {
        "title": "System Error",
        "message": "An unexpected error occurred while processing your request.",
        "action": "Please try again later. If the problem persists, contact support.",
    },
}


# ============================================================================
# Domain Exceptions (Pure - No External Dependencies)
# ============================================================================

class DomainError(Exception):
    """
    Base exception for all domain errors.

    Domain exceptions can optionally wrap original errors for context.
    """

    def __init__(self, message: str, original_error: Exception = None):
        """
        Initialize domain error.

        Args:
            message: Error message
            original_error: Optional original exception that caused this error
        """
        super().__init__(message)
        self.original_error = original_error


class NoSessionError(DomainError):
    """Raised when the caller has no authentication session."""
    pass


class SessionRefreshError(DomainError):
    """Raised by an auth gateway when a session refresh fails."""
    pass


class TokenIssueError(DomainError):
    """Raised when a single file access token cannot be persisted."""
    pass


class BatchIssueError(DomainError):
    """Raised when a token batch yields nothing for a non-empty request."""
    pass


class InvalidFileAccessTokenError(DomainError):
    """Raised when a token's band does not match its storage path."""
    pass


class MalformedPathError(DomainError):
    """
    Raised when a path or URL does not parse into the storage path layout.

    Treated the same as a cross-tenant violation: reject, do not guess.
    """
    pass


class CrossTenantViolationError(DomainError):
    """
    Raised when a storage path belongs to a band other than the active one.

    Always fatal to the enclosing operation.
    """

    def __init__(self, path_band_id: str, expected_band_id: str):
        super().__init__(
            f"Path belongs to band {path_band_id!r}, not {expected_band_id!r}"
        )
        self.path_band_id = path_band_id
        self.expected_band_id = expected_band_id


class FileUploadError(DomainError):
    """Raised when an object cannot be written to the object store."""
    pass


class TokenRejectedError(DomainError):
    """
    Raised by the file serving endpoint when a request cannot be honoured.

    Carries the HTTP status code the endpoint answers with.
    """

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


# ============================================================================
# Application Layer Exceptions
# ============================================================================

class ApplicationError(Exception):
    """
    Base application error with category and user-friendly messaging.

    Bridges domain errors with user-facing error messages and HTTP responses.
    """

    def __init__(
        self,
        category: ErrorCategory,
        technical_message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize application error.

        Args:
            category: Error category
            technical_message: Technical error details for logging
            context: Additional context information
        """
        self.category = category
        self.technical_message = technical_message or ""
        self.context = context or {}

        error_info = ERROR_MESSAGES.get(
            category, ERROR_MESSAGES[ErrorCategory.SYSTEM_ERROR]
        )
        self.title = error_info["title"]
        self.message = error_info["message"]
        self.action = error_info["action"]

        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert error to dictionary for API response.

        Returns:
            Dictionary with error information
        """
        data = {
            "error": self.category.value,
            "title": self.title,
            "message": self.message,
            "action": self.action,
        }
        if self.technical_message:
            data["details"] = self.technical_message
        return data


def create_error_response(
    category: ErrorCategory,
    technical_message: Optional[str] = None,
    context: Optional[Dict[str, Any]] = None,
    status_code: int = 400,
) -> tuple[Dict[str, Any], int]:
    """
    Create a structured error response for API endpoints.

    Args:
        category: Error category
        technical_message: Technical error details for logging
        context: Additional context information
        status_code: HTTP status code

    Returns:
        Tuple of (error_dict, status_code)
    """
    error = ApplicationError(category, technical_message, context)
    return error.to_dict(), status_code
