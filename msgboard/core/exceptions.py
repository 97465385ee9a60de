"""Custom exceptions for the message board."""
from typing import Any, Dict, Optional


class MessageBoardError(Exception):
    """Base exception for message board errors."""

    def __init__(
        self,
        message: str,
        error_code: str = "MESSAGE_BOARD_ERROR",
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class InvalidArgumentError(MessageBoardError):
    """Input rejected by a business rule."""

    def __init__(
        self, message: str, field: Optional[str] = None, details: Optional[Dict[str, Any]] = None
    ):
        error_details = details or {}
        if field:
            error_details["field"] = field

        super().__init__(
            message=message,
            error_code="INVALID_ARGUMENT",
            status_code=400,
            details=error_details,
        )


class NotFoundError(MessageBoardError):
    """Resource not found errors."""

    def __init__(
        self,
        resource: str,
        identifier: Any = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource} not found"
        if identifier is not None:
            message += f" with id: {identifier}"

        error_details = details or {}
        error_details["resource"] = resource
        if identifier is not None:
            error_details["identifier"] = identifier

        super().__init__(
            message=message,
            error_code="NOT_FOUND",
            status_code=404,
            details=error_details,
        )
