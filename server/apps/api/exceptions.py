"""Exceptions for API app.

Views raise these; ApiErrorMiddleware turns them into JSON responses.
"""

from http import HTTPStatus
from typing import Any


class ApiError(Exception):
    """Base class for errors reported to API clients."""

    status_code: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        """Initialize ApiError.

        Args:
            message: Human readable message returned to the client.
        """
        self.message = message
        super().__init__(message)

    def to_payload(self) -> dict[str, Any]:
        """Build the JSON body for this error.

        Returns:
            Dictionary with the error message.
        """
        return {'message': self.message}


class ValidationFailedError(ApiError):
    """Raised when a request body or query fails validation."""

    status_code = HTTPStatus.BAD_REQUEST

    def __init__(
        self,
        message: str,
        errors: dict[str, list[dict[str, str]]] | None = None,
    ) -> None:
        """Initialize ValidationFailedError.

        Args:
            message: Summary message.
            errors: Field-level errors (Django forms JSON format).
        """
        self.errors = errors or {}
        super().__init__(message)

    def to_payload(self) -> dict[str, Any]:
        """Build the JSON body including field errors.

        Returns:
            Dictionary with message and errors.
        """
        payload = super().to_payload()
        if self.errors:
            payload['errors'] = self.errors
        return payload


class RecordNotFoundError(ApiError):
    """Raised when a requested record does not exist."""

    status_code = HTTPStatus.NOT_FOUND

    def __init__(self, record_name: str) -> None:
        """Initialize RecordNotFoundError.

        Args:
            record_name: Kind of record, e.g. 'File'.
        """
        self.record_name = record_name
        super().__init__(f'{record_name} not found')
