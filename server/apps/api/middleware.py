"""Middleware converting API exceptions into JSON responses."""

import logging
from collections.abc import Callable
from http import HTTPStatus
from typing import Final

from django.http import HttpRequest, HttpResponse, JsonResponse

from server.apps.api.exceptions import ApiError, ValidationFailedError

_API_PREFIX: Final = '/api/'

logger = logging.getLogger(__name__)


class ApiErrorMiddleware:
    """Render exceptions raised by API views as JSON.

    ApiError subclasses map to their status code. Any other exception
    on an /api/ path is logged and becomes a generic 500.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        """Initialize middleware.

        Args:
            get_response: Next handler in the chain.
        """
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """Pass the request through.

        Args:
            request: Incoming request.

        Returns:
            Response from the next handler.
        """
        return self.get_response(request)

    def process_exception(
        self,
        request: HttpRequest,
        exception: Exception,
    ) -> HttpResponse | None:
        """Convert an exception raised by a view.

        Args:
            request: Request being handled.
            exception: Exception raised by the view.

        Returns:
            JSON error response, or None to let Django handle it.
        """
        if not request.path.startswith(_API_PREFIX):
            return None

        if isinstance(exception, ApiError):
            log = (
                logger.warning
                if isinstance(exception, ValidationFailedError)
                else logger.info
            )
            log(
                'API error on %s %s: %s',
                request.method,
                request.path,
                exception.message,
            )
            return JsonResponse(
                exception.to_payload(),
                status=exception.status_code,
            )

        logger.exception(
            'Unhandled error on %s %s',
            request.method,
            request.path,
        )
        return JsonResponse(
            {'message': 'Internal server error'},
            status=HTTPStatus.INTERNAL_SERVER_ERROR,
        )
