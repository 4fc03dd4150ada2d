"""Access logging and request timing middleware."""

import time
from collections.abc import Callable

from django.http import HttpRequest, HttpResponse

import structlog

from core.constants import PROCESS_TIME_HEADER, SLOW_REQUEST_THRESHOLD

logger = structlog.get_logger(__name__)

_UNLOGGED_PATH_PREFIXES = ("/api/v1/health/",)


class RequestLoggingMiddleware:
    """Log one ``request_completed`` event per request and time it.

    Adds the ``X-Process-Time`` header (seconds) to every response. Health
    checks are timed but not logged; requests slower than
    SLOW_REQUEST_THRESHOLD are logged as warnings.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        """Initialize the middleware.

        Args:
            get_response: The next middleware or view in the chain.
        """
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """Process the request and log its outcome.

        Args:
            request: The incoming HTTP request.

        Returns:
            The HTTP response with the process time header added.
        """
        start_time = time.perf_counter()
        response = self.get_response(request)
        duration = time.perf_counter() - start_time

        response[PROCESS_TIME_HEADER] = f"{duration:.6f}"

        if duration > SLOW_REQUEST_THRESHOLD:
            logger.warning(
                "slow_request",
                method=request.method,
                path=request.path,
                status_code=response.status_code,
                duration_ms=round(duration * 1000, 2),
                threshold_s=SLOW_REQUEST_THRESHOLD,
            )
        elif not request.path.startswith(_UNLOGGED_PATH_PREFIXES):
            logger.info(
                "request_completed",
                method=request.method,
                path=request.path,
                status_code=response.status_code,
                duration_ms=round(duration * 1000, 2),
                content_length=response.get("Content-Length"),
            )

        return response
