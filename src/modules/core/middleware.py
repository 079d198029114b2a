import re
import time
import uuid
from typing import Callable

import structlog
from django.http import HttpRequest, HttpResponse

REQUEST_ID_HEADER = "X-Request-ID"
# Printable token of at most 128 characters.
_VALID_REQUEST_ID = re.compile(r"[A-Za-z0-9._:\-]{1,128}")

logger = structlog.get_logger(__name__)


def resolve_correlation_id(raw: str | None) -> str:
    """Return the caller's request id if usable, otherwise a fresh UUID4."""
    if raw and _VALID_REQUEST_ID.fullmatch(raw):
        return raw
    return str(uuid.uuid4())


class CorrelationIdMiddleware:
    """Tag every request, and every log line it emits, with a correlation id.

    The id comes from the ``X-Request-ID`` header when the client sends a
    well-formed one and is generated otherwise.  It is bound to structlog's
    contextvars together with the request method and path, logged at the
    start and end of the request (with the elapsed time) and echoed back
    in the ``X-Request-ID`` response header.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        cid = resolve_correlation_id(request.headers.get(REQUEST_ID_HEADER))

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            correlation_id=cid,
            method=request.method,
            path=request.path,
        )

        started = time.monotonic()
        logger.info("request.started")
        response = self.get_response(request)

        logger.info(
            "request.finished",
            status_code=response.status_code,
            duration_ms=round((time.monotonic() - started) * 1000, 2),
        )
        response[REQUEST_ID_HEADER] = cid
        return response
