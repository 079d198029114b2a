"""DRF exception handler producing a single error envelope.

Every error response has the shape::

    {"type": "validation_error", "errors": [{"code": ..., "detail": ..., "attr": ...}]}

``InternalFailure`` raised by a service is rendered as a generic 500;
its message never reaches the client.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from modules.core.exceptions import InternalFailure

logger = structlog.get_logger(__name__)


def standard_exception_handler(
    exc: Exception, context: Dict[str, Any]
) -> Optional[Response]:
    if isinstance(exc, InternalFailure):
        view = context.get("view")
        logger.error(
            "api.internal_failure",
            view=view.__class__.__name__ if view else None,
            error=str(exc),
        )
        return Response(
            {
                "type": "server_error",
                "errors": [
                    {
                        "code": "internal_failure",
                        "detail": "An internal server error occurred.",
                        "attr": None,
                    }
                ],
            },
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    response = exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, exceptions.ValidationError):
        error_type = "validation_error"
    elif response.status_code >= 500:
        error_type = "server_error"
    else:
        error_type = "client_error"

    if isinstance(exc, exceptions.APIException):
        detail = exc.detail
    else:
        detail = response.data
    response.data = {"type": error_type, "errors": _flatten(detail)}
    return response


def _flatten(detail: Any, attr: Optional[str] = None) -> List[Dict[str, Any]]:
    """Turn DRF's nested error detail into a flat list of errors."""
    if isinstance(detail, dict):
        errors: List[Dict[str, Any]] = []
        for key, value in detail.items():
            if key in ("non_field_errors", "detail"):
                child = attr
            else:
                child = key if attr is None else f"{attr}.{key}"
            errors.extend(_flatten(value, child))
        return errors
    if isinstance(detail, list):
        errors = []
        for index, value in enumerate(detail):
            if isinstance(value, (dict, list)):
                child = str(index) if attr is None else f"{attr}.{index}"
                errors.extend(_flatten(value, child))
            else:
                errors.extend(_flatten(value, attr))
        return errors
    return [
        {
            "code": getattr(detail, "code", "error"),
            "detail": str(detail),
            "attr": attr,
        }
    ]
