"""Liveness/readiness endpoint.

``GET /health`` runs every probe listed in ``settings.HEALTH_CHECKS``
(dotted paths to callables returning a details dict, raising on
failure) and answers 200 only when all of them pass.
"""

import time
from typing import Any, Callable, Dict

import structlog
from django.conf import settings
from django.db import DatabaseError, connections
from django.http import HttpRequest, JsonResponse
from django.utils import timezone
from django.utils.module_loading import import_string

logger = structlog.get_logger(__name__)


class HealthCheckFailed(Exception):
    """Raised by a probe when its dependency is reachable but unusable."""


def check_database() -> Dict[str, Any]:
    conn = connections["default"]
    conn.ensure_connection()
    with conn.cursor() as cursor:
        cursor.execute("SELECT 1")
        cursor.fetchone()
    return {}


def _run_probe(name: str, probe: Callable[[], Dict[str, Any]]) -> Dict[str, Any]:
    start = time.monotonic()
    try:
        details = probe()
    except (DatabaseError, HealthCheckFailed) as exc:
        logger.error("health.probe_failed", probe=name, error=str(exc))
        return {"status": "down"}
    return {
        "status": "up",
        "response_time_ms": round((time.monotonic() - start) * 1000, 2),
        **details,
    }


def health_check(request: HttpRequest) -> JsonResponse:
    services = {
        name: _run_probe(name, import_string(path))
        for name, path in settings.HEALTH_CHECKS.items()
    }
    healthy = all(s["status"] == "up" for s in services.values())

    logger.info("health.checked", status="healthy" if healthy else "unhealthy")
    return JsonResponse(
        {
            "status": "healthy" if healthy else "unhealthy",
            "timestamp": timezone.now().isoformat(),
            "services": services,
        },
        status=200 if healthy else 503,
    )
