import os
import time
import uuid

from django.core.cache import cache
from django.db import connections
from django.db.utils import OperationalError
from django.http import JsonResponse

from .logger import get_logger

logger = get_logger(__name__).bind(component="common", layer="health")


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


def _db_check(alias="default"):
    started = time.perf_counter()
    try:
        with connections[alias].cursor() as cursor:
            cursor.execute("SELECT 1")
    except OperationalError as e:
        logger.warning("Database health check failed", alias=alias, error=str(e))
        return {"status": "fail", "error": str(e)}
    except Exception as e:
        logger.error(
            "Database health check failed unexpectedly",
            alias=alias,
            error=str(e),
            exception=e.__class__.__name__,
        )
        return {"status": "fail", "error": str(e), "exception": e.__class__.__name__}
    latency = _elapsed_ms(started)
    logger.debug("Database health check succeeded", alias=alias, latency_ms=latency)
    return {"status": "ok", "latency_ms": latency}


def _cache_check():
    # The Redis cache is configured to swallow connection errors, so a
    # round-trip that loses the value is how an outage shows up here.
    key = f"health:{uuid.uuid4().hex}"
    started = time.perf_counter()
    try:
        cache.set(key, "1", timeout=5)
        value = cache.get(key)
        cache.delete(key)
    except Exception as e:
        logger.warning("Cache health check failed", error=str(e))
        return {"status": "fail", "error": str(e)}
    if value != "1":
        logger.warning("Cache health check lost written value")
        return {"status": "fail", "error": "cache round-trip failed"}
    return {"status": "ok", "latency_ms": _elapsed_ms(started)}


def live_health(request):
    """Liveness probe: process is up and can service requests."""
    logger.debug("Liveness probe served")
    return JsonResponse({"status": "alive"})


def ready_health(request):
    """Readiness probe: verifies the database, and the Redis cache when REDIS_URL is set."""
    checks = {"database": _db_check()}
    if os.getenv("REDIS_URL"):
        checks["cache"] = _cache_check()
    else:
        checks["cache"] = {"status": "skipped"}
    failing = [name for name, r in checks.items() if r.get("status") == "fail"]
    overall_status = "degraded" if failing else "ok"
    logger.info(
        "Readiness probe evaluated", status=overall_status, failing_components=failing
    )
    return JsonResponse(
        {"status": overall_status, "checks": checks},
        status=503 if failing else 200,
    )
