"""Health check service with short-lived result caching."""

import logging
import time
from collections.abc import Callable

from django.core.cache import cache
from django.db import connection
from django.db.utils import DatabaseError

from redis.exceptions import RedisError

from core.enums import HealthStatus
from core.exceptions import HubNotInitializedError
from core.realtime import get_hub
from core.schemas.health import (
    DependencyHealth,
    LivenessResponse,
    ReadinessResponse,
)

logger = logging.getLogger(__name__)

HEALTH_CHECK_CACHE_KEY = "__health_check__"


class HealthService:
    """Service for performing health checks with caching."""

    def __init__(self, cache_ttl_seconds: float = 5.0) -> None:
        """Initialize the health service.

        Args:
            cache_ttl_seconds: Time to live for cached dependency results
        """
        self.cache_ttl_seconds = cache_ttl_seconds
        self._cache: dict[str, tuple[float, DependencyHealth]] = {}

    def get_liveness_status(self) -> LivenessResponse:
        """Get liveness status (always returns alive)."""
        return LivenessResponse(status="alive")

    def get_readiness_status(self) -> ReadinessResponse:
        """Get readiness status with database, Redis and realtime checks.

        The service stays ready when a dependency is down and reports itself
        degraded, so it keeps serving while reconnection continues.
        """
        dependencies = {
            "database": self.check_database_health(),
            "redis": self.check_redis_health(),
            "realtime": self.check_realtime_health(),
        }
        degraded = not all(health.healthy for health in dependencies.values())
        if degraded:
            logger.warning(
                "Service degraded: %s",
                ", ".join(name for name, h in dependencies.items() if not h.healthy),
            )

        return ReadinessResponse(
            ready=True,
            status="degraded" if degraded else "ready",
            degraded=degraded,
            dependencies=dependencies,
        )

    def check_database_health(self) -> DependencyHealth:
        """Check database connectivity.

        Uses ensure_connection(), which validates the socket without running
        a query.
        """
        return self._cached("database", self._check_database)

    def check_redis_health(self) -> DependencyHealth:
        """Check Redis connectivity with a set/get round trip on the cache."""
        return self._cached("redis", self._check_redis)

    def check_realtime_health(self) -> DependencyHealth:
        """Check that the realtime hub is installed in this process."""
        try:
            hub = get_hub()
        except HubNotInitializedError:
            return DependencyHealth(
                healthy=False,
                status=HealthStatus.UNHEALTHY,
                message="Realtime hub not initialized",
            )
        return DependencyHealth(
            healthy=True,
            status=HealthStatus.HEALTHY,
            message=f"{hub.connection_count} live connections",
        )

    def _cached(
        self, name: str, check: Callable[[], DependencyHealth]
    ) -> DependencyHealth:
        now = time.time()
        cached = self._cache.get(name)
        if cached is not None and now - cached[0] < self.cache_ttl_seconds:
            return cached[1]

        health = check()
        self._cache[name] = (now, health)
        return health

    def _check_database(self) -> DependencyHealth:
        start_time = time.perf_counter()
        try:
            connection.ensure_connection()
        except DatabaseError as e:
            logger.warning("Database health check failed: %s", e)
            return DependencyHealth(
                healthy=False,
                status=HealthStatus.UNHEALTHY,
                message=f"Database connection failed: {e!s}",
                response_time_ms=_elapsed_ms(start_time),
            )
        return DependencyHealth(
            healthy=True,
            status=HealthStatus.HEALTHY,
            message="Database connection successful",
            response_time_ms=_elapsed_ms(start_time),
        )

    def _check_redis(self) -> DependencyHealth:
        start_time = time.perf_counter()
        try:
            cache.set(HEALTH_CHECK_CACHE_KEY, "ok", timeout=1)
            result = cache.get(HEALTH_CHECK_CACHE_KEY)
        except (RedisError, OSError) as e:
            logger.warning("Redis health check failed: %s", e)
            return DependencyHealth(
                healthy=False,
                status=HealthStatus.UNHEALTHY,
                message=f"Redis connection failed: {e!s}",
                response_time_ms=_elapsed_ms(start_time),
            )

        if result != "ok":
            return DependencyHealth(
                healthy=False,
                status=HealthStatus.DEGRADED,
                message="Redis health check failed: unexpected result",
                response_time_ms=_elapsed_ms(start_time),
            )
        return DependencyHealth(
            healthy=True,
            status=HealthStatus.HEALTHY,
            message="Redis connection successful",
            response_time_ms=_elapsed_ms(start_time),
        )


def _elapsed_ms(start_time: float) -> float:
    return (time.perf_counter() - start_time) * 1000


health_service = HealthService()
