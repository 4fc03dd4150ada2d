"""Tests for HealthService."""

from unittest.mock import patch

from django.db.utils import OperationalError
from django.test import TestCase

from redis.exceptions import ConnectionError as RedisConnectionError

from core.enums import HealthStatus
from core.realtime import EventHub, install_hub, uninstall_hub
from core.services.health_service import HealthService
from tests.base import RecordingTransport


class TestHealthService(TestCase):
    """Test suite for HealthService."""

    def setUp(self):
        """Set up a service without result caching and an installed hub."""
        self.service = HealthService(cache_ttl_seconds=0)
        self.hub = install_hub(EventHub(RecordingTransport()))
        self.addCleanup(uninstall_hub)

    def test_liveness(self):
        """Liveness never checks dependencies."""
        self.assertEqual(self.service.get_liveness_status().status, "alive")

    def test_ready_when_all_dependencies_healthy(self):
        """Database, cache and hub all answer."""
        readiness = self.service.get_readiness_status()

        self.assertTrue(readiness.ready)
        self.assertFalse(readiness.degraded)
        self.assertEqual(readiness.status, "ready")
        self.assertEqual(
            set(readiness.dependencies), {"database", "redis", "realtime"}
        )

    def test_realtime_reports_connection_count(self):
        """The realtime check counts live connections."""
        self.hub.connect("sid-1")
        self.hub.connect("sid-2")

        health = self.service.check_realtime_health()

        self.assertTrue(health.healthy)
        self.assertEqual(health.message, "2 live connections")

    def test_realtime_unhealthy_without_hub(self):
        """A process without an installed hub is degraded, not down."""
        uninstall_hub()

        health = self.service.check_realtime_health()
        readiness = self.service.get_readiness_status()

        self.assertFalse(health.healthy)
        self.assertEqual(health.status, HealthStatus.UNHEALTHY)
        self.assertTrue(readiness.ready)
        self.assertEqual(readiness.status, "degraded")

    @patch("core.services.health_service.cache")
    def test_redis_failure(self, mock_cache):
        """Cache connection errors mark Redis unhealthy."""
        mock_cache.set.side_effect = RedisConnectionError("refused")

        health = self.service.check_redis_health()

        self.assertFalse(health.healthy)
        self.assertIn("refused", health.message)

    @patch("core.services.health_service.cache")
    def test_redis_unexpected_value(self, mock_cache):
        """A round trip returning something else is degraded."""
        mock_cache.get.return_value = None

        health = self.service.check_redis_health()

        self.assertEqual(health.status, HealthStatus.DEGRADED)

    @patch("core.services.health_service.connection")
    def test_database_failure(self, mock_connection):
        """Database errors mark the database unhealthy."""
        mock_connection.ensure_connection.side_effect = OperationalError("down")

        health = self.service.check_database_health()

        self.assertFalse(health.healthy)
        self.assertEqual(health.status, HealthStatus.UNHEALTHY)

    @patch("core.services.health_service.connection")
    def test_results_are_cached(self, mock_connection):
        """Within the TTL the check is not repeated."""
        service = HealthService(cache_ttl_seconds=60)

        service.check_database_health()
        service.check_database_health()

        mock_connection.ensure_connection.assert_called_once()
