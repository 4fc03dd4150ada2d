"""Unit tests for RequestLoggingMiddleware."""

import unittest
from unittest.mock import patch

from django.http import HttpResponse
from django.test import RequestFactory

from core.constants import PROCESS_TIME_HEADER
from core.middleware import RequestLoggingMiddleware


class TestRequestLoggingMiddleware(unittest.TestCase):
    """Test cases for RequestLoggingMiddleware."""

    def setUp(self):
        """Set up test fixtures."""
        self.middleware = RequestLoggingMiddleware(lambda request: HttpResponse("OK"))
        self.factory = RequestFactory()

    def test_adds_process_time_header(self):
        """Every response carries its duration in seconds."""
        response = self.middleware(self.factory.get("/api/v1/tasks"))

        self.assertGreaterEqual(float(response[PROCESS_TIME_HEADER]), 0.0)

    @patch("core.middleware.request_logging.logger")
    def test_logs_completed_request(self, mock_logger):
        """Normal requests are logged once at info level."""
        self.middleware(self.factory.get("/api/v1/tasks"))

        mock_logger.info.assert_called_once()
        self.assertEqual(mock_logger.info.call_args.args[0], "request_completed")
        self.assertEqual(mock_logger.info.call_args.kwargs["status_code"], 200)

    @patch("core.middleware.request_logging.logger")
    def test_health_checks_are_not_logged(self, mock_logger):
        """Health checks would drown the access log."""
        self.middleware(self.factory.get("/api/v1/health/live"))

        mock_logger.info.assert_not_called()

    @patch("core.middleware.request_logging.SLOW_REQUEST_THRESHOLD", -1.0)
    @patch("core.middleware.request_logging.logger")
    def test_slow_requests_are_warnings(self, mock_logger):
        """Requests over the threshold are logged as slow_request."""
        self.middleware(self.factory.get("/api/v1/health/live"))

        mock_logger.warning.assert_called_once()
        self.assertEqual(mock_logger.warning.call_args.args[0], "slow_request")
