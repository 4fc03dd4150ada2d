"""Tests for the structlog processors."""

from django.test import SimpleTestCase

from core.logging.context import clear_request_id, set_request_id
from core.logging.processors import (
    add_process_info,
    add_request_context,
    console_renderer,
)


class TestProcessors(SimpleTestCase):
    """Test suite for the custom processors."""

    def tearDown(self):
        """Leave no request ID bound to the test thread."""
        clear_request_id()

    def test_request_context_only_when_bound(self):
        """request_id is added only while a request is in flight."""
        self.assertNotIn("request_id", add_request_context(None, "info", {}))

        set_request_id("req-1")
        self.assertEqual(add_request_context(None, "info", {})["request_id"], "req-1")

    def test_process_info(self):
        """Process and thread ids are attached."""
        event = add_process_info(None, "info", {})
        self.assertIn("process_id", event)
        self.assertIn("thread_id", event)

    def test_console_renderer_shows_event_and_extras(self):
        """Prefix fields are hidden from the key=value tail."""
        line = console_renderer(
            None,
            "info",
            {
                "level": "info",
                "event": "room_joined",
                "logger": "core.realtime.hub",
                "request_id": "req-1",
                "room": "project:42",
                "thread_id": 7,
            },
        )

        self.assertIn("[INFO", line)
        self.assertIn("room_joined", line)
        self.assertIn("room=project:42", line)
        self.assertNotIn("thread_id=", line)
