"""Unit tests for RequestIDMiddleware."""

import unittest
import uuid

from django.http import HttpResponse
from django.test import RequestFactory

from core.constants import REQUEST_ID_HEADER
from core.logging.context import get_request_id
from core.middleware import RequestIDMiddleware


class TestRequestIDMiddleware(unittest.TestCase):
    """Test cases for RequestIDMiddleware."""

    def setUp(self):
        """Set up a middleware recording the id seen by the view."""
        self.seen_ids = []

        def get_response(request):
            self.seen_ids.append(get_request_id())
            return HttpResponse("OK")

        self.middleware = RequestIDMiddleware(get_response)
        self.factory = RequestFactory()

    def test_reuses_incoming_id(self):
        """A well-formed incoming id is kept."""
        request = self.factory.get("/", HTTP_X_REQUEST_ID="abc-123")

        response = self.middleware(request)

        self.assertEqual(response[REQUEST_ID_HEADER], "abc-123")
        self.assertEqual(request.request_id, "abc-123")
        self.assertEqual(self.seen_ids, ["abc-123"])

    def test_generates_id_when_missing(self):
        """Requests without an id get a UUID4."""
        response = self.middleware(self.factory.get("/"))

        self.assertEqual(uuid.UUID(response[REQUEST_ID_HEADER]).version, 4)

    def test_replaces_malformed_id(self):
        """Ids with unexpected characters are not echoed."""
        request = self.factory.get("/", HTTP_X_REQUEST_ID="bad id\nInjected: 1")

        response = self.middleware(request)

        self.assertNotIn("Injected", response[REQUEST_ID_HEADER])

    def test_clears_id_after_response(self):
        """The id does not leak into the next request on this thread."""
        self.middleware(self.factory.get("/", HTTP_X_REQUEST_ID="abc-123"))

        self.assertIsNone(get_request_id())
