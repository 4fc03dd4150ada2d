"""Base test classes for different test types."""

from typing import Any
from unittest.mock import patch

from django.test import SimpleTestCase, TestCase

from rest_framework.test import APIClient

from core.enums import RoomKind
from core.realtime import EventHub, install_hub, uninstall_hub
from tests.factories import make_token


class RecordingTransport:
    """Transport that records every write instead of sending it.

    Connections listed in ``failing`` raise on write, like a socket that
    dropped between the snapshot and the send.
    """

    def __init__(self) -> None:
        self.sent: list[tuple[str, str, Any]] = []
        self.failing: set[str] = set()

    def send(self, connection_id: str, event: str, payload: Any) -> None:
        if connection_id in self.failing:
            msg = f"connection {connection_id} is gone"
            raise ConnectionError(msg)
        self.sent.append((connection_id, event, payload))

    def received(self, connection_id: str) -> list[tuple[str, Any]]:
        """Events written to one connection, in order."""
        return [(e, p) for c, e, p in self.sent if c == connection_id]

    def payloads(self, event: str) -> list[Any]:
        """Payloads of one event across all connections."""
        return [p for _, e, p in self.sent if e == event]


class BaseUnitTest(SimpleTestCase):
    """Base class for unit tests that need neither the database nor a hub."""


class BaseServiceTest(TestCase):
    """Base class for tests of services that broadcast and queue emails.

    Installs a hub writing to a RecordingTransport and replaces the rq queue
    with a mock, so no Redis server is needed.
    """

    def setUp(self):
        """Install the hub and mock the email queue."""
        super().setUp()
        self.transport = RecordingTransport()
        self.hub = install_hub(EventHub(self.transport))
        self.addCleanup(uninstall_hub)

        queue_patcher = patch("core.services.notification_service.django_rq.get_queue")
        self.mock_get_queue = queue_patcher.start()
        self.addCleanup(queue_patcher.stop)

    def listen(self, room_kind: RoomKind, room_id) -> str:
        """Connect a fake socket, join it to a room and return its id."""
        connection_id = f"{room_kind.value}-listener-{room_id}"
        self.hub.connect(connection_id)
        self.hub.join(connection_id, room_kind, room_id)
        return connection_id

    @property
    def enqueued_jobs(self) -> list[tuple]:
        """Positional args of every enqueue() call on the mocked queue."""
        enqueue = self.mock_get_queue.return_value.enqueue
        return [call.args for call in enqueue.call_args_list]


class BaseComponentTest(BaseServiceTest):
    """Base class for component tests going through URL routing and DRF."""

    def setUp(self):
        """Set up an API client on top of the service fixtures."""
        super().setUp()
        self.client = APIClient()

    def authenticate(self, user) -> None:
        """Send a valid bearer token for ``user`` with every request."""
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {make_token(user.user_id)}")
