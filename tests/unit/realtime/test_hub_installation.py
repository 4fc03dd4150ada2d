"""Tests for installing the process-wide hub and resolving it in services."""

from core.exceptions import HubNotInitializedError
from core.realtime import EventHub, get_hub, install_hub, uninstall_hub
from core.services.broadcasting import BroadcastingService
from tests.base import BaseUnitTest, RecordingTransport


class TestHubInstallation(BaseUnitTest):
    """Test suite for install_hub/get_hub."""

    def tearDown(self):
        """Leave no hub behind."""
        uninstall_hub()

    def test_get_hub_without_install_raises(self):
        """Using the hub before startup is a configuration error."""
        uninstall_hub()
        with self.assertRaises(HubNotInitializedError):
            get_hub()

    def test_get_hub_returns_installed_hub(self):
        """install_hub makes the hub available process-wide."""
        hub = install_hub(EventHub(RecordingTransport()))
        self.assertIs(get_hub(), hub)

    def test_service_prefers_injected_hub(self):
        """A hub passed to the constructor wins over the installed one."""
        install_hub(EventHub(RecordingTransport()))
        injected = EventHub(RecordingTransport())

        self.assertIs(BroadcastingService(injected).hub, injected)

    def test_service_falls_back_to_installed_hub(self):
        """Without an injected hub, the installed hub is looked up on access."""
        service = BroadcastingService()
        hub = install_hub(EventHub(RecordingTransport()))

        self.assertIs(service.hub, hub)

    def test_service_without_any_hub_fails_fast(self):
        """Broadcasting without a hub raises instead of dropping events."""
        uninstall_hub()
        with self.assertRaises(HubNotInitializedError):
            _ = BroadcastingService().hub
