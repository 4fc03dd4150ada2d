"""Pytest configuration and shared fixtures."""

import pytest

from core.realtime import EventHub, install_hub, uninstall_hub
from tests.base import RecordingTransport


@pytest.fixture
def transport():
    """Provide a transport recording every write."""
    return RecordingTransport()


@pytest.fixture
def hub(transport):
    """Provide an installed hub, removed again after the test."""
    installed = install_hub(EventHub(transport))
    yield installed
    uninstall_hub()
