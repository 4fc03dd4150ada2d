"""Realtime event fan-out.

One EventHub exists per process. It is created together with the Socket.IO
server at startup (``create_socket_server``) and installed here; services
receive it through their constructor or fall back to the installed hub.
"""

import threading

from core.exceptions import HubNotInitializedError
from core.realtime.hub import EventHub, Transport
from core.realtime.rooms import room_name

_hub: EventHub | None = None
_install_lock = threading.Lock()


def install_hub(hub: EventHub) -> EventHub:
    """Install the process-wide hub and return it."""
    global _hub  # noqa: PLW0603
    with _install_lock:
        _hub = hub
    return hub


def uninstall_hub() -> None:
    """Remove the installed hub, so that get_hub() fails again."""
    global _hub  # noqa: PLW0603
    with _install_lock:
        _hub = None


def get_hub() -> EventHub:
    """Return the installed hub.

    Raises:
        HubNotInitializedError: If install_hub() has not run.
    """
    hub = _hub
    if hub is None:
        raise HubNotInitializedError
    return hub


__all__ = [
    "EventHub",
    "Transport",
    "get_hub",
    "install_hub",
    "room_name",
    "uninstall_hub",
]
