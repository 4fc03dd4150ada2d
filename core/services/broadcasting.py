"""Base class for services that push realtime events."""

from core.realtime import EventHub, get_hub


class BroadcastingService:
    """Resolves the realtime hub for a service.

    A hub passed to the constructor wins; otherwise the hub installed at
    process start is used, looked up on each access so that module-level
    service instances can be created before the hub exists.
    """

    def __init__(self, hub: EventHub | None = None) -> None:
        """Initialize the service.

        Args:
            hub: Hub to broadcast through, or None for the installed hub.
        """
        self._hub = hub

    @property
    def hub(self) -> EventHub:
        """The hub to broadcast through.

        Raises:
            HubNotInitializedError: If no hub was given and none is installed.
        """
        return self._hub if self._hub is not None else get_hub()
