"""Room-scoped event fan-out.

The hub owns the room membership table of this process: which live
connections are in which ``project``, ``task`` and ``user`` rooms. It knows
nothing about sockets; writes go through a Transport, which for the running
service is the Socket.IO server (see core.realtime.socket_server).
"""

import threading
from collections import defaultdict
from enum import Enum
from typing import Any, Protocol
from uuid import UUID

import structlog
from pydantic import BaseModel

from core.enums import RoomKind
from core.realtime.rooms import room_name

logger = structlog.get_logger(__name__)


class Transport(Protocol):
    """Writes one event to one live connection."""

    def send(self, connection_id: str, event: str, payload: Any) -> None:
        """Deliver ``payload`` tagged ``event`` to ``connection_id``."""


class EventHub:
    """Thread-safe room membership registry with broadcast.

    Membership mutations and broadcast snapshots happen under one lock;
    writes to the transport happen outside of it, so a slow connection
    never blocks joins or other broadcasts.

    Delivery is fire-and-forget: no acknowledgment, no retry and no ordering
    across connections. A failed write to one member is logged and does not
    affect the other members or the caller.
    """

    def __init__(self, transport: Transport) -> None:
        """Initialize an empty hub.

        Args:
            transport: Writer used to deliver events to connections.
        """
        self._transport = transport
        self._lock = threading.Lock()
        self._rooms: defaultdict[str, set[str]] = defaultdict(set)
        self._connections: dict[str, set[str]] = {}

    def connect(self, connection_id: str) -> None:
        """Register a live connection with no rooms."""
        with self._lock:
            self._connections.setdefault(connection_id, set())
        logger.debug("connection_registered", connection_id=connection_id)

    def join(
        self, connection_id: str, room_kind: RoomKind | str, room_id: UUID | str
    ) -> str:
        """Add a connection to a room. Joining twice has no further effect.

        Connections that are not registered, for example because they
        disconnected while the join was being authorized, are ignored.

        Returns:
            The room name.
        """
        name = room_name(room_kind, room_id)
        with self._lock:
            rooms = self._connections.get(connection_id)
            if rooms is None:
                joined = False
            else:
                rooms.add(name)
                self._rooms[name].add(connection_id)
                joined = True
        if not joined:
            logger.info("room_join_ignored", connection_id=connection_id, room=name)
            return name
        logger.info("room_joined", connection_id=connection_id, room=name)
        return name

    def leave(
        self, connection_id: str, room_kind: RoomKind | str, room_id: UUID | str
    ) -> str:
        """Remove a connection from a room, if it is a member.

        Returns:
            The room name.
        """
        name = room_name(room_kind, room_id)
        with self._lock:
            self._discard(connection_id, name)
            rooms = self._connections.get(connection_id)
            if rooms is not None:
                rooms.discard(name)
        logger.info("room_left", connection_id=connection_id, room=name)
        return name

    def disconnect(self, connection_id: str) -> frozenset[str]:
        """Drop a connection from every room it held.

        Other members of those rooms are not told.

        Returns:
            The rooms the connection was removed from.
        """
        with self._lock:
            rooms = self._connections.pop(connection_id, set())
            for name in rooms:
                self._discard(connection_id, name)
        logger.info(
            "connection_dropped",
            connection_id=connection_id,
            room_count=len(rooms),
        )
        return frozenset(rooms)

    def broadcast(
        self,
        room_kind: RoomKind | str,
        room_id: UUID | str,
        event: Enum | str,
        payload: Any,
    ) -> int:
        """Send an event to every current member of a room.

        Args:
            room_kind: Namespace of the room.
            room_id: Identifier inside the namespace.
            event: Event name, for example ``notification:new``.
            payload: A pydantic model (serialized to camelCase JSON) or any
                JSON-serializable value.

        Returns:
            Number of members the event was written to.
        """
        name = room_name(room_kind, room_id)
        event_name = event.value if isinstance(event, Enum) else event
        body = _encode(payload)

        with self._lock:
            members = list(self._rooms.get(name, ()))

        delivered = 0
        for connection_id in members:
            try:
                self._transport.send(connection_id, event_name, body)
            except Exception as e:  # noqa: BLE001
                logger.warning(
                    "broadcast_delivery_failed",
                    connection_id=connection_id,
                    room=name,
                    event_name=event_name,
                    error=str(e),
                )
            else:
                delivered += 1

        logger.debug(
            "event_broadcast",
            room=name,
            event_name=event_name,
            member_count=len(members),
            delivered=delivered,
        )
        return delivered

    def emit_to_project(
        self, project_id: UUID | str, event: Enum | str, payload: Any
    ) -> int:
        """Broadcast to the members of ``project:{project_id}``."""
        return self.broadcast(RoomKind.PROJECT, project_id, event, payload)

    def emit_to_task(self, task_id: UUID | str, event: Enum | str, payload: Any) -> int:
        """Broadcast to the members of ``task:{task_id}``."""
        return self.broadcast(RoomKind.TASK, task_id, event, payload)

    def emit_to_user(self, user_id: UUID | str, event: Enum | str, payload: Any) -> int:
        """Broadcast to the connections of one user."""
        return self.broadcast(RoomKind.USER, user_id, event, payload)

    def members(self, room_kind: RoomKind | str, room_id: UUID | str) -> frozenset[str]:
        """Return the connections currently in a room."""
        name = room_name(room_kind, room_id)
        with self._lock:
            return frozenset(self._rooms.get(name, ()))

    def rooms_for(self, connection_id: str) -> frozenset[str]:
        """Return the rooms a connection is currently in."""
        with self._lock:
            return frozenset(self._connections.get(connection_id, ()))

    @property
    def connection_count(self) -> int:
        """Number of registered live connections."""
        with self._lock:
            return len(self._connections)

    def _discard(self, connection_id: str, name: str) -> None:
        # Caller holds the lock
        members = self._rooms.get(name)
        if members is None:
            return
        members.discard(connection_id)
        if not members:
            del self._rooms[name]


def _encode(payload: Any) -> Any:
    if isinstance(payload, BaseModel):
        return payload.model_dump(mode="json", by_alias=True)
    return payload
