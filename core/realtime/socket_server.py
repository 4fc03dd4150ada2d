"""Socket.IO endpoint for the realtime hub.

Clients authenticate during the handshake with the same bearer token used
for the HTTP API, either as ``auth={"token": ...}`` or in the Authorization
header. A connection automatically joins its ``user:{id}`` room and may ask
to join ``project:{id}`` and ``task:{id}`` rooms it is a member of:

    join-project / leave-project   payload: project id
    join-task / leave-task         payload: task id

The server runs in threading mode; handlers touch the database from worker
threads, so every handler closes stale connections first.
"""

from typing import Any

from django.conf import settings
from django.db import close_old_connections

import socketio
import structlog
from rest_framework.exceptions import AuthenticationFailed

from core.auth import decode_access_token, extract_bearer_token
from core.enums import RoomKind
from core.realtime import EventHub, install_hub

logger = structlog.get_logger(__name__)


class SocketIOTransport:
    """Transport writing hub events through a Socket.IO server."""

    def __init__(self, sio: socketio.Server) -> None:
        self.sio = sio

    def send(self, connection_id: str, event: str, payload: Any) -> None:
        self.sio.emit(event, payload, to=connection_id)


class SocketGateway:
    """Socket.IO event handlers bound to a hub and a membership checker."""

    def __init__(self, sio: socketio.Server, hub: EventHub, projects=None) -> None:
        """Initialize the gateway.

        Args:
            sio: Server the handlers are registered on.
            hub: Hub tracking room membership.
            projects: Service answering membership questions. Defaults to the
                module-level ProjectService.
        """
        if projects is None:
            from core.services.project_service import project_service  # noqa: PLC0415

            projects = project_service
        self.sio = sio
        self.hub = hub
        self.projects = projects

    def register(self) -> None:
        """Register the handlers on the server."""
        self.sio.on("connect", handler=self.on_connect)
        self.sio.on("disconnect", handler=self.on_disconnect)
        self.sio.on("join-project", handler=self.on_join_project)
        self.sio.on("leave-project", handler=self.on_leave_project)
        self.sio.on("join-task", handler=self.on_join_task)
        self.sio.on("leave-task", handler=self.on_leave_task)

    def on_connect(self, sid: str, environ: dict, auth: Any = None) -> None:
        """Authenticate the handshake and join the user's own room.

        Raises:
            socketio.exceptions.ConnectionRefusedError: If the token is
                missing or invalid.
        """
        close_old_connections()
        token = None
        if isinstance(auth, dict):
            token = auth.get("token")
        try:
            if not token:
                header = environ.get("HTTP_AUTHORIZATION")
                if not header:
                    raise AuthenticationFailed("Missing access token")
                token = extract_bearer_token(header)
            user_id = decode_access_token(token)
        except AuthenticationFailed as e:
            logger.info("socket_connection_refused", sid=sid, reason=str(e.detail))
            raise socketio.exceptions.ConnectionRefusedError("Unauthorized") from e

        self.sio.save_session(sid, {"user_id": user_id})
        self.hub.connect(sid)
        self.hub.join(sid, RoomKind.USER, user_id)
        logger.info("socket_connected", sid=sid, user_id=str(user_id))

    def on_disconnect(self, sid: str, reason: Any = None) -> None:
        rooms = self.hub.disconnect(sid)
        logger.info(
            "socket_disconnected",
            sid=sid,
            reason=str(reason) if reason is not None else None,
            room_count=len(rooms),
        )

    def on_join_project(self, sid: str, project_id: Any) -> None:
        self._join(sid, RoomKind.PROJECT, project_id)

    def on_leave_project(self, sid: str, project_id: Any) -> None:
        self.hub.leave(sid, RoomKind.PROJECT, str(project_id))

    def on_join_task(self, sid: str, task_id: Any) -> None:
        self._join(sid, RoomKind.TASK, task_id)

    def on_leave_task(self, sid: str, task_id: Any) -> None:
        self.hub.leave(sid, RoomKind.TASK, str(task_id))

    def _join(self, sid: str, kind: RoomKind, room_id: Any) -> bool:
        close_old_connections()
        user_id = self.sio.get_session(sid)["user_id"]
        if kind == RoomKind.PROJECT:
            allowed = self.projects.is_project_member(room_id, user_id)
        else:
            allowed = self.projects.is_task_member(room_id, user_id)

        if not allowed:
            logger.warning(
                "room_join_denied",
                sid=sid,
                user_id=str(user_id),
                room_kind=kind.value,
                room_id=str(room_id),
            )
            return False

        self.hub.join(sid, kind, str(room_id))
        return True


def create_socket_server() -> socketio.Server:
    """Create the Socket.IO server and install the process-wide hub.

    Returns:
        The server, ready to be wrapped in ``socketio.WSGIApp``.
    """
    sio = socketio.Server(
        async_mode="threading",
        cors_allowed_origins=settings.SOCKETIO_CORS_ORIGINS,
    )
    hub = install_hub(EventHub(SocketIOTransport(sio)))
    SocketGateway(sio, hub).register()
    logger.info("socket_server_created", cors_origins=settings.SOCKETIO_CORS_ORIGINS)
    return sio
