"""Room naming for the realtime hub."""

from uuid import UUID

from core.enums import RoomKind


def room_name(room_kind: RoomKind | str, room_id: UUID | str) -> str:
    """Return the ``"{kind}:{id}"`` name of a room.

    Raises:
        ValueError: If ``room_kind`` is not a RoomKind value.
    """
    return f"{RoomKind(room_kind).value}:{room_id}"
