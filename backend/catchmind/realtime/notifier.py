from __future__ import annotations

from typing import Any

from flask_socketio import SocketIO


class SocketIONotifier:
    """Outbound side of the game service, backed by a ``SocketIO`` server.

    Goes through ``socketio.server`` for room membership so it also works from
    background tasks, where there is no request context.
    """

    def __init__(self, socketio: SocketIO, namespace: str = "/") -> None:
        self._socketio = socketio
        self._namespace = namespace

    def emit(self, event: str, payload: Any = None, *, to: str, skip_sid: str | None = None) -> None:
        args = () if payload is None else (payload,)
        self._socketio.emit(event, *args, to=to, skip_sid=skip_sid, namespace=self._namespace)

    def enter_room(self, sid: str, room_id: str) -> None:
        self._socketio.server.enter_room(sid, room_id, namespace=self._namespace)

    def leave_room(self, sid: str, room_id: str) -> None:
        self._socketio.server.leave_room(sid, room_id, namespace=self._namespace)
