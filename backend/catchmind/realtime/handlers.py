from __future__ import annotations

import logging

from flask import request
from flask_socketio import SocketIO

from ..game.service import GameService
from .events import (
    INBOUND_EVENTS,
    Answer,
    ChatMessage,
    ClearCanvas,
    Command,
    Disconnect,
    Draw,
    JoinRoom,
    LeaveRoom,
    SetCategory,
    StartGame,
    parse_command,
)


logger = logging.getLogger(__name__)


def dispatch(game: GameService, sid: str, command: Command) -> None:
    if isinstance(command, JoinRoom):
        game.join(sid, command.room_id, command.nickname)
    elif isinstance(command, (LeaveRoom, Disconnect)):
        game.leave(sid)
    elif isinstance(command, SetCategory):
        game.set_category(sid, command.category)
    elif isinstance(command, StartGame):
        room = game.room_of(sid)
        if room is not None:
            game.start_game(room.room_id)
    elif isinstance(command, Draw):
        game.relay(sid, "draw", dict(command.stroke))
    elif isinstance(command, ClearCanvas):
        game.relay(sid, "clearCanvas")
    elif isinstance(command, Answer):
        game.submit_answer(sid, command.message)
    elif isinstance(command, ChatMessage):
        game.send_chat(sid, command.message)
    else:
        raise TypeError(f"unhandled command {command!r}")


def register_socketio_handlers(socketio: SocketIO, game: GameService) -> None:
    def _make_handler(name: str):
        def _handler(data=None):
            dispatch(game, request.sid, parse_command(name, data))

        _handler.__name__ = f"on_{name}"
        return _handler

    for name in INBOUND_EVENTS:
        socketio.on_event(name, _make_handler(name))

    @socketio.on("connect")
    def on_connect(auth=None):
        logger.info("connected sid=%s", request.sid)

    @socketio.on("disconnect")
    def on_disconnect(reason=None):
        logger.info("disconnected sid=%s reason=%s", request.sid, reason)
        dispatch(game, request.sid, parse_command("disconnect"))
