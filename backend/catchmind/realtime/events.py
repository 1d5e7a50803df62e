"""Inbound Socket.IO events as typed commands.

Clients send loosely shaped payloads; ``parse_command`` coerces each one into
a frozen dataclass so the dispatcher never has to look at raw dicts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union


@dataclass(frozen=True)
class JoinRoom:
    room_id: str
    nickname: str


@dataclass(frozen=True)
class LeaveRoom:
    pass


@dataclass(frozen=True)
class SetCategory:
    category: str


@dataclass(frozen=True)
class StartGame:
    pass


@dataclass(frozen=True)
class Draw:
    stroke: dict = field(default_factory=dict)


@dataclass(frozen=True)
class ClearCanvas:
    pass


@dataclass(frozen=True)
class Answer:
    message: str


@dataclass(frozen=True)
class ChatMessage:
    message: str


@dataclass(frozen=True)
class Disconnect:
    pass


Command = Union[
    JoinRoom, LeaveRoom, SetCategory, StartGame, Draw, ClearCanvas, Answer, ChatMessage, Disconnect
]

STROKE_KEYS = ("x0", "y0", "x1", "y1", "color", "lineWidth")


def _text(payload: Any, key: str) -> str:
    if not isinstance(payload, dict):
        return ""
    value = payload.get(key)
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def parse_command(name: str, payload: Any = None) -> Command:
    if name == "joinRoom":
        return JoinRoom(room_id=_text(payload, "roomId"), nickname=_text(payload, "nickname"))
    if name == "leaveRoom":
        return LeaveRoom()
    if name == "setCategory":
        # Older clients send the bare category string.
        if isinstance(payload, str):
            return SetCategory(category=payload)
        return SetCategory(category=_text(payload, "category"))
    if name == "startGame":
        return StartGame()
    if name == "draw":
        data = payload if isinstance(payload, dict) else {}
        return Draw(stroke={k: data.get(k) for k in STROKE_KEYS})
    if name == "clearCanvas":
        return ClearCanvas()
    if name == "answer":
        return Answer(message=_text(payload, "message"))
    if name == "chatMessage":
        return ChatMessage(message=_text(payload, "message"))
    if name == "disconnect":
        return Disconnect()
    raise ValueError(f"unknown event {name!r}")


INBOUND_EVENTS = (
    "joinRoom",
    "leaveRoom",
    "setCategory",
    "startGame",
    "draw",
    "clearCanvas",
    "answer",
    "chatMessage",
)
