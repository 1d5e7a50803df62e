from __future__ import annotations

import logging
from typing import Callable, Iterator

from .models import GameSettings, Room


logger = logging.getLogger(__name__)


class RoomRegistry:
    def __init__(self, settings: GameSettings, cancel: Callable[[object], None]) -> None:
        self._settings = settings
        self._cancel = cancel
        self._rooms: dict[str, Room] = {}

    def get_or_create(self, room_id: str) -> Room:
        room = self._rooms.get(room_id)
        if room is None:
            room = Room(
                room_id=room_id,
                max_rounds=self._settings.max_rounds,
                category=self._settings.default_category,
            )
            self._rooms[room_id] = room
            logger.info("room created room=%s", room_id)
        return room

    def get(self, room_id: str) -> Room | None:
        return self._rooms.get(room_id)

    def remove(self, room_id: str) -> Room | None:
        room = self._rooms.pop(room_id, None)
        if room is None:
            return None
        for handle in room.pending_handles():
            self._cancel(handle)
        room.timeout_handle = None
        room.hint_handle = None
        room.next_round_handle = None
        logger.info("room destroyed room=%s", room_id)
        return room

    def __contains__(self, room_id: object) -> bool:
        return room_id in self._rooms

    def __iter__(self) -> Iterator[Room]:
        return iter(list(self._rooms.values()))

    def __len__(self) -> int:
        return len(self._rooms)


class SessionIndex:
    """Connection id -> the one room it currently occupies."""

    def __init__(self) -> None:
        self._rooms_by_sid: dict[str, str] = {}

    def bind(self, sid: str, room_id: str) -> None:
        self._rooms_by_sid[sid] = room_id

    def unbind(self, sid: str) -> str | None:
        return self._rooms_by_sid.pop(sid, None)

    def room_of(self, sid: str) -> str | None:
        return self._rooms_by_sid.get(sid)

    def __len__(self) -> int:
        return len(self._rooms_by_sid)
