from __future__ import annotations

import logging
import secrets
import string
from threading import RLock
from typing import Any, Callable, Protocol

from . import roster
from .hint import make_chosung_hint
from .models import GameSettings, Room, RoundOutcome
from .registry import RoomRegistry, SessionIndex
from .timers import Timers
from .words import WordProvider


logger = logging.getLogger(__name__)

ANONYMOUS_NICKNAME = "익명"
UNKNOWN_NICKNAME = "알 수 없음"
ROOM_ID_ALPHABET = string.ascii_lowercase + string.digits
ROOM_ID_LENGTH = 6

MSG_JOINED = "{nickname} 님이 입장했습니다."
MSG_LEFT = "{nickname} 님이 퇴장했습니다."
MSG_GAME_STARTING = "게임을 시작합니다!"
REASON_TIMED_OUT = "시간이 종료되었습니다."
REASON_GUESSED = "{nickname} 님이 정답을 맞췄습니다!"
REASON_DRAWER_LEFT = "출제자가 나갔습니다. 다음 라운드로 넘어갑니다."


class Notifier(Protocol):
    def emit(self, event: str, payload: Any = None, *, to: str, skip_sid: str | None = None) -> None: ...

    def enter_room(self, sid: str, room_id: str) -> None: ...

    def leave_room(self, sid: str, room_id: str) -> None: ...


def random_room_id() -> str:
    return "".join(secrets.choice(ROOM_ID_ALPHABET) for _ in range(ROOM_ID_LENGTH))


class GameService:
    """Owns every room and session binding of one server instance.

    All mutations, including fired timer callbacks, run under a single
    re-entrant lock so events are applied one at a time.
    """

    def __init__(
        self,
        notifier: Notifier,
        timers: Timers,
        words: WordProvider | None = None,
        settings: GameSettings | None = None,
    ) -> None:
        self.settings = settings or GameSettings()
        self.notifier = notifier
        self.timers = timers
        self.words = words or WordProvider(default_category=self.settings.default_category)
        self.rooms = RoomRegistry(self.settings, cancel=timers.cancel)
        self.sessions = SessionIndex()
        self._lock = RLock()

    # -- lookups ---------------------------------------------------------

    def get_room(self, room_id: str) -> Room | None:
        with self._lock:
            return self.rooms.get(room_id)

    def room_of(self, sid: str) -> Room | None:
        with self._lock:
            room_id = self.sessions.room_of(sid)
            return self.rooms.get(room_id) if room_id else None

    def room_state(self, room: Room) -> dict:
        return {
            "players": roster.list_players(room),
            "drawerId": room.drawer_id,
            "round": room.round,
            "maxRounds": room.max_rounds,
            "category": room.category,
            "roundActive": room.round_active,
        }

    # -- membership ------------------------------------------------------

    def join(self, sid: str, room_id: str, nickname: str) -> Room:
        with self._lock:
            room_id = (room_id or "").strip() or random_room_id()
            nickname = (nickname or "").strip()[: self.settings.nickname_max_length] or ANONYMOUS_NICKNAME

            prev_room_id = self.sessions.room_of(sid)
            if prev_room_id is not None and prev_room_id != room_id:
                self.leave(sid)

            room = self.rooms.get_or_create(room_id)
            self.notifier.enter_room(sid, room_id)
            self.sessions.bind(sid, room_id)
            # Rejoining the same room only replaces the player entry.
            roster.remove_player(room, sid)
            roster.add_player(room, sid, nickname)
            logger.info("player joined room=%s sid=%s nickname=%s", room_id, sid, nickname)

            self._system_message(room, MSG_JOINED.format(nickname=nickname))
            self._broadcast_room_state(room)
            return room

    def leave(self, sid: str) -> None:
        """Remove ``sid`` from its room; used for room switches and disconnects."""
        with self._lock:
            room_id = self.sessions.unbind(sid)
            if room_id is None:
                return
            self.notifier.leave_room(sid, room_id)
            room = self.rooms.get(room_id)
            if room is None:
                return

            player = roster.remove_player(room, sid)
            nickname = player.nickname if player else UNKNOWN_NICKNAME
            logger.info("player left room=%s sid=%s", room_id, sid)
            self._system_message(room, MSG_LEFT.format(nickname=nickname))

            if not room.players:
                self.rooms.remove(room_id)
                return

            if room.drawer_id == sid:
                room.drawer_id = None
                if room.round_active:
                    self._end_round(room, "drawer_left", REASON_DRAWER_LEFT, broadcast_state=False)
                    return

            self._broadcast_room_state(room)

    def set_category(self, sid: str, category: str) -> None:
        with self._lock:
            room = self.room_of(sid)
            if room is None:
                return
            room.category = (category or "").strip() or self.settings.default_category
            self._broadcast_room_state(room)

    # -- rounds ----------------------------------------------------------

    def start_game(self, room_id: str) -> bool:
        with self._lock:
            room = self.rooms.get(room_id)
            if room is None or room.round_active:
                return False

            room.round = 0
            room.current_word = None
            room.drawer_id = None
            logger.info("game started room=%s", room_id)
            self._system_message(room, MSG_GAME_STARTING)
            self.start_round(room_id)
            return True

    def start_round(self, room_id: str) -> None:
        with self._lock:
            room = self.rooms.get(room_id)
            if room is None or not room.players:
                return

            self._cancel_timers(room)
            room.epoch += 1
            room.round += 1

            if room.round > room.max_rounds:
                self._finish_game(room)
                return

            room.drawer_id = roster.next_drawer_id(room)
            room.current_word = self.words.pick(room.category)
            room.phase = "active"
            logger.info(
                "round started room=%s round=%s drawer=%s", room.room_id, room.round, room.drawer_id
            )

            self._clear_board(room)
            self.notifier.emit(
                "roundStarted",
                {
                    "round": room.round,
                    "maxRounds": room.max_rounds,
                    "drawerId": room.drawer_id,
                    "roundDurationSec": self.settings.round_duration_sec,
                },
                to=room.room_id,
            )
            self.notifier.emit("wordForDrawer", {"word": room.current_word}, to=room.drawer_id)
            self._broadcast_room_state(room)

            room.hint_handle = self.timers.schedule(
                self.settings.hint_delay_sec, self._guarded(room, self._reveal_hint)
            )
            room.timeout_handle = self.timers.schedule(
                self.settings.round_duration_sec, self._guarded(room, self._time_out)
            )

    def submit_answer(self, sid: str, text: str) -> None:
        with self._lock:
            room = self.room_of(sid)
            if room is None:
                return
            player = room.players.get(sid)
            if player is None:
                return
            text = (text or "").strip()
            if not text:
                return

            if not room.round_active or not room.current_word or room.drawer_id == sid:
                self._chat(room, player.nickname, text)
                return

            if text.lower() != room.current_word.lower():
                self._chat(room, player.nickname, text)
                self._broadcast_room_state(room)
                return

            player.score += self.settings.score_reward
            self.notifier.emit(
                "answerResult",
                {
                    "correct": True,
                    "playerId": player.id,
                    "nickname": player.nickname,
                    "word": room.current_word,
                    "newScore": player.score,
                },
                to=room.room_id,
            )
            self._end_round(
                room, "guessed_correctly", REASON_GUESSED.format(nickname=player.nickname)
            )

    def send_chat(self, sid: str, text: str) -> None:
        with self._lock:
            room = self.room_of(sid)
            if room is None:
                return
            player = room.players.get(sid)
            if player is None or not (text or "").strip():
                return
            self._chat(room, player.nickname, text)

    def relay(self, sid: str, event: str, payload: Any = None) -> None:
        """Forward drawing traffic to everyone else in the sender's room."""
        with self._lock:
            room = self.room_of(sid)
            if room is None:
                return
            self.notifier.emit(event, payload, to=room.room_id, skip_sid=sid)

    # -- internals -------------------------------------------------------

    def _guarded(self, room: Room, action: Callable[[Room], None]) -> Callable[[], None]:
        epoch = room.epoch

        def _callback() -> None:
            with self._lock:
                if self.rooms.get(room.room_id) is not room or room.epoch != epoch:
                    logger.debug("stale timer ignored room=%s epoch=%s", room.room_id, epoch)
                    return
                action(room)

        return _callback

    def _reveal_hint(self, room: Room) -> None:
        if not room.round_active or not room.current_word:
            return
        room.hint_handle = None
        self.notifier.emit("hintUpdated", {"hint": make_chosung_hint(room.current_word)}, to=room.room_id)

    def _time_out(self, room: Room) -> None:
        if not room.round_active:
            return
        room.timeout_handle = None
        self._end_round(room, "timed_out", REASON_TIMED_OUT)

    def _end_round(
        self, room: Room, outcome: RoundOutcome, reason: str, broadcast_state: bool = True
    ) -> None:
        room.phase = "idle"
        self._cancel_timers(room)
        logger.info("round ended room=%s round=%s outcome=%s", room.room_id, room.round, outcome)

        self.notifier.emit("roundEnded", {"reason": reason, "round": room.round}, to=room.room_id)
        self._clear_board(room)
        if broadcast_state:
            self._broadcast_room_state(room)
        room.next_round_handle = self.timers.schedule(
            self.settings.cooldown_sec, self._guarded(room, self._next_round)
        )

    def _next_round(self, room: Room) -> None:
        if room.round_active:
            return
        room.next_round_handle = None
        self.start_round(room.room_id)

    def _finish_game(self, room: Room) -> None:
        room.phase = "game_over"
        room.current_word = None
        room.drawer_id = None
        logger.info("game over room=%s", room.room_id)

        self.notifier.emit("gameEnded", {"players": roster.list_players(room)}, to=room.room_id)
        self._clear_board(room)
        self._broadcast_room_state(room)

    def _cancel_timers(self, room: Room) -> None:
        for handle in room.pending_handles():
            self.timers.cancel(handle)
        room.timeout_handle = None
        room.hint_handle = None
        room.next_round_handle = None

    def _clear_board(self, room: Room) -> None:
        self.notifier.emit("clearCanvas", to=room.room_id)
        self.notifier.emit("hintUpdated", {"hint": ""}, to=room.room_id)

    def _chat(self, room: Room, nickname: str, message: str) -> None:
        self.notifier.emit(
            "chat", {"nickname": nickname, "message": message, "correct": False}, to=room.room_id
        )

    def _system_message(self, room: Room, message: str) -> None:
        self.notifier.emit("systemMessage", {"message": message}, to=room.room_id)

    def _broadcast_room_state(self, room: Room) -> None:
        self.notifier.emit("roomState", self.room_state(room), to=room.room_id)
