import os
import random
import sys

import pytest

# Ensure the backend root (containing the `catchmind` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from catchmind.config import Config
from catchmind.game.models import GameSettings
from catchmind.game.service import GameService
from catchmind.game.timers import TimerHandle
from catchmind.game.words import WordProvider
from catchmind.server import create_app


class FakeTimers:
    """Deterministic clock: callbacks only run when the test advances time."""

    def __init__(self):
        self.now = 0.0
        self._pending = []
        self._seq = 0

    def schedule(self, delay, fn):
        handle = TimerHandle(delay)
        self._seq += 1
        self._pending.append((self.now + delay, self._seq, handle, fn))
        return handle

    def cancel(self, handle):
        if handle is not None:
            handle.cancelled = True

    def live(self):
        return [h for _, _, h, _ in self._pending if not h.cancelled]

    def advance(self, seconds):
        target = self.now + seconds
        while True:
            due = [e for e in self._pending if e[0] <= target]
            if not due:
                break
            entry = min(due, key=lambda e: (e[0], e[1]))
            self._pending.remove(entry)
            self.now = entry[0]
            if not entry[2].cancelled:
                entry[3]()
        self.now = target

    def fire(self, handle):
        """Run a callback even if it was cancelled, like a timer that already slipped through."""
        for entry in list(self._pending):
            if entry[2] is handle:
                self._pending.remove(entry)
                entry[3]()
                return
        raise AssertionError('handle is not pending')


class RecordingNotifier:
    def __init__(self):
        self.sent = []
        self.members = {}

    def emit(self, event, payload=None, *, to, skip_sid=None):
        self.sent.append((event, payload, to, skip_sid))

    def enter_room(self, sid, room_id):
        self.members.setdefault(room_id, set()).add(sid)

    def leave_room(self, sid, room_id):
        self.members.get(room_id, set()).discard(sid)

    def payloads(self, event, to=None):
        return [p for e, p, t, _ in self.sent if e == event and (to is None or t == to)]

    def names(self):
        return [e for e, _, _, _ in self.sent]

    def clear(self):
        self.sent.clear()


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = 'test-secret'
    TRUST_PROXY_HEADERS = False


@pytest.fixture()
def timers():
    return FakeTimers()


@pytest.fixture()
def notifier():
    return RecordingNotifier()


@pytest.fixture()
def settings():
    return GameSettings(round_duration_sec=40, max_rounds=5, score_reward=10, cooldown_sec=3)


@pytest.fixture()
def words():
    return WordProvider(rng=random.Random(7))


@pytest.fixture()
def game(notifier, timers, words, settings):
    return GameService(notifier=notifier, timers=timers, words=words, settings=settings)


@pytest.fixture()
def make_game(notifier, timers, settings):
    def _make(pool=None, **overrides):
        game_settings = GameSettings(**{**settings.__dict__, **overrides})
        provider = WordProvider(pool=pool, rng=random.Random(7))
        return GameService(notifier=notifier, timers=timers, words=provider, settings=game_settings)

    return _make


@pytest.fixture()
def flask_app(timers):
    application, socketio = create_app(TestConfig, timers=timers)
    application.extensions['test_socketio'] = socketio
    yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_factory(flask_app):
    socketio = flask_app.extensions['test_socketio']
    clients = []

    def _connect():
        test_client = socketio.test_client(flask_app, flask_test_client=flask_app.test_client())
        clients.append(test_client)
        return test_client

    yield _connect
    for test_client in clients:
        try:
            if test_client.is_connected():
                test_client.disconnect()
        except Exception:
            pass
