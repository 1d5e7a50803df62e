from catchmind.game.timers import SocketIOTimers


class InlineSocketIO:
    def __init__(self):
        self.tasks = []
        self.sleeps = []
        self.on_sleep = None

    def start_background_task(self, target, *args, **kwargs):
        self.tasks.append(lambda: target(*args, **kwargs))

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        if self.on_sleep:
            self.on_sleep()


def test_callback_runs_after_full_delay():
    socketio = InlineSocketIO()
    timers = SocketIOTimers(socketio, poll_interval=1.0)
    calls = []

    timers.schedule(2.5, lambda: calls.append('fired'))
    assert calls == []
    socketio.tasks[0]()

    assert calls == ['fired']
    assert socketio.sleeps == [1.0, 1.0, 0.5]


def test_cancelled_task_stops_sleeping_early():
    socketio = InlineSocketIO()
    timers = SocketIOTimers(socketio, poll_interval=1.0)
    calls = []
    handle = timers.schedule(40, lambda: calls.append('fired'))
    socketio.on_sleep = lambda: timers.cancel(handle)

    socketio.tasks[0]()

    assert calls == []
    assert socketio.sleeps == [1.0]


def test_callback_errors_are_logged_not_raised(caplog):
    socketio = InlineSocketIO()
    timers = SocketIOTimers(socketio)

    def _boom():
        raise RuntimeError('boom')

    timers.schedule(1, _boom)
    socketio.tasks[0]()

    assert 'timer callback failed' in caplog.text
