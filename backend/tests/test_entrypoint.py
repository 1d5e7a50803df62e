import logging
import sys
import types

import catchmind.server


def test_logging_is_configured_before_app_is_built(monkeypatch):
    order = []

    class FakeSocketIO:
        def run(self, app, **kwargs):
            order.append(('run', kwargs['port']))

    def fake_create_app():
        order.append('create_app')
        return object(), FakeSocketIO()

    monkeypatch.setenv('SOCKETIO_ASYNC_MODE', 'threading')
    monkeypatch.setenv('PORT', '4100')
    monkeypatch.setattr(logging, 'basicConfig', lambda **kwargs: order.append('logging'))
    monkeypatch.setattr(catchmind.server, 'create_app', fake_create_app)
    fake_server = types.ModuleType('backend.catchmind.server')
    fake_server.create_app = fake_create_app
    monkeypatch.setitem(sys.modules, 'backend.catchmind.server', fake_server)

    import app as entrypoint

    entrypoint.main()

    assert order == ['logging', 'create_app', ('run', 4100)]
