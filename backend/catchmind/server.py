from __future__ import annotations

import os
import sys

from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from werkzeug.middleware.proxy_fix import ProxyFix

from .config import Config
from .game.models import GameSettings
from .game.service import GameService
from .game.timers import SocketIOTimers, Timers
from .game.words import WordProvider
from .realtime.handlers import register_socketio_handlers
from .realtime.notifier import SocketIONotifier
from .routes.categories import bp as categories_bp
from .routes.health import bp as health_bp
from .routes.rooms import bp as rooms_bp


def create_app(
    config_class: type = Config,
    timers: Timers | None = None,
    words: WordProvider | None = None,
) -> tuple[Flask, SocketIO]:
    app = Flask(__name__)
    app.config.from_object(config_class)

    if app.config.get("TRUST_PROXY_HEADERS", False):
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_port=1)

    cors_origins = app.config.get("CORS_ORIGINS", "*")
    CORS(app, resources={r"/api/*": {"origins": cors_origins}})

    env_async_mode = os.environ.get("SOCKETIO_ASYNC_MODE", "").strip()
    if env_async_mode:
        async_mode = env_async_mode
    elif app.config.get("TESTING"):
        async_mode = "threading"
    else:
        # Default choice:
        # - Windows: threading (eventlet has known compatibility issues on newer Python)
        # - Python >= 3.13: threading (safer default)
        # - Otherwise: eventlet
        if sys.platform.startswith("win") or sys.version_info >= (3, 13):
            async_mode = "threading"
        else:
            async_mode = "eventlet"

    socketio = SocketIO(
        app,
        cors_allowed_origins=cors_origins,
        async_mode=async_mode,
    )

    settings = GameSettings.from_config(app.config)
    game = GameService(
        notifier=SocketIONotifier(socketio),
        timers=timers or SocketIOTimers(socketio),
        words=words or WordProvider(default_category=settings.default_category),
        settings=settings,
    )
    app.extensions["catchmind"] = game

    app.register_blueprint(health_bp, url_prefix="/api")
    app.register_blueprint(rooms_bp, url_prefix="/api")
    app.register_blueprint(categories_bp, url_prefix="/api")

    register_socketio_handlers(socketio, game)

    return app, socketio
