import logging
import os

logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO"))

try:
    from backend.catchmind.server import create_app
except ImportError:  # pragma: no cover
    from catchmind.server import create_app

app, socketio = create_app()
