"""Lotto room: multiplayer 5-of-50 number lottery service."""

from __future__ import annotations

from flask import Flask
from dotenv import load_dotenv


def create_app(config: type | None = None) -> Flask:
    """Application factory.

    Args:
        config: Configuration class; resolved from APP_ENV when omitted.

    Returns:
        Configured Flask application.
    """
    load_dotenv()

    from lotto_room.config import get_config
    from lotto_room.db import init_db
    from lotto_room.error_handlers import register_error_handlers
    from lotto_room.logging_config import configure_logging
    from lotto_room.routes.games import games_bp
    from lotto_room.routes.health import health_bp
    from lotto_room.services.events import connect_event_logging
    from lotto_room.services.locks import default_registry

    app = Flask(__name__)
    app.config.from_object(config or get_config())

    configure_logging(app)
    init_db(app)
    register_error_handlers(app)
    connect_event_logging()

    app.extensions["game_locks"] = default_registry()

    app.register_blueprint(health_bp)
    app.register_blueprint(games_bp)

    return app
