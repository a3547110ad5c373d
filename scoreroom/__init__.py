"""Initialize the Flask app and its extensions."""

import os

from flask import Flask
from werkzeug.middleware.proxy_fix import ProxyFix

from .core.constants import (
    BROADCAST_DISMISS_MS,
    BROADCAST_VISIBLE_MS,
    DEVICE_IDLE_MS,
    NOTICE_TTL_MS,
    STORE_WRITE_WORKERS,
    TIMER_DEFAULT_MINUTES,
)
from .extensions import csrf, rooms


def create_app(test_config=None):
    """Create and configure an instance of the Flask application."""
    app = Flask(__name__, instance_relative_config=True)

    # Load configuration
    app.config.from_mapping(
        SECRET_KEY=os.environ.get("SECRET_KEY") or "dev",
        FIREBASE_CREDENTIALS_JSON=os.environ.get("FIREBASE_CREDENTIALS_JSON"),
        FIREBASE_PROJECT_ID=os.environ.get("FIREBASE_PROJECT_ID"),
        TIMER_DEFAULT_MINUTES=int(
            os.environ.get("TIMER_DEFAULT_MINUTES") or TIMER_DEFAULT_MINUTES
        ),
        BROADCAST_VISIBLE_MS=int(
            os.environ.get("BROADCAST_VISIBLE_MS") or BROADCAST_VISIBLE_MS
        ),
        BROADCAST_DISMISS_MS=int(
            os.environ.get("BROADCAST_DISMISS_MS") or BROADCAST_DISMISS_MS
        ),
        NOTICE_TTL_MS=int(os.environ.get("NOTICE_TTL_MS") or NOTICE_TTL_MS),
        DEVICE_IDLE_MS=int(os.environ.get("DEVICE_IDLE_MS") or DEVICE_IDLE_MS),
        STORE_WRITE_WORKERS=int(
            os.environ.get("STORE_WRITE_WORKERS") or STORE_WRITE_WORKERS
        ),
    )

    if test_config:
        app.config.update(test_config)

    # Initialize extensions
    csrf.init_app(app)
    rooms.init_app(app)

    # Register blueprints
    from . import room as room_bp

    app.register_blueprint(room_bp.bp)

    from . import scorer as scorer_bp

    app.register_blueprint(scorer_bp.bp)

    from . import contestant as contestant_bp

    app.register_blueprint(contestant_bp.bp)

    from . import error_handlers

    app.register_blueprint(error_handlers.error_handlers_bp)

    @app.route("/health")
    def health_check():
        """Perform a simple health check."""
        return "OK", 200

    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_prefix=1)

    return app
