"""Flask extensions for the application."""

import atexit

from flask_wtf.csrf import CSRFProtect

from .store.base import StoreStatus
from .store.connection import connect_store
from .sync.session import DeviceRegistry, SessionSettings
from .utils import now_ms


class RoomSessions:
    """Connects the room store and keeps one device registry per app."""

    def __init__(self, app=None):
        """Initialize the extension, binding it to ``app`` when given."""
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        """Connect the store and attach a device registry to ``app``."""
        store = app.config.get("ROOM_STORE")
        owns_store = False
        if store is not None:
            status = StoreStatus(ready=True)
        elif app.config.get("TESTING"):
            store, status = None, StoreStatus(ready=False, error="Firebase disabled.")
        else:
            store, status = connect_store(app)
            owns_store = store is not None

        if not status.ready:
            app.logger.error(f"Room store unavailable: {status.error}")

        settings = SessionSettings(
            notice_ttl_ms=app.config["NOTICE_TTL_MS"],
            broadcast_visible_ms=app.config["BROADCAST_VISIBLE_MS"],
            broadcast_dismiss_ms=app.config["BROADCAST_DISMISS_MS"],
            timer_default_minutes=app.config["TIMER_DEFAULT_MINUTES"],
            device_idle_ms=app.config["DEVICE_IDLE_MS"],
        )
        registry = DeviceRegistry(
            store, status, settings, clock=app.config.get("CLOCK") or now_ms
        )
        app.extensions["room_sessions"] = registry
        if owns_store:
            atexit.register(registry.close_all)


csrf = CSRFProtect()
rooms = RoomSessions()
