"""Room entry blueprint."""

from flask import Blueprint

bp = Blueprint("room", __name__, url_prefix="/room")

from . import routes  # noqa: E402, F401
from .services import RoomService  # noqa: E402

__all__ = ["RoomService", "routes"]
