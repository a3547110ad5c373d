"""Scorer console blueprint."""

from flask import Blueprint

bp = Blueprint("scorer", __name__, url_prefix="/scorer")

from . import routes  # noqa: E402, F401
from .services import ScorerService  # noqa: E402

__all__ = ["ScorerService", "routes"]
