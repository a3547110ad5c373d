"""Contestant view blueprint."""

from flask import Blueprint

bp = Blueprint("contestant", __name__, url_prefix="/contestant")

from . import routes  # noqa: E402, F401

__all__ = ["routes"]
