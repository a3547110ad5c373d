"""Routes for the room blueprint."""

from __future__ import annotations

from typing import Any

from flask import current_app
from flask_wtf.csrf import generate_csrf

from scoreroom.core.constants import NOTICE_SUCCESS, ROLE_CONTESTANT, ROLE_SCORER
from scoreroom.device.identity import IdentityProvider, normalize_room_code
from scoreroom.device.storage import SessionStorage
from scoreroom.sync.session import current_device, current_registry

from . import bp
from .forms import LanguageForm, RoomEntryForm
from .services import RoomService
from .utils import respond, validate_form


@bp.route("/status", methods=["GET"])
def status() -> Any:
    """Report store connectivity and this device's room state."""
    device = current_device()
    registry = current_registry()
    cookie_identity = IdentityProvider(SessionStorage())
    return respond(
        device,
        firebase={"ready": registry.status.ready, "error": registry.status.error},
        room=device.room_code,
        role=device.role,
        ready=device.ready,
        lastRoom=cookie_identity.last_room,
        language=cookie_identity.language,
        clientId=device.client_id,
        csrfToken=generate_csrf(),
    )


@bp.route("/scorer", methods=["POST"])
def enter_scorer() -> Any:
    """Enter a room as its scorer, creating it on first entry."""
    device = current_device()
    registry = current_registry()
    form = validate_form(RoomEntryForm())

    code = normalize_room_code(form.code.data)
    password = form.password.data or device.identity.scorer_pin(code) or ""
    code = RoomService.enter_as_scorer(
        registry.store, registry.status, code, password, registry.clock()
    )

    device.identity.set_scorer_pin(code, password)
    IdentityProvider(SessionStorage()).last_room = code
    device.enter_room(code, ROLE_SCORER)
    current_app.logger.info(f"Scorer entered room {code}")
    device.notices.push(f"Entered room {code}.", NOTICE_SUCCESS)
    return respond(device, room=code, role=ROLE_SCORER, ready=device.ready)


@bp.route("/contestant", methods=["POST"])
def enter_contestant() -> Any:
    """Join an existing room as a contestant."""
    device = current_device()
    registry = current_registry()
    form = validate_form(RoomEntryForm())

    code = RoomService.join_as_contestant(registry.store, registry.status, form.code.data)

    IdentityProvider(SessionStorage()).last_room = code
    device.enter_room(code, ROLE_CONTESTANT)
    device.notices.push(f"Joined room {code}.", NOTICE_SUCCESS)
    return respond(device, room=code, role=ROLE_CONTESTANT, ready=device.ready)


@bp.route("/leave", methods=["POST"])
def leave() -> Any:
    """Close this device's room."""
    device = current_device()
    device.leave()
    return respond(device, room=None, role=None, ready=False)


@bp.route("/language", methods=["POST"])
def set_language() -> Any:
    """Remember the interface language for this device."""
    device = current_device()
    form = validate_form(LanguageForm())
    IdentityProvider(SessionStorage()).language = form.lang.data
    device.identity.language = form.lang.data
    return respond(device, language=form.lang.data)
