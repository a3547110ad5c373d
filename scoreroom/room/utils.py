"""Request helpers shared by the room, scorer and contestant blueprints."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from flask import jsonify

from scoreroom.errors import ValidationError
from scoreroom.schedule.services import bracket_rounds
from scoreroom.stats.services import rank_players
from scoreroom.timer.services import format_countdown, remaining_seconds

if TYPE_CHECKING:
    from flask import Response
    from flask_wtf import FlaskForm

    from scoreroom.core.types import TimerState
    from scoreroom.sync.client import RoomSyncClient
    from scoreroom.sync.session import DeviceSession


def validate_form(form: FlaskForm) -> FlaskForm:
    """Validate a submitted form, raising its first error as a ValidationError."""
    if form.validate_on_submit():
        return form
    for field_name, errors in form.errors.items():
        if errors:
            field = getattr(form, field_name, None)
            label = field.label.text if field is not None else field_name
            raise ValidationError(f"{label}: {errors[0]}")
    raise ValidationError()


def respond(device: DeviceSession, status_code: int = 200, **payload: Any) -> tuple[Response, int]:
    """JSON response that also hands the device its pending notices."""
    payload["notices"] = [n.to_dict() for n in device.notices.drain()]
    return jsonify(payload), status_code


def timer_view(timer: TimerState, now: int) -> dict[str, Any]:
    """Timer slice plus the countdown every client should display."""
    seconds = remaining_seconds(timer, now)
    return {**timer, "remaining": seconds, "display": format_countdown(seconds)}


def room_state(sync: RoomSyncClient, now: int) -> dict[str, Any]:
    """Ranked leaderboard, bracket and timer of a room."""
    matches = sync.matches
    return {
        "room": sync.room_code,
        "ready": sync.ready,
        "players": rank_players(sync.players),
        "matches": matches,
        "bracket": bracket_rounds(matches),
        "timer": timer_view(sync.timer, now),
    }
