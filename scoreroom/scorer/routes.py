"""Routes for the scorer blueprint."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from flask import current_app

from scoreroom.core.constants import NOTICE_SUCCESS, ROLE_SCORER
from scoreroom.room.decorators import room_required
from scoreroom.room.utils import respond, room_state, timer_view, validate_form

from . import bp
from .forms import (
    BroadcastForm,
    ConfirmForm,
    PlayerForm,
    PointsForm,
    ScheduleForm,
    ScoreForm,
    TimerForm,
)
from .services import ScorerService

if TYPE_CHECKING:
    from scoreroom.sync.session import DeviceSession


def _service(device: DeviceSession) -> ScorerService:
    return ScorerService(device.sync, clock=device.clock)


@bp.route("/state", methods=["GET"])
@room_required(role=ROLE_SCORER)
def state(device: DeviceSession) -> Any:
    """Full room view for the scorer, including the message log."""
    payload = room_state(device.sync, device.clock())
    payload["messages"] = device.sync.messages
    return respond(device, **payload)


@bp.route("/players", methods=["POST"])
@room_required(role=ROLE_SCORER, ready=True)
def add_player(device: DeviceSession) -> Any:
    """Add a player to the roster."""
    form = validate_form(PlayerForm())
    player = _service(device).add_player(form.name.data)
    device.notices.push(f"Added {player['name']}.", NOTICE_SUCCESS)
    return respond(device, 201, player=player)


@bp.route("/players/<string:player_id>/rename", methods=["POST"])
@room_required(role=ROLE_SCORER, ready=True)
def rename_player(device: DeviceSession, player_id: str) -> Any:
    """Change a player's display name."""
    form = validate_form(PlayerForm())
    players = _service(device).rename_player(player_id, form.name.data)
    return respond(device, players=players)


@bp.route("/players/<string:player_id>/delete", methods=["POST"])
@room_required(role=ROLE_SCORER, ready=True)
def delete_player(device: DeviceSession, player_id: str) -> Any:
    """Remove a player and every match involving them."""
    players = _service(device).delete_player(player_id)
    return respond(device, players=players, matches=device.sync.matches)


@bp.route("/players/<string:player_id>/points", methods=["POST"])
@room_required(role=ROLE_SCORER, ready=True)
def adjust_points(device: DeviceSession, player_id: str) -> Any:
    """Add or subtract points outside of a match."""
    form = validate_form(PointsForm())
    players = _service(device).adjust_score(player_id, form.delta.data)
    return respond(device, players=players)


@bp.route("/matches/<string:match_id>/result", methods=["POST"])
@room_required(role=ROLE_SCORER, ready=True)
def submit_result(device: DeviceSession, match_id: str) -> Any:
    """Record the final score of a match."""
    form = validate_form(ScoreForm())
    players = _service(device).submit_result(
        match_id, form.score_p1.data, form.score_p2.data
    )
    device.notices.push("Match result saved.", NOTICE_SUCCESS)
    return respond(device, players=players, matches=device.sync.matches)


@bp.route("/schedule", methods=["POST"])
@room_required(role=ROLE_SCORER, ready=True)
def generate_schedule(device: DeviceSession) -> Any:
    """Replace the match log with a new schedule."""
    form = validate_form(ScheduleForm())
    matches = _service(device).generate_schedule(form.format.data, form.confirm.data)
    current_app.logger.info(
        f"Schedule generated in room {device.room_code}: {len(matches)} matches"
    )
    return respond(device, 201, matches=matches)


@bp.route("/timer/start", methods=["POST"])
@room_required(role=ROLE_SCORER, ready=True)
def start_timer(device: DeviceSession) -> Any:
    """Start or resume the shared countdown."""
    form = validate_form(TimerForm())
    minutes = form.minutes.data or device.settings.timer_default_minutes
    timer = _service(device).start_timer(minutes)
    return respond(device, timer=timer_view(timer, device.clock()))


@bp.route("/timer/pause", methods=["POST"])
@room_required(role=ROLE_SCORER, ready=True)
def pause_timer(device: DeviceSession) -> Any:
    """Freeze the shared countdown."""
    timer = _service(device).pause_timer()
    return respond(device, timer=timer_view(timer, device.clock()))


@bp.route("/timer/reset", methods=["POST"])
@room_required(role=ROLE_SCORER, ready=True)
def reset_timer(device: DeviceSession) -> Any:
    """Stop the countdown and re-arm it with a full duration."""
    form = validate_form(TimerForm())
    minutes = form.minutes.data or device.settings.timer_default_minutes
    timer = _service(device).reset_timer(minutes)
    return respond(device, timer=timer_view(timer, device.clock()))


@bp.route("/broadcast", methods=["POST"])
@room_required(role=ROLE_SCORER, ready=True)
def broadcast(device: DeviceSession) -> Any:
    """Send a message to everyone or to selected players."""
    form = BroadcastForm()
    form.player_ids.choices = [
        (p["id"], p.get("name", "")) for p in device.sync.players
    ]
    validate_form(form)
    player_ids = (form.player_ids.data or []) if form.target.data == "select" else None
    message = _service(device).broadcast(form.text.data, player_ids)
    device.notices.push("Message sent.", NOTICE_SUCCESS)
    return respond(device, 201, message=message)


@bp.route("/reset", methods=["POST"])
@room_required(role=ROLE_SCORER, ready=True)
def reset_room(device: DeviceSession) -> Any:
    """Wipe the roster and match log."""
    form = validate_form(ConfirmForm())
    _service(device).reset_room(form.confirm.data)
    current_app.logger.warning(f"Room {device.room_code} was reset by the scorer")
    return respond(device, players=[], matches=[])
