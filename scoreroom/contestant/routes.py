"""Routes for the contestant blueprint."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from scoreroom.broadcast.services import overlay_title
from scoreroom.core.constants import NOTICE_SUCCESS, ROLE_CONTESTANT
from scoreroom.room.decorators import room_required
from scoreroom.room.utils import respond, room_state, validate_form

from . import bp
from .forms import ClaimForm

if TYPE_CHECKING:
    from scoreroom.sync.session import DeviceSession


@bp.route("/state", methods=["GET"])
@room_required(role=ROLE_CONTESTANT)
def state(device: DeviceSession) -> Any:
    """Leaderboard, bracket and timer, plus the player this device holds."""
    payload = room_state(device.sync, device.clock())
    payload["currentPlayer"] = device.claims.current_player()
    return respond(device, **payload)


@bp.route("/claim", methods=["POST"])
@room_required(role=ROLE_CONTESTANT, ready=True)
def claim(device: DeviceSession) -> Any:
    """Bind this device to a player on the roster."""
    form = validate_form(ClaimForm())
    player = device.claims.claim(form.player_id.data)
    device.notices.push(f"You are {player.get('name')}.", NOTICE_SUCCESS)
    return respond(device, currentPlayer=player)


@bp.route("/release", methods=["POST"])
@room_required(role=ROLE_CONTESTANT)
def release(device: DeviceSession) -> Any:
    """Let go of this device's player."""
    device.claims.release()
    return respond(device, currentPlayer=None)


@bp.route("/overlay", methods=["GET"])
@room_required(role=ROLE_CONTESTANT)
def overlay(device: DeviceSession) -> Any:
    """The broadcast this device should be showing right now, if any."""
    message = device.overlay.update(
        device.sync.messages, device.claims.selected_player_id, device.clock()
    )
    if message is None:
        return respond(device, message=None)
    return respond(device, message=message, title=overlay_title(message))


@bp.route("/overlay/dismiss", methods=["POST"])
@room_required(role=ROLE_CONTESTANT)
def dismiss_overlay(device: DeviceSession) -> Any:
    """Close the broadcast overlay."""
    device.overlay.dismiss()
    return respond(device, message=None)
