"""Decorators for the room-scoped blueprints."""

from functools import wraps

from scoreroom.errors import AuthorizationError, SyncPendingError
from scoreroom.sync.session import current_device


def room_required(f=None, role=None, ready=False):
    """Refuse the request unless the device is in a room.

    Usage:
    @room_required
    def view():
        ...

    @room_required(role="scorer", ready=True)
    def mutate():
        ...
    """

    def decorator(func):
        @wraps(func)
        def decorated_function(*args, **kwargs):
            device = current_device()
            if device.sync is None:
                raise AuthorizationError("Enter a room first.")
            if role and device.role != role:
                raise AuthorizationError(f"Only the {role} can do that.")
            if ready and not device.ready:
                raise SyncPendingError()
            return func(device, *args, **kwargs)

        return decorated_function

    if f:
        return decorator(f)
    return decorator
