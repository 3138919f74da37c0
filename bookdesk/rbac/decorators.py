"""
Declarative permission decorators for async handlers.

Usage:
    @require_permission("delete", "bookings")
    async def delete_booking(request: Request, booking_id: str):
        ...

The caller's role is read from ``request.state.user_role``, which the
authentication layer sets before the handler runs.
"""

from functools import wraps
from starlette.requests import Request

from bookdesk.utils.exceptions import PermissionDeniedError
from .permissions import can_access_route, check_permission


def _find_request(args, kwargs) -> Request:
    request: Request | None = kwargs.get("request")
    if request is None:
        for arg in args:
            if isinstance(arg, Request):
                request = arg
                break

    if request is None:
        raise RuntimeError("Request object not found in handler")
    return request


def require_permission(action: str, resource: str):
    """
    Decorator that checks the current role may perform `action` on
    `resource`. Raises PermissionDeniedError (403) otherwise.
    """

    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            request = _find_request(args, kwargs)
            role = getattr(request.state, "user_role", None)

            if not check_permission(role, action, resource):
                raise PermissionDeniedError(
                    f"Permission denied. Requires: {resource}:{action}"
                )

            return await func(*args, **kwargs)

        return wrapper

    return decorator


def require_route():
    """Decorator that applies the route table to the request path."""

    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            request = _find_request(args, kwargs)
            role = getattr(request.state, "user_role", None)

            if not can_access_route(role, request.url.path):
                raise PermissionDeniedError(
                    f"Permission denied for route {request.url.path}"
                )

            return await func(*args, **kwargs)

        return wrapper

    return decorator
