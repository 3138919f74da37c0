"""
Permission checking utilities.

Pure lookups against the static tables in ``roles``. Every check is
fail-closed: a missing role, an unknown resource/action/flag, or a role
without a matrix row resolves to ``False`` and never raises.
"""

from enum import Enum
from typing import Any

from .roles import (
    FEATURE_FLAGS,
    PERMISSION_MATRIX,
    ROUTE_PERMISSIONS,
    Action,
    Role,
)


def table_key(value: Any) -> str | None:
    """Normalize an Enum member or raw string to its table key."""
    if isinstance(value, Enum):
        value = value.value
    return value if isinstance(value, str) and value else None


def check_permission(role, action, resource) -> bool:
    """
    Check if a role may perform an action on a resource.

    Examples:
      check_permission("manager", "delete", "bookings")  → False
      check_permission("admin", "delete", "bookings")    → True
      check_permission("manager", "update", "bookings")  → True
      check_permission(None, "read", "bookings")         → False
    """
    role_key = table_key(role)
    if role_key is None:
        return False

    role_permissions = PERMISSION_MATRIX.get(role_key)
    if not role_permissions:
        return False

    resource_permissions = role_permissions.get(table_key(resource))
    if not resource_permissions:
        return False

    return resource_permissions.get(table_key(action), False)


def can_delete(role, resource) -> bool:
    """Shorthand for check_permission(role, "delete", resource)."""
    return check_permission(role, Action.DELETE, resource)


def _matches_prefix(path: str, prefix: str) -> bool:
    # "/admin" covers "/admin" and "/admin/..." but not "/administrator"
    if prefix == "/":
        return True
    return path == prefix or path.startswith(prefix.rstrip("/") + "/")


def can_access_route(role, path: str) -> bool:
    """
    Check if a role can enter a route.

    The longest configured prefix decides. Paths with no configured
    prefix are open to any authenticated role; an absent role is denied
    everywhere.
    """
    role_key = table_key(role)
    if role_key is None:
        return False

    segments = (path or "").split("?", 1)[0].split("/")
    normalized = "/" + "/".join(s for s in segments if s)
    matches = [p for p in ROUTE_PERMISSIONS if _matches_prefix(normalized, p)]
    if not matches:
        return True

    allowed_roles = ROUTE_PERMISSIONS[max(matches, key=len)]
    return role_key in allowed_roles


def has_feature(role, feature: str) -> bool:
    """Check if a role has access to a named feature flag."""
    role_key = table_key(role)
    if role_key is None:
        return False

    allowed_roles = FEATURE_FLAGS.get(table_key(feature))
    if not allowed_roles:
        return False

    return role_key in allowed_roles


def get_permissions_for_role(role) -> dict[str, dict[str, bool]]:
    """
    Return a snapshot of the role's per-resource action map.

    The result is a plain dict copy; mutating it never touches the matrix.
    """
    rows = PERMISSION_MATRIX.get(table_key(role)) or {}
    return {resource: dict(actions) for resource, actions in rows.items()}


def is_admin(role) -> bool:
    return table_key(role) == Role.ADMIN.value


def is_manager_or_admin(role) -> bool:
    return table_key(role) in (Role.ADMIN.value, Role.MANAGER.value)


def is_staff(role) -> bool:
    return table_key(role) == Role.STAFF.value
