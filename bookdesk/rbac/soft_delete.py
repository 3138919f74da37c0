"""
Soft delete permissions.

Soft delete and restore are recovery actions open to admin and manager.
Permanent deletion is admin-only, independent of the matrix "delete" action.
"""

from .permissions import table_key
from .roles import SOFT_DELETE_RESOURCES, Role

_RECOVERY_ROLES = frozenset({Role.ADMIN.value, Role.MANAGER.value})


def supports_soft_delete(resource) -> bool:
    """Check if a resource supports soft delete (archive/restore)."""
    return table_key(resource) in SOFT_DELETE_RESOURCES


def can_soft_delete(role, resource) -> bool:
    """Admin and manager can soft delete resources that support it."""
    if not supports_soft_delete(resource):
        return False
    return table_key(role) in _RECOVERY_ROLES


def can_restore(role) -> bool:
    return table_key(role) in _RECOVERY_ROLES


def can_permanently_delete(role) -> bool:
    """Only admin can permanently delete."""
    return table_key(role) == Role.ADMIN.value
