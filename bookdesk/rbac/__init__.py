from .roles import (
    Role,
    Resource,
    Action,
    PERMISSION_MATRIX,
    FEATURE_FLAGS,
    ROUTE_PERMISSIONS,
    SOFT_DELETE_RESOURCES,
    get_role_permissions,
)
from .permissions import (
    check_permission,
    can_delete,
    can_access_route,
    has_feature,
    get_permissions_for_role,
    is_admin,
    is_manager_or_admin,
    is_staff,
)
from .soft_delete import (
    supports_soft_delete,
    can_soft_delete,
    can_restore,
    can_permanently_delete,
)
from .decorators import require_permission, require_route

__all__ = [
    "Role",
    "Resource",
    "Action",
    "PERMISSION_MATRIX",
    "FEATURE_FLAGS",
    "ROUTE_PERMISSIONS",
    "SOFT_DELETE_RESOURCES",
    "get_role_permissions",
    "check_permission",
    "can_delete",
    "can_access_route",
    "has_feature",
    "get_permissions_for_role",
    "is_admin",
    "is_manager_or_admin",
    "is_staff",
    "supports_soft_delete",
    "can_soft_delete",
    "can_restore",
    "can_permanently_delete",
    "require_permission",
    "require_route",
]
