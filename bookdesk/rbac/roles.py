"""
Role definitions and permission matrix.

Matrix format:  ROLE -> RESOURCE -> ACTION -> bool
  - Roles     : admin, manager, staff, customer
  - Resources : bookings, customers, staff, teams, reports, settings,
                users, service_packages
  - Actions   : create, read, update, delete, export

Every table in this module is read-only once the module is imported.
"""

from enum import Enum
from types import MappingProxyType
from typing import Mapping


class Role(str, Enum):
    ADMIN = "admin"
    MANAGER = "manager"
    STAFF = "staff"
    CUSTOMER = "customer"


class Resource(str, Enum):
    BOOKINGS = "bookings"
    CUSTOMERS = "customers"
    STAFF = "staff"
    TEAMS = "teams"
    REPORTS = "reports"
    SETTINGS = "settings"
    USERS = "users"
    SERVICE_PACKAGES = "service_packages"


class Action(str, Enum):
    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"
    EXPORT = "export"


def _row(*granted: Action) -> Mapping[str, bool]:
    """Build a total action row: every action present, only `granted` True."""
    return MappingProxyType({action.value: action in granted for action in Action})


_ALL = tuple(Action)
_NONE: tuple[Action, ...] = ()
C, R, U, E = Action.CREATE, Action.READ, Action.UPDATE, Action.EXPORT


_MATRIX: dict[Role, dict[Resource, tuple[Action, ...]]] = {
    Role.ADMIN: {resource: _ALL for resource in Resource},
    Role.MANAGER: {
        Resource.BOOKINGS: (C, R, U, E),
        Resource.CUSTOMERS: (C, R, U, E),
        Resource.STAFF: (R, U),
        Resource.TEAMS: (C, R, U, E),
        Resource.REPORTS: (R, E),
        Resource.SETTINGS: _NONE,
        Resource.USERS: _NONE,
        Resource.SERVICE_PACKAGES: (R,),
    },
    Role.STAFF: {
        Resource.BOOKINGS: (R, U),       # update own assignments
        Resource.CUSTOMERS: (R,),
        Resource.STAFF: (R, U),          # own profile only
        Resource.TEAMS: (R,),
        Resource.REPORTS: _NONE,
        Resource.SETTINGS: _NONE,
        Resource.USERS: _NONE,
        Resource.SERVICE_PACKAGES: (R,),
    },
    Role.CUSTOMER: {
        # ownership of the record is enforced by the caller
        Resource.BOOKINGS: (R,),
        Resource.CUSTOMERS: (R,),
        Resource.STAFF: _NONE,
        Resource.TEAMS: _NONE,
        Resource.REPORTS: _NONE,
        Resource.SETTINGS: _NONE,
        Resource.USERS: _NONE,
        Resource.SERVICE_PACKAGES: _NONE,
    },
}

PERMISSION_MATRIX: Mapping[str, Mapping[str, Mapping[str, bool]]] = MappingProxyType(
    {
        role.value: MappingProxyType(
            {resource.value: _row(*granted) for resource, granted in resources.items()}
        )
        for role, resources in _MATRIX.items()
    }
)


# ── Feature flags (capabilities outside the resource matrix) ─────
FEATURE_FLAGS: Mapping[str, frozenset[str]] = MappingProxyType(
    {
        "view_financial_reports": frozenset({"admin"}),
        "manage_user_roles": frozenset({"admin"}),
        "view_audit_logs": frozenset({"admin"}),
        "export_data": frozenset({"admin", "manager"}),
        "manage_settings": frozenset({"admin"}),
        "create_staff": frozenset({"admin"}),
        "delete_records": frozenset({"admin"}),
        "view_all_data": frozenset({"admin", "manager"}),
        "manage_teams": frozenset({"admin", "manager"}),
        "assign_staff": frozenset({"admin", "manager"}),
        "view_archived": frozenset({"admin"}),
    }
)


# ── Route prefixes → allowed roles ───────────────────────────────
_BACK_OFFICE = frozenset({"admin", "manager"})
_FIELD = frozenset({"admin", "manager", "staff"})

ROUTE_PERMISSIONS: Mapping[str, frozenset[str]] = MappingProxyType(
    {
        "/admin": _BACK_OFFICE,
        "/admin/bookings": _BACK_OFFICE,
        "/admin/customers": _BACK_OFFICE,
        "/admin/staff": _BACK_OFFICE,
        "/admin/teams": _BACK_OFFICE,
        "/admin/reports": _BACK_OFFICE,
        "/admin/calendar": _BACK_OFFICE,
        "/admin/weekly-schedule": _BACK_OFFICE,
        "/admin/chat": _BACK_OFFICE,
        "/admin/packages": _BACK_OFFICE,
        "/admin/settings": frozenset({"admin"}),
        "/admin/profile": _BACK_OFFICE,
        "/staff": _FIELD,
        "/staff/calendar": _FIELD,
        "/staff/chat": _FIELD,
        "/staff/profile": _FIELD,
    }
)


# ── Resources with a reversible "archived" state ─────────────────
SOFT_DELETE_RESOURCES: frozenset[str] = frozenset(
    {
        Resource.BOOKINGS.value,
        Resource.CUSTOMERS.value,
        Resource.TEAMS.value,
        Resource.SERVICE_PACKAGES.value,
    }
)


def get_role_permissions(role: str) -> Mapping[str, Mapping[str, bool]]:
    """Return the read-only matrix rows for a given role name."""
    if isinstance(role, Enum):
        role = role.value
    return PERMISSION_MATRIX.get(role, MappingProxyType({}))
