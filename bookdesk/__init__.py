"""
Bookdesk — authorization and lifecycle rules for the operations console.

Subpackages:
    rbac      : permission matrix, route guard, feature flags, soft-delete policy
    bookings  : booking status lifecycle
    revenue   : per-member revenue allocation for team bookings
    customers : relationship tier and auto-tag classification
    archive   : soft delete / restore / permanent delete
"""

__version__ = "1.0.0"
