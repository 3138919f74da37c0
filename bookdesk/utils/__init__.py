from .helpers import serialize_mongo_doc, parse_object_id
from .logger import Logger
from .exceptions import (
    PermissionDeniedError,
    NotFoundError,
    ValidationError,
    InvalidTransitionError,
)

__all__ = [
    "serialize_mongo_doc",
    "parse_object_id",
    "Logger",
    "PermissionDeniedError",
    "NotFoundError",
    "ValidationError",
    "InvalidTransitionError",
]
