"""
Utility functions
"""
from .errors import (
    RegistryError,
    NotFoundError,
    ConflictError,
    ValidationError,
    NetworkError,
    InternalError,
)
from .datetime_utils import utc_now
from .ids import parse_uuid

__all__ = [
    'RegistryError',
    'NotFoundError',
    'ConflictError',
    'ValidationError',
    'NetworkError',
    'InternalError',
    'utc_now',
    'parse_uuid',
]
