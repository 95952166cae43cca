"""
Identifier helpers.

Registry rows use server-generated UUIDs (gen_random_uuid()).
Any id arriving from a caller is parsed here before it reaches SQL.
"""
import uuid
from typing import Union

from .errors import ValidationError


def parse_uuid(value: Union[str, uuid.UUID], what: str = "id") -> uuid.UUID:
    """
    Parse a caller-supplied UUID.

    Raises:
        ValidationError: If value is not a UUID
    """
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (ValueError, TypeError, AttributeError):
        raise ValidationError(f"Malformed {what}: expected UUID")
