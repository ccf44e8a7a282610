"""Small helpers shared by the routers."""

import uuid

from adminpanel.exceptions import ValidationError


def parse_id(value: str, name: str = "ID") -> uuid.UUID:
    """
    Parse a path identifier.

    Raises:
        ValidationError: If ``value`` is empty or not a UUID
    """
    if not value:
        raise ValidationError(f"{name} is required")
    try:
        return uuid.UUID(value)
    except ValueError:
        raise ValidationError(f"Invalid {name} format")
