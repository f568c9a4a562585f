"""
Identifier validation for remote resources.

Every id-addressed operation checks its identifier here before touching the
network, so a malformed id fails locally with a clear message instead of
costing a round trip.
"""

from __future__ import annotations

import re
from typing import Any, Optional, Pattern, Union

from .models.resource import ID_SUFFIX_LENGTH, ResourceType

_ANY_IDENTIFIER = re.compile(rf"^([a-z_]+)/[a-zA-Z0-9]{{{ID_SUFFIX_LENGTH}}}$")


def validate(candidate: Any, pattern: Union[str, Pattern[str]]) -> bool:
    """
    Check that ``candidate`` is a non-empty string fully matching ``pattern``.

    Args:
        candidate: Value to check
        pattern: Compiled regex or pattern string

    Returns:
        True if the candidate is a valid identifier, False otherwise
    """
    if not isinstance(candidate, str) or not candidate:
        return False
    return re.fullmatch(pattern, candidate) is not None


def validate_resource_id(candidate: Any, resource_type: ResourceType) -> bool:
    """Check that ``candidate`` is a valid identifier of ``resource_type``."""
    return validate(candidate, resource_type.pattern)


def resource_type_of(candidate: Any) -> Optional[str]:
    """
    Return the type prefix of a well-formed identifier.

    Returns:
        The type name (e.g. ``"forecast"``), or None if the value is not
        shaped like an identifier
    """
    if not isinstance(candidate, str):
        return None
    match = _ANY_IDENTIFIER.fullmatch(candidate)
    return match.group(1) if match else None


__all__ = ["validate", "validate_resource_id", "resource_type_of"]
