"""Permission matching rules.

A permission grants ``(resource, action)`` when each of its fields either
equals the requested value or is the wildcard. Comparison is exact and
case-sensitive.
"""

from enum import Enum
from typing import Optional

from warden.schemas.permission import WILDCARD, Permission


class MatchKind(str, Enum):
    """How a permission satisfied a request, in precedence order."""

    EXACT = "exact"
    WILDCARD_ACTION = "wildcard action"
    WILDCARD_RESOURCE = "wildcard resource"
    FULL_WILDCARD = "full wildcard"


def match_permission(permission: Permission, resource: str, action: str) -> Optional[MatchKind]:
    """Return how ``permission`` grants ``(resource, action)``, or None if it does not."""
    if permission.resource == resource:
        if permission.action == action:
            return MatchKind.EXACT
        if permission.action == WILDCARD:
            return MatchKind.WILDCARD_ACTION
        return None
    if permission.resource == WILDCARD:
        if permission.action == action:
            return MatchKind.WILDCARD_RESOURCE
        if permission.action == WILDCARD:
            return MatchKind.FULL_WILDCARD
    return None


def permission_matches(permission: Permission, resource: str, action: str) -> bool:
    """Whether ``permission`` grants ``(resource, action)``."""
    return match_permission(permission, resource, action) is not None
