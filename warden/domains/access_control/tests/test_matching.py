"""Unit tests for permission matching rules."""

import pytest

from warden.domains.access_control.matching import (
    MatchKind,
    match_permission,
    permission_matches,
)
from warden.schemas.permission import Permission


def _perm(resource: str, action: str) -> Permission:
    name = f"{resource}:{action}"
    return Permission(id=name, name=name, resource=resource, action=action)


@pytest.mark.parametrize(
    "resource,action,expected",
    [
        ("users", "read", MatchKind.EXACT),
        ("users", "*", MatchKind.WILDCARD_ACTION),
        ("*", "read", MatchKind.WILDCARD_RESOURCE),
        ("*", "*", MatchKind.FULL_WILDCARD),
    ],
)
def test_match_kinds(resource, action, expected):
    assert match_permission(_perm(resource, action), "users", "read") == expected


@pytest.mark.parametrize(
    "resource,action",
    [
        ("users", "update"),
        ("roles", "read"),
        ("roles", "*"),
        ("*", "update"),
    ],
)
def test_non_matching(resource, action):
    assert match_permission(_perm(resource, action), "users", "read") is None
    assert permission_matches(_perm(resource, action), "users", "read") is False


def test_matching_is_case_sensitive():
    assert match_permission(_perm("Users", "Read"), "users", "read") is None


def test_requested_wildcard_is_a_literal():
    """A request for action "*" is only granted by a wildcard-action permission."""
    assert match_permission(_perm("users", "read"), "users", "*") is None
    assert match_permission(_perm("users", "*"), "users", "*") == MatchKind.EXACT


def test_explanation_labels():
    assert [k.value for k in MatchKind] == [
        "exact",
        "wildcard action",
        "wildcard resource",
        "full wildcard",
    ]
