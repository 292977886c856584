"""Unit tests for PermissionResolver.

Uses fakes for all repositories.
"""

import pytest

from warden.domains.access_control.resolver import PermissionResolver, role_applies_to_org
from warden.domains.permissions.fakes.repository import FakePermissionRepository
from warden.domains.roles.fakes.repository import FakeRoleRepository
from warden.domains.users.exceptions import UserNotFoundError
from warden.domains.users.fakes.repository import FakeUserRepository
from warden.schemas.permission import Permission
from warden.schemas.role import Role
from warden.schemas.user import User

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _perm(pid: str, resource: str = "users", action: str = "read") -> Permission:
    return Permission(id=pid, name=pid, resource=resource, action=action)


def _role(rid: str, *permission_ids: str, org: str = None, default: bool = False) -> Role:
    return Role(
        id=rid,
        name=rid.title(),
        organization_id=org,
        permission_ids=list(permission_ids),
        is_system_default=default,
    )


def _build_resolver(user: User, roles=(), permissions=()):
    users = FakeUserRepository()
    users.seed(user)
    role_repo = FakeRoleRepository()
    role_repo.seed(*roles)
    permission_repo = FakePermissionRepository()
    permission_repo.seed(*permissions)
    return PermissionResolver(users, role_repo, permission_repo), role_repo, permission_repo


# ---------------------------------------------------------------------------
# role_applies_to_org
# ---------------------------------------------------------------------------


class TestRoleAppliesToOrg:
    def test_system_role_applies_everywhere(self):
        assert role_applies_to_org(_role("r"), "o1") is True
        assert role_applies_to_org(_role("r", org=""), "o1") is True

    def test_scoped_role_without_request_org(self):
        assert role_applies_to_org(_role("r", org="o1"), None) is True
        assert role_applies_to_org(_role("r", org="o1"), "") is True

    def test_scoped_role_matching_org(self):
        assert role_applies_to_org(_role("r", org="o1"), "o1") is True

    def test_scoped_role_other_org(self):
        assert role_applies_to_org(_role("r", org="o1"), "o2") is False

    def test_system_default_role_ignores_org_tag(self):
        assert role_applies_to_org(_role("r", org="o1", default=True), "o2") is True


# ---------------------------------------------------------------------------
# get_user / resolve_roles
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_get_user_missing_raises():
    resolver, _, _ = _build_resolver(User(id="u1"))

    with pytest.raises(UserNotFoundError):
        await resolver.get_user("ghost")


@pytest.mark.asyncio
async def test_get_user_propagates_repository_errors(
    fake_user_repo, fake_role_repo, fake_permission_repo
):
    fake_user_repo.fail_with(ConnectionError("db down"))
    resolver = PermissionResolver(fake_user_repo, fake_role_repo, fake_permission_repo)

    with pytest.raises(ConnectionError):
        await resolver.get_user("u1")


@pytest.mark.asyncio
async def test_resolve_roles_keeps_assignment_order():
    user = User(id="u1", role_ids=["b", "a"])
    resolver, _, _ = _build_resolver(user, roles=[_role("a"), _role("b")])

    roles = await resolver.resolve_roles(user)

    assert [r.id for r in roles] == ["b", "a"]


@pytest.mark.asyncio
async def test_resolve_roles_skips_missing_and_failing_roles():
    user = User(id="u1", role_ids=["missing", "broken", "ok"])
    resolver, role_repo, _ = _build_resolver(user, roles=[_role("broken"), _role("ok")])
    role_repo.fail_on("broken", RuntimeError("timeout"))

    roles = await resolver.resolve_roles(user)

    assert [r.id for r in roles] == ["ok"]


@pytest.mark.asyncio
async def test_resolve_roles_filters_by_org():
    user = User(id="u1", role_ids=["global", "o1", "o2", "default"])
    roles = [
        _role("global"),
        _role("o1", org="O1"),
        _role("o2", org="O2"),
        _role("default", org="O2", default=True),
    ]
    resolver, _, _ = _build_resolver(user, roles=roles)

    in_o1 = await resolver.resolve_roles(user, "O1")
    unscoped = await resolver.resolve_roles(user)

    assert [r.id for r in in_o1] == ["global", "o1", "default"]
    assert [r.id for r in unscoped] == ["global", "o1", "o2", "default"]


# ---------------------------------------------------------------------------
# permissions_for_role / get_user_permissions
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_permissions_for_role_skips_bad_references():
    role = _role("r", "p1", "gone", "boom", "p2")
    resolver, _, permission_repo = _build_resolver(
        User(id="u1"), permissions=[_perm("p1"), _perm("p2"), _perm("boom")]
    )
    permission_repo.fail_on("boom", RuntimeError("timeout"))

    permissions = await resolver.permissions_for_role(role)

    assert [p.id for p in permissions] == ["p1", "p2"]


@pytest.mark.asyncio
async def test_get_user_permissions_dedups_by_id_in_first_seen_order():
    user = User(id="u1", role_ids=["a", "b"])
    resolver, _, _ = _build_resolver(
        user,
        roles=[_role("a", "p2", "p1"), _role("b", "p1", "p3")],
        permissions=[_perm("p1"), _perm("p2"), _perm("p3")],
    )

    permissions = await resolver.get_user_permissions("u1")

    assert [p.id for p in permissions] == ["p2", "p1", "p3"]


@pytest.mark.asyncio
async def test_get_user_permissions_respects_org_scope():
    user = User(id="u1", role_ids=["a", "b"])
    resolver, _, _ = _build_resolver(
        user,
        roles=[_role("a", "p1", org="O1"), _role("b", "p2", org="O2")],
        permissions=[_perm("p1"), _perm("p2")],
    )

    permissions = await resolver.get_user_permissions("u1", org_id="O2")

    assert [p.id for p in permissions] == ["p2"]


@pytest.mark.asyncio
async def test_user_without_roles_has_no_permissions():
    resolver, _, _ = _build_resolver(User(id="u1"))

    assert await resolver.get_user_permissions("u1") == []
