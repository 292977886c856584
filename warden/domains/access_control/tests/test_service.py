"""Unit tests for AccessControlService.

Uses fakes for all dependencies; the real PermissionResolver sits between
the service and the fake repositories.
"""

import pytest

from warden.core.exceptions import InvalidInputError, PermissionException
from warden.domains.access_control.exceptions import AccessDeniedError
from warden.domains.access_control.fakes.catalog import FakeResourceCatalog
from warden.domains.access_control.resolver import PermissionResolver
from warden.domains.access_control.service import AccessControlService
from warden.domains.permissions.fakes.repository import FakePermissionRepository
from warden.domains.roles.fakes.repository import FakeRoleRepository
from warden.domains.users.exceptions import UserNotFoundError
from warden.domains.users.fakes.repository import FakeUserRepository
from warden.schemas.access import AccessRequest
from warden.schemas.permission import Permission
from warden.schemas.role import Role
from warden.schemas.user import User

ALL_ACCESS = Permission(id="p-all", name="all_access", resource="*", action="*")
READ_USERS = Permission(id="p-read-users", name="read_users", resource="users", action="read")
MANAGE_ROLES = Permission(id="p-roles", name="manage_roles", resource="roles", action="*")
LIST_ANY = Permission(id="p-list", name="list_anything", resource="*", action="list")

CATALOG = FakeResourceCatalog(
    resources=["users", "roles", "permissions"],
    actions={"users": ["create", "read"], "roles": ["read", "assign"]},
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _role(rid: str, name: str, *permissions: Permission, org: str = None) -> Role:
    return Role(
        id=rid,
        name=name,
        organization_id=org,
        permission_ids=[p.id for p in permissions],
    )


def _build_service(*, roles=(), user_roles=(), catalog=CATALOG, user_orgs=()):
    users = FakeUserRepository()
    users.seed(User(id="u1", role_ids=list(user_roles), organization_ids=list(user_orgs)))
    role_repo = FakeRoleRepository()
    role_repo.seed(*roles)
    permission_repo = FakePermissionRepository()
    permission_repo.seed(ALL_ACCESS, READ_USERS, MANAGE_ROLES, LIST_ANY)
    resolver = PermissionResolver(users, role_repo, permission_repo)
    service = AccessControlService(resolver, catalog)
    return service, role_repo, permission_repo


def _request(resource: str = "users", action: str = "read", org_id: str = None):
    return AccessRequest(user_id="u1", resource=resource, action=action, org_id=org_id)


# ---------------------------------------------------------------------------
# check_access
# ---------------------------------------------------------------------------


class TestCheckAccess:
    @pytest.mark.asyncio
    async def test_full_wildcard_grants_anything(self):
        admin = _role("r-admin", "Admin", ALL_ACCESS)
        service, _, _ = _build_service(roles=[admin], user_roles=["r-admin"])

        assert await service.check_access(_request("users", "delete")) is True

    @pytest.mark.asyncio
    async def test_exact_permission_does_not_grant_other_actions(self):
        viewer = _role("r-viewer", "Viewer", READ_USERS)
        service, _, _ = _build_service(roles=[viewer], user_roles=["r-viewer"])

        assert await service.check_access(_request("users", "read")) is True
        assert await service.check_access(_request("users", "update")) is False

    @pytest.mark.asyncio
    async def test_org_scoped_role_is_excluded_for_other_org(self):
        scoped = _role("r", "R", READ_USERS, org="O1")
        service, _, _ = _build_service(
            roles=[scoped], user_roles=["r"], user_orgs=["O1", "O2"]
        )

        assert await service.check_access(_request(org_id="O2")) is False
        assert await service.check_access(_request(org_id="O1")) is True
        assert await service.check_access(_request()) is True

    @pytest.mark.asyncio
    async def test_system_default_role_applies_in_every_org(self):
        default = _role("r", "R", READ_USERS, org="O1").model_copy(
            update={"is_system_default": True}
        )
        service, _, _ = _build_service(
            roles=[default], user_roles=["r"], user_orgs=["O1", "O2"]
        )

        assert await service.check_access(_request(org_id="O2")) is True

    @pytest.mark.asyncio
    async def test_user_without_roles_is_denied(self):
        service, _, _ = _build_service()

        assert await service.check_access(_request()) is False

    @pytest.mark.asyncio
    async def test_failing_role_does_not_block_other_roles(self):
        broken = _role("r-broken", "Broken", ALL_ACCESS)
        viewer = _role("r-viewer", "Viewer", READ_USERS)
        service, role_repo, _ = _build_service(
            roles=[broken, viewer], user_roles=["r-broken", "r-viewer"]
        )
        role_repo.fail_on("r-broken", RuntimeError("timeout"))

        assert await service.check_access(_request("users", "read")) is True
        assert await service.check_access(_request("users", "delete")) is False

    @pytest.mark.asyncio
    async def test_failing_permission_is_skipped(self):
        viewer = _role("r-viewer", "Viewer", ALL_ACCESS, READ_USERS)
        service, _, permission_repo = _build_service(roles=[viewer], user_roles=["r-viewer"])
        permission_repo.fail_on(ALL_ACCESS.id, RuntimeError("timeout"))

        assert await service.check_access(_request("users", "read")) is True
        assert await service.check_access(_request("roles", "read")) is False

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "request_kwargs,missing",
        [
            ({"resource": "users", "action": "read"}, "user_id"),
            ({"user_id": "u1", "action": "read"}, "resource"),
            ({"user_id": "u1", "resource": "users"}, "action"),
        ],
    )
    async def test_missing_fields_are_invalid_input(self, request_kwargs, missing):
        service, _, _ = _build_service()

        with pytest.raises(InvalidInputError, match=missing):
            await service.check_access(AccessRequest(**request_kwargs))

    @pytest.mark.asyncio
    async def test_unknown_user(self):
        service, _, _ = _build_service()

        with pytest.raises(UserNotFoundError):
            await service.check_access(AccessRequest(user_id="ghost", resource="x", action="y"))

    @pytest.mark.asyncio
    async def test_reads_current_role_state_every_call(self):
        viewer = _role("r-viewer", "Viewer")
        service, role_repo, _ = _build_service(roles=[viewer], user_roles=["r-viewer"])
        assert await service.check_access(_request()) is False

        role_repo.seed(_role("r-viewer", "Viewer", READ_USERS))

        assert await service.check_access(_request()) is True

    @pytest.mark.asyncio
    async def test_has_permission_ignores_org_scope(self):
        scoped = _role("r", "R", READ_USERS, org="O1")
        service, _, _ = _build_service(roles=[scoped], user_roles=["r"])

        assert await service.has_permission("u1", "users", "read") is True
        assert await service.has_permission("u1", "users", "delete") is False


# ---------------------------------------------------------------------------
# check_access_detailed / require_access
# ---------------------------------------------------------------------------


class TestCheckAccessDetailed:
    @pytest.mark.asyncio
    async def test_wildcard_grant_names_rule_and_role(self):
        admin = _role("r-admin", "Admin", ALL_ACCESS)
        service, _, _ = _build_service(roles=[admin], user_roles=["r-admin"])

        response = await service.check_access_detailed(_request("users", "delete"))

        assert response.allowed is True
        assert response.matched_rule == "all_access"
        assert response.explanation == "User has full wildcard permission through role Admin"
        assert response.user_roles == ["Admin"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "permission,resource,action,kind",
        [
            (READ_USERS, "users", "read", "exact"),
            (MANAGE_ROLES, "roles", "assign", "wildcard action"),
            (LIST_ANY, "organizations", "list", "wildcard resource"),
        ],
    )
    async def test_explanation_names_match_kind(self, permission, resource, action, kind):
        role = _role("r", "Ops", permission)
        service, _, _ = _build_service(roles=[role], user_roles=["r"])

        response = await service.check_access_detailed(_request(resource, action))

        assert response.explanation == f"User has {kind} permission through role Ops"
        assert response.matched_rule == permission.name

    @pytest.mark.asyncio
    async def test_first_granting_role_wins(self):
        viewer = _role("r-viewer", "Viewer", READ_USERS)
        admin = _role("r-admin", "Admin", ALL_ACCESS)
        service, _, _ = _build_service(roles=[viewer, admin], user_roles=["r-viewer", "r-admin"])

        response = await service.check_access_detailed(_request("users", "read"))

        assert response.matched_rule == "read_users"
        assert response.user_roles == ["Viewer", "Admin"]

    @pytest.mark.asyncio
    async def test_denied_lists_considered_roles(self):
        viewer = _role("r-viewer", "Viewer", READ_USERS)
        other_org = _role("r-o2", "Elsewhere", ALL_ACCESS, org="O2")
        service, _, _ = _build_service(
            roles=[viewer, other_org], user_roles=["r-viewer", "r-o2"]
        )

        response = await service.check_access_detailed(_request("users", "update", org_id="O1"))

        assert response.allowed is False
        assert response.matched_rule is None
        assert response.explanation == "User does not have required permission"
        assert response.user_roles == ["Viewer"]

    @pytest.mark.asyncio
    async def test_same_state_gives_same_answer(self):
        viewer = _role("r-viewer", "Viewer", READ_USERS, MANAGE_ROLES)
        service, _, _ = _build_service(roles=[viewer], user_roles=["r-viewer"])

        first = await service.check_access_detailed(_request("roles", "read"))
        second = await service.check_access_detailed(_request("roles", "read"))

        assert first.model_dump(exclude={"timestamp"}) == second.model_dump(
            exclude={"timestamp"}
        )

    @pytest.mark.asyncio
    async def test_require_access_raises_on_denial(self):
        viewer = _role("r-viewer", "Viewer", READ_USERS)
        service, _, _ = _build_service(roles=[viewer], user_roles=["r-viewer"])

        assert (await service.require_access(_request("users", "read"))).allowed is True
        with pytest.raises(AccessDeniedError) as exc_info:
            await service.require_access(_request("users", "delete"))

        assert isinstance(exc_info.value, PermissionException)
        assert exc_info.value.action == "delete"


# ---------------------------------------------------------------------------
# Inventories
# ---------------------------------------------------------------------------


class TestInventories:
    @pytest.mark.asyncio
    async def test_get_user_permissions_dedups(self):
        a = _role("a", "A", READ_USERS, MANAGE_ROLES)
        b = _role("b", "B", MANAGE_ROLES)
        service, _, _ = _build_service(roles=[a, b], user_roles=["a", "b"])

        permissions = await service.get_user_permissions("u1")

        assert [p.id for p in permissions] == [READ_USERS.id, MANAGE_ROLES.id]

    @pytest.mark.asyncio
    async def test_resources_literal(self):
        role = _role("r", "R", READ_USERS, MANAGE_ROLES)
        service, _, _ = _build_service(roles=[role], user_roles=["r"])

        assert await service.get_user_resources("u1") == ["users", "roles"]

    @pytest.mark.asyncio
    async def test_wildcard_resource_expands_from_catalog(self):
        role = _role("r", "R", READ_USERS, LIST_ANY)
        service, _, _ = _build_service(roles=[role], user_roles=["r"])

        assert await service.get_user_resources("u1") == ["users", "roles", "permissions"]

    @pytest.mark.asyncio
    async def test_wildcard_resource_falls_back_when_catalog_down(self):
        catalog = FakeResourceCatalog(resources=["users"])
        catalog.unavailable = True
        role = _role("r", "R", MANAGE_ROLES, ALL_ACCESS)
        service, _, _ = _build_service(roles=[role], user_roles=["r"], catalog=catalog)

        assert await service.get_user_resources("u1") == ["roles", "*"]

    @pytest.mark.asyncio
    async def test_without_catalog_wildcards_stay_literal(self):
        role = _role("r", "R", ALL_ACCESS)
        service, _, _ = _build_service(roles=[role], user_roles=["r"], catalog=None)

        assert await service.get_user_resources("u1") == ["*"]
        assert await service.get_user_actions("u1", "users") == ["*"]

    @pytest.mark.asyncio
    async def test_actions_include_wildcard_resource_permissions(self):
        role = _role("r", "R", READ_USERS, LIST_ANY)
        service, _, _ = _build_service(roles=[role], user_roles=["r"])

        assert await service.get_user_actions("u1", "users") == ["read", "list"]
        assert await service.get_user_actions("u1", "roles") == ["list"]

    @pytest.mark.asyncio
    async def test_wildcard_action_expands_once(self):
        catalog = FakeResourceCatalog(actions={"roles": ["read", "assign"]})
        role = _role("r", "R", MANAGE_ROLES, ALL_ACCESS, LIST_ANY)
        service, _, _ = _build_service(roles=[role], user_roles=["r"], catalog=catalog)

        actions = await service.get_user_actions("u1", "roles")

        assert actions == ["read", "assign", "list"]
        assert catalog.call_count("list_actions") == 1

    @pytest.mark.asyncio
    async def test_unrelated_resource_has_no_actions(self):
        role = _role("r", "R", READ_USERS)
        service, _, _ = _build_service(roles=[role], user_roles=["r"])

        assert await service.get_user_actions("u1", "roles") == []

    @pytest.mark.asyncio
    async def test_inventories_for_unknown_user(self):
        service, _, _ = _build_service()

        with pytest.raises(UserNotFoundError):
            await service.get_user_resources("ghost")
        with pytest.raises(UserNotFoundError):
            await service.get_user_actions("ghost", "users")
