"""Wiring tests for the container factory.

Drives the fully wired in-memory container end to end.
"""

import pytest

from warden.core import container as di
from warden.core.config import Settings
from warden.core.container import create_container
from warden.schemas.access import AccessRequest
from warden.schemas.permission import PermissionCreate
from warden.schemas.role import RoleCreate
from warden.schemas.token import TokenClaims
from warden.schemas.user import User

SECRET = "container-test-secret-at-least-32-characters"


@pytest.fixture
def container():
    return create_container(Settings(JWT_SECRET=SECRET, RESOURCE_CATALOG=["users", "reports"]))


def test_containers_do_not_share_state():
    settings = Settings(JWT_SECRET=SECRET)

    first, second = create_container(settings), create_container(settings)

    assert first.token_repo is not second.token_repo
    assert first.access_control.__class__ is second.access_control.__class__


@pytest.mark.asyncio
async def test_admin_flow(container):
    manage = await container.permission_service.create_permission(
        PermissionCreate(name="manage_users", resource="users", action="*")
    )
    read_any = await container.permission_service.create_permission(
        PermissionCreate(name="read_any", resource="*", action="read")
    )
    role = await container.role_service.create_role(
        RoleCreate(name="UserAdmin", permission_ids=[manage.id, read_any.id])
    )
    await container.user_repo.add(User(id="u1", role_ids=[role.id]))

    response = await container.access_control.check_access_detailed(
        AccessRequest(user_id="u1", resource="users", action="delete")
    )

    assert response.allowed is True
    assert response.matched_rule == "manage_users"
    assert await container.access_control.get_user_resources("u1") == ["users", "reports"]
    assert await container.access_control.has_permission("u1", "reports", "write") is False


@pytest.mark.asyncio
async def test_session_flow(container):
    tokens = container.token_service
    access = await tokens.generate_token(TokenClaims(user_id="u1", role_ids=["r1"]))
    refresh = await tokens.generate_refresh_token("u1")

    rotation = await tokens.rotate_refresh_token(refresh)
    await tokens.revoke_token(access)

    assert rotation.user_id == "u1"
    assert await tokens.is_revoked(refresh) is True
    assert await tokens.is_revoked(access) is True


def test_initialize_once():
    di.reset_container()
    try:
        built = di.initialize_container(Settings(JWT_SECRET=SECRET))

        assert di.container is built
        with pytest.raises(RuntimeError):
            di.initialize_container(Settings(JWT_SECRET=SECRET))
    finally:
        di.reset_container()
