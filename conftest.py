"""Root conftest for pytest configuration and shared fixtures.

Loaded before the colocated tests under warden/, so its fixtures are
available to every domain and adapter test module.
"""

import os

import pytest

# Register pytest-asyncio plugin at the root level
pytest_plugins = ("pytest_asyncio",)

# ---------------------------------------------------------------------------
# Environment variables: must be set before any warden module import
# Uses setdefault so real env vars (CI) are never overridden.
# ---------------------------------------------------------------------------
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("JWT_SECRET", "test-jwt-secret-key-minimum-32-characters-long")
os.environ.setdefault("LOG_LEVEL", "WARNING")


# ---------------------------------------------------------------------------
# Shared fake fixtures: individual protocol fakes
# ---------------------------------------------------------------------------


@pytest.fixture
def fake_user_repo():
    """Fake UserRepository with seed/fail_with helpers."""
    from warden.domains.users.fakes.repository import FakeUserRepository

    return FakeUserRepository()


@pytest.fixture
def fake_organization_repo():
    """Fake OrganizationRepository."""
    from warden.domains.organizations.fakes.repository import FakeOrganizationRepository

    return FakeOrganizationRepository()


@pytest.fixture
def fake_role_repo():
    """Fake RoleRepository with per-ID failure injection."""
    from warden.domains.roles.fakes.repository import FakeRoleRepository

    return FakeRoleRepository()


@pytest.fixture
def fake_permission_repo():
    """Fake PermissionRepository with per-ID failure injection."""
    from warden.domains.permissions.fakes.repository import FakePermissionRepository

    return FakePermissionRepository()


@pytest.fixture
def fake_token_repo():
    """Fake TokenRepository without atomic consume."""
    from warden.domains.tokens.fakes.repository import FakeTokenRepository

    return FakeTokenRepository()


@pytest.fixture
def test_settings():
    """Settings built from the test environment above."""
    from warden.core.config import Settings

    return Settings()
