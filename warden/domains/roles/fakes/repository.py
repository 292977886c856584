"""Fake role repository for testing."""

from typing import Any, Dict, List, Optional
from uuid import uuid4

from warden.schemas.role import Role


class FakeRoleRepository:
    """In-memory fake for RoleRepositoryProtocol.

    ``fail_on`` makes lookups of a single role raise, to exercise
    best-effort resolution.
    """

    def __init__(self) -> None:
        """Initialize with empty store and call log."""
        self._store: dict[str, Role] = {}
        self._failures: dict[str, Exception] = {}
        self._calls: list[tuple] = []

    def seed(self, *roles: Role) -> None:
        """Populate store with test data."""
        for role in roles:
            self._store[role.id] = role

    def fail_on(self, role_id: str, error: Exception) -> None:
        """Raise ``error`` whenever ``role_id`` is looked up."""
        self._failures[role_id] = error

    def call_count(self, method: str) -> int:
        """Return the number of times a method was called."""
        return sum(1 for name, *_ in self._calls if name == method)

    def _matches(self, role: Role, filters: Optional[Dict[str, Any]]) -> bool:
        return all(getattr(role, k, None) == v for k, v in (filters or {}).items())

    async def get(self, role_id: str) -> Optional[Role]:
        """Return seeded role by ID."""
        self._calls.append(("get", role_id))
        if role_id in self._failures:
            raise self._failures[role_id]
        return self._store.get(role_id)

    async def get_by_name(self, name: str) -> Optional[Role]:
        """Return seeded role by name."""
        self._calls.append(("get_by_name", name))
        return next((r for r in self._store.values() if r.name == name), None)

    async def get_multi(
        self,
        *,
        filters: Optional[Dict[str, Any]] = None,
        skip: int = 0,
        limit: int = 100,
    ) -> List[Role]:
        """Return seeded roles matching the filters."""
        self._calls.append(("get_multi", filters, skip, limit))
        items = [r for r in self._store.values() if self._matches(r, filters)]
        return items[skip : skip + limit]

    async def count(self, *, filters: Optional[Dict[str, Any]] = None) -> int:
        """Count seeded roles matching the filters."""
        self._calls.append(("count", filters))
        return len([r for r in self._store.values() if self._matches(r, filters)])

    async def create(self, *, obj_in: Dict[str, Any]) -> Role:
        """Store a new role with a generated ID."""
        self._calls.append(("create", obj_in))
        role = Role(id=str(uuid4()), **obj_in)
        self._store[role.id] = role
        return role

    async def update(self, role_id: str, *, obj_in: Dict[str, Any]) -> Optional[Role]:
        """Apply updates to a seeded role."""
        self._calls.append(("update", role_id, obj_in))
        role = self._store.get(role_id)
        if role is None:
            return None
        updated = role.model_copy(update=obj_in)
        self._store[role_id] = updated
        return updated

    async def remove(self, role_id: str) -> Optional[Role]:
        """Remove a role from the store."""
        self._calls.append(("remove", role_id))
        return self._store.pop(role_id, None)
