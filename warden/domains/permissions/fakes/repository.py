"""Fake permission repository for testing."""

from typing import Any, Dict, List, Optional, Sequence
from uuid import uuid4

from warden.schemas.permission import Permission


class FakePermissionRepository:
    """In-memory fake for PermissionRepositoryProtocol.

    ``fail_on`` makes lookups of a single permission raise, to exercise
    best-effort resolution.
    """

    def __init__(self) -> None:
        """Initialize with empty store and call log."""
        self._store: dict[str, Permission] = {}
        self._failures: dict[str, Exception] = {}
        self._calls: list[tuple] = []

    def seed(self, *permissions: Permission) -> None:
        """Populate store with test data."""
        for permission in permissions:
            self._store[permission.id] = permission

    def fail_on(self, permission_id: str, error: Exception) -> None:
        """Raise ``error`` whenever ``permission_id`` is looked up."""
        self._failures[permission_id] = error

    def call_count(self, method: str) -> int:
        """Return the number of times a method was called."""
        return sum(1 for name, *_ in self._calls if name == method)

    def _matches(self, permission: Permission, filters: Optional[Dict[str, Any]]) -> bool:
        return all(getattr(permission, k, None) == v for k, v in (filters or {}).items())

    async def get(self, permission_id: str) -> Optional[Permission]:
        """Return seeded permission by ID."""
        self._calls.append(("get", permission_id))
        if permission_id in self._failures:
            raise self._failures[permission_id]
        return self._store.get(permission_id)

    async def get_by_ids(self, permission_ids: Sequence[str]) -> List[Permission]:
        """Return seeded permissions among the IDs."""
        self._calls.append(("get_by_ids", list(permission_ids)))
        return [self._store[pid] for pid in dict.fromkeys(permission_ids) if pid in self._store]

    async def get_multi(
        self,
        *,
        filters: Optional[Dict[str, Any]] = None,
        skip: int = 0,
        limit: int = 100,
    ) -> List[Permission]:
        """Return seeded permissions matching the filters."""
        self._calls.append(("get_multi", filters, skip, limit))
        items = [p for p in self._store.values() if self._matches(p, filters)]
        return items[skip : skip + limit]

    async def count(self, *, filters: Optional[Dict[str, Any]] = None) -> int:
        """Count seeded permissions matching the filters."""
        self._calls.append(("count", filters))
        return len([p for p in self._store.values() if self._matches(p, filters)])

    async def create(self, *, obj_in: Dict[str, Any]) -> Permission:
        """Store a new permission with a generated ID."""
        self._calls.append(("create", obj_in))
        permission = Permission(id=str(uuid4()), **obj_in)
        self._store[permission.id] = permission
        return permission

    async def remove(self, permission_id: str) -> Optional[Permission]:
        """Remove a permission from the store."""
        self._calls.append(("remove", permission_id))
        return self._store.pop(permission_id, None)
