"""In-memory repository implementations.

Back every repository protocol with a dict. Suitable for single-process
deployments, local development and integration tests; swap with a
database-backed implementation for anything shared.

Safe for concurrent coroutines within a single event loop via
asyncio.Lock. Records are copied on the way in and out, so callers
never hold a reference to stored state.
"""

from __future__ import annotations

import asyncio
from datetime import datetime
from typing import Any, Dict, Generic, List, Optional, Sequence, Tuple, TypeVar
from uuid import uuid4

from pydantic import BaseModel

from warden.core.datetime_utils import utc_now
from warden.schemas.organization import Organization
from warden.schemas.permission import Permission
from warden.schemas.role import Role
from warden.schemas.token import Token, TokenType
from warden.schemas.user import User

ModelT = TypeVar("ModelT", bound=BaseModel)


class _InMemoryStore(Generic[ModelT]):
    """ID-keyed dict of pydantic records guarded by an asyncio.Lock."""

    model: type[ModelT]

    def __init__(self) -> None:
        """Initialize an empty store."""
        self._records: Dict[str, ModelT] = {}
        self._lock = asyncio.Lock()

    async def add(self, *records: ModelT) -> None:
        """Insert or replace records as given, keeping their IDs."""
        async with self._lock:
            for record in records:
                self._records[record.id] = record.model_copy(deep=True)

    async def get(self, record_id: str) -> Optional[ModelT]:
        """Get a record by ID, or None."""
        async with self._lock:
            record = self._records.get(record_id)
            return record.model_copy(deep=True) if record is not None else None

    @staticmethod
    def _matches(record: ModelT, filters: Optional[Dict[str, Any]]) -> bool:
        return all(getattr(record, k, None) == v for k, v in (filters or {}).items())

    async def get_multi(
        self,
        *,
        filters: Optional[Dict[str, Any]] = None,
        skip: int = 0,
        limit: int = 100,
    ) -> List[ModelT]:
        """List records matching ``filters`` in insertion order."""
        async with self._lock:
            matched = [r for r in self._records.values() if self._matches(r, filters)]
            return [r.model_copy(deep=True) for r in matched[skip : skip + limit]]

    async def count(self, *, filters: Optional[Dict[str, Any]] = None) -> int:
        """Count records matching ``filters``."""
        async with self._lock:
            return sum(1 for r in self._records.values() if self._matches(r, filters))

    async def create(self, *, obj_in: Dict[str, Any]) -> ModelT:
        """Create a record with a fresh ID and timestamps."""
        now = utc_now()
        record = self.model(**{**obj_in, "id": str(uuid4()), "created_at": now, "updated_at": now})
        async with self._lock:
            self._records[record.id] = record
            return record.model_copy(deep=True)

    async def remove(self, record_id: str) -> Optional[ModelT]:
        """Delete a record, returning it, or None if it did not exist."""
        async with self._lock:
            return self._records.pop(record_id, None)


class InMemoryUserRepository(_InMemoryStore[User]):
    """UserRepositoryProtocol over a dict. Users are loaded with ``add``."""

    model = User


class InMemoryOrganizationRepository(_InMemoryStore[Organization]):
    """OrganizationRepositoryProtocol over a dict."""

    model = Organization


class InMemoryPermissionRepository(_InMemoryStore[Permission]):
    """PermissionRepositoryProtocol over a dict."""

    model = Permission

    async def get_by_ids(self, permission_ids: Sequence[str]) -> List[Permission]:
        """Get the existing permissions among ``permission_ids``, in request order."""
        async with self._lock:
            return [
                self._records[pid].model_copy(deep=True)
                for pid in dict.fromkeys(permission_ids)
                if pid in self._records
            ]


class InMemoryRoleRepository(_InMemoryStore[Role]):
    """RoleRepositoryProtocol over a dict."""

    model = Role

    async def get_by_name(self, name: str) -> Optional[Role]:
        """Get a role by its unique name."""
        async with self._lock:
            for role in self._records.values():
                if role.name == name:
                    return role.model_copy(deep=True)
            return None

    async def update(self, role_id: str, *, obj_in: Dict[str, Any]) -> Optional[Role]:
        """Apply ``obj_in`` to a role and bump ``updated_at``."""
        async with self._lock:
            role = self._records.get(role_id)
            if role is None:
                return None
            changes = {k: v for k, v in obj_in.items() if k not in ("id", "created_at")}
            changes["updated_at"] = utc_now()
            updated = Role.model_validate({**role.model_dump(), **changes})
            self._records[role_id] = updated
            return updated.model_copy(deep=True)


class InMemoryTokenRepository:
    """TokenRepositoryProtocol over a dict keyed by ``(token_type, token_value)``.

    Also implements ``consume_token`` so one-time tokens are consumed
    atomically.
    """

    def __init__(self) -> None:
        """Initialize an empty store."""
        self._tokens: Dict[Tuple[TokenType, str], Token] = {}
        self._lock = asyncio.Lock()

    async def store_token(self, token: Token) -> None:
        """Insert or replace a token."""
        async with self._lock:
            self._tokens[(token.token_type, token.token_value)] = token.model_copy()

    async def find_token_by_value(
        self, token_type: TokenType, token_value: str
    ) -> Optional[Token]:
        """Get a token by type and value, expired or not."""
        async with self._lock:
            token = self._tokens.get((token_type, token_value))
            return token.model_copy() if token is not None else None

    async def find_tokens_by_user(self, token_type: TokenType, user_id: str) -> List[Token]:
        """Get every token of ``token_type`` owned by ``user_id``."""
        async with self._lock:
            return [
                t.model_copy()
                for (tt, _), t in self._tokens.items()
                if tt == token_type and t.user_id == user_id
            ]

    async def delete_token(self, token_type: TokenType, token_value: str) -> bool:
        """Delete a token. Returns False if it did not exist."""
        async with self._lock:
            return self._tokens.pop((token_type, token_value), None) is not None

    async def consume_token(self, token_type: TokenType, token_value: str) -> Optional[Token]:
        """Delete a token and return it, or None if it did not exist."""
        async with self._lock:
            return self._tokens.pop((token_type, token_value), None)

    async def delete_tokens_by_user(self, token_type: TokenType, user_id: str) -> int:
        """Delete every token of ``token_type`` owned by ``user_id``."""
        async with self._lock:
            keys = [
                key
                for key, t in self._tokens.items()
                if key[0] == token_type and t.user_id == user_id
            ]
            for key in keys:
                del self._tokens[key]
            return len(keys)

    async def delete_expired_tokens(self, now: datetime) -> int:
        """Delete every token whose expiry is at or before ``now``."""
        async with self._lock:
            keys = [key for key, t in self._tokens.items() if t.is_expired(now)]
            for key in keys:
                del self._tokens[key]
            return len(keys)
