"""Access control service: decides whether a user may act on a resource."""

from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, List, Optional

from warden.core.exceptions import InvalidInputError
from warden.core.logging import ContextualLogger
from warden.core.logging import logger as default_logger
from warden.domains.access_control.exceptions import AccessDeniedError
from warden.domains.access_control.matching import MatchKind, match_permission
from warden.domains.access_control.protocols import (
    AccessControlServiceProtocol,
    PermissionResolverProtocol,
    ResourceCatalogProtocol,
)
from warden.schemas.access import AccessRequest, AccessResponse
from warden.schemas.permission import WILDCARD, Permission
from warden.schemas.role import Role

_DENIED_EXPLANATION = "User does not have required permission"


@dataclass(slots=True)
class _Grant:
    """The first role/permission pair that satisfied a request."""

    role: Role
    permission: Permission
    kind: MatchKind


class AccessControlService(AccessControlServiceProtocol):
    """Answers access checks and derives resource/action inventories.

    Every call re-reads role and permission state through the resolver;
    nothing is cached between calls.
    """

    def __init__(
        self,
        resolver: PermissionResolverProtocol,
        catalog: Optional[ResourceCatalogProtocol] = None,
        logger: Optional[ContextualLogger] = None,
    ) -> None:
        """Initialize with the resolver and an optional wildcard catalog."""
        self._resolver = resolver
        self._catalog = catalog
        self._logger = logger or default_logger.with_context(component="access_control")

    @staticmethod
    def _validate(request: AccessRequest) -> None:
        missing = [f for f in ("user_id", "resource", "action") if not getattr(request, f)]
        if missing:
            raise InvalidInputError(f"Access request is missing: {', '.join(missing)}")

    async def _evaluate(self, request: AccessRequest) -> tuple[List[Role], Optional[_Grant]]:
        """Return the roles considered and the first grant, if any."""
        self._validate(request)
        user = await self._resolver.get_user(request.user_id)
        roles = await self._resolver.resolve_roles(user, request.org_id)

        for role in roles:
            for permission in await self._resolver.permissions_for_role(role):
                kind = match_permission(permission, request.resource, request.action)
                if kind is not None:
                    return roles, _Grant(role=role, permission=permission, kind=kind)
        return roles, None

    async def check_access(self, request: AccessRequest) -> bool:
        """Whether ``request`` is granted by any of the user's applicable roles.

        Raises:
            InvalidInputError: If user_id, resource or action is empty.
            UserNotFoundError: If the user does not exist.
        """
        _, grant = await self._evaluate(request)
        self._logger.debug(
            f"Access {'granted' if grant else 'denied'}: user={request.user_id} "
            f"resource={request.resource} action={request.action} org={request.org_id}"
        )
        return grant is not None

    async def check_access_detailed(self, request: AccessRequest) -> AccessResponse:
        """Evaluate ``request`` and explain the outcome.

        ``user_roles`` lists every role considered, matching or not.
        """
        roles, grant = await self._evaluate(request)
        role_names = [role.name for role in roles]

        if grant is None:
            return AccessResponse(
                allowed=False,
                explanation=_DENIED_EXPLANATION,
                user_roles=role_names,
            )
        return AccessResponse(
            allowed=True,
            explanation=f"User has {grant.kind.value} permission through role {grant.role.name}",
            matched_rule=grant.permission.name,
            user_roles=role_names,
        )

    async def require_access(self, request: AccessRequest) -> AccessResponse:
        """Like check_access_detailed, but raise AccessDeniedError on denial."""
        response = await self.check_access_detailed(request)
        if not response.allowed:
            raise AccessDeniedError(request.user_id, request.resource, request.action)
        return response

    async def get_user_permissions(self, user_id: str) -> List[Permission]:
        """All permissions reachable by the user, de-duplicated by ID."""
        return await self._resolver.get_user_permissions(user_id)

    async def _expand(self, label: str, fetch: Callable[[], Awaitable[List[str]]]) -> List[str]:
        """Run a catalog lookup, falling back to the literal wildcard."""
        if self._catalog is None:
            return [WILDCARD]
        try:
            return list(await fetch())
        except Exception as e:
            self._logger.warning(f"Catalog unavailable while expanding {label}: {e}")
            return [WILDCARD]

    async def get_user_resources(self, user_id: str) -> List[str]:
        """Distinct resources across the user's permissions.

        A wildcard resource expands to the catalog's resources, or stays
        ``"*"`` when the catalog is unavailable.
        """
        permissions = await self.get_user_permissions(user_id)

        resources: Dict[str, None] = {}
        expanded = False
        for permission in permissions:
            if permission.resource != WILDCARD:
                resources[permission.resource] = None
            elif not expanded:
                expanded = True
                for resource in await self._expand(
                    "resources", lambda: self._catalog.list_resources()
                ):
                    resources[resource] = None
        return list(resources)

    async def get_user_actions(self, user_id: str, resource: str) -> List[str]:
        """Distinct actions the user may perform on ``resource``.

        Permissions apply when their resource is ``resource`` or the wildcard.
        A wildcard action expands to the catalog's actions for ``resource``,
        or stays ``"*"`` when the catalog is unavailable.
        """
        permissions = await self.get_user_permissions(user_id)

        actions: Dict[str, None] = {}
        expanded = False
        for permission in permissions:
            if permission.resource not in (resource, WILDCARD):
                continue
            if permission.action != WILDCARD:
                actions[permission.action] = None
            elif not expanded:
                expanded = True
                for action in await self._expand(
                    f"actions for {resource}", lambda: self._catalog.list_actions(resource)
                ):
                    actions[action] = None
        return list(actions)

    async def has_permission(self, user_id: str, resource: str, action: str) -> bool:
        """Unscoped check_access."""
        return await self.check_access(
            AccessRequest(user_id=user_id, resource=resource, action=action)
        )
