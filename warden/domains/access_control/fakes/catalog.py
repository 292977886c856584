"""Fake resource catalog for testing."""

from typing import Dict, List, Optional


class FakeResourceCatalog:
    """In-memory fake for ResourceCatalogProtocol.

    Set ``unavailable`` to make every call raise, simulating a catalog outage.
    """

    def __init__(
        self,
        resources: Optional[List[str]] = None,
        actions: Optional[Dict[str, List[str]]] = None,
    ) -> None:
        """Initialize with seeded resources and per-resource actions."""
        self._resources = list(resources or [])
        self._actions = dict(actions or {})
        self.unavailable = False
        self._calls: list[tuple] = []

    def call_count(self, method: str) -> int:
        """Return the number of times a method was called."""
        return sum(1 for name, *_ in self._calls if name == method)

    async def list_resources(self) -> List[str]:
        """Return seeded resources."""
        self._calls.append(("list_resources",))
        if self.unavailable:
            raise ConnectionError("resource catalog unavailable")
        return list(self._resources)

    async def list_actions(self, resource: str) -> List[str]:
        """Return seeded actions for ``resource``."""
        self._calls.append(("list_actions", resource))
        if self.unavailable:
            raise ConnectionError("resource catalog unavailable")
        return list(self._actions.get(resource, []))
