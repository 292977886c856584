"""Static resource catalog.

Backs wildcard expansion with the resource and action lists from settings.
Every resource shares the same action list.
"""

from typing import Iterable, List

from warden.core.config import Settings


class StaticResourceCatalog:
    """ResourceCatalogProtocol implementation over fixed lists."""

    def __init__(self, resources: Iterable[str], actions: Iterable[str]) -> None:
        """Initialize with the known resources and actions."""
        self._resources = list(dict.fromkeys(resources))
        self._actions = list(dict.fromkeys(actions))

    @classmethod
    def from_settings(cls, settings: Settings) -> "StaticResourceCatalog":
        """Build the catalog from ``RESOURCE_CATALOG`` and ``ACTION_CATALOG``."""
        return cls(settings.RESOURCE_CATALOG, settings.ACTION_CATALOG)

    async def list_resources(self) -> List[str]:
        """Return every configured resource."""
        return list(self._resources)

    async def list_actions(self, resource: str) -> List[str]:
        """Return every configured action."""
        return list(self._actions)
