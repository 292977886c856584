"""Dependency Injection Container Module.

Usage:
------
    # Initialize at startup
    from warden.core.config import settings
    from warden.core.container import initialize_container
    initialize_container(settings)

    # Use the global container after initialization
    from warden.core import container as di
    await di.container.token_service.validate_token(raw)

    # In tests, build a private container instead of the global one
    from warden.core.container import create_container
    test_container = create_container(settings)

Module structure:
-----------------
    container/
    ├── __init__.py      # This file - exports public API
    ├── container.py     # Container dataclass (serves)
    └── factory.py       # create_container() (builds)
"""

from typing import TYPE_CHECKING, Optional

from warden.core.container.container import Container
from warden.core.container.factory import create_container

if TYPE_CHECKING:
    from warden.core.config import Settings

__all__ = [
    "Container",
    "create_container",
    "container",
    "initialize_container",
    "reset_container",
]


container: Optional[Container] = None
"""Global container instance, set by ``initialize_container()``.

Domain code never imports this; it receives dependencies as arguments.
"""


def initialize_container(settings: "Settings") -> Container:
    """Initialize the global container. Call once at startup.

    Raises:
        RuntimeError: If the container is already initialized.
    """
    global container

    if container is not None:
        raise RuntimeError(
            "Container already initialized. "
            "initialize_container() should only be called once at startup."
        )

    container = create_container(settings)
    return container


def reset_container() -> None:
    """Reset the global container to None. For testing only."""
    global container
    container = None
