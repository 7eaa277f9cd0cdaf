"""Port interface for keyed service lookup.

This module defines the ServiceLocatorPort protocol: the minimal keyed
lookup capability (has-key / get-by-key) the commerce factory is composed
on. The host may pass its own container or a
:class:`~vitrine.domain.commerce.registry.ServiceRegistry`.

Example:
    >>> from vitrine.foundation.domain.ports import ServiceLocatorPort
    >>> def price_system(locator: ServiceLocatorPort, name: str) -> object:
    ...     return locator.get(name) if locator.has(name) else None
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ServiceLocatorPort(Protocol):
    """Port for a read-only keyed lookup of service instances.

    The protocol is runtime_checkable to enable isinstance() verification
    in tests and dependency injection validation.
    """

    def has(self, key: str) -> bool:
        """Return True if a service is registered under ``key``."""
        ...

    def get(self, key: str) -> Any:
        """Return the service registered under ``key``.

        Implementations raise when the key is absent; callers are expected
        to check ``has`` first when they want a descriptive error.
        """
        ...
