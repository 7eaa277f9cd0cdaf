"""Name-indexed service registries.

A ``ServiceRegistry`` is the explicit mapping the commerce factory looks
services up in: one registry per category (cart managers, price systems,
...), populated once at startup and read-only afterwards.

Entries may be ready instances or zero-argument factories. Factories are
invoked on first access and the result is memoized, so only services
actually requested are built.

Usage:
    registry = ServiceRegistry("price_system", {"default": DefaultPriceSystem()})
    registry.has("default")  # True

    lazy = ServiceRegistry.from_factories(
        "cart_manager", {"default": lambda: MultiCartManager(...)}
    )
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from vitrine.foundation.application.discovery import discover
from vitrine.foundation.domain.exceptions import UnsupportedError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator, Mapping

logger = logging.getLogger(__name__)


class ServiceRegistry:
    """Read-only keyed lookup for one service category.

    Implements ``ServiceLocatorPort``.

    Args:
        category: Human-readable category name used in errors and logs.
        entries: Mapping of registry key to service instance.
        factories: Mapping of registry key to zero-argument factory.
            A key may appear in ``entries`` or ``factories``, not both.

    Raises:
        ValueError: If a key is registered both eagerly and lazily.
    """

    def __init__(
        self,
        category: str,
        entries: Mapping[str, Any] | None = None,
        factories: Mapping[str, Callable[[], Any]] | None = None,
    ) -> None:
        entries = dict(entries or {})
        factories = dict(factories or {})
        overlap = entries.keys() & factories.keys()
        if overlap:
            msg = f"Keys registered both as instance and factory in {category}: {sorted(overlap)}"
            raise ValueError(msg)

        self._category = category
        self._instances: dict[str, Any] = entries
        self._factories: Mapping[str, Callable[[], Any]] = MappingProxyType(factories)

    @classmethod
    def from_factories(
        cls,
        category: str,
        factories: Mapping[str, Callable[[], Any]],
    ) -> ServiceRegistry:
        """Create a registry whose services are built on first access."""
        return cls(category, factories=factories)

    @property
    def category(self) -> str:
        """The category this registry serves."""
        return self._category

    def has(self, key: str) -> bool:
        return key in self._instances or key in self._factories

    def get(self, key: str) -> Any:
        """Return the service registered under ``key``.

        Raises:
            UnsupportedError: If nothing is registered under ``key``.
        """
        if key in self._instances:
            return self._instances[key]

        factory = self._factories.get(key)
        if factory is None:
            raise UnsupportedError(
                f'No {self._category} registered under "{key}".',
                category=self._category,
                key=key,
            )

        instance = factory()
        self._instances[key] = instance
        logger.debug(
            "service_constructed",
            extra={"category": self._category, "key": key},
        )
        return instance

    def keys(self) -> list[str]:
        """All registered keys, sorted."""
        return sorted(self._instances.keys() | self._factories.keys())

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.has(key)

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __len__(self) -> int:
        return len(self._instances.keys() | self._factories.keys())

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._category!r}, keys={self.keys()!r})"


def registry_from_entry_points(
    category: str,
    group: str,
    *,
    exclude_names: frozenset[str] = frozenset(),
) -> ServiceRegistry:
    """Build a lazy registry from an entry point group.

    Args:
        category: Category name for the registry.
        group: Entry point group, e.g. ``vitrine.price_systems``.
        exclude_names: Entry point names to skip.

    Returns:
        ServiceRegistry whose factories are the loaded entry point values.
    """
    services = discover(group, exclude_names=exclude_names)
    return ServiceRegistry.from_factories(
        category,
        {service.key: service.factory for service in services},
    )
