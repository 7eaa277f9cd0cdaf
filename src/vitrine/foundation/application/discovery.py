"""Entry-point-based discovery of commerce services.

Installed distributions contribute cart managers, price systems and the
other tenant-scoped subsystems by declaring entry points in one of the
``vitrine.*`` groups below. The entry point name is the registry key
(``"default"``, ``"b2b"``, or ``"default.b2b"`` for checkout-manager-family
groups) and the entry point value is a zero-argument factory.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from importlib.metadata import entry_points
from typing import Any

logger = logging.getLogger(__name__)

GROUP_CART_MANAGERS = "vitrine.cart_managers"
GROUP_ORDER_MANAGERS = "vitrine.order_managers"
GROUP_PRICE_SYSTEMS = "vitrine.price_systems"
GROUP_AVAILABILITY_SYSTEMS = "vitrine.availability_systems"
GROUP_CHECKOUT_MANAGER_FACTORIES = "vitrine.checkout_manager_factories"
GROUP_COMMIT_ORDER_PROCESSORS = "vitrine.commit_order_processors"


@dataclass(frozen=True, slots=True)
class DiscoveredService:
    """A single discovered service entry point.

    Attributes:
        key: Registry key, taken from the entry point name.
        group: Entry point group (e.g., ``"vitrine.price_systems"``).
        factory: The loaded factory object.
    """

    key: str
    group: str
    factory: Any


def discover(
    group: str,
    *,
    exclude_names: frozenset[str] = frozenset(),
) -> list[DiscoveredService]:
    """Discover and load all service entry points for a given group.

    Entry points that fail to load are logged and skipped (fail-soft): a
    broken plugin surfaces later as an explicit "not defined" error on
    lookup instead of preventing startup.

    Args:
        group: The entry point group name (e.g., ``"vitrine.price_systems"``).
        exclude_names: Set of entry point names to skip.

    Returns:
        List of successfully loaded services, in entry point order.
    """
    services: list[DiscoveredService] = []

    for ep in entry_points(group=group):
        if ep.name in exclude_names:
            logger.debug("Skipping excluded service %s:%s", group, ep.name)
            continue
        try:
            loaded = ep.load()
        except Exception:
            logger.exception("Failed to load service %s:%s", group, ep.name)
            continue
        services.append(DiscoveredService(key=ep.name, group=group, factory=loaded))
        logger.debug("Loaded service %s:%s", group, ep.name)

    logger.info("Discovered %d services in group %r", len(services), group)
    return services
