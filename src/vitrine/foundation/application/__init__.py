"""Vitrine Foundation Application — application layer patterns."""

from vitrine.foundation.application.context import (
    CheckoutState,
    ContextEnvironment,
    clear_checkout_state,
    get_checkout_state,
    set_checkout_state,
)
from vitrine.foundation.application.discovery import (
    GROUP_AVAILABILITY_SYSTEMS,
    GROUP_CART_MANAGERS,
    GROUP_CHECKOUT_MANAGER_FACTORIES,
    GROUP_COMMIT_ORDER_PROCESSORS,
    GROUP_ORDER_MANAGERS,
    GROUP_PRICE_SYSTEMS,
    DiscoveredService,
    discover,
)

__all__ = [
    "GROUP_AVAILABILITY_SYSTEMS",
    "GROUP_CART_MANAGERS",
    "GROUP_CHECKOUT_MANAGER_FACTORIES",
    "GROUP_COMMIT_ORDER_PROCESSORS",
    "GROUP_ORDER_MANAGERS",
    "GROUP_PRICE_SYSTEMS",
    "CheckoutState",
    "ContextEnvironment",
    "DiscoveredService",
    "clear_checkout_state",
    "discover",
    "get_checkout_state",
    "set_checkout_state",
]
