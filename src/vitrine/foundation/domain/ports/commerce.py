"""Port interfaces for the commerce subsystems resolved by the factory.

Only the members the factory itself calls are part of these protocols.
Concrete cart managers, price systems and so on are supplied by the host
application and may expose a much richer API.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class CartManagerPort(Protocol):
    """Tenant-scoped cart manager."""

    def save(self) -> None:
        """Persist all carts held by this manager."""
        ...


@runtime_checkable
class OrderManagerPort(Protocol):
    """Tenant-scoped order manager."""

    def get_or_create_order_from_cart(self, cart: Any) -> Any: ...


@runtime_checkable
class PriceSystemPort(Protocol):
    """Named price system."""

    def get_price_info(self, product: Any, quantity: int = 1) -> Any: ...


@runtime_checkable
class AvailabilitySystemPort(Protocol):
    """Named availability system."""

    def get_availability_info(self, product: Any, quantity: int = 1) -> Any: ...


@runtime_checkable
class CheckoutManagerFactoryPort(Protocol):
    """Factory registered per ``name.tenant`` building cart-bound checkout managers."""

    def create_checkout_manager(self, cart: Any) -> Any:
        """Create a checkout manager for ``cart``."""
        ...


@runtime_checkable
class CommitOrderProcessorPort(Protocol):
    """Processor committing orders for a checkout manager ``name.tenant``."""

    def commit_order(self, order: Any) -> Any: ...
