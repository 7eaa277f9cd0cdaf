"""Domain port interfaces for hexagonal architecture.

Ports define abstract interfaces that the domain layer uses to interact
with the host container, the storefront environment, and the commerce
subsystems it resolves. Implementations (adapters) live elsewhere.
"""

from vitrine.foundation.domain.ports.commerce import (
    AvailabilitySystemPort,
    CartManagerPort,
    CheckoutManagerFactoryPort,
    CommitOrderProcessorPort,
    OrderManagerPort,
    PriceSystemPort,
)
from vitrine.foundation.domain.ports.environment import EnvironmentPort
from vitrine.foundation.domain.ports.service_locator import ServiceLocatorPort

__all__ = [
    "AvailabilitySystemPort",
    "CartManagerPort",
    "CheckoutManagerFactoryPort",
    "CommitOrderProcessorPort",
    "EnvironmentPort",
    "OrderManagerPort",
    "PriceSystemPort",
    "ServiceLocatorPort",
]
