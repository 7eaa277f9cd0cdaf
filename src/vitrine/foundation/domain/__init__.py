"""Vitrine Foundation Domain -- pure Python domain primitives.

This package provides the foundational building blocks shared by the
commerce and metadata contexts: exceptions, composite service keys and
port interfaces.
"""

from vitrine.foundation.domain.exceptions import (
    ConflictError,
    DomainError,
    InvalidConfigError,
    NotFoundError,
    UnsupportedError,
    ValidationError,
)
from vitrine.foundation.domain.ports import (
    AvailabilitySystemPort,
    CartManagerPort,
    CheckoutManagerFactoryPort,
    CommitOrderProcessorPort,
    EnvironmentPort,
    OrderManagerPort,
    PriceSystemPort,
    ServiceLocatorPort,
)
from vitrine.foundation.domain.service_keys import (
    DEFAULT_NAME,
    SERVICE_KEY_SEPARATOR,
    ServiceKey,
)

__all__ = [
    "DEFAULT_NAME",
    "SERVICE_KEY_SEPARATOR",
    "AvailabilitySystemPort",
    "CartManagerPort",
    "CheckoutManagerFactoryPort",
    "CommitOrderProcessorPort",
    "ConflictError",
    "DomainError",
    "EnvironmentPort",
    "InvalidConfigError",
    "NotFoundError",
    "OrderManagerPort",
    "PriceSystemPort",
    "ServiceKey",
    "ServiceLocatorPort",
    "UnsupportedError",
    "ValidationError",
]
