"""Vitrine Commerce — tenant-scoped commerce service factory."""

from vitrine.domain.commerce.config import (
    CommerceSettings,
    FilterTypeConfig,
    FrameworkConfig,
    IndexTenantConfig,
    ProductIndexConfig,
    get_commerce_settings,
    load_framework_config,
)
from vitrine.domain.commerce.factory import (
    SERVICE_ID_ENVIRONMENT,
    SERVICE_ID_OFFER_TOOL,
    SERVICE_ID_PAYMENT_MANAGER,
    SERVICE_ID_PRICING_MANAGER,
    SERVICE_ID_TOKEN_MANAGER_FACTORY,
    SERVICE_ID_TRACKING_MANAGER,
    SERVICE_ID_VOUCHER_SERVICE,
    CommerceFactory,
)
from vitrine.domain.commerce.filter_service import FilterService
from vitrine.domain.commerce.index_service import IndexService
from vitrine.domain.commerce.registry import ServiceRegistry, registry_from_entry_points

__all__ = [
    "SERVICE_ID_ENVIRONMENT",
    "SERVICE_ID_OFFER_TOOL",
    "SERVICE_ID_PAYMENT_MANAGER",
    "SERVICE_ID_PRICING_MANAGER",
    "SERVICE_ID_TOKEN_MANAGER_FACTORY",
    "SERVICE_ID_TRACKING_MANAGER",
    "SERVICE_ID_VOUCHER_SERVICE",
    "CommerceFactory",
    "CommerceSettings",
    "FilterService",
    "FilterTypeConfig",
    "FrameworkConfig",
    "IndexService",
    "IndexTenantConfig",
    "ProductIndexConfig",
    "ServiceRegistry",
    "get_commerce_settings",
    "load_framework_config",
    "registry_from_entry_points",
]
