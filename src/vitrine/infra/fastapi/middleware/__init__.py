"""ASGI middleware for the storefront."""

from vitrine.infra.fastapi.middleware.checkout_tenant import (
    ASSORTMENT_TENANT_HEADER,
    CHECKOUT_TENANT_HEADER,
    CheckoutTenantMiddleware,
)

__all__ = [
    "ASSORTMENT_TENANT_HEADER",
    "CHECKOUT_TENANT_HEADER",
    "CheckoutTenantMiddleware",
]
