"""Vitrine Infra FastAPI — checkout middleware, dependencies, error handlers."""

from vitrine.infra.fastapi.dependencies import (
    CommerceFactoryDep,
    get_commerce_factory,
    install_commerce_factory,
)
from vitrine.infra.fastapi.error_handlers import ProblemDetail, register_exception_handlers
from vitrine.infra.fastapi.middleware import (
    ASSORTMENT_TENANT_HEADER,
    CHECKOUT_TENANT_HEADER,
    CheckoutTenantMiddleware,
)

__all__ = [
    "ASSORTMENT_TENANT_HEADER",
    "CHECKOUT_TENANT_HEADER",
    "CheckoutTenantMiddleware",
    "CommerceFactoryDep",
    "ProblemDetail",
    "get_commerce_factory",
    "install_commerce_factory",
    "register_exception_handlers",
]
