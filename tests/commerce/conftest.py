"""Shared fixtures for commerce factory tests."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any
from unittest.mock import MagicMock

import pytest

from vitrine.domain.commerce.config import FrameworkConfig
from vitrine.domain.commerce.factory import (
    SERVICE_ID_ENVIRONMENT,
    SERVICE_ID_PAYMENT_MANAGER,
    SERVICE_ID_TOKEN_MANAGER_FACTORY,
    CommerceFactory,
)
from vitrine.domain.commerce.registry import ServiceRegistry

if TYPE_CHECKING:
    from pathlib import Path

FRAMEWORK_CONFIG: dict[str, Any] = {
    "product_index": {
        "default_tenant": "default",
        "tenants": {
            "default": {},
            "b2b": {
                "filter_types": {"select_b2b": {"type": "select", "template": "b2b/select"}},
                "search_backend": "elastic",
            },
        },
    },
    "filter_types": {
        "number_range": {"type": "number_range", "template": "filter/range"},
        "select": {"type": "select"},
    },
}


class FakeEnvironment:
    def __init__(
        self,
        checkout_tenant: str | None = None,
        assortment_tenant: str | None = None,
    ) -> None:
        self.checkout_tenant = checkout_tenant
        self.assortment_tenant = assortment_tenant
        self.saved = 0

    def get_current_checkout_tenant(self) -> str | None:
        return self.checkout_tenant

    def get_current_assortment_tenant(self) -> str | None:
        return self.assortment_tenant

    def save(self) -> None:
        self.saved += 1


@pytest.fixture
def environment() -> FakeEnvironment:
    return FakeEnvironment()


@pytest.fixture
def framework_config() -> FrameworkConfig:
    return FrameworkConfig.from_mapping(FRAMEWORK_CONFIG)


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "ecommerce.json"
    path.write_text(json.dumps(FRAMEWORK_CONFIG), encoding="utf-8")
    return path


@pytest.fixture
def services() -> dict[str, MagicMock]:
    """Named mock services, one per registry entry used in the factory fixture."""
    return {
        "cart.default": MagicMock(name="cart_default"),
        "cart.b2b": MagicMock(name="cart_b2b"),
        "order.default": MagicMock(name="order_default"),
        "order.b2b": MagicMock(name="order_b2b"),
        "price.default": MagicMock(name="price_default"),
        "price.b2b": MagicMock(name="price_b2b"),
        "availability.default": MagicMock(name="availability_default"),
        "checkout.default.default": MagicMock(name="checkout_default_default"),
        "checkout.express.b2b": MagicMock(name="checkout_express_b2b"),
        "commit.default.default": MagicMock(name="commit_default_default"),
        "commit.default.b2b": MagicMock(name="commit_default_b2b"),
        "payment_manager": MagicMock(name="payment_manager"),
        "token_manager_factory": MagicMock(name="token_manager_factory"),
    }


@pytest.fixture
def factory(
    environment: FakeEnvironment,
    framework_config: FrameworkConfig,
    services: dict[str, MagicMock],
) -> CommerceFactory:
    container = ServiceRegistry(
        "service",
        {
            SERVICE_ID_ENVIRONMENT: environment,
            SERVICE_ID_PAYMENT_MANAGER: services["payment_manager"],
            SERVICE_ID_TOKEN_MANAGER_FACTORY: services["token_manager_factory"],
        },
    )
    return CommerceFactory(
        container,
        cart_managers=ServiceRegistry(
            "cart_manager",
            {"default": services["cart.default"], "b2b": services["cart.b2b"]},
        ),
        order_managers=ServiceRegistry(
            "order_manager",
            {"default": services["order.default"], "b2b": services["order.b2b"]},
        ),
        price_systems=ServiceRegistry(
            "price_system",
            {"default": services["price.default"], "b2b": services["price.b2b"]},
        ),
        availability_systems=ServiceRegistry(
            "availability_system",
            {"default": services["availability.default"]},
        ),
        checkout_manager_factories=ServiceRegistry(
            "checkout_manager_factory",
            {
                "default.default": services["checkout.default.default"],
                "express.b2b": services["checkout.express.b2b"],
            },
        ),
        commit_order_processors=ServiceRegistry(
            "commit_order_processor",
            {
                "default.default": services["commit.default.default"],
                "default.b2b": services["commit.default.b2b"],
            },
        ),
        config=framework_config,
    )
