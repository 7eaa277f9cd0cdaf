"""Integration tests for the commerce factory dependency."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from vitrine.domain.commerce.config import FrameworkConfig
from vitrine.domain.commerce.factory import SERVICE_ID_ENVIRONMENT, CommerceFactory
from vitrine.domain.commerce.registry import ServiceRegistry
from vitrine.foundation.application.context import ContextEnvironment
from vitrine.infra.fastapi import (
    CHECKOUT_TENANT_HEADER,
    CheckoutTenantMiddleware,
    CommerceFactoryDep,
    install_commerce_factory,
    register_exception_handlers,
)


class NamedCartManager:
    def __init__(self, name: str) -> None:
        self.name = name
        self.saves = 0

    def save(self) -> None:
        self.saves += 1


def _make_factory() -> CommerceFactory:
    container = ServiceRegistry("service", {SERVICE_ID_ENVIRONMENT: ContextEnvironment()})

    def empty(category: str) -> ServiceRegistry:
        return ServiceRegistry(category)

    return CommerceFactory(
        container,
        cart_managers=ServiceRegistry(
            "cart_manager",
            factories={
                "default": lambda: NamedCartManager("default"),
                "b2b": lambda: NamedCartManager("b2b"),
            },
        ),
        order_managers=empty("order_manager"),
        price_systems=empty("price_system"),
        availability_systems=empty("availability_system"),
        checkout_manager_factories=empty("checkout_manager_factory"),
        commit_order_processors=empty("commit_order_processor"),
        config=FrameworkConfig.from_mapping({}),
    )


def _make_app(factory: CommerceFactory | None) -> FastAPI:
    app = FastAPI()
    app.add_middleware(CheckoutTenantMiddleware)
    register_exception_handlers(app)
    if factory is not None:
        install_commerce_factory(app, factory)

    @app.get("/cart-manager")
    def cart_manager(factory: CommerceFactoryDep) -> dict[str, str]:
        return {"name": factory.get_cart_manager().name}

    @app.post("/state")
    def save_state(factory: CommerceFactoryDep) -> dict[str, int]:
        factory.save_state()
        return {"saves": factory.get_cart_manager().saves}

    return app


class TestCommerceFactoryDependency:
    @pytest.mark.integration
    def test_resolves_default_cart_manager(self) -> None:
        client = TestClient(_make_app(_make_factory()))
        resp = client.get("/cart-manager")
        assert resp.status_code == 200
        assert resp.json() == {"name": "default"}

    @pytest.mark.integration
    def test_checkout_tenant_header_selects_cart_manager(self) -> None:
        client = TestClient(_make_app(_make_factory()))
        resp = client.get("/cart-manager", headers={CHECKOUT_TENANT_HEADER: "b2b"})
        assert resp.json() == {"name": "b2b"}

    @pytest.mark.integration
    def test_unknown_tenant_returns_problem_details(self) -> None:
        client = TestClient(_make_app(_make_factory()))
        resp = client.get("/cart-manager", headers={CHECKOUT_TENANT_HEADER: "b2c"})
        assert resp.status_code == 500
        assert resp.json()["context"] == {"category": "cart_manager", "tenant": "b2c"}

    @pytest.mark.integration
    def test_save_state_saves_tenant_cart_manager(self) -> None:
        client = TestClient(_make_app(_make_factory()))
        resp = client.post("/state", headers={CHECKOUT_TENANT_HEADER: "b2b"})
        assert resp.json() == {"saves": 1}

    @pytest.mark.unit
    def test_missing_factory_raises(self) -> None:
        client = TestClient(_make_app(None), raise_server_exceptions=False)
        resp = client.get("/cart-manager")
        assert resp.status_code == 500
        assert resp.json()["error_code"] == "INTERNAL_ERROR"
