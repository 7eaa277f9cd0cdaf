"""Tenant-scoped commerce service factory.

Single entry point for resolving commerce subsystems. Systems with several
instances (tenant specific cart and order managers, named price and
availability systems, checkout managers per ``name.tenant``) are looked up
in dedicated registries. All other services are fetched from the host
container on demand, so only services that are actually used get built.

Default resolution:

- Tenant-style lookups (cart manager, order manager): explicit tenant,
  else the environment's current checkout tenant, else ``"default"``.
- Named lookups (price system, availability system): explicit name,
  else ``"default"``. The environment is never consulted.
- Checkout-manager-family lookups: ``"<name>.<tenant>"`` where the name
  defaults to ``"default"`` and the tenant follows the tenant-style chain.

Every miss raises :class:`UnsupportedError` naming the offending key(s).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from vitrine.domain.commerce.config import get_commerce_settings, load_framework_config
from vitrine.domain.commerce.filter_service import FilterService
from vitrine.domain.commerce.index_service import IndexService
from vitrine.domain.commerce.registry import registry_from_entry_points
from vitrine.foundation.application.discovery import (
    GROUP_AVAILABILITY_SYSTEMS,
    GROUP_CART_MANAGERS,
    GROUP_CHECKOUT_MANAGER_FACTORIES,
    GROUP_COMMIT_ORDER_PROCESSORS,
    GROUP_ORDER_MANAGERS,
    GROUP_PRICE_SYSTEMS,
)
from vitrine.foundation.domain.exceptions import UnsupportedError, ValidationError
from vitrine.foundation.domain.service_keys import DEFAULT_NAME, ServiceKey

if TYPE_CHECKING:
    from vitrine.domain.commerce.config import CommerceSettings, FrameworkConfig
    from vitrine.foundation.domain.ports import (
        AvailabilitySystemPort,
        CartManagerPort,
        CommitOrderProcessorPort,
        EnvironmentPort,
        OrderManagerPort,
        PriceSystemPort,
        ServiceLocatorPort,
    )

logger = logging.getLogger(__name__)

# Container service IDs
SERVICE_ID_ENVIRONMENT = "vitrine.environment"
SERVICE_ID_PRICING_MANAGER = "vitrine.pricing_manager"
SERVICE_ID_PAYMENT_MANAGER = "vitrine.payment_manager"
SERVICE_ID_OFFER_TOOL = "vitrine.offer_tool"
SERVICE_ID_VOUCHER_SERVICE = "vitrine.voucher_service"
SERVICE_ID_TOKEN_MANAGER_FACTORY = "vitrine.token_manager_factory"
SERVICE_ID_TRACKING_MANAGER = "vitrine.tracking_manager"

# (constructor argument, registry category, entry point group)
_REGISTRY_GROUPS = (
    ("cart_managers", "cart_manager", GROUP_CART_MANAGERS),
    ("order_managers", "order_manager", GROUP_ORDER_MANAGERS),
    ("price_systems", "price_system", GROUP_PRICE_SYSTEMS),
    ("availability_systems", "availability_system", GROUP_AVAILABILITY_SYSTEMS),
    (
        "checkout_manager_factories",
        "checkout_manager_factory",
        GROUP_CHECKOUT_MANAGER_FACTORIES,
    ),
    ("commit_order_processors", "commit_order_processor", GROUP_COMMIT_ORDER_PROCESSORS),
)


class CommerceFactory:
    """Facade resolving commerce services per tenant and name.

    Holds no domain state of its own apart from the framework
    configuration and the index service, both created on first access and
    memoized for the lifetime of the factory.

    Args:
        container: Host container for singleton services (environment,
            payment manager, ...).
        cart_managers: Cart managers keyed by checkout tenant.
        order_managers: Order managers keyed by checkout tenant.
        price_systems: Price systems keyed by name.
        availability_systems: Availability systems keyed by name.
        checkout_manager_factories: Checkout manager factories keyed by
            ``"name.tenant"``.
        commit_order_processors: Commit order processors keyed by
            ``"checkout_manager_name.tenant"``.
        settings: Settings locating the framework config file. Defaults to
            the cached environment-based settings.
        config: Pre-loaded framework config. When given, the config file
            is never read.
    """

    def __init__(
        self,
        container: ServiceLocatorPort,
        cart_managers: ServiceLocatorPort,
        order_managers: ServiceLocatorPort,
        price_systems: ServiceLocatorPort,
        availability_systems: ServiceLocatorPort,
        checkout_manager_factories: ServiceLocatorPort,
        commit_order_processors: ServiceLocatorPort,
        *,
        settings: CommerceSettings | None = None,
        config: FrameworkConfig | None = None,
    ) -> None:
        self._container = container
        self._cart_managers = cart_managers
        self._order_managers = order_managers
        self._price_systems = price_systems
        self._availability_systems = availability_systems
        self._checkout_manager_factories = checkout_manager_factories
        self._commit_order_processors = commit_order_processors
        self._settings = settings
        self._config = config
        self._index_service: IndexService | None = None

    @classmethod
    def from_entry_points(
        cls,
        container: ServiceLocatorPort,
        *,
        exclude_names: frozenset[str] = frozenset(),
        settings: CommerceSettings | None = None,
    ) -> CommerceFactory:
        """Build a factory whose registries are discovered from entry points.

        Each registry is populated from its ``vitrine.*`` entry point group;
        services are constructed lazily on first lookup.
        """
        registries = {
            argument: registry_from_entry_points(category, group, exclude_names=exclude_names)
            for argument, category, group in _REGISTRY_GROUPS
        }
        return cls(container, settings=settings, **registries)

    # ------------------------------------------------------------------
    # Environment
    # ------------------------------------------------------------------

    def get_environment(self) -> EnvironmentPort:
        return self._get_container_service(SERVICE_ID_ENVIRONMENT)  # type: ignore[no-any-return]

    def _resolve_tenant(self, tenant: str | None) -> str:
        """Explicit tenant, else current checkout tenant, else "default"."""
        if tenant is not None:
            return tenant
        current = self.get_environment().get_current_checkout_tenant()
        return current if current is not None else DEFAULT_NAME

    # ------------------------------------------------------------------
    # Tenant specific systems
    # ------------------------------------------------------------------

    def get_cart_manager(self, tenant: str | None = None) -> CartManagerPort:
        """Return the cart manager for ``tenant``.

        If no tenant is passed it falls back to the current checkout tenant,
        or to "default" if no checkout tenant is set.

        Raises:
            UnsupportedError: If no cart manager is defined for the tenant.
        """
        tenant = self._resolve_tenant(tenant)
        if not self._cart_managers.has(tenant):
            raise UnsupportedError(
                f'Cart manager for tenant "{tenant}" is not defined. '
                "Please check the configuration.",
                category="cart_manager",
                tenant=tenant,
            )
        return self._cart_managers.get(tenant)  # type: ignore[no-any-return]

    def get_order_manager(self, tenant: str | None = None) -> OrderManagerPort:
        """Return the order manager for ``tenant``.

        Follows the same tenant fallback as :meth:`get_cart_manager`.

        Raises:
            UnsupportedError: If no order manager is defined for the tenant.
        """
        tenant = self._resolve_tenant(tenant)
        if not self._order_managers.has(tenant):
            raise UnsupportedError(
                f'Order manager for tenant "{tenant}" is not defined. '
                "Please check the configuration.",
                category="order_manager",
                tenant=tenant,
            )
        return self._order_managers.get(tenant)  # type: ignore[no-any-return]

    # ------------------------------------------------------------------
    # Named systems
    # ------------------------------------------------------------------

    def get_price_system(self, name: str | None = None) -> PriceSystemPort:
        """Return a price system by name, "default" if no name is passed.

        Raises:
            UnsupportedError: If the price system is not registered.
        """
        if name is None:
            name = DEFAULT_NAME
        if not self._price_systems.has(name):
            raise UnsupportedError(
                f'Price system "{name}" is not supported. Please check the configuration.',
                category="price_system",
                name=name,
            )
        return self._price_systems.get(name)  # type: ignore[no-any-return]

    def get_availability_system(self, name: str | None = None) -> AvailabilitySystemPort:
        """Return an availability system by name, "default" if no name is passed.

        Raises:
            UnsupportedError: If the availability system is not registered.
        """
        if name is None:
            name = DEFAULT_NAME
        if not self._availability_systems.has(name):
            raise UnsupportedError(
                f'Availability system "{name}" is not supported. '
                "Please check the configuration.",
                category="availability_system",
                name=name,
            )
        return self._availability_systems.get(name)  # type: ignore[no-any-return]

    # ------------------------------------------------------------------
    # Checkout manager family
    # ------------------------------------------------------------------

    def build_checkout_manager_key(
        self,
        name: str | None = None,
        tenant: str | None = None,
    ) -> ServiceKey:
        """Normalize name and tenant to "default" and/or the current checkout tenant.

        Raises:
            UnsupportedError: If either part is empty or contains the key
                separator, so no registry can hold the composed key.
        """
        name = name if name is not None else DEFAULT_NAME
        tenant = self._resolve_tenant(tenant)
        try:
            return ServiceKey(name=name, tenant=tenant)
        except ValidationError as exc:
            raise UnsupportedError(
                f'Checkout manager with name "{name}" and tenant "{tenant}" cannot be '
                "configured. Please check the configuration.",
                category="checkout_manager_key",
                name=name,
                tenant=tenant,
            ) from exc

    def get_checkout_manager(
        self,
        cart: Any,
        name: str | None = None,
        tenant: str | None = None,
    ) -> Any:
        """Create a checkout manager bound to ``cart``.

        Checkout managers are named, and each name may support several
        tenants. Without name or tenant, the "default" tenant of the
        checkout manager named "default" is used (subject to the current
        checkout tenant).

        Raises:
            UnsupportedError: If no factory is defined for ``name.tenant``.
        """
        key = self.build_checkout_manager_key(name, tenant)
        service_id = key.compose()

        if not self._checkout_manager_factories.has(service_id):
            raise UnsupportedError(
                f'There is no factory defined for checkout manager with name "{key.name}" '
                f'and tenant "{key.tenant}". Please check the configuration.',
                category="checkout_manager_factory",
                name=key.name,
                tenant=key.tenant,
            )

        factory = self._checkout_manager_factories.get(service_id)
        return factory.create_checkout_manager(cart)

    def get_commit_order_processor(
        self,
        checkout_manager_name: str | None = None,
        tenant: str | None = None,
    ) -> CommitOrderProcessorPort:
        """Return the commit order processor configured for a checkout manager.

        ``checkout_manager_name`` and ``tenant`` follow the same defaults as
        :meth:`get_checkout_manager`.

        Raises:
            UnsupportedError: If no processor is defined for ``name.tenant``.
        """
        key = self.build_checkout_manager_key(checkout_manager_name, tenant)
        service_id = key.compose()

        if not self._commit_order_processors.has(service_id):
            raise UnsupportedError(
                f'Commit order processor for checkout manager name "{key.name}" '
                f'and tenant "{key.tenant}" is not defined. Please check the configuration.',
                category="commit_order_processor",
                name=key.name,
                tenant=key.tenant,
            )
        return self._commit_order_processors.get(service_id)  # type: ignore[no-any-return]

    # ------------------------------------------------------------------
    # Singleton services
    # ------------------------------------------------------------------

    def _get_container_service(self, service_id: str) -> Any:
        if not self._container.has(service_id):
            raise UnsupportedError(
                f'Service "{service_id}" is not defined. Please check the configuration.',
                category="service",
                service_id=service_id,
            )
        return self._container.get(service_id)

    def get_pricing_manager(self) -> Any:
        return self._get_container_service(SERVICE_ID_PRICING_MANAGER)

    def get_payment_manager(self) -> Any:
        return self._get_container_service(SERVICE_ID_PAYMENT_MANAGER)

    def get_offer_tool_service(self) -> Any:
        return self._get_container_service(SERVICE_ID_OFFER_TOOL)

    def get_voucher_service(self) -> Any:
        return self._get_container_service(SERVICE_ID_VOUCHER_SERVICE)

    def get_tracking_manager(self) -> Any:
        return self._get_container_service(SERVICE_ID_TRACKING_MANAGER)

    def get_token_manager(self, configuration: Any) -> Any:
        """Build a token manager for a voucher token configuration."""
        token_manager_factory = self._get_container_service(SERVICE_ID_TOKEN_MANAGER_FACTORY)
        return token_manager_factory.get_token_manager(configuration)

    # ------------------------------------------------------------------
    # Configuration, index and filters
    # ------------------------------------------------------------------

    def get_config(self) -> FrameworkConfig:
        """Return the framework configuration, loading it on first access.

        Raises:
            InvalidConfigError: If the configuration file cannot be loaded.
        """
        if self._config is None:
            settings = self._settings or get_commerce_settings()
            self._config = load_framework_config(settings.config_path)
            logger.info(
                "framework_config_loaded",
                extra={"path": str(settings.config_path)},
            )
        return self._config

    def get_index_service(self) -> IndexService:
        if self._index_service is None:
            self._index_service = IndexService(
                self.get_config().product_index,
                self.get_environment(),
            )
        return self._index_service

    def get_all_tenants(self) -> list[str]:
        """Names of all configured product index tenants."""
        return list(self.get_config().product_index.tenants)

    def get_filter_service(self) -> FilterService:
        """Filter service for the current index tenant.

        Uses the tenant's own filter types when it defines any, else the
        global filter types.
        """
        filter_types = self.get_index_service().get_current_tenant_config().get_filter_type_config()
        if not filter_types:
            filter_types = self.get_config().filter_types
        return FilterService(filter_types)

    def save_state(self) -> None:
        """Save the current cart manager, then the environment."""
        self.get_cart_manager().save()
        self.get_environment().save()
