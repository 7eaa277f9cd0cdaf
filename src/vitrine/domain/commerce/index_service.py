"""Product index service facade.

Resolves product index tenant configuration for the current visitor.
The active tenant comes from the environment's assortment tenant and
falls back to the configured default tenant.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from vitrine.foundation.domain.exceptions import UnsupportedError

if TYPE_CHECKING:
    from vitrine.domain.commerce.config import IndexTenantConfig, ProductIndexConfig
    from vitrine.foundation.domain.ports import EnvironmentPort


class IndexService:
    """Tenant-aware access to the product index configuration.

    Args:
        config: The ``product_index`` section of the framework config.
        environment: Environment supplying the current assortment tenant.
    """

    def __init__(self, config: ProductIndexConfig, environment: EnvironmentPort) -> None:
        self._config = config
        self._environment = environment

    def get_tenants(self) -> list[str]:
        """Names of all configured index tenants, in configuration order."""
        return list(self._config.tenants)

    def get_tenant_config(self, name: str) -> IndexTenantConfig:
        """Return the configuration of index tenant ``name``.

        Raises:
            UnsupportedError: If the tenant is not configured.
        """
        tenant_config = self._config.tenants.get(name)
        if tenant_config is None:
            raise UnsupportedError(
                f'Index tenant "{name}" is not defined. Please check the configuration.',
                category="index_tenant",
                key=name,
            )
        return tenant_config

    def get_current_tenant_name(self) -> str:
        return self._environment.get_current_assortment_tenant() or self._config.default_tenant

    def get_current_tenant_config(self) -> IndexTenantConfig:
        return self.get_tenant_config(self.get_current_tenant_name())
