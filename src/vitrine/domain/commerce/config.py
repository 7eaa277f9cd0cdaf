"""Commerce framework configuration.

Two layers:

- ``CommerceSettings`` reads process settings from environment variables
  with the ``COMMERCE_`` prefix (currently only the config file path).
- ``FrameworkConfig`` is the structured framework configuration loaded
  from that JSON file: product index tenants and filter types.

Example config file::

    {
      "product_index": {
        "default_tenant": "default",
        "tenants": {
          "default": {},
          "b2b": {"filter_types": {"select": {"type": "select"}}}
        }
      },
      "filter_types": {
        "number_range": {"type": "number_range", "template": "filter/range"}
      }
    }
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from vitrine.foundation.domain.exceptions import InvalidConfigError
from vitrine.foundation.domain.service_keys import DEFAULT_NAME

DEFAULT_CONFIG_PATH = Path("config/ecommerce.json")


class CommerceSettings(BaseSettings):
    """Commerce settings from environment variables.

    Loads configuration from environment variables with ``COMMERCE_`` prefix:
    - COMMERCE_CONFIG_PATH: Path of the framework JSON config file
      (default: config/ecommerce.json)
    """

    model_config = SettingsConfigDict(
        env_prefix="COMMERCE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    config_path: Path = Field(
        default=DEFAULT_CONFIG_PATH,
        description="Path of the framework configuration file",
    )


class FilterTypeConfig(BaseModel):
    """A filter type definition (e.g. select box, number range)."""

    model_config = ConfigDict(extra="allow", frozen=True)

    type: str
    template: str | None = None


class IndexTenantConfig(BaseModel):
    """Configuration of one product index tenant.

    Unknown attributes are kept so index backends can read their own
    options from the same section.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    filter_types: dict[str, FilterTypeConfig] | None = None

    def get_filter_type_config(self) -> dict[str, FilterTypeConfig] | None:
        """Tenant specific filter types, or None to use the global ones."""
        return self.filter_types or None


class ProductIndexConfig(BaseModel):
    """Product index section: tenants and the default tenant name."""

    model_config = ConfigDict(frozen=True)

    default_tenant: str = DEFAULT_NAME
    tenants: dict[str, IndexTenantConfig] = Field(default_factory=dict)


class FrameworkConfig(BaseModel):
    """Root of the framework configuration file."""

    model_config = ConfigDict(frozen=True)

    product_index: ProductIndexConfig = Field(default_factory=ProductIndexConfig)
    filter_types: dict[str, FilterTypeConfig] = Field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> FrameworkConfig:
        """Validate a plain mapping, raising InvalidConfigError on failure."""
        try:
            return cls.model_validate(data)
        except PydanticValidationError as exc:
            raise InvalidConfigError(
                "Invalid framework configuration",
                errors=exc.error_count(),
            ) from exc


def load_framework_config(path: Path | str) -> FrameworkConfig:
    """Load and validate the framework configuration file.

    Args:
        path: Path of the JSON configuration file.

    Returns:
        Validated FrameworkConfig.

    Raises:
        InvalidConfigError: If the file is missing, unreadable, not JSON,
            or does not match the configuration schema.
    """
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise InvalidConfigError(
            f"Framework configuration file cannot be read: {exc.strerror}",
            path=str(path),
        ) from exc

    try:
        return FrameworkConfig.model_validate_json(raw)
    except PydanticValidationError as exc:
        raise InvalidConfigError(
            "Invalid framework configuration",
            path=str(path),
            errors=exc.error_count(),
        ) from exc


@lru_cache(maxsize=1)
def get_commerce_settings() -> CommerceSettings:
    """Get cached CommerceSettings instance.

    Clear cache with ``get_commerce_settings.cache_clear()`` for testing.
    """
    return CommerceSettings()
