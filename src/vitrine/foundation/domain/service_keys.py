"""Composite service keys for checkout-manager-family registries.

Checkout manager factories and commit order processors are registered
under ``"<name>.<tenant>"`` keys. ``ServiceKey`` owns both directions of
that format so that error messages can always report the two parts.

Example:
    >>> key = ServiceKey("default", "b2b")
    >>> key.compose()
    'default.b2b'
    >>> ServiceKey.parse("default.b2b") == key
    True
"""

from __future__ import annotations

from dataclasses import dataclass

from vitrine.foundation.domain.exceptions import ValidationError

DEFAULT_NAME = "default"
SERVICE_KEY_SEPARATOR = "."


@dataclass(frozen=True, slots=True)
class ServiceKey:
    """Value object for a ``name.tenant`` registry key.

    Attributes:
        name: Service name (e.g., checkout manager name).
        tenant: Checkout tenant the service is configured for.

    Raises:
        ValidationError: If either part is empty or contains the separator.
    """

    name: str
    tenant: str

    def __post_init__(self) -> None:
        for field, value in (("name", self.name), ("tenant", self.tenant)):
            if not value:
                raise ValidationError(field, "Service key part must not be empty")
            if SERVICE_KEY_SEPARATOR in value:
                raise ValidationError(
                    field,
                    f"Service key part must not contain {SERVICE_KEY_SEPARATOR!r}",
                    value=value,
                )

    def compose(self) -> str:
        """Join name and tenant with the fixed separator."""
        return f"{self.name}{SERVICE_KEY_SEPARATOR}{self.tenant}"

    @classmethod
    def parse(cls, key: str) -> ServiceKey:
        """Split a composite key back into its name and tenant parts.

        Args:
            key: Composite key string (e.g., ``"default.b2b"``).

        Returns:
            The ServiceKey the string was composed from.

        Raises:
            ValidationError: If the separator is missing or a part is empty.
        """
        name, separator, tenant = key.partition(SERVICE_KEY_SEPARATOR)
        if not separator:
            raise ValidationError(
                "service_key",
                f"Missing {SERVICE_KEY_SEPARATOR!r} separator",
                value=key,
            )
        return cls(name=name, tenant=tenant)

    def __str__(self) -> str:
        return self.compose()
