"""Port interface for the storefront environment.

The environment holds per-visitor state owned by the host (session,
request headers): most importantly the current checkout tenant used as
the fallback for tenant-scoped lookups.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class EnvironmentPort(Protocol):
    """Port for reading and persisting storefront environment state."""

    def get_current_checkout_tenant(self) -> str | None:
        """Return the current checkout tenant, or None when unset."""
        ...

    def get_current_assortment_tenant(self) -> str | None:
        """Return the current product index (assortment) tenant, or None."""
        ...

    def save(self) -> None:
        """Persist environment state to the host's storage."""
        ...
