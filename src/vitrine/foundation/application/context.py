"""Checkout context management for the storefront environment.

Provides a ContextVar-based mechanism for propagating the visitor's
checkout and assortment tenants across the call stack without explicit
parameter passing. Middleware populates the context at the start of a
request; :class:`ContextEnvironment` exposes it through the
``EnvironmentPort`` the commerce factory depends on.

Usage:
    # In middleware (automatically populates context)
    from vitrine.foundation.application.context import (
        clear_checkout_state,
        set_checkout_state,
    )

    token = set_checkout_state(checkout_tenant="b2b")
    try:
        ...
    finally:
        clear_checkout_state(token)

    # In services
    from vitrine.foundation.application.context import ContextEnvironment

    ContextEnvironment().get_current_checkout_tenant()  # "b2b"
"""

from __future__ import annotations

import logging
from contextvars import ContextVar
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable
    from contextvars import Token

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CheckoutState:
    """Immutable container for storefront environment state.

    Attributes:
        checkout_tenant: Tenant used for cart, order and checkout lookups.
        assortment_tenant: Product index tenant used for listings and filters.
    """

    checkout_tenant: str | None = None
    assortment_tenant: str | None = None


_EMPTY_STATE = CheckoutState()

# ContextVar for request-scoped state - None when no request is active
checkout_context: ContextVar[CheckoutState | None] = ContextVar(
    "checkout_context", default=None
)


def get_checkout_state() -> CheckoutState:
    """Get the current checkout state.

    Unlike request-bound identity context, an unset checkout state is not
    an error: it simply means no tenant was selected.

    Returns:
        The active CheckoutState, or an empty state outside a request.
    """
    return checkout_context.get() or _EMPTY_STATE


def set_checkout_state(
    checkout_tenant: str | None = None,
    assortment_tenant: str | None = None,
) -> Token[CheckoutState | None]:
    """Set the checkout state for the current async task.

    Returns a token that must be used to reset the context.

    Args:
        checkout_tenant: The current checkout tenant, if any.
        assortment_tenant: The current assortment tenant, if any.

    Returns:
        Token for resetting the context via clear_checkout_state().
    """
    state = CheckoutState(
        checkout_tenant=checkout_tenant or None,
        assortment_tenant=assortment_tenant or None,
    )
    return checkout_context.set(state)


def clear_checkout_state(token: Token[CheckoutState | None]) -> None:
    """Reset the checkout state using the provided token.

    Args:
        token: The token returned from set_checkout_state.
    """
    checkout_context.reset(token)


class ContextEnvironment:
    """``EnvironmentPort`` implementation backed by the checkout ContextVar.

    Setters replace the state for the current context only. ``save()``
    hands the current state to ``persist`` when one is configured, so the
    host can write it to its session storage.

    Args:
        persist: Optional callback receiving the CheckoutState on save.
    """

    def __init__(self, persist: Callable[[CheckoutState], None] | None = None) -> None:
        self._persist = persist

    def get_current_checkout_tenant(self) -> str | None:
        return get_checkout_state().checkout_tenant

    def set_current_checkout_tenant(self, tenant: str | None) -> None:
        checkout_context.set(replace(get_checkout_state(), checkout_tenant=tenant or None))

    def get_current_assortment_tenant(self) -> str | None:
        return get_checkout_state().assortment_tenant

    def set_current_assortment_tenant(self, tenant: str | None) -> None:
        checkout_context.set(replace(get_checkout_state(), assortment_tenant=tenant or None))

    def save(self) -> None:
        """Persist the current checkout state through the configured callback."""
        state = get_checkout_state()
        if self._persist is None:
            logger.debug("environment_save_skipped", extra={"reason": "no_persist_callback"})
            return
        self._persist(state)
        logger.debug(
            "environment_saved",
            extra={
                "checkout_tenant": state.checkout_tenant,
                "assortment_tenant": state.assortment_tenant,
            },
        )
