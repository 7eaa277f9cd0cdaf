"""Middleware populating the checkout context from HTTP headers.

Extracts the visitor's checkout and assortment tenants from request
headers and makes them available to ``ContextEnvironment`` for the
duration of the request.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from vitrine.foundation.application.context import (
    clear_checkout_state,
    set_checkout_state,
)

if TYPE_CHECKING:
    from collections.abc import Callable


# Header names
CHECKOUT_TENANT_HEADER = "X-Checkout-Tenant"
ASSORTMENT_TENANT_HEADER = "X-Assortment-Tenant"

_CHECKOUT_TENANT_KEY = CHECKOUT_TENANT_HEADER.lower().encode("latin-1")
_ASSORTMENT_TENANT_KEY = ASSORTMENT_TENANT_HEADER.lower().encode("latin-1")


def _extract_header(headers: list[tuple[bytes, bytes]], name: bytes) -> str:
    """Extract a header value from raw ASGI headers."""
    for key, value in headers:
        if key.lower() == name:
            return value.decode("latin-1").strip()
    return ""


class CheckoutTenantMiddleware:
    """Pure ASGI middleware that sets the checkout state per request.

    Reads the following optional headers:
    - X-Checkout-Tenant: tenant for cart, order and checkout lookups
    - X-Assortment-Tenant: product index tenant

    Missing or blank headers leave the respective tenant unset, so lookups
    fall back to "default". The state is cleared after the request completes.
    """

    def __init__(self, app: Any) -> None:
        self.app = app

    async def __call__(
        self,
        scope: dict[str, Any],
        receive: Callable[..., Any],
        send: Callable[..., Any],
    ) -> None:
        if scope["type"] not in ("http", "websocket"):
            await self.app(scope, receive, send)
            return

        headers = scope.get("headers", [])
        token = set_checkout_state(
            checkout_tenant=_extract_header(headers, _CHECKOUT_TENANT_KEY) or None,
            assortment_tenant=_extract_header(headers, _ASSORTMENT_TENANT_KEY) or None,
        )
        try:
            await self.app(scope, receive, send)
        finally:
            clear_checkout_state(token)
