"""FastAPI dependencies exposing the commerce factory to endpoints.

Usage in endpoint::

    from vitrine.infra.fastapi.dependencies import CommerceFactoryDep

    @router.get("/cart")
    def get_cart(factory: CommerceFactoryDep) -> dict[str, str]:
        cart_manager = factory.get_cart_manager()
        ...
"""

# NOTE: Do NOT use ``from __future__ import annotations`` here.
# FastAPI dependency injection needs runtime-evaluable type annotations
# (``request: Request``) to resolve parameters.

from typing import Annotated

from fastapi import Depends, FastAPI, Request
from vitrine.domain.commerce.factory import CommerceFactory


def install_commerce_factory(app: FastAPI, factory: CommerceFactory) -> None:
    """Store the factory on app state for ``get_commerce_factory``.

    Call once during startup, after the registries are populated.
    """
    app.state.commerce_factory = factory


def get_commerce_factory(request: Request) -> CommerceFactory:
    """Retrieve the commerce factory from FastAPI app state.

    Expects ``request.app.state.commerce_factory`` to be set during startup.

    Raises:
        RuntimeError: If no factory was installed on the application.
    """
    factory = getattr(request.app.state, "commerce_factory", None)
    if factory is None:
        msg = "No commerce factory installed. Call install_commerce_factory() at startup."
        raise RuntimeError(msg)
    return factory  # type: ignore[no-any-return]


CommerceFactoryDep = Annotated[CommerceFactory, Depends(get_commerce_factory)]
