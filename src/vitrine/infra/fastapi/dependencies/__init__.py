"""FastAPI dependencies."""

from vitrine.infra.fastapi.dependencies.commerce import (
    CommerceFactoryDep,
    get_commerce_factory,
    install_commerce_factory,
)

__all__ = ["CommerceFactoryDep", "get_commerce_factory", "install_commerce_factory"]
