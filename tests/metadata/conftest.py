"""Fixtures for metadata repository tests backed by in-memory SQLite."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest
from sqlalchemy import create_engine, insert
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from vitrine.domain.metadata.element_metadata import MetadataOwner
from vitrine.domain.metadata.infrastructure import ElementMetadataRepository, metadata_table

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from sqlalchemy import Engine

CLASS_ID = "Product"


@pytest.fixture
def engine() -> Iterator[Engine]:
    engine = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    metadata_table(CLASS_ID).create(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(engine, expire_on_commit=False)


@pytest.fixture
def repository(session_factory: sessionmaker[Session]) -> ElementMetadataRepository:
    return ElementMetadataRepository(session_factory)


@pytest.fixture
def owner() -> MetadataOwner:
    return MetadataOwner(object_id=10, class_id=CLASS_ID)


@pytest.fixture
def insert_rows(engine: Engine) -> Callable[..., None]:
    """Insert raw metadata rows; each row overrides a base relation row."""

    def _insert(*rows: dict[str, Any]) -> None:
        base = {
            "o_id": 10,
            "dest_id": 20,
            "type": "object",
            "fieldname": "accessories",
            "ownertype": "object",
            "ownername": "",
            "position": "0",
        }
        with engine.begin() as conn:
            conn.execute(insert(metadata_table(CLASS_ID)), [{**base, **row} for row in rows])

    return _insert
