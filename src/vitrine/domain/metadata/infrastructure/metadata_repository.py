"""Repository for element metadata rows.

Sync repository with an injected session factory. Rows are addressed by
owner object plus :class:`MetadataReference`; each row stores one column
value of the relation.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import and_, delete, insert, select

from vitrine.domain.metadata.element_metadata import OBJECT_TYPE_ALIASES
from vitrine.domain.metadata.infrastructure.schema import metadata_table
from vitrine.foundation.domain.exceptions import ConflictError

if TYPE_CHECKING:
    from collections.abc import Callable

    from sqlalchemy import ColumnElement, Table
    from sqlalchemy.orm import Session

    from vitrine.domain.metadata.element_metadata import (
        ElementMetadata,
        MetadataOwner,
        MetadataReference,
    )

logger = logging.getLogger(__name__)


def _reference_filter(
    table: Table,
    owner: MetadataOwner,
    reference: MetadataReference,
) -> ColumnElement[bool]:
    """Build the WHERE clause selecting one relation's rows.

    An "object" destination also matches rows stored with an empty type.
    """
    c = table.c
    if reference.matches_any_object_type:
        type_clause = c["type"].in_(OBJECT_TYPE_ALIASES)
    else:
        type_clause = c["type"] == reference.destination_type

    return and_(
        c.o_id == owner.object_id,
        c.dest_id == reference.destination_id,
        c.fieldname == reference.fieldname,
        c.ownertype == reference.owner_type,
        c.ownername == reference.owner_name,
        c.position == reference.position,
        type_clause,
    )


class ElementMetadataRepository:
    """Read/write access to ``object_metadata_<class_id>`` tables.

    Args:
        session_factory: Callable returning a SQLAlchemy Session context manager.
    """

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def load(
        self,
        owner: MetadataOwner,
        record: ElementMetadata,
        reference: MetadataReference,
    ) -> ElementMetadata | None:
        """Populate ``record`` from the rows of one relation.

        Issues a single query. Rows whose column is not one of the record's
        columns are ignored.

        Args:
            owner: Owning object (selects the table and ``o_id``).
            record: Record to populate; defines the known columns.
            reference: Relation keys and destination type.

        Returns:
            The populated record, or None if no row matched.

        Raises:
            ConflictError: If two rows carry a value for the same column.
        """
        table = metadata_table(owner.class_id)
        stmt = select(table.c["column"], table.c.data).where(
            _reference_filter(table, owner, reference)
        )

        with self._session_factory() as session:
            rows = session.execute(stmt).all()

        if not rows:
            return None

        record.set_element_type_and_id(reference.destination_type, reference.destination_id)
        record.fieldname = reference.fieldname

        setters = record.setters
        seen: set[str] = set()
        for column, data in rows:
            setter = setters.get(column)
            if setter is None:
                logger.debug(
                    "metadata_column_ignored",
                    extra={"table": table.name, "column": column},
                )
                continue

            if column in seen:
                raise ConflictError(
                    "Duplicate metadata rows for column",
                    table=table.name,
                    object_id=owner.object_id,
                    destination_id=reference.destination_id,
                    fieldname=reference.fieldname,
                    column=column,
                )
            seen.add(column)
            setter(data)

        return record

    def save(
        self,
        owner: MetadataOwner,
        record: ElementMetadata,
        reference: MetadataReference,
    ) -> None:
        """Replace the stored rows of one relation with ``record``'s values.

        Deletes existing rows for the reference, then inserts one row per
        column holding a value. Runs in a single transaction.
        """
        table = metadata_table(owner.class_id)
        values = [
            {
                "o_id": owner.object_id,
                "dest_id": reference.destination_id,
                "type": reference.destination_type,
                "fieldname": reference.fieldname,
                "column": column,
                "data": value,
                "ownertype": reference.owner_type,
                "ownername": reference.owner_name,
                "position": reference.position,
            }
            for column, value in record.data.items()
            if value is not None
        ]

        with self._session_factory() as session:
            session.execute(delete(table).where(_reference_filter(table, owner, reference)))
            if values:
                session.execute(insert(table), values)
            session.commit()

        logger.debug(
            "metadata_saved",
            extra={
                "table": table.name,
                "object_id": owner.object_id,
                "destination_id": reference.destination_id,
                "columns": len(values),
            },
        )

    def delete(self, owner: MetadataOwner, reference: MetadataReference) -> int:
        """Delete the stored rows of one relation.

        Returns:
            Number of rows removed.
        """
        table = metadata_table(owner.class_id)
        with self._session_factory() as session:
            stmt = delete(table).where(_reference_filter(table, owner, reference))
            result = session.execute(stmt)
            session.commit()
            row_count: int = getattr(result, "rowcount", 0)
            return row_count
