"""SQLAlchemy table definitions for element metadata storage.

Each owner class stores its relation metadata in its own table,
``object_metadata_<class_id>``. One row holds one column value of one
relation; the primary key spans the full owner reference plus the column,
so a relation can never carry two values for the same column.
"""

from __future__ import annotations

from sqlalchemy import Column, Integer, MetaData, PrimaryKeyConstraint, String, Table, Text

from vitrine.domain.metadata.element_metadata import TABLE_PREFIX

metadata_obj = MetaData()

# Owner reference plus column: at most one row per combination.
UNIQUE_COLUMNS: tuple[str, ...] = (
    "o_id",
    "dest_id",
    "type",
    "fieldname",
    "column",
    "ownertype",
    "ownername",
    "position",
)


def metadata_table(class_id: str) -> Table:
    """Return the metadata table for an owner class.

    Tables are registered on the shared ``metadata_obj`` once and reused.

    Args:
        class_id: ID of the owner class.

    Returns:
        The ``object_metadata_<class_id>`` Table.
    """
    return Table(
        f"{TABLE_PREFIX}{class_id}",
        metadata_obj,
        Column("o_id", Integer, nullable=False, default=0),
        Column("dest_id", Integer, nullable=False, default=0),
        Column("type", String(50), nullable=False, default=""),
        Column("fieldname", String(71), nullable=False),
        Column("column", String(190), nullable=False),
        Column("data", Text),
        Column("ownertype", String(12), nullable=False, default="object"),
        Column("ownername", String(70), nullable=False, default=""),
        Column("position", String(70), nullable=False, default="0"),
        PrimaryKeyConstraint(*UNIQUE_COLUMNS, name=f"pk_{TABLE_PREFIX}{class_id}"),
        keep_existing=True,
    )
