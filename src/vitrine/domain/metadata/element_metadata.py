"""Element metadata records.

An ``ElementMetadata`` describes the relation between an owning object and
a destination element (object, asset or document) held in one of the
owner's relation fields. The record carries a fixed set of columns,
defined by the relation field, each holding one serialized value.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import cached_property, partial
from typing import TYPE_CHECKING

from vitrine.foundation.domain.exceptions import ValidationError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Mapping

DEFAULT_DESTINATION_TYPE = "object"

# Destination types the storage layer treats as "object"; legacy rows carry ''.
OBJECT_TYPE_ALIASES: tuple[str, ...] = (DEFAULT_DESTINATION_TYPE, "")

TABLE_PREFIX = "object_metadata_"

_CLASS_ID_PATTERN = re.compile(r"[A-Za-z0-9_]+")


@dataclass(frozen=True, slots=True)
class MetadataOwner:
    """The owning object of a metadata relation.

    Attributes:
        object_id: ID of the owning object.
        class_id: ID of the owner's class; selects the metadata table.
    """

    object_id: int
    class_id: str

    def __post_init__(self) -> None:
        if not _CLASS_ID_PATTERN.fullmatch(self.class_id):
            raise ValidationError(
                "class_id",
                "Class ID may only contain letters, digits and underscores",
                value=self.class_id,
            )

    @property
    def table_name(self) -> str:
        return f"{TABLE_PREFIX}{self.class_id}"


@dataclass(frozen=True, slots=True)
class MetadataReference:
    """Descriptive keys locating one relation of an owner.

    Attributes:
        destination_id: ID of the related element.
        fieldname: Relation field on the owner.
        owner_type: Container type of the field (e.g. "object", "localizedfield").
        owner_name: Name of the container holding the field.
        position: Position discriminator (e.g. language for localized fields).
        destination_type: Type of the related element.
    """

    destination_id: int
    fieldname: str
    owner_type: str = "object"
    owner_name: str = ""
    position: str = "0"
    destination_type: str = DEFAULT_DESTINATION_TYPE

    @property
    def matches_any_object_type(self) -> bool:
        """True when legacy rows with an empty type also belong to this reference."""
        return self.destination_type == DEFAULT_DESTINATION_TYPE


class ElementMetadata:
    """Key/value metadata attached to one related element.

    Args:
        fieldname: Relation field the metadata belongs to.
        columns: Column names defined by the relation field.
        element_type: Type of the related element.
        element_id: ID of the related element.

    Example:
        >>> meta = ElementMetadata("accessories", ["quantity", "note"])
        >>> meta.set_value("quantity", "2")
        >>> meta.get_value("quantity")
        '2'
    """

    def __init__(
        self,
        fieldname: str,
        columns: Iterable[str],
        element_type: str = DEFAULT_DESTINATION_TYPE,
        element_id: int | None = None,
    ) -> None:
        self.fieldname = fieldname
        self.element_type = element_type
        self.element_id = element_id
        self._columns: tuple[str, ...] = tuple(columns)
        self._data: dict[str, str | None] = {}

    @property
    def columns(self) -> tuple[str, ...]:
        return self._columns

    @property
    def data(self) -> Mapping[str, str | None]:
        """Snapshot of the values set so far."""
        return dict(self._data)

    def set_element_type_and_id(self, element_type: str, element_id: int) -> None:
        self.element_type = element_type
        self.element_id = element_id

    def get_value(self, column: str) -> str | None:
        self._require_column(column)
        return self._data.get(column)

    def set_value(self, column: str, value: str | None) -> None:
        self._require_column(column)
        self._data[column] = value

    @cached_property
    def setters(self) -> Mapping[str, Callable[[str | None], None]]:
        """Field index: column name -> assignment function.

        Built once per record from its column definition.
        """
        return {column: partial(self._assign, column) for column in self._columns}

    def _assign(self, column: str, value: str | None) -> None:
        self._data[column] = value

    def _require_column(self, column: str) -> None:
        if column not in self._columns:
            raise ValidationError(
                "column",
                f"Unknown metadata column {column!r}",
                fieldname=self.fieldname,
            )

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(fieldname={self.fieldname!r}, "
            f"element_type={self.element_type!r}, element_id={self.element_id!r}, "
            f"data={self._data!r})"
        )
