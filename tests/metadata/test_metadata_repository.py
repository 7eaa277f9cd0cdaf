"""Tests for ElementMetadataRepository against in-memory SQLite."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from sqlalchemy import func, select

from vitrine.domain.metadata.element_metadata import ElementMetadata, MetadataReference
from vitrine.domain.metadata.infrastructure import ElementMetadataRepository, metadata_table
from vitrine.foundation.domain.exceptions import ConflictError

COLUMNS = ("quantity", "note")


def _record() -> ElementMetadata:
    return ElementMetadata("placeholder", COLUMNS)


def _row_count(engine) -> int:
    stmt = select(func.count()).select_from(metadata_table("Product"))
    with engine.connect() as conn:
        return conn.execute(stmt).scalar_one()


@pytest.mark.unit
class TestLoad:
    def test_no_rows_returns_none(self, repository, owner) -> None:
        record = _record()
        result = repository.load(owner, record, MetadataReference(20, "accessories"))
        assert result is None
        assert record.data == {}
        assert record.element_id is None

    def test_populates_known_columns(self, repository, owner, insert_rows) -> None:
        insert_rows(
            {"column": "quantity", "data": "2"},
            {"column": "note", "data": "gift wrap"},
        )
        record = _record()
        result = repository.load(owner, record, MetadataReference(20, "accessories"))

        assert result is record
        assert record.data == {"quantity": "2", "note": "gift wrap"}
        assert record.fieldname == "accessories"
        assert (record.element_type, record.element_id) == ("object", 20)

    def test_unknown_columns_ignored(self, repository, owner, insert_rows) -> None:
        insert_rows(
            {"column": "quantity", "data": "2"},
            {"column": "legacy_flag", "data": "1"},
        )
        record = repository.load(owner, _record(), MetadataReference(20, "accessories"))
        assert record is not None
        assert record.data == {"quantity": "2"}

    def test_repeated_unknown_column_ignored(self, repository, owner, insert_rows) -> None:
        insert_rows(
            {"column": "quantity", "data": "2"},
            {"column": "legacy_flag", "data": "1", "type": "object"},
            {"column": "legacy_flag", "data": "0", "type": ""},
        )
        record = repository.load(owner, _record(), MetadataReference(20, "accessories"))
        assert record is not None
        assert record.data == {"quantity": "2"}

    def test_object_reference_matches_legacy_empty_type(
        self, repository, owner, insert_rows
    ) -> None:
        insert_rows({"column": "quantity", "data": "4", "type": ""})
        record = repository.load(owner, _record(), MetadataReference(20, "accessories"))
        assert record is not None
        assert record.get_value("quantity") == "4"

    def test_non_object_type_matches_exactly(self, repository, owner, insert_rows) -> None:
        insert_rows(
            {"column": "quantity", "data": "1", "type": ""},
            {"column": "note", "data": "object note", "type": "object"},
        )
        reference = MetadataReference(20, "accessories", destination_type="asset")
        assert repository.load(owner, _record(), reference) is None

        insert_rows({"column": "note", "data": "asset note", "type": "asset"})
        record = repository.load(owner, _record(), reference)
        assert record is not None
        assert record.data == {"note": "asset note"}
        assert record.element_type == "asset"

    def test_rows_of_other_relations_excluded(self, repository, owner, insert_rows) -> None:
        insert_rows(
            {"column": "quantity", "data": "1", "position": "de"},
            {"column": "quantity", "data": "2", "ownertype": "localizedfield"},
            {"column": "quantity", "data": "3", "dest_id": 21},
            {"column": "quantity", "data": "4", "o_id": 11},
        )
        assert repository.load(owner, _record(), MetadataReference(20, "accessories")) is None

        record = repository.load(
            owner, _record(), MetadataReference(20, "accessories", position="de")
        )
        assert record is not None
        assert record.get_value("quantity") == "1"

    def test_duplicate_column_raises_conflict(self, repository, owner, insert_rows) -> None:
        insert_rows(
            {"column": "quantity", "data": "1", "type": "object"},
            {"column": "quantity", "data": "2", "type": ""},
        )
        with pytest.raises(ConflictError) as exc_info:
            repository.load(owner, _record(), MetadataReference(20, "accessories"))
        assert exc_info.value.context["column"] == "quantity"
        assert exc_info.value.context["table"] == "object_metadata_Product"

    def test_single_query_per_load(self, owner) -> None:
        session = MagicMock()
        session.execute.return_value.all.return_value = []
        session_factory = MagicMock()
        session_factory.return_value.__enter__.return_value = session

        ElementMetadataRepository(session_factory).load(
            owner, _record(), MetadataReference(20, "accessories")
        )

        session.execute.assert_called_once()


@pytest.mark.unit
class TestSaveAndDelete:
    def test_save_then_load(self, repository, owner) -> None:
        reference = MetadataReference(20, "accessories")
        record = ElementMetadata("accessories", COLUMNS)
        record.set_value("quantity", "5")
        record.set_value("note", "fragile")
        repository.save(owner, record, reference)

        loaded = repository.load(owner, _record(), reference)
        assert loaded is not None
        assert loaded.data == {"quantity": "5", "note": "fragile"}

    def test_save_replaces_existing_rows(self, repository, owner, insert_rows, engine) -> None:
        insert_rows(
            {"column": "quantity", "data": "1", "type": ""},
            {"column": "note", "data": "old"},
        )
        record = ElementMetadata("accessories", COLUMNS)
        record.set_value("quantity", "9")
        repository.save(owner, record, MetadataReference(20, "accessories"))

        assert _row_count(engine) == 1
        loaded = repository.load(owner, _record(), MetadataReference(20, "accessories"))
        assert loaded is not None
        assert loaded.data == {"quantity": "9"}

    def test_none_values_not_stored(self, repository, owner, engine) -> None:
        record = ElementMetadata("accessories", COLUMNS)
        record.set_value("quantity", None)
        repository.save(owner, record, MetadataReference(20, "accessories"))
        assert _row_count(engine) == 0

    def test_delete_returns_removed_rows(self, repository, owner, insert_rows, engine) -> None:
        insert_rows(
            {"column": "quantity", "data": "1"},
            {"column": "note", "data": "x"},
            {"column": "quantity", "data": "1", "dest_id": 21},
        )
        removed = repository.delete(owner, MetadataReference(20, "accessories"))
        assert removed == 2
        assert _row_count(engine) == 1
