"""
Storage Service Tests
=====================

Unit tests for the persistence gateway including:
- Collection and diagram CRUD
- Cascade delete
- Validation before store access
- Upload and duplicate
- Store failure wrapping
- Default collection seeding

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""

import pytest
from unittest.mock import Mock
from sqlalchemy.exc import OperationalError

from config.database import DEFAULT_COLLECTION_NAME, init_db, seed_default_collection
from models.domain import Collection, Diagram
from services.storage import (
    StorageService,
    StorageValidationError,
    CollectionNotFoundError,
    DiagramNotFoundError,
    StorageInternalError,
)
from services.storage.diagram_mixin import diagram_name_from_filename, is_mermaid_filename


@pytest.fixture
def service(db_session):
    return StorageService(db_session)


@pytest.fixture
def collection(service):
    return service.create_collection("Architecture", "System diagrams")


class TestSeeding:
    """Default collection seeding."""

    def test_default_collection_seeded_once(self, engine, db_session):
        init_db(bind=engine)
        init_db(bind=engine)

        names = [c.name for c in db_session.query(Collection).all()]
        assert names == [DEFAULT_COLLECTION_NAME]

    def test_seed_skips_non_empty_store(self, db_session):
        assert seed_default_collection(db_session) is False


class TestCollectionOperations:
    """Collection CRUD."""

    def test_create_and_get(self, service, collection):
        fetched = service.get_collection(collection.id)

        assert fetched.name == "Architecture"
        assert fetched.description == "System diagrams"
        assert fetched.created_at is not None

    def test_ids_are_unique(self, service):
        first = service.create_collection("One")
        second = service.create_collection("Two")

        assert first.id != second.id

    @pytest.mark.parametrize("name", [None, "", "   "])
    def test_create_requires_name(self, name):
        db_mock = Mock()
        service = StorageService(db_mock)

        with pytest.raises(StorageValidationError) as exc_info:
            service.create_collection(name)

        assert exc_info.value.message == "Name is required"
        assert exc_info.value.error_code == "VALIDATION"
        db_mock.add.assert_not_called()

    def test_list_newest_first(self, service):
        older = service.create_collection("Older")
        newer = service.create_collection("Newer")

        ids = [c.id for c in service.list_collections()]

        assert ids.index(newer.id) < ids.index(older.id)

    def test_blank_description_is_stored_as_null(self, service, collection):
        created = service.create_collection("Empty", description="")
        updated = service.update_collection(collection.id, description="")

        assert created.description is None
        assert updated.description is None

    def test_update_keeps_omitted_fields(self, service, collection):
        updated = service.update_collection(collection.id, name="Renamed")

        assert updated.name == "Renamed"
        assert updated.description == "System diagrams"
        assert updated.updated_at >= updated.created_at

    def test_update_rejects_blank_name(self, service, collection):
        with pytest.raises(StorageValidationError):
            service.update_collection(collection.id, name=" ")

    def test_update_missing_returns_none(self, service):
        assert service.update_collection(9999, name="x") is None

    def test_get_missing_returns_none(self, service):
        assert service.get_collection(9999) is None

    def test_delete_missing_returns_false(self, service):
        assert service.delete_collection(9999) is False

    def test_delete_cascades_to_diagrams(self, service, collection, db_session):
        diagram_id = service.create_diagram(collection.id, "Flow", "graph TD").id

        assert service.delete_collection(collection.id) is True

        db_session.expire_all()
        assert service.get_diagram(diagram_id) is None
        assert db_session.query(Diagram).count() == 0


class TestDiagramOperations:
    """Diagram CRUD."""

    def test_create_and_get(self, service, collection):
        diagram = service.create_diagram(collection.id, "Flow", "graph TD\n    A --> B")

        fetched = service.get_diagram(diagram.id)
        assert fetched.name == "Flow"
        assert fetched.content == "graph TD\n    A --> B"
        assert fetched.collection_id == collection.id

    def test_create_validates_before_store_access(self):
        db_mock = Mock()
        service = StorageService(db_mock)

        with pytest.raises(StorageValidationError) as exc_info:
            service.create_diagram(None, "Flow", None)

        assert exc_info.value.message == "collection_id, name, and content are required"
        assert exc_info.value.context["fields"] == ["collection_id", "content"]
        db_mock.query.assert_not_called()
        db_mock.add.assert_not_called()

    def test_create_rejects_empty_content(self, service, collection):
        with pytest.raises(StorageValidationError) as exc_info:
            service.create_diagram(collection.id, "Flow", "")

        assert exc_info.value.context["fields"] == ["content"]

    def test_create_keeps_whitespace_only_content(self, service, collection):
        diagram = service.create_diagram(collection.id, "Blank", "  \n")

        assert service.get_diagram(diagram.id).content == "  \n"

    def test_create_in_unknown_collection(self, service, db_session):
        with pytest.raises(CollectionNotFoundError) as exc_info:
            service.create_diagram(9999, "Orphan", "graph TD")

        assert exc_info.value.error_code == "NOT_FOUND"
        assert db_session.query(Diagram).count() == 0

    def test_list_by_collection_only_returns_its_diagrams(self, service, collection):
        other = service.create_collection("Other")
        mine = service.create_diagram(collection.id, "Mine", "graph TD")
        service.create_diagram(other.id, "Theirs", "graph TD")

        listed = service.list_diagrams_by_collection(collection.id)

        assert [d.id for d in listed] == [mine.id]

    def test_list_unknown_collection_is_empty(self, service):
        assert service.list_diagrams_by_collection(9999) == []

    def test_update_allows_empty_content(self, service, collection):
        diagram = service.create_diagram(collection.id, "Flow", "graph TD")

        updated = service.update_diagram(diagram.id, content="")

        assert updated.content == ""
        assert updated.name == "Flow"

    def test_update_missing_returns_none(self, service):
        assert service.update_diagram(9999, name="x", content="y") is None

    def test_delete(self, service, collection):
        diagram = service.create_diagram(collection.id, "Flow", "graph TD")

        assert service.delete_diagram(diagram.id) is True
        assert service.get_diagram(diagram.id) is None
        assert service.delete_diagram(diagram.id) is False

    def test_duplicate(self, service, collection):
        diagram = service.create_diagram(collection.id, "Flow", "graph TD")

        copy = service.duplicate_diagram(diagram.id)

        assert copy.id != diagram.id
        assert copy.name == "Flow (copy)"
        assert copy.content == "graph TD"
        assert copy.collection_id == collection.id

    def test_duplicate_missing(self, service):
        with pytest.raises(DiagramNotFoundError):
            service.duplicate_diagram(9999)


class TestUpload:
    """Uploading Mermaid source files."""

    def test_upload_preserves_content(self, service, collection):
        content = "graph TD\r\n    A[Ünïcode] --> B\n\n"

        diagram = service.upload_diagram(collection.id, "foo.mmd", content.encode("utf-8"))

        assert diagram.name == "foo"
        assert diagram.content == content

    def test_upload_rejects_wrong_extension(self, service, collection):
        with pytest.raises(StorageValidationError) as exc_info:
            service.upload_diagram(collection.id, "foo.txt", b"graph TD")

        assert exc_info.value.message == "Please upload a .mmd or .mermaid file"

    def test_upload_rejects_non_utf8(self, service, collection):
        with pytest.raises(StorageValidationError):
            service.upload_diagram(collection.id, "foo.mmd", b"\xff\xfe\x00")

    def test_upload_requires_file(self, service, collection):
        with pytest.raises(StorageValidationError):
            service.upload_diagram(collection.id, None, None)

    def test_upload_unknown_collection(self, service):
        with pytest.raises(CollectionNotFoundError):
            service.upload_diagram(9999, "foo.mmd", b"graph TD")

    @pytest.mark.parametrize("filename,expected", [
        ("foo.mmd", "foo"),
        ("Foo.MMD", "Foo"),
        ("flow.chart.mermaid", "flow.chart"),
        ("dir/sub/seq.mmd", "seq"),
        ("C:\\Users\\me\\seq.mermaid", "seq"),
    ])
    def test_name_from_filename(self, filename, expected):
        assert diagram_name_from_filename(filename) == expected

    @pytest.mark.parametrize("filename,accepted", [
        ("a.mmd", True),
        ("a.MERMAID", True),
        ("a.md", False),
        ("", False),
        (None, False),
    ])
    def test_is_mermaid_filename(self, filename, accepted):
        assert is_mermaid_filename(filename) is accepted


class TestStoreFailures:
    """SQLAlchemy errors are rolled back and wrapped."""

    def test_commit_failure_is_wrapped(self):
        db_mock = Mock()
        db_mock.commit.side_effect = OperationalError("INSERT", {}, Exception("disk I/O error"))
        service = StorageService(db_mock)

        with pytest.raises(StorageInternalError) as exc_info:
            service.create_collection("Doomed")

        assert exc_info.value.error_code == "INTERNAL"
        assert exc_info.value.operation == "create_collection"
        db_mock.rollback.assert_called_once()
