import pytest

from docintake.database.exceptions import (
    DocumentNotFoundError,
    InvalidStatusTransitionError,
)
from docintake.database.models import (
    DocumentCategory,
    DocumentFilters,
    DocumentStatus,
    NewDocument,
)
from docintake.database.repositories.memory_documents_repository import (
    InMemoryDocumentsRepository,
)

OWNER = "owner-1"


def _new(document_id: str, **overrides: object) -> NewDocument:
    fields: dict[str, object] = {
        "id": document_id,
        "owner_id": OWNER,
        "title": f"{document_id}.txt",
        "content": "text",
        "category": DocumentCategory.FIELD_REPORT,
        "source_format": "text/plain",
        "size_bytes": 4,
    }
    fields.update(overrides)
    return NewDocument(**fields)  # type: ignore[arg-type]


class TestCreate:
    def test_new_documents_are_pending_with_empty_extraction(self) -> None:
        repo = InMemoryDocumentsRepository()
        document = repo.create_document(_new("d1", structured={"rowCount": 1}))
        assert document.status is DocumentStatus.PENDING
        assert document.extracted_data == {}
        assert document.structured == {"rowCount": 1}
        assert document.created_at is not None

    def test_duplicate_id_is_rejected(self) -> None:
        repo = InMemoryDocumentsRepository()
        repo.create_document(_new("d1"))
        with pytest.raises(ValueError, match="already exists"):
            repo.create_document(_new("d1"))

    def test_returned_rows_are_copies(self) -> None:
        repo = InMemoryDocumentsRepository()
        repo.create_document(_new("d1"))
        fetched = repo.get_document_by_id("d1", OWNER)
        fetched.extracted_data["tampered"] = True
        assert repo.get_document_by_id("d1", OWNER).extracted_data == {}


class TestStatusTransitions:
    def test_pending_to_completed_stores_payload(self) -> None:
        repo = InMemoryDocumentsRepository()
        repo.create_document(_new("d1"))
        repo.update_document_status("d1", OWNER, DocumentStatus.COMPLETED, {"date": "2024"})
        document = repo.get_document_by_id("d1", OWNER)
        assert document.status is DocumentStatus.COMPLETED
        assert document.extracted_data == {"date": "2024"}

    def test_processing_then_failed(self) -> None:
        repo = InMemoryDocumentsRepository()
        repo.create_document(_new("d1"))
        repo.update_document_status("d1", OWNER, DocumentStatus.PROCESSING)
        repo.update_document_status("d1", OWNER, DocumentStatus.FAILED, {"error": "x"})
        assert repo.get_document_by_id("d1", OWNER).status is DocumentStatus.FAILED

    @pytest.mark.parametrize("terminal", [DocumentStatus.COMPLETED, DocumentStatus.FAILED])
    @pytest.mark.parametrize("target", list(DocumentStatus))
    def test_terminal_status_never_changes(
        self, terminal: DocumentStatus, target: DocumentStatus
    ) -> None:
        repo = InMemoryDocumentsRepository()
        repo.create_document(_new("d1"))
        repo.update_document_status("d1", OWNER, terminal, {"kept": True})

        with pytest.raises(InvalidStatusTransitionError):
            repo.update_document_status("d1", OWNER, target, {})

        document = repo.get_document_by_id("d1", OWNER)
        assert document.status is terminal
        assert document.extracted_data == {"kept": True}

    def test_processing_cannot_return_to_pending(self) -> None:
        repo = InMemoryDocumentsRepository()
        repo.create_document(_new("d1"))
        repo.update_document_status("d1", OWNER, DocumentStatus.PROCESSING)
        with pytest.raises(InvalidStatusTransitionError):
            repo.update_document_status("d1", OWNER, DocumentStatus.PENDING)

    def test_update_by_other_owner_is_not_found(self) -> None:
        repo = InMemoryDocumentsRepository()
        repo.create_document(_new("d1"))
        with pytest.raises(DocumentNotFoundError):
            repo.update_document_status("d1", "intruder", DocumentStatus.COMPLETED, {})
        assert repo.get_document_by_id("d1", OWNER).status is DocumentStatus.PENDING


class TestListAndDelete:
    def test_lists_newest_first(self) -> None:
        repo = InMemoryDocumentsRepository()
        for document_id in ("d1", "d2", "d3"):
            repo.create_document(_new(document_id))
        assert [d.id for d in repo.list_documents(OWNER)] == ["d3", "d2", "d1"]

    def test_lists_only_own_documents(self) -> None:
        repo = InMemoryDocumentsRepository()
        repo.create_document(_new("mine"))
        repo.create_document(_new("theirs", owner_id="owner-2"))
        assert [d.id for d in repo.list_documents(OWNER)] == ["mine"]

    def test_filters_by_category_and_status(self) -> None:
        repo = InMemoryDocumentsRepository()
        repo.create_document(_new("d1"))
        repo.create_document(_new("d2", category=DocumentCategory.SOP_MANUAL))
        repo.create_document(_new("d3", category=DocumentCategory.SOP_MANUAL))
        repo.update_document_status("d3", OWNER, DocumentStatus.COMPLETED, {})

        filters = DocumentFilters(
            category=DocumentCategory.SOP_MANUAL, status=DocumentStatus.PENDING
        )
        assert [d.id for d in repo.list_documents(OWNER, filters)] == ["d2"]

    def test_paginates(self) -> None:
        repo = InMemoryDocumentsRepository()
        for index in range(5):
            repo.create_document(_new(f"d{index}"))
        page = repo.list_documents(OWNER, DocumentFilters(limit=2, offset=1))
        assert [d.id for d in page] == ["d3", "d2"]

    def test_delete_removes_row(self) -> None:
        repo = InMemoryDocumentsRepository()
        repo.create_document(_new("d1"))
        repo.delete_document("d1", OWNER)
        with pytest.raises(DocumentNotFoundError):
            repo.get_document_by_id("d1", OWNER)

    def test_delete_by_other_owner_is_not_found(self) -> None:
        repo = InMemoryDocumentsRepository()
        repo.create_document(_new("d1"))
        with pytest.raises(DocumentNotFoundError):
            repo.delete_document("d1", "intruder")
        assert repo.get_document_by_id("d1", OWNER).id == "d1"
