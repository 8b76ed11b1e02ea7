import json
import uuid
from typing import Any

from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from docintake.database.connection import get_connection
from docintake.database.exceptions import (
    DocumentNotFoundError,
    InvalidStatusTransitionError,
)
from docintake.database.models import (
    Document,
    DocumentCategory,
    DocumentFilters,
    DocumentStatus,
    NewDocument,
    allowed_predecessors,
)
from docintake.database.repositories.base import BaseDocumentRepository

_COLUMNS = """
    id, user_id, title, content, type, file_type, file_size, file_ref,
    status, structured_data, extracted_data, created_at, updated_at
"""


class DocumentsRepository(BaseDocumentRepository):
    """Database operations for the documents table."""

    def create_document(self, document: NewDocument) -> Document:
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    INSERT INTO documents
                    (id, user_id, title, content, type, file_type, file_size,
                     file_ref, status, structured_data, extracted_data)
                    VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
                    RETURNING {_COLUMNS}
                    """,
                    (
                        document.id,
                        document.owner_id,
                        document.title,
                        document.content,
                        document.category.value,
                        document.source_format,
                        document.size_bytes,
                        document.file_ref,
                        DocumentStatus.PENDING.value,
                        Jsonb(document.structured) if document.structured is not None else None,
                        Jsonb({}),
                    ),
                )
                row = cur.fetchone()
            conn.commit()

        if row is None:
            raise RuntimeError(f"Insert of document {document.id} returned no row")
        return _row_to_document(row)

    def update_document_status(
        self,
        document_id: str,
        owner_id: str,
        status: DocumentStatus,
        extracted_data: dict[str, Any] | None = None,
    ) -> None:
        """Persist a forward status move together with the extracted data.

        The predecessor check runs inside the UPDATE so a row can never be
        moved backwards, even by a stale writer.
        """
        _require_document_id(document_id)
        predecessors = [s.value for s in allowed_predecessors(status)]
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    UPDATE documents
                    SET status = %s, extracted_data = %s, updated_at = NOW()
                    WHERE id = %s AND user_id = %s AND status = ANY(%s)
                    """,
                    (
                        status.value,
                        Jsonb(extracted_data or {}),
                        document_id,
                        owner_id,
                        predecessors,
                    ),
                )
                updated = cur.rowcount
                current = None
                if updated == 0:
                    cur.execute(
                        "SELECT status FROM documents WHERE id = %s AND user_id = %s",
                        (document_id, owner_id),
                    )
                    current = cur.fetchone()
            conn.commit()

        if updated:
            return
        if current is None:
            raise DocumentNotFoundError(f"Document {document_id} not found")
        raise InvalidStatusTransitionError(
            f"Document {document_id} cannot move from {current[0]} to {status.value}"
        )

    def get_document_by_id(self, document_id: str, owner_id: str) -> Document:
        _require_document_id(document_id)
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    SELECT {_COLUMNS}
                    FROM documents
                    WHERE id = %s AND user_id = %s
                    """,
                    (document_id, owner_id),
                )
                row = cur.fetchone()

        if row is None:
            raise DocumentNotFoundError(f"Document {document_id} not found")
        return _row_to_document(row)

    def list_documents(
        self, owner_id: str, filters: DocumentFilters | None = None
    ) -> list[Document]:
        filters = filters or DocumentFilters()
        clauses = ["user_id = %s"]
        params: list[Any] = [owner_id]
        if filters.category is not None:
            clauses.append("type = %s")
            params.append(filters.category.value)
        if filters.status is not None:
            clauses.append("status = %s")
            params.append(filters.status.value)
        params.extend([filters.limit, filters.offset])

        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    SELECT {_COLUMNS}
                    FROM documents
                    WHERE {" AND ".join(clauses)}
                    ORDER BY created_at DESC
                    LIMIT %s OFFSET %s
                    """,
                    params,
                )
                rows = cur.fetchall()

        return [_row_to_document(row) for row in rows]

    def delete_document(self, document_id: str, owner_id: str) -> None:
        _require_document_id(document_id)
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    "DELETE FROM documents WHERE id = %s AND user_id = %s",
                    (document_id, owner_id),
                )
                if cur.rowcount == 0:
                    raise DocumentNotFoundError(f"Document {document_id} not found")
            conn.commit()


def _require_document_id(document_id: str) -> None:
    # The id column is a uuid; anything else cannot name a stored document.
    try:
        uuid.UUID(document_id)
    except (ValueError, TypeError, AttributeError) as exc:
        raise DocumentNotFoundError(f"Document {document_id} not found") from exc


def _load_json(value: Any) -> Any:
    # jsonb columns arrive decoded; text columns from older rows do not.
    if isinstance(value, str):
        return json.loads(value or "{}")
    return value


def _row_to_document(row: dict[str, Any]) -> Document:
    return Document(
        id=str(row["id"]),
        owner_id=str(row["user_id"]),
        title=row["title"],
        content=row["content"],
        category=DocumentCategory(row["type"]),
        source_format=row["file_type"],
        size_bytes=row["file_size"],
        file_ref=row["file_ref"],
        status=DocumentStatus(row["status"]),
        structured=_load_json(row["structured_data"]),
        extracted_data=_load_json(row["extracted_data"]) or {},
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )
