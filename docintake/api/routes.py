from typing import Annotated, Any

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile, status

from docintake.api.dependencies import get_owner_id, get_processor
from docintake.database.models import DocumentCategory, DocumentFilters, DocumentStatus
from docintake.processor.models import UploadRequest
from docintake.processor.processor import Processor

router = APIRouter(prefix="/documents", tags=["documents"])

OwnerId = Annotated[str, Depends(get_owner_id)]
ProcessorDep = Annotated[Processor, Depends(get_processor)]


@router.post("/upload")
def upload_document(
    owner_id: OwnerId,
    processor: ProcessorDep,
    file: Annotated[UploadFile, File()],
    category: Annotated[str, Form(alias="type")],
) -> dict[str, Any]:
    content = file.file.read()
    outcome = processor.upload(
        UploadRequest(
            owner_id=owner_id,
            filename=file.filename or "upload",
            content=content,
            mime_type=file.content_type or "application/octet-stream",
            category=category,
        )
    )
    return {
        "success": True,
        "documentId": outcome.document_id,
        "status": outcome.status.value,
        "message": outcome.message,
    }


@router.get("")
def list_documents(
    owner_id: OwnerId,
    processor: ProcessorDep,
    category: Annotated[str | None, Query(alias="type")] = None,
    status_filter: Annotated[str | None, Query(alias="status")] = None,
    limit: Annotated[int, Query(ge=1, le=200)] = 50,
    offset: Annotated[int, Query(ge=0)] = 0,
) -> dict[str, Any]:
    try:
        filters = DocumentFilters(
            category=DocumentCategory(category) if category else None,
            status=DocumentStatus(status_filter) if status_filter else None,
            limit=limit,
            offset=offset,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    documents = processor.list_documents(owner_id, filters)
    return {"documents": [document.to_dict() for document in documents]}


@router.get("/{document_id}")
def get_document(
    document_id: str,
    owner_id: OwnerId,
    processor: ProcessorDep,
) -> dict[str, Any]:
    return {"document": processor.get_document(document_id, owner_id).to_dict()}


@router.delete("/{document_id}")
def delete_document(
    document_id: str,
    owner_id: OwnerId,
    processor: ProcessorDep,
) -> dict[str, Any]:
    processor.delete_document(document_id, owner_id)
    return {"success": True, "message": "Document deleted successfully"}
