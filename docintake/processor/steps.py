from docintake.database.models import DocumentCategory, DocumentStatus, NewDocument
from docintake.database.repositories.base import BaseDocumentRepository
from docintake.logging.logger import Log
from docintake.parsing.dispatcher import ParseDispatcher
from docintake.processor.exceptions import (
    InvalidDocumentCategoryError,
    OversizedUploadError,
)
from docintake.processor.orchestrator import ExtractionOrchestrator
from docintake.processor.pipeline import PipelineContext, PipelineStep
from docintake.storage.base import BaseBlobStore, blob_key


class ValidateUploadStep(PipelineStep):
    def __init__(self, max_upload_bytes: int) -> None:
        self._max_upload_bytes = max_upload_bytes

    def run(self, context: PipelineContext) -> PipelineContext:
        size = len(context.request.content)
        if size > self._max_upload_bytes:
            Log.warning(
                f"Rejected upload of {size} bytes from owner {context.request.owner_id}: "
                f"limit is {self._max_upload_bytes}"
            )
            raise OversizedUploadError(size, self._max_upload_bytes)
        try:
            context.category = DocumentCategory(context.request.category)
        except ValueError as exc:
            raise InvalidDocumentCategoryError(
                f"Invalid document type: {context.request.category!r}"
            ) from exc
        return context


class StoreBlobStep(PipelineStep):
    def __init__(self, blob_store: BaseBlobStore) -> None:
        self._blob_store = blob_store

    def run(self, context: PipelineContext) -> PipelineContext:
        request = context.request
        if not request.content:
            Log.info(f"Empty upload for document {context.document_id}, no blob stored")
            return context
        key = blob_key(request.owner_id, context.document_id, request.filename)
        self._blob_store.put(key, request.content)
        context.file_ref = key
        Log.info(f"Stored {len(request.content)} bytes for document {context.document_id}")
        return context


class ParseStep(PipelineStep):
    def __init__(self, dispatcher: ParseDispatcher) -> None:
        self._dispatcher = dispatcher

    def run(self, context: PipelineContext) -> PipelineContext:
        context.parse_outcome = self._dispatcher.dispatch(
            context.request.content, context.request.mime_type
        )
        return context


class CreateDocumentStep(PipelineStep):
    def __init__(self, doc_repo: BaseDocumentRepository) -> None:
        self._doc_repo = doc_repo

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.parse_outcome is None or context.category is None:
            raise ValueError("PipelineContext must be parsed and validated before create")
        request = context.request
        parsed = context.parse_outcome.result
        self._doc_repo.create_document(
            NewDocument(
                id=context.document_id,
                owner_id=request.owner_id,
                title=request.filename,
                content=parsed.raw,
                category=context.category,
                source_format=request.mime_type,
                size_bytes=len(request.content),
                file_ref=context.file_ref,
                structured=parsed.structured,
            )
        )
        context.document_created = True
        context.status = DocumentStatus.PENDING
        Log.info("Document created", document_id=context.document_id, owner_id=request.owner_id)
        return context


class MarkProcessingStep(PipelineStep):
    def __init__(self, doc_repo: BaseDocumentRepository) -> None:
        self._doc_repo = doc_repo

    def run(self, context: PipelineContext) -> PipelineContext:
        self._doc_repo.update_document_status(
            context.document_id,
            context.request.owner_id,
            DocumentStatus.PROCESSING,
        )
        context.status = DocumentStatus.PROCESSING
        Log.info("Document marked as processing", document_id=context.document_id)
        return context


class ExtractStep(PipelineStep):
    def __init__(self, orchestrator: ExtractionOrchestrator) -> None:
        self._orchestrator = orchestrator

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.parse_outcome is None or context.category is None:
            raise ValueError("PipelineContext must be parsed and validated before extraction")
        context.status = self._orchestrator.run(
            context.document_id,
            context.request.owner_id,
            context.parse_outcome.result,
            context.category,
        )
        return context
