import uuid

from docintake.config.settings import Settings
from docintake.database.models import Document, DocumentFilters
from docintake.database.repositories.base import BaseDocumentRepository
from docintake.database.repositories.factory import DocumentRepositoryFactory
from docintake.extraction.base import BaseExtractor
from docintake.extraction.factory import ExtractorFactory
from docintake.logging.logger import Log
from docintake.parsing.dispatcher import ParseDispatcher, build_dispatcher
from docintake.processor.models import UploadOutcome, UploadRequest
from docintake.processor.orchestrator import ExtractionOrchestrator
from docintake.processor.pipeline import PipelineContext, PipelineStep
from docintake.processor.steps import (
    CreateDocumentStep,
    ExtractStep,
    MarkProcessingStep,
    ParseStep,
    StoreBlobStep,
    ValidateUploadStep,
)
from docintake.storage.base import BaseBlobStore
from docintake.storage.factory import BlobStoreFactory


class Processor:
    """Owner-scoped document operations around the upload pipeline.

    Pipeline: validate -> store blob -> parse -> create -> [mark processing]
    -> extract. Everything runs synchronously inside the calling request.
    """

    def __init__(
        self,
        *,
        dispatcher: ParseDispatcher,
        extractor: BaseExtractor,
        doc_repo: BaseDocumentRepository,
        blob_store: BaseBlobStore,
        max_upload_bytes: int,
        persist_processing_state: bool = False,
    ) -> None:
        self._doc_repo = doc_repo
        self._blob_store = blob_store
        orchestrator = ExtractionOrchestrator(extractor, doc_repo)
        steps: list[PipelineStep] = [
            ValidateUploadStep(max_upload_bytes),
            StoreBlobStep(blob_store),
            ParseStep(dispatcher),
            CreateDocumentStep(doc_repo),
        ]
        if persist_processing_state:
            steps.append(MarkProcessingStep(doc_repo))
        steps.append(ExtractStep(orchestrator))
        self._steps = steps

    def upload(self, request: UploadRequest) -> UploadOutcome:
        """Run the full upload pipeline for one file.

        Raises:
            OversizedUploadError: before anything is stored.
            InvalidDocumentCategoryError: before anything is stored.
        """
        context = PipelineContext(request=request, document_id=str(uuid.uuid4()))
        Log.info(
            "Processing upload",
            document_id=context.document_id,
            owner_id=request.owner_id,
            filename=request.filename,
            mime_type=request.mime_type,
        )
        try:
            for step in self._steps:
                context = step.run(context)
        except Exception:
            self._discard_orphan_blob(context)
            raise
        return UploadOutcome(document_id=context.document_id, status=context.status)

    def get_document(self, document_id: str, owner_id: str) -> Document:
        return self._doc_repo.get_document_by_id(document_id, owner_id)

    def list_documents(
        self, owner_id: str, filters: DocumentFilters | None = None
    ) -> list[Document]:
        return self._doc_repo.list_documents(owner_id, filters)

    def delete_document(self, document_id: str, owner_id: str) -> None:
        """Delete a document and its blob.

        Raises:
            DocumentNotFoundError: if missing or not owned.
        """
        document = self._doc_repo.get_document_by_id(document_id, owner_id)
        if document.file_ref:
            self._blob_store.delete(document.file_ref)
        self._doc_repo.delete_document(document_id, owner_id)
        Log.info("Document deleted", document_id=document_id, owner_id=owner_id)

    def _discard_orphan_blob(self, context: PipelineContext) -> None:
        if context.file_ref is None or context.document_created:
            return
        try:
            self._blob_store.delete(context.file_ref)
        except Exception as exc:
            Log.warning("Could not remove orphan blob", key=context.file_ref, error=exc)


def build_processor(
    settings: Settings,
    doc_repo: BaseDocumentRepository | None = None,
    blob_store: BaseBlobStore | None = None,
) -> Processor:
    """Build a Processor with all required adapters."""
    return Processor(
        dispatcher=build_dispatcher(settings),
        extractor=ExtractorFactory.create(settings),
        doc_repo=doc_repo if doc_repo is not None else DocumentRepositoryFactory.create(settings),
        blob_store=blob_store if blob_store is not None else BlobStoreFactory.create(settings),
        max_upload_bytes=settings.max_upload_bytes,
        persist_processing_state=settings.persist_processing_state,
    )
