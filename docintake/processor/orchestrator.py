from docintake.database.models import DocumentCategory, DocumentStatus
from docintake.database.repositories.base import BaseDocumentRepository
from docintake.extraction.base import BaseExtractor
from docintake.extraction.exceptions import ExtractionError
from docintake.logging.logger import Log
from docintake.parsing.models import ParsedResult

AI_EXTRACTION_FAILED = "AI extraction failed"


class ExtractionOrchestrator:
    """Runs the single extraction attempt for a document and settles its status.

    A collaborator failure marks the document FAILED instead of propagating;
    a malformed response still completes it with the fallback payload.
    """

    def __init__(
        self,
        extractor: BaseExtractor,
        doc_repo: BaseDocumentRepository,
    ) -> None:
        self._extractor = extractor
        self._doc_repo = doc_repo

    def run(
        self,
        document_id: str,
        owner_id: str,
        parsed: ParsedResult,
        category: DocumentCategory,
    ) -> DocumentStatus:
        try:
            result = self._extractor.extract(parsed.raw, category)
        except ExtractionError as exc:
            Log.error("AI extraction failed", document_id=document_id, error=exc)
            self._doc_repo.update_document_status(
                document_id,
                owner_id,
                DocumentStatus.FAILED,
                {"error": AI_EXTRACTION_FAILED, "parseMetadata": parsed.metadata},
            )
            return DocumentStatus.FAILED

        self._doc_repo.update_document_status(
            document_id,
            owner_id,
            DocumentStatus.COMPLETED,
            result.payload,
        )
        Log.info("Document completed", document_id=document_id, degraded=result.degraded)
        return DocumentStatus.COMPLETED
