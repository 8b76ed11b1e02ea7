from docintake.config.settings import Settings
from docintake.pdf.base import BasePdfExtractor
from docintake.pdf.pdfplumber_adapter import PdfPlumberAdapter
from docintake.pdf.pymupdf_adapter import PyMuPdfAdapter
from docintake.pdf.stream_scan_adapter import StreamScanAdapter


class PdfExtractorFactory:
    """Creates the PDF extraction chain based on settings."""

    ADAPTERS: dict[str, type[BasePdfExtractor]] = {
        "stream": StreamScanAdapter,
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }

    @classmethod
    def create(cls, settings: Settings) -> BasePdfExtractor:
        engine = settings.pdf_engine.lower()
        adapter_cls = cls.ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.ADAPTERS)}"
            )
        return adapter_cls()

    @classmethod
    def create_chain(cls, settings: Settings) -> list[BasePdfExtractor]:
        """Configured engine first, stream scan last as the catch-all."""
        primary = cls.create(settings)
        if isinstance(primary, StreamScanAdapter):
            return [primary]
        return [primary, StreamScanAdapter()]
