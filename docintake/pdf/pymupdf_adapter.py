import pymupdf

from docintake.pdf.base import BasePdfExtractor


class PyMuPdfAdapter(BasePdfExtractor):
    name = "pymupdf"

    def _page_texts(self, pdf_bytes: bytes) -> list[str]:
        with pymupdf.open(stream=pdf_bytes, filetype="pdf") as document:  # type: ignore[no-untyped-call]
            return [page.get_text() for page in document]
