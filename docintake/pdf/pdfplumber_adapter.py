import io

import pdfplumber

from docintake.pdf.base import BasePdfExtractor


class PdfPlumberAdapter(BasePdfExtractor):
    name = "pdfplumber"

    def _page_texts(self, pdf_bytes: bytes) -> list[str]:
        with pdfplumber.open(io.BytesIO(pdf_bytes)) as document:
            return [page.extract_text() or "" for page in document.pages]
