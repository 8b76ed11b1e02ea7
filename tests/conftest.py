import io
import zipfile
from collections.abc import Callable
from datetime import date

import openpyxl
import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

_DOCX_NS = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"


def build_docx(paragraphs: list[str]) -> bytes:
    """Build a minimal .docx archive holding only word/document.xml."""
    body = "".join(
        f'<w:p><w:r><w:t xml:space="preserve">{text}</w:t></w:r></w:p>'
        for text in paragraphs
    )
    document_xml = (
        '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
        f'<w:document xmlns:w="{_DOCX_NS}"><w:body>{body}</w:body></w:document>'
    )
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as archive:
        archive.writestr("word/document.xml", document_xml)
    return buf.getvalue()


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Hello PDF World")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Page one content")
    c.showPage()
    c.drawString(72, 720, "Page two content")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page)."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def docx_factory() -> Callable[[list[str]], bytes]:
    return build_docx


@pytest.fixture()
def sample_docx_bytes() -> bytes:
    return build_docx(["Clearance report", "Area 4 cleared"])


@pytest.fixture()
def sample_xlsx_bytes() -> bytes:
    """Two-sheet workbook with a header row, numbers and a date cell."""
    workbook = openpyxl.Workbook()
    teams = workbook.active
    teams.title = "Teams"
    teams.append(["team", "area_m2", "started"])
    teams.append(["Alpha", 1200, date(2024, 3, 1)])
    teams.append(["Bravo", 850, None])
    items = workbook.create_sheet("Items")
    items.append(["item", "count"])
    items.append(["AP mine", 3])
    buf = io.BytesIO()
    workbook.save(buf)
    return buf.getvalue()
