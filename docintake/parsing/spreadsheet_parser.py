import csv
import io
from datetime import date, datetime, time, timedelta
from typing import Any

import openpyxl

from docintake.parsing.base import BaseParser
from docintake.parsing.exceptions import ParseFailure
from docintake.parsing.models import ParsedResult, extracted_at


class SpreadsheetParser(BaseParser):
    """Every sheet of an .xlsx workbook as CSV text plus row-major cell data."""

    name = "spreadsheet"
    mime_types = (
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    )

    def parse(self, content: bytes) -> ParsedResult:
        try:
            workbook = openpyxl.load_workbook(
                io.BytesIO(content), read_only=True, data_only=True
            )
        except Exception as exc:
            raise ParseFailure(f"Excel parsing failed: {exc}") from exc

        raw = ""
        sheets: list[dict[str, Any]] = []
        try:
            for worksheet in workbook.worksheets:
                rows = [
                    [_cell_value(value) for value in row]
                    for row in worksheet.iter_rows(values_only=True)
                ]
                raw += f"\n\n=== Sheet: {worksheet.title} ===\n{_to_csv(rows)}"
                sheets.append({"name": worksheet.title, "rows": rows})
        except Exception as exc:
            raise ParseFailure(f"Excel parsing failed: {exc}") from exc
        finally:
            workbook.close()

        return ParsedResult(
            raw=raw,
            structured={"sheets": sheets},
            metadata={
                "extractedAt": extracted_at(),
                "sheetCount": len(sheets),
            },
        )


def _cell_value(value: Any) -> Any:
    """Keep cells untyped but JSON-safe: dates become ISO strings."""
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, timedelta):
        return str(value)
    return value


def _to_csv(rows: list[list[Any]]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    for row in rows:
        writer.writerow(["" if value is None else value for value in row])
    return buffer.getvalue().rstrip("\n")
