import csv
import io
import re
from typing import Any

import pandas as pd

from docintake.logging.logger import Log
from docintake.parsing.base import BaseParser
from docintake.parsing.exceptions import ParseFailure
from docintake.parsing.models import ParsedResult, extracted_at

_NUMBER_RE = re.compile(r"^\s*-?(\d+\.?|\.\d+|\d+\.\d+)([eE][-+]?\d+)?\s*$")

EXTRA_FIELDS_KEY = "__parsed_extra"


class CsvParser(BaseParser):
    """CSV with a header row and per-field typing.

    Every field is read as text and typed on its own, so a column may mix
    numbers and strings. Ragged rows are kept: fields past the header go to
    ``__parsed_extra``, missing trailing fields are left out of the row, and
    both cases are reported in ``metadata["warnings"]``.
    """

    name = "csv"
    mime_types = ("text/csv",)

    def parse(self, content: bytes) -> ParsedResult:
        text = content.decode("utf-8-sig", errors="replace")
        try:
            width = _max_field_count(text)
            if width == 0:
                return _result(text, headers=[], data=[], warnings=[])
            # Numbered columns wide enough for the longest row, so pandas
            # never drops a line and short rows come back NaN-padded.
            frame = pd.read_csv(
                io.StringIO(text),
                header=None,
                names=list(range(width)),
                dtype=str,
                keep_default_na=False,
                skip_blank_lines=True,
                engine="python",
            )
        except pd.errors.EmptyDataError:
            return _result(text, headers=[], data=[], warnings=[])
        except (csv.Error, pd.errors.ParserError, ValueError) as exc:
            raise ParseFailure(f"CSV parsing failed: {exc}") from exc

        rows = [_present_fields(row) for row in frame.itertuples(index=False, name=None)]
        if not rows:
            return _result(text, headers=[], data=[], warnings=[])

        headers = rows[0]
        data: list[dict[str, Any]] = []
        warnings: list[str] = []
        for number, fields in enumerate(rows[1:], start=1):
            record = {
                header: infer_value(value) for header, value in zip(headers, fields)
            }
            if len(fields) > len(headers):
                record[EXTRA_FIELDS_KEY] = [infer_value(v) for v in fields[len(headers):]]
                warnings.append(
                    f"Row {number}: too many fields, expected {len(headers)}, found {len(fields)}"
                )
            elif len(fields) < len(headers):
                warnings.append(
                    f"Row {number}: too few fields, expected {len(headers)}, found {len(fields)}"
                )
            data.append(record)

        if warnings:
            Log.warning("CSV parsing warnings", count=len(warnings))
        return _result(text, headers=headers, data=data, warnings=warnings)


def _max_field_count(text: str) -> int:
    return max((len(row) for row in csv.reader(io.StringIO(text))), default=0)


def _present_fields(row: tuple[Any, ...]) -> list[str]:
    # pandas pads short rows with NaN even under dtype=str
    return [value for value in row if isinstance(value, str)]


def _result(
    text: str,
    *,
    headers: list[str],
    data: list[dict[str, Any]],
    warnings: list[str],
) -> ParsedResult:
    metadata: dict[str, Any] = {
        "extractedAt": extracted_at(),
        "rowCount": len(data),
        "columnCount": len(headers),
    }
    if warnings:
        metadata["warnings"] = warnings
    return ParsedResult(
        raw=text,
        structured={"data": data, "headers": headers, "rowCount": len(data)},
        metadata=metadata,
    )


def infer_value(value: Any) -> Any:
    """Type one CSV field: numbers, booleans, empty as None, else the text."""
    if value is None:
        return None
    if not isinstance(value, str):
        return None if pd.isna(value) else value
    if value == "":
        return None
    lowered = value.strip().lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    if _NUMBER_RE.match(value):
        stripped = value.strip()
        if re.fullmatch(r"-?\d+", stripped):
            return int(stripped)
        return float(stripped)
    return value
