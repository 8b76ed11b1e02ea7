"""Dependency-free PDF text recovery by scanning content streams.

Each ``stream ... endstream`` body is ASCII85-decoded and inflated when it
is encoded that way, then text-showing operands (``(...) Tj`` and
``[...] TJ``) are collected. Bodies without any text operator are kept
verbatim.
"""

import base64
import re
import zlib
from typing import ClassVar

from docintake.pdf.base import BasePdfExtractor


class StreamScanAdapter(BasePdfExtractor):
    """Best-effort text extraction that never raises."""

    name = "stream"

    _STREAM_RE: ClassVar[re.Pattern[bytes]] = re.compile(
        rb"stream\s*(.*?)\s*endstream", re.DOTALL
    )
    _TJ_RE: ClassVar[re.Pattern[bytes]] = re.compile(
        rb"\((?P<literal>(?:\\.|[^\\)])*)\)\s*Tj|\[(?P<array>[^\]]*)\]\s*TJ",
        re.DOTALL,
    )
    _ARRAY_LITERAL_RE: ClassVar[re.Pattern[bytes]] = re.compile(
        rb"\(((?:\\.|[^\\)])*)\)", re.DOTALL
    )
    _ESCAPES: ClassVar[dict[bytes, bytes]] = {
        b"n": b"\n",
        b"r": b"\r",
        b"t": b"\t",
        b"b": b"\b",
        b"f": b"\f",
        b"(": b"(",
        b")": b")",
        b"\\": b"\\",
    }

    def extract(self, pdf_bytes: bytes) -> str:
        return " ".join(self._page_texts(pdf_bytes)).strip()

    def _page_texts(self, pdf_bytes: bytes) -> list[str]:
        # Content streams, not pages: the scan has no page tree.
        chunks = []
        for match in self._STREAM_RE.finditer(pdf_bytes):
            text = self._stream_text(match.group(1))
            if text:
                chunks.append(text)
        return chunks

    def _stream_text(self, body: bytes) -> str:
        data = self._inflate(self._decode_ascii85(body))
        operands = self._text_operands(data)
        if operands:
            return " ".join(operands)
        return data.decode("utf-8", errors="replace").strip()

    @staticmethod
    def _decode_ascii85(body: bytes) -> bytes:
        stripped = body.strip()
        if not stripped.endswith(b"~>"):
            return body
        stripped = stripped[:-2]
        if stripped.startswith(b"<~"):
            stripped = stripped[2:]
        try:
            return base64.a85decode(stripped)
        except ValueError:
            return body

    @staticmethod
    def _inflate(body: bytes) -> bytes:
        # The scan may trim trailing bytes of a compressed body, so partial
        # output from a decompressor object is accepted.
        try:
            inflated = zlib.decompressobj().decompress(body)
        except zlib.error:
            return body
        return inflated or body

    def _text_operands(self, data: bytes) -> list[str]:
        operands = []
        for match in self._TJ_RE.finditer(data):
            if match.group("literal") is not None:
                pieces = [match.group("literal")]
            else:
                pieces = self._ARRAY_LITERAL_RE.findall(match.group("array"))
            text = "".join(self._unescape(piece) for piece in pieces).strip()
            if text:
                operands.append(text)
        return operands

    def _unescape(self, literal: bytes) -> str:
        out = bytearray()
        i = 0
        while i < len(literal):
            char = literal[i : i + 1]
            if char == b"\\" and i + 1 < len(literal):
                nxt = literal[i + 1 : i + 2]
                if nxt in (b"\n", b"\r"):
                    i += 2
                    continue
                octal = re.match(rb"[0-7]{1,3}", literal[i + 1 : i + 4])
                if octal:
                    out.append(int(octal.group(0), 8) & 0xFF)
                    i += 1 + len(octal.group(0))
                    continue
                out += self._ESCAPES.get(nxt, nxt)
                i += 2
                continue
            out += char
            i += 1
        return out.decode("latin-1")
