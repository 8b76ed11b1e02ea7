import base64
import zlib

from docintake.pdf.stream_scan_adapter import StreamScanAdapter


def _pdf_with_stream(body: bytes) -> bytes:
    return (
        b"%PDF-1.4\n1 0 obj\n<< /Length " + str(len(body)).encode() + b" >>\n"
        b"stream\n" + body + b"\nendstream\nendobj\n%%EOF\n"
    )


class TestStreamScanAdapter:
    def test_collects_tj_operands(self) -> None:
        pdf = _pdf_with_stream(b"BT /F1 12 Tf 72 720 Td (Hello stream) Tj ET")
        assert StreamScanAdapter().extract(pdf) == "Hello stream"

    def test_collects_tj_array_operands(self) -> None:
        pdf = _pdf_with_stream(b"BT [(Hel) -20 (lo)] TJ ET")
        assert StreamScanAdapter().extract(pdf) == "Hello"

    def test_unescapes_literal_strings(self) -> None:
        pdf = _pdf_with_stream(rb"BT (a\(b\) caf\351) Tj ET")
        assert StreamScanAdapter().extract(pdf) == "a(b) café"

    def test_inflates_flate_streams(self) -> None:
        pdf = _pdf_with_stream(zlib.compress(b"BT (Compressed text) Tj ET"))
        assert StreamScanAdapter().extract(pdf) == "Compressed text"

    def test_decodes_ascii85_then_inflates(self) -> None:
        encoded = base64.a85encode(zlib.compress(b"BT (Wrapped twice) Tj ET")) + b"~>"
        pdf = _pdf_with_stream(encoded)
        assert StreamScanAdapter().extract(pdf) == "Wrapped twice"

    def test_keeps_body_without_text_operators(self) -> None:
        pdf = _pdf_with_stream(b"plain words in a stream")
        assert StreamScanAdapter().extract(pdf) == "plain words in a stream"

    def test_joins_multiple_streams(self) -> None:
        pdf = _pdf_with_stream(b"BT (first) Tj ET") + _pdf_with_stream(b"BT (second) Tj ET")
        assert StreamScanAdapter().extract(pdf) == "first second"

    def test_returns_empty_string_without_streams(self) -> None:
        assert StreamScanAdapter().extract(b"not a pdf at all") == ""

    def test_reads_reportlab_output(self, sample_pdf_bytes: bytes) -> None:
        assert "Hello PDF World" in StreamScanAdapter().extract(sample_pdf_bytes)
