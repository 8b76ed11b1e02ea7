"""Tests for the Extractor (AI-powered structured extraction)."""

import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from docintake.database.models import DocumentCategory
from docintake.extraction.exceptions import ExtractionError, ExtractionNetworkError
from docintake.extraction.extractor import Extractor


def _make_extractor(client: MagicMock | None = None, **kwargs: object) -> Extractor:
    if client is None:
        client = MagicMock()
    return Extractor(client=client, model="test-model", **kwargs)  # type: ignore[arg-type]


def _mock_ai_response(client: MagicMock, content: str) -> None:
    """Configure the mock client to return the given content."""
    client.create_chat_completion.return_value = content


def _valid_json_response() -> str:
    return json.dumps({
        "location": "Sector 7",
        "date": "2024-03-01",
        "personnel": ["Team Alpha"],
        "hazards": ["AP mine"],
    })


class TestExtractSuccess:
    def test_returns_parsed_object(self) -> None:
        client = MagicMock()
        _mock_ai_response(client, _valid_json_response())
        result = _make_extractor(client).extract("some text", DocumentCategory.FIELD_REPORT)
        assert result.degraded is False
        assert result.payload["location"] == "Sector 7"
        assert result.payload["hazards"] == ["AP mine"]

    def test_passes_input_text_to_prompt(self) -> None:
        client = MagicMock()
        _mock_ai_response(client, _valid_json_response())
        _make_extractor(client).extract("clearance input", DocumentCategory.FIELD_REPORT)
        user_msg = client.create_chat_completion.call_args.kwargs["user_prompt"]
        assert "clearance input" in user_msg
        assert "FIELD_REPORT" in user_msg

    def test_system_prompt_lists_category_focus_fields(self) -> None:
        client = MagicMock()
        _mock_ai_response(client, _valid_json_response())
        _make_extractor(client).extract("text", DocumentCategory.INCIDENT_LOG)
        system_msg = client.create_chat_completion.call_args.kwargs["system_prompt"]
        assert "INCIDENT_LOG" in system_msg
        assert "- Incident type and severity" in system_msg
        assert "- Hazards identified" in system_msg
        assert "Team and task identifiers" not in system_msg

    def test_text_with_braces_is_not_treated_as_placeholder(self) -> None:
        client = MagicMock()
        _mock_ai_response(client, _valid_json_response())
        _make_extractor(client).extract("{not a field}", DocumentCategory.SOP_MANUAL)
        user_msg = client.create_chat_completion.call_args.kwargs["user_prompt"]
        assert "{not a field}" in user_msg

    def test_truncates_input_text(self) -> None:
        client = MagicMock()
        _mock_ai_response(client, _valid_json_response())
        text = "a" * 50 + "b" * 50
        _make_extractor(client, max_input_chars=50).extract(text, DocumentCategory.FIELD_REPORT)
        user_msg = client.create_chat_completion.call_args.kwargs["user_prompt"]
        assert "a" * 50 in user_msg
        assert "b" not in user_msg.split("\n\n", 1)[1]

    def test_calls_ai_with_model_and_max_tokens(self) -> None:
        client = MagicMock()
        _mock_ai_response(client, _valid_json_response())
        _make_extractor(client, max_tokens=123).extract("text", DocumentCategory.FIELD_REPORT)
        call_args = client.create_chat_completion.call_args
        assert call_args.kwargs["model"] == "test-model"
        assert call_args.kwargs["max_tokens"] == 123

    def test_clamps_temperature_to_zero_to_point_two(self) -> None:
        client = MagicMock()
        _mock_ai_response(client, _valid_json_response())
        _make_extractor(client, temperature=0.7).extract("text", DocumentCategory.FIELD_REPORT)
        assert client.create_chat_completion.call_args.kwargs["temperature"] == 0.2

    def test_makes_exactly_one_call(self) -> None:
        client = MagicMock()
        _mock_ai_response(client, "not json")
        _make_extractor(client).extract("text", DocumentCategory.FIELD_REPORT)
        assert client.create_chat_completion.call_count == 1


class TestJsonParsing:
    def test_strips_markdown_code_fences(self) -> None:
        client = MagicMock()
        _mock_ai_response(client, "```json\n" + _valid_json_response() + "\n```")
        result = _make_extractor(client).extract("text", DocumentCategory.FIELD_REPORT)
        assert result.degraded is False
        assert result.payload["location"] == "Sector 7"

    def test_strips_plain_code_fences(self) -> None:
        client = MagicMock()
        _mock_ai_response(client, "```\n" + _valid_json_response() + "\n```")
        result = _make_extractor(client).extract("text", DocumentCategory.FIELD_REPORT)
        assert result.payload["date"] == "2024-03-01"

    def test_non_json_response_degrades(self) -> None:
        client = MagicMock()
        _mock_ai_response(client, "not json")
        result = _make_extractor(client).extract("not json", DocumentCategory.FIELD_REPORT)
        assert result.degraded is True
        assert result.payload == {
            "raw": "not json",
            "error": "Failed to parse as JSON",
            "extractedText": "not json",
        }

    def test_json_array_degrades(self) -> None:
        client = MagicMock()
        _mock_ai_response(client, "[1, 2, 3]")
        result = _make_extractor(client).extract("text", DocumentCategory.FIELD_REPORT)
        assert result.degraded is True
        assert result.payload["raw"] == "[1, 2, 3]"

    def test_fallback_excerpt_is_bounded(self) -> None:
        client = MagicMock()
        _mock_ai_response(client, "nope")
        result = _make_extractor(client).extract("x" * 5000, DocumentCategory.FIELD_REPORT)
        assert result.payload["extractedText"] == "x" * 1000


class TestErrors:
    def test_network_error_propagates(self) -> None:
        client = MagicMock()
        client.create_chat_completion.side_effect = ExtractionNetworkError("timeout")
        with pytest.raises(ExtractionNetworkError):
            _make_extractor(client).extract("text", DocumentCategory.FIELD_REPORT)

    def test_unexpected_client_error_is_wrapped(self) -> None:
        client = MagicMock()
        client.create_chat_completion.side_effect = RuntimeError("socket closed")
        with pytest.raises(ExtractionError, match="AI provider call failed"):
            _make_extractor(client).extract("text", DocumentCategory.FIELD_REPORT)

    def test_missing_prompt_template_raises(self) -> None:
        with pytest.raises(ExtractionError, match="Failed to load prompt template"):
            _make_extractor(system_prompt_path=Path("/nonexistent/prompt.txt"))
