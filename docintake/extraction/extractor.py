"""AI-powered structured data extraction for uploaded documents."""

import json
from pathlib import Path
from typing import Any

from docintake.database.models import DocumentCategory
from docintake.extraction.base import BaseExtractor
from docintake.extraction.client_base import BaseExtractionClient
from docintake.extraction.exceptions import ExtractionError
from docintake.extraction.focus import render_focus_fields
from docintake.extraction.models import JSON_PARSE_ERROR, ExtractionResult
from docintake.extraction.prompt_loader import load_prompt_template
from docintake.logging.logger import Log


class Extractor(BaseExtractor):
    """Extracts structured data from document text using an AI provider.

    One call per document, no retries. A response that is not a JSON object
    is still a successful extraction and yields the fallback payload.
    """

    def __init__(
        self,
        *,
        client: BaseExtractionClient,
        model: str,
        temperature: float = 0.0,
        max_tokens: int = 4000,
        max_input_chars: int = 4000,
        fallback_excerpt_chars: int = 1000,
        system_prompt_path: Path | None = None,
        user_prompt_path: Path | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(0.2, temperature))
        self._max_tokens = max_tokens
        self._max_input_chars = max_input_chars
        self._fallback_excerpt_chars = fallback_excerpt_chars
        self._system_template = load_prompt_template(
            system_prompt_path, default="system_prompt.txt"
        )
        self._user_template = load_prompt_template(
            user_prompt_path, default="user_prompt.txt"
        )

    def extract(self, text: str, category: DocumentCategory) -> ExtractionResult:
        system_prompt, user_prompt = self._build_prompts(text, category)
        Log.debug(f"Extraction prompt:\n{system_prompt}\n\n{user_prompt}")

        raw_response = self._call_ai(system_prompt, user_prompt)
        Log.debug(f"AI raw response:\n{raw_response}")

        parsed = self._parse_json(raw_response)
        if parsed is None:
            Log.warning(f"AI response for {category.value} is not a JSON object, storing raw text")
            return ExtractionResult(
                payload={
                    "raw": raw_response,
                    "error": JSON_PARSE_ERROR,
                    "extractedText": text[: self._fallback_excerpt_chars],
                },
                degraded=True,
            )

        Log.info(f"Extraction complete: {len(parsed)} top-level fields")
        return ExtractionResult(payload=parsed)

    def _build_prompts(self, text: str, category: DocumentCategory) -> tuple[str, str]:
        document_type = category.value
        system_prompt = self._system_template.format(
            document_type=document_type,
            focus_fields=render_focus_fields(category),
        )
        user_prompt = self._user_template.format(
            document_type=document_type,
            content=text[: self._max_input_chars],
        )
        return system_prompt, user_prompt

    def _call_ai(self, system_prompt: str, user_prompt: str) -> str:
        try:
            return self._client.create_chat_completion(
                model=self._model,
                temperature=self._temperature,
                max_tokens=self._max_tokens,
                system_prompt=system_prompt,
                user_prompt=user_prompt,
            )
        except ExtractionError:
            raise
        except Exception as exc:
            raise ExtractionError(f"AI provider call failed: {exc}") from exc

    @staticmethod
    def _parse_json(raw: str) -> dict[str, Any] | None:
        cleaned = raw.strip()
        if cleaned.startswith("```"):
            lines = cleaned.splitlines()
            if lines and lines[0].startswith("```"):
                lines = lines[1:]
            if lines and lines[-1].strip() == "```":
                lines = lines[:-1]
            cleaned = "\n".join(lines)

        try:
            parsed = json.loads(cleaned)
        except json.JSONDecodeError:
            return None

        if not isinstance(parsed, dict):
            return None
        return parsed
