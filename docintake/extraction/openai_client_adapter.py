from typing import Any

import httpx
import openai

from docintake.extraction.client_base import BaseExtractionClient
from docintake.extraction.exceptions import ExtractionNetworkError
from docintake.logging.logger import Log


class OpenAIClientAdapter(BaseExtractionClient):
    """Extraction client for any OpenAI-compatible chat completions endpoint.

    SDK retries are off, so one upload costs exactly one request. A reply
    without text is returned as an empty string and left to the extractor,
    which stores it as an unparsed response.
    """

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
            max_retries=0,
        )

    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        max_tokens: int,
        system_prompt: str,
        user_prompt: str,
    ) -> str:
        try:
            response = self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                max_tokens=max_tokens,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
            )
        except openai.APIStatusError as exc:
            raise ExtractionNetworkError(
                f"AI provider returned HTTP {exc.status_code}: {exc.message}"
            ) from exc
        except (openai.APIConnectionError, httpx.TransportError) as exc:
            raise ExtractionNetworkError(f"AI provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise ExtractionNetworkError(f"AI provider API error: {exc}") from exc

        return _reply_text(response, model)


def _reply_text(response: Any, model: str) -> str:
    if not response.choices:
        Log.warning("AI reply has no choices", model=model)
        return ""
    content = response.choices[0].message.content
    if not content:
        Log.warning("AI reply has no text", model=model)
        return ""
    return content
