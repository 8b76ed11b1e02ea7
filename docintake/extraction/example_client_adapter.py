"""Offline extraction client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseExtractionClient and register the provider in ExtractorFactory.
"""

import json
from typing import ClassVar

from docintake.extraction.client_base import BaseExtractionClient


class ExampleClientAdapter(BaseExtractionClient):
    """Adapter that returns a fixed, valid extraction JSON object.

    No network calls. Useful for local development and tests.
    """

    DEFAULT_RESPONSE: ClassVar[dict[str, object]] = {
        "location": None,
        "date": None,
        "personnel": [],
        "activities": [],
        "hazards": [],
        "safetyMeasures": [],
        "equipment": [],
        "results": None,
    }

    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        max_tokens: int,
        system_prompt: str,
        user_prompt: str,
    ) -> str:
        _ = model, temperature, max_tokens, system_prompt, user_prompt
        return json.dumps(self.DEFAULT_RESPONSE)
