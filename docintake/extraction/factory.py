from typing import ClassVar

from docintake.config.settings import Settings
from docintake.extraction.base import BaseExtractor
from docintake.extraction.client_base import BaseExtractionClient
from docintake.extraction.example_client_adapter import ExampleClientAdapter
from docintake.extraction.extractor import Extractor
from docintake.extraction.openai_client_adapter import OpenAIClientAdapter


class ExtractorFactory:
    """Creates the configured extractor adapter."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "together": "https://api.together.xyz/v1",
        "deepseek": "https://api.deepseek.com/v1",
        "ollama": "http://localhost:11434/v1",
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseExtractor:
        """Create a configured extractor from application settings."""
        provider = settings.extraction_provider.lower()
        return Extractor(
            client=cls._create_client(provider, settings),
            model="example" if provider == "example" else settings.extraction_model_name,
            temperature=settings.extraction_temperature,
            max_tokens=settings.extraction_max_tokens,
            max_input_chars=settings.extraction_max_input_chars,
            fallback_excerpt_chars=settings.extraction_fallback_excerpt_chars,
        )

    @classmethod
    def _create_client(cls, provider: str, settings: Settings) -> BaseExtractionClient:
        if provider == "example":
            return ExampleClientAdapter()
        return OpenAIClientAdapter(
            api_key=cls._resolve_api_key(provider, settings),
            timeout_seconds=settings.extraction_timeout_seconds,
            base_url=cls._resolve_base_url(provider, settings),
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        override = settings.extraction_base_url.strip()
        if provider == "openai":
            return override or None
        if provider == "openai_compatible":
            if not override:
                raise ValueError(
                    "extraction_base_url is required for "
                    "extraction_provider=openai_compatible"
                )
            return override
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return override or default_base_url
        supported = [
            "example",
            "openai",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        raise ValueError(
            f"Unknown extraction provider '{provider}'. Choose from: {supported}"
        )

    @classmethod
    def _resolve_api_key(cls, provider: str, settings: Settings) -> str:
        # Local servers such as ollama accept any non-empty key.
        if not settings.extraction_api_key and provider == "ollama":
            return "ollama"
        return settings.extraction_api_key
