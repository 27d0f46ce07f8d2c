from typing import ClassVar

from docscan.config.settings import Settings
from docscan.content.base import BaseContentScorer
from docscan.content.example_client_adapter import ExampleClientAdapter
from docscan.content.openai_client_adapter import OpenAIClientAdapter
from docscan.content.scorer import ContentScorer


class ContentScorerFactory:
    """Creates the content scorer for the configured provider."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "together": "https://api.together.xyz/v1",
        "deepseek": "https://api.deepseek.com/v1",
        "ollama": "http://localhost:11434/v1",
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseContentScorer:
        provider = settings.content_provider.lower()
        if provider == "example":
            return ContentScorer(client=ExampleClientAdapter(), model="example")
        base_url = cls._resolve_base_url(provider, settings)
        client = OpenAIClientAdapter(
            api_key=cls._resolve_api_key(provider, settings),
            timeout_seconds=cls._resolve_timeout_seconds(provider, settings),
            base_url=base_url,
        )
        return ContentScorer(
            client=client,
            model=cls._resolve_model_name(provider, settings),
            temperature=settings.content_openai_temperature if provider == "openai" else 0.0,
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        if provider == "openai":
            return None
        if provider == "openai_compatible":
            url = settings.content_openai_compatible_base_url.strip()
            if not url:
                raise ValueError(
                    "content_openai_compatible_base_url is required for "
                    "content_provider=openai_compatible"
                )
            return url
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return default_base_url
        supported = ["example", "openai", "openai_compatible", *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS)]
        raise ValueError(f"Unknown content provider '{provider}'. Choose from: {supported}")

    @staticmethod
    def _resolve_api_key(provider: str, settings: Settings) -> str:
        return {
            "openai": settings.content_openai_api_key,
            "openai_compatible": settings.content_openai_compatible_api_key,
            "openrouter": settings.content_openrouter_api_key,
            "groq": settings.content_groq_api_key,
            "together": settings.content_together_api_key,
            "deepseek": settings.content_deepseek_api_key,
            "ollama": settings.content_ollama_api_key,
        }.get(provider, "")

    @staticmethod
    def _resolve_model_name(provider: str, settings: Settings) -> str:
        return {
            "openai": settings.content_openai_model_name,
            "openai_compatible": settings.content_openai_compatible_model_name,
            "openrouter": settings.content_openrouter_model_name,
            "groq": settings.content_groq_model_name,
            "together": settings.content_together_model_name,
            "deepseek": settings.content_deepseek_model_name,
            "ollama": settings.content_ollama_model_name,
        }.get(provider, "")

    @staticmethod
    def _resolve_timeout_seconds(provider: str, settings: Settings) -> int:
        if provider == "openai_compatible":
            return settings.content_openai_compatible_timeout_seconds
        return settings.content_openai_timeout_seconds
