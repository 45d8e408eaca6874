from app.config.settings import Settings
from app.translation.client_base import BaseTranslationClient
from app.translation.direct_client import DirectTranslationClient
from app.translation.http_client import HttpTranslationClient
from app.translation.translator import Translator
from app.upstream.factory import CompletionClientFactory


class TranslatorFactory:
    """Creates the server-side Translator."""

    @classmethod
    def create(cls, settings: Settings) -> Translator:
        """Raises MissingCredentialError if no API key is configured."""
        client = CompletionClientFactory.create(settings, source="DeepSeek Text")
        return Translator(client=client, model=settings.deepseek_text_model)


class TranslationClientFactory:
    """Creates the translation collaborator for the configured mode."""

    MODES: tuple[str, ...] = ("direct", "http")

    @classmethod
    def create(cls, settings: Settings) -> BaseTranslationClient:
        mode = settings.translation_mode.lower()
        if mode == "direct":
            return DirectTranslationClient(TranslatorFactory.create(settings))
        if mode == "http":
            return HttpTranslationClient(
                base_url=settings.translation_service_url,
                timeout_seconds=settings.deepseek_timeout_seconds,
            )
        raise ValueError(
            f"Unknown translation mode '{mode}'. Choose from: {list(cls.MODES)}"
        )
