from app.config.settings import Settings
from app.errors.exceptions import MissingCredentialError
from app.upstream.client_base import BaseCompletionClient
from app.upstream.openai_client_adapter import OpenAIClientAdapter


class CompletionClientFactory:
    """Creates the completion client for the configured DeepSeek backend."""

    @classmethod
    def create(cls, settings: Settings, source: str = "DeepSeek") -> BaseCompletionClient:
        """Create a configured completion client.

        Raises:
            MissingCredentialError: if no API key is configured.
        """
        require_credential(settings)
        return OpenAIClientAdapter(
            api_key=settings.deepseek_api_key,
            timeout_seconds=settings.deepseek_timeout_seconds,
            base_url=cls._resolve_base_url(settings),
            source=source,
        )

    @classmethod
    def _resolve_base_url(cls, settings: Settings) -> str:
        base = settings.deepseek_base_url.strip().rstrip("/")
        if not base:
            raise ValueError("deepseek_base_url must not be empty")
        return base if base.endswith("/v1") else f"{base}/v1"


def require_credential(settings: Settings) -> None:
    """Fail before any outbound call when the API credential is absent."""
    if not settings.deepseek_api_key.strip():
        raise MissingCredentialError("Server misconfig: missing DEEPSEEK")
