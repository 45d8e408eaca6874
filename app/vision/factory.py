from app.config.settings import Settings
from app.upstream.factory import CompletionClientFactory
from app.vision.extractor import RemoteVisionExtractor


class VisionExtractorFactory:
    """Creates the server-side vision extractor."""

    @classmethod
    def create(cls, settings: Settings) -> RemoteVisionExtractor:
        """Raises MissingCredentialError if no API key is configured."""
        client = CompletionClientFactory.create(settings, source="DeepSeek Vision")
        return RemoteVisionExtractor(client=client, model=settings.deepseek_vision_model)
