"""Server-side text extraction through the upstream vision model."""

import base64

from app.documents.exceptions import TooLargeError
from app.documents.models import ValidatedImage
from app.logging.logger import Log
from app.upstream.client_base import BaseCompletionClient
from app.upstream.exceptions import UpstreamStatusError

EXTRACT_PROMPT = "Extract all readable text from this image."
MAX_BASE64_CHARS = 500_000
DEFAULT_MAX_TOKENS = 2048


class RemoteVisionExtractor:
    """Sends the image as a data URL to a vision chat model."""

    def __init__(
        self,
        *,
        client: BaseCompletionClient,
        model: str,
        max_tokens: int = DEFAULT_MAX_TOKENS,
    ) -> None:
        self._client = client
        self._model = model
        self._max_tokens = max_tokens

    async def extract(self, image: ValidatedImage) -> str:
        """Return the text the vision model reads in the image.

        Raises:
            TooLargeError: if the encoded image exceeds the upstream payload limit.
            UpstreamStatusError: if the model is unavailable or the call fails.
            NetworkError: if the provider cannot be reached.
        """
        encoded = base64.b64encode(image.data).decode("ascii")
        if len(encoded) > MAX_BASE64_CHARS:
            raise TooLargeError("Image too large for processing")

        content: list[dict[str, object]] = [
            {"type": "text", "text": EXTRACT_PROMPT},
            {
                "type": "image_url",
                "image_url": {"url": f"data:{image.mime_type};base64,{encoded}"},
            },
        ]
        Log.info(
            f"Vision extraction request: model={self._model} "
            f"type={image.mime_type} base64_length={len(encoded)}"
        )

        try:
            text = await self._client.create_chat_completion(
                model=self._model,
                content=content,
                max_tokens=self._max_tokens,
            )
        except UpstreamStatusError as exc:
            Log.error(f"Vision upstream failed: {exc}")
            raw = exc.raw_message.lower()
            if "model" in raw or "vision" in raw:
                raise UpstreamStatusError(
                    exc.http_status,
                    f"Vision model not available. Please check if {self._model} "
                    "is accessible with your API key.",
                    source="DeepSeek Vision",
                ) from exc
            raise

        Log.info(f"Vision extraction returned {len(text)} chars")
        return text
