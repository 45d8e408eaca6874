import httpx
import openai

from app.upstream.client_base import BaseCompletionClient, MessageContent
from app.upstream.exceptions import NetworkError, UpstreamResponseError, UpstreamStatusError


class OpenAIClientAdapter(BaseCompletionClient):
    """Completion client built on the OpenAI-compatible async chat API."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
        source: str = "Upstream",
    ) -> None:
        self._client = openai.AsyncOpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
            max_retries=0,
        )
        self._source = source

    async def create_chat_completion(
        self,
        *,
        model: str,
        content: MessageContent,
        max_tokens: int | None = None,
    ) -> str:
        request: dict[str, object] = {
            "model": model,
            "messages": [{"role": "user", "content": content}],
        }
        if max_tokens is not None:
            request["max_tokens"] = max_tokens

        try:
            response = await self._client.chat.completions.create(**request)  # type: ignore[call-overload]
        except openai.APIStatusError as exc:
            raise UpstreamStatusError(
                exc.status_code, exc.response.text, source=self._source
            ) from exc
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise NetworkError(f"{self._source} network error: {exc}") from exc
        except openai.APIError as exc:
            raise UpstreamResponseError(f"{self._source} API error: {exc}") from exc

        if not response.choices:
            raise UpstreamResponseError(f"{self._source} returned no choices")
        message_content = response.choices[0].message.content
        if message_content is None:
            raise UpstreamResponseError(f"{self._source} returned empty response")
        return message_content

