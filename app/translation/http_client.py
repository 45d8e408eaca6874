import httpx
from pydantic import ValidationError

from app.translation.client_base import BaseTranslationClient
from app.translation.exceptions import TranslationError
from app.translation.schemas import ErrorResponse, TextResponse, TranslateRequest
from app.upstream.exceptions import NetworkError, UpstreamResponseError


class HttpTranslationClient(BaseTranslationClient):
    """Calls a running POST /translate endpoint."""

    def __init__(
        self,
        *,
        base_url: str,
        timeout_seconds: float,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout_seconds
        self._transport = transport

    async def translate(self, text: str, target_language: str) -> str:
        payload = TranslateRequest(text=text, to_lang=target_language).model_dump(by_alias=True)
        try:
            async with httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = await client.post("/translate", json=payload)
        except httpx.HTTPError as exc:
            raise NetworkError(f"Translation service network error: {exc}") from exc

        if not response.is_success:
            raise TranslationError(response.status_code, _error_message(response))

        try:
            body = TextResponse.model_validate_json(response.content)
        except ValidationError as exc:
            raise UpstreamResponseError(
                f"Translation service returned an unexpected body: {exc}"
            ) from exc
        return body.text


def _error_message(response: httpx.Response) -> str:
    try:
        return ErrorResponse.model_validate_json(response.content).error
    except ValidationError:
        return response.text
