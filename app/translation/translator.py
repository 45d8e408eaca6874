"""Server-side translation through the upstream text model."""

import re

from app.logging.logger import Log
from app.translation.exceptions import EmptyTextError, InvalidLanguageError, TranslationError
from app.upstream.client_base import BaseCompletionClient
from app.upstream.exceptions import UpstreamStatusError

_LANGUAGE_CODE_PATTERN = re.compile(r"^[A-Za-z][A-Za-z_-]{1,31}$")

PROMPT_TEMPLATE = (
    "Translate the following text into {language}. "
    "Respond with translated text only, no extra notes:\n\n{text}"
)


def validate_translation_input(text: str, target_language: str) -> None:
    """Reject input that must never reach the translation service.

    Raises:
        EmptyTextError: if text is empty or whitespace-only.
        InvalidLanguageError: if target_language is not a plausible language code.
    """
    if not isinstance(text, str) or not text.strip():
        raise EmptyTextError("text is required")
    if not isinstance(target_language, str) or not target_language.strip():
        raise InvalidLanguageError("toLang is required")
    if not _LANGUAGE_CODE_PATTERN.match(target_language.strip()):
        raise InvalidLanguageError(f"toLang '{target_language}' is not a valid language code")


class Translator:
    """Translates text by prompting an upstream chat model."""

    def __init__(self, *, client: BaseCompletionClient, model: str) -> None:
        self._client = client
        self._model = model

    async def translate(self, text: str, target_language: str) -> str:
        validate_translation_input(text, target_language)
        prompt = PROMPT_TEMPLATE.format(language=target_language.strip(), text=text)
        Log.debug(f"Translation prompt:\n{prompt}")

        try:
            translated = await self._client.create_chat_completion(
                model=self._model,
                content=prompt,
            )
        except UpstreamStatusError as exc:
            Log.error(f"Translation upstream failed: {exc}")
            raise TranslationError(exc.http_status, exc.raw_message, source="DeepSeek Text") from exc

        Log.info(f"Translated {len(text)} chars into '{target_language}'")
        return translated
