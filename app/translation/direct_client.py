from app.translation.client_base import BaseTranslationClient
from app.translation.translator import Translator


class DirectTranslationClient(BaseTranslationClient):
    """Runs the Translator in-process instead of going through HTTP."""

    def __init__(self, translator: Translator) -> None:
        self._translator = translator

    async def translate(self, text: str, target_language: str) -> str:
        return await self._translator.translate(text, target_language)
