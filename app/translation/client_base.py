from abc import ABC, abstractmethod


class BaseTranslationClient(ABC):
    """Contract for the translation collaborator used by the pipeline."""

    @abstractmethod
    async def translate(self, text: str, target_language: str) -> str:
        """Translate text into target_language.

        Raises:
            TranslationError: on a non-success response from the service.
            NetworkError: if the call cannot be completed at all.
        """
