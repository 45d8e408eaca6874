from abc import ABC, abstractmethod
from collections.abc import AsyncIterator

from app.documents.models import ValidatedImage
from app.recognition.models import RecognitionEvent


class BaseRecognitionEngine(ABC):
    """Contract for all local text recognition adapters."""

    def __init__(self, language: str) -> None:
        self._language = language

    @property
    def language(self) -> str:
        return self._language

    @abstractmethod
    async def start(self) -> None:
        """Acquire whatever the engine needs before recognizing.

        Raises:
            EngineInitError: if the engine cannot be made ready.
        """

    @abstractmethod
    def recognize(self, image: ValidatedImage) -> AsyncIterator[RecognitionEvent]:
        """Recognize text in an image.

        Yields RecognitionProgress events followed by exactly one
        RecognitionResult.

        Raises:
            RecognitionError: if recognition fails for any reason.
        """

    @abstractmethod
    async def stop(self) -> None:
        """Release the engine's resources. Safe to call more than once."""
