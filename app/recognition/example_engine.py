"""Example recognition engine.

Use this module as a reference when implementing new engine adapters.
Implement BaseRecognitionEngine and register the adapter in RecognitionEngineFactory.
"""

import asyncio
from collections.abc import AsyncIterator, Sequence
from typing import ClassVar

from app.documents.models import ValidatedImage
from app.recognition.base import BaseRecognitionEngine
from app.recognition.exceptions import RecognitionError
from app.recognition.models import RecognitionEvent, RecognitionProgress, RecognitionResult


class ExampleEngine(BaseRecognitionEngine):
    """Engine that returns a fixed text with fixed progress steps.

    No native dependencies. Useful for local development and tests.
    """

    DEFAULT_TEXT: ClassVar[str] = "Hello World"
    DEFAULT_STEPS: ClassVar[tuple[int, ...]] = (0, 50, 100)

    def __init__(
        self,
        language: str,
        *,
        text: str | None = None,
        steps: Sequence[int] | None = None,
    ) -> None:
        super().__init__(language)
        self._text = self.DEFAULT_TEXT if text is None else text
        self._steps = tuple(self.DEFAULT_STEPS if steps is None else steps)
        self._started = False

    async def start(self) -> None:
        self._started = True

    async def recognize(self, image: ValidatedImage) -> AsyncIterator[RecognitionEvent]:
        if not self._started:
            raise RecognitionError("example engine is not started")
        _ = image
        for percent in self._steps:
            yield RecognitionProgress(percent)
            await asyncio.sleep(0)
        yield RecognitionResult(text=self._text)

    async def stop(self) -> None:
        self._started = False
