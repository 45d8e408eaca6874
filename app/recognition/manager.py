"""Lifecycle owner of the single local recognition engine."""

from collections.abc import AsyncIterator
from contextlib import aclosing

from app.documents.models import ValidatedImage
from app.errors.exceptions import InputValidationError
from app.logging.logger import Log
from app.recognition.base import BaseRecognitionEngine
from app.recognition.exceptions import EngineBusyError, EngineInitError, RecognitionError
from app.recognition.factory import EngineBuilder
from app.recognition.models import (
    EngineState,
    RecognitionEvent,
    RecognitionProgress,
    RecognitionResult,
)


class RecognitionEngineManager:
    """Owns one recognition engine and serializes access to it.

    State machine: UNINITIALIZED -> READY -> BUSY -> READY ... -> TERMINATED.
    The engine is rebuilt only when the requested language differs from the
    language it was built for. A second recognize() while BUSY fails with
    EngineBusyError instead of queueing.
    """

    def __init__(self, engine_builder: EngineBuilder) -> None:
        self._engine_builder = engine_builder
        self._engine: BaseRecognitionEngine | None = None
        self._state = EngineState.UNINITIALIZED

    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def language(self) -> str | None:
        return self._engine.language if self._engine is not None else None

    async def ensure_engine(self, language: str) -> None:
        """Make a READY engine for language available, reusing the current one if possible.

        Raises:
            EngineBusyError: if the engine is recognizing or being built.
            EngineInitError: if construction fails. The manager stays UNINITIALIZED.
            UnsupportedLanguageError: if the engine has no pack for language.
        """
        if self._state is EngineState.BUSY:
            raise EngineBusyError("recognition engine is busy")
        language = language.strip().lower()
        if self._engine is not None and self._engine.language == language:
            return

        await self._teardown()
        self._state = EngineState.BUSY
        try:
            engine = await self._build(language)
        finally:
            self._state = EngineState.UNINITIALIZED

        self._engine = engine
        self._state = EngineState.READY
        Log.info(f"Recognition engine ready for language '{language}'")

    async def _build(self, language: str) -> BaseRecognitionEngine:
        try:
            engine = self._engine_builder(language)
        except (EngineInitError, InputValidationError):
            raise
        except Exception as exc:
            raise EngineInitError(
                f"recognition engine initialization failed: {exc}"
            ) from exc

        try:
            await engine.start()
        except (EngineInitError, InputValidationError):
            await self._stop_quietly(engine)
            raise
        except Exception as exc:
            await self._stop_quietly(engine)
            raise EngineInitError(
                f"recognition engine initialization failed: {exc}"
            ) from exc
        return engine

    async def recognize(self, image: ValidatedImage) -> AsyncIterator[RecognitionEvent]:
        """Run recognition, yielding non-decreasing progress then the final text.

        Progress is clamped to 0..100, regressions are dropped and a terminal
        100 is emitted exactly once before the RecognitionResult.

        Raises:
            EngineBusyError: if another recognition is in flight.
            EngineInitError: if no engine has been built.
            RecognitionError: if the engine fails. The manager returns to READY.
        """
        if self._state is EngineState.BUSY:
            raise EngineBusyError("recognition engine is busy")
        if self._engine is None or self._state is not EngineState.READY:
            raise EngineInitError("recognition engine is not initialized")

        engine = self._engine
        self._state = EngineState.BUSY
        Log.info(f"Recognition started ({image.size_bytes} bytes, {image.mime_type})")
        last_percent = -1
        try:
            async with aclosing(engine.recognize(image)) as events:
                async for event in events:
                    if isinstance(event, RecognitionResult):
                        if last_percent < 100:
                            yield RecognitionProgress(100)
                        Log.info(f"Recognition finished: {len(event.text)} chars")
                        yield RecognitionResult(text=event.text)
                        return
                    percent = max(0, min(100, int(event.percent)))
                    if percent <= last_percent:
                        continue
                    last_percent = percent
                    yield RecognitionProgress(percent)
            raise RecognitionError("recognition engine finished without text")
        except RecognitionError:
            raise
        except Exception as exc:
            raise RecognitionError(f"recognition failed: {exc}") from exc
        finally:
            if self._state is EngineState.BUSY and self._engine is engine:
                self._state = EngineState.READY

    async def terminate(self) -> None:
        """Release the engine. Idempotent; a later ensure_engine() builds fresh."""
        if self._state is EngineState.TERMINATED:
            return
        await self._teardown()
        self._state = EngineState.TERMINATED
        Log.info("Recognition engine terminated")

    async def _teardown(self) -> None:
        engine = self._engine
        self._engine = None
        self._state = EngineState.UNINITIALIZED
        if engine is None:
            return
        Log.info(f"Tearing down recognition engine for '{engine.language}'")
        await self._stop_quietly(engine)

    async def _stop_quietly(self, engine: BaseRecognitionEngine) -> None:
        try:
            await engine.stop()
        except Exception as exc:
            Log.warning(f"Recognition engine teardown failed: {exc}")
