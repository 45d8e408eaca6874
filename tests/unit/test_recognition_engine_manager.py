import asyncio
from collections.abc import AsyncIterator, Sequence

import pytest

from app.documents.models import ValidatedImage
from app.recognition.base import BaseRecognitionEngine
from app.recognition.example_engine import ExampleEngine
from app.recognition.exceptions import (
    EngineBusyError,
    EngineInitError,
    RecognitionError,
    UnsupportedLanguageError,
)
from app.recognition.manager import RecognitionEngineManager
from app.recognition.models import (
    EngineState,
    RecognitionEvent,
    RecognitionProgress,
    RecognitionResult,
)

_IMAGE = ValidatedImage(data=b"img", mime_type="image/png", size_bytes=3)


class _RecordingBuilder:
    """Builds ExampleEngines and records construction and teardown."""

    def __init__(self) -> None:
        self.built: list[str] = []
        self.stopped: list[str] = []

    def __call__(self, language: str) -> BaseRecognitionEngine:
        self.built.append(language)
        builder = self

        class _Engine(ExampleEngine):
            async def stop(self) -> None:
                builder.stopped.append(self.language)
                await super().stop()

        return _Engine(language)


class _ScriptedEngine(BaseRecognitionEngine):
    def __init__(
        self,
        language: str = "en",
        *,
        events: Sequence[RecognitionEvent] = (),
        gate: asyncio.Event | None = None,
        error: Exception | None = None,
    ) -> None:
        super().__init__(language)
        self._events = list(events)
        self._gate = gate
        self._error = error

    async def start(self) -> None:
        return None

    async def recognize(self, image: ValidatedImage) -> AsyncIterator[RecognitionEvent]:
        for event in self._events:
            yield event
        if self._gate is not None:
            await self._gate.wait()
        if self._error is not None:
            raise self._error
        yield RecognitionResult(text="done")

    async def stop(self) -> None:
        return None


async def _collect(manager: RecognitionEngineManager) -> list[RecognitionEvent]:
    return [event async for event in manager.recognize(_IMAGE)]


class TestEnsureEngine:
    def test_constructs_once_for_same_language(self) -> None:
        builder = _RecordingBuilder()
        manager = RecognitionEngineManager(builder)

        async def scenario() -> None:
            await manager.ensure_engine("en")
            await manager.ensure_engine("en")

        asyncio.run(scenario())

        assert builder.built == ["en"]
        assert builder.stopped == []
        assert manager.state is EngineState.READY
        assert manager.language == "en"

    def test_language_change_tears_down_once_and_rebuilds_once(self) -> None:
        builder = _RecordingBuilder()
        manager = RecognitionEngineManager(builder)

        async def scenario() -> None:
            await manager.ensure_engine("en")
            await manager.ensure_engine("ja")

        asyncio.run(scenario())

        assert builder.built == ["en", "ja"]
        assert builder.stopped == ["en"]
        assert manager.language == "ja"

    def test_init_failure_leaves_manager_uninitialized(self) -> None:
        def failing_builder(language: str) -> BaseRecognitionEngine:
            raise RuntimeError("no tesseract")

        manager = RecognitionEngineManager(failing_builder)

        with pytest.raises(EngineInitError, match="no tesseract"):
            asyncio.run(manager.ensure_engine("en"))

        assert manager.state is EngineState.UNINITIALIZED
        assert manager.language is None

    def test_retry_after_init_failure(self) -> None:
        attempts: list[str] = []

        def flaky_builder(language: str) -> BaseRecognitionEngine:
            attempts.append(language)
            if len(attempts) == 1:
                raise EngineInitError("first attempt fails")
            return ExampleEngine(language)

        manager = RecognitionEngineManager(flaky_builder)

        async def scenario() -> None:
            with pytest.raises(EngineInitError):
                await manager.ensure_engine("en")
            await manager.ensure_engine("en")

        asyncio.run(scenario())

        assert manager.state is EngineState.READY
        assert attempts == ["en", "en"]

    def test_unsupported_language_is_not_wrapped(self) -> None:
        def builder(language: str) -> BaseRecognitionEngine:
            raise UnsupportedLanguageError(f"Unsupported recognition language '{language}'")

        manager = RecognitionEngineManager(builder)

        with pytest.raises(UnsupportedLanguageError):
            asyncio.run(manager.ensure_engine("xx"))

    def test_language_codes_are_case_insensitive(self) -> None:
        builder = _RecordingBuilder()
        manager = RecognitionEngineManager(builder)

        async def scenario() -> None:
            await manager.ensure_engine("en")
            await manager.ensure_engine(" EN ")

        asyncio.run(scenario())

        assert builder.built == ["en"]
        assert builder.stopped == []
        assert manager.language == "en"

    def test_failed_start_stops_engine(self) -> None:
        stopped: list[str] = []

        class _BrokenStartEngine(ExampleEngine):
            async def start(self) -> None:
                raise RuntimeError("pack missing")

            async def stop(self) -> None:
                stopped.append(self.language)

        manager = RecognitionEngineManager(_BrokenStartEngine)

        with pytest.raises(EngineInitError, match="pack missing"):
            asyncio.run(manager.ensure_engine("ja"))

        assert stopped == ["ja"]
        assert manager.state is EngineState.UNINITIALIZED

    def test_failed_start_survives_failing_stop(self) -> None:
        class _BrokenEngine(ExampleEngine):
            async def start(self) -> None:
                raise EngineInitError("no tesseract")

            async def stop(self) -> None:
                raise RuntimeError("stop failed")

        manager = RecognitionEngineManager(_BrokenEngine)

        with pytest.raises(EngineInitError, match="no tesseract"):
            asyncio.run(manager.ensure_engine("en"))

        assert manager.state is EngineState.UNINITIALIZED


class TestRecognize:
    def test_yields_progress_then_text(self) -> None:
        manager = RecognitionEngineManager(lambda language: ExampleEngine(language))

        async def scenario() -> list[RecognitionEvent]:
            await manager.ensure_engine("en")
            return await _collect(manager)

        events = asyncio.run(scenario())

        assert events == [
            RecognitionProgress(0),
            RecognitionProgress(50),
            RecognitionProgress(100),
            RecognitionResult(text="Hello World"),
        ]
        assert manager.state is EngineState.READY

    def test_progress_is_clamped_monotonic_and_terminal_once(self) -> None:
        engine = _ScriptedEngine(
            events=[
                RecognitionProgress(-5),
                RecognitionProgress(40),
                RecognitionProgress(30),
                RecognitionProgress(40),
                RecognitionProgress(80),
            ]
        )
        manager = RecognitionEngineManager(lambda language: engine)

        async def scenario() -> list[RecognitionEvent]:
            await manager.ensure_engine("en")
            return await _collect(manager)

        events = asyncio.run(scenario())

        percents = [e.percent for e in events if isinstance(e, RecognitionProgress)]
        assert percents == [0, 40, 80, 100]
        assert events[-1] == RecognitionResult(text="done")

    def test_fails_when_not_initialized(self) -> None:
        manager = RecognitionEngineManager(lambda language: ExampleEngine(language))

        with pytest.raises(EngineInitError, match="not initialized"):
            asyncio.run(_collect(manager))

    def test_busy_rejects_second_call_without_disturbing_first(self) -> None:
        gate = asyncio.Event()
        engine = _ScriptedEngine(events=[RecognitionProgress(10)], gate=gate)
        manager = RecognitionEngineManager(lambda language: engine)

        async def scenario() -> tuple[list[RecognitionEvent], Exception | None]:
            await manager.ensure_engine("en")
            first = asyncio.ensure_future(_collect(manager))
            while manager.state is not EngineState.BUSY:
                await asyncio.sleep(0)
            second_error: Exception | None = None
            try:
                await _collect(manager)
            except EngineBusyError as exc:
                second_error = exc
            gate.set()
            return await first, second_error

        events, second_error = asyncio.run(scenario())

        assert isinstance(second_error, EngineBusyError)
        assert events[-1] == RecognitionResult(text="done")
        assert manager.state is EngineState.READY

    def test_engine_failure_becomes_recognition_error_and_returns_to_ready(self) -> None:
        engine = _ScriptedEngine(error=ValueError("corrupt image"))
        manager = RecognitionEngineManager(lambda language: engine)

        async def scenario() -> None:
            await manager.ensure_engine("en")
            with pytest.raises(RecognitionError, match="corrupt image"):
                await _collect(manager)

        asyncio.run(scenario())

        assert manager.state is EngineState.READY

    def test_cancellation_returns_to_ready(self) -> None:
        gate = asyncio.Event()
        engine = _ScriptedEngine(gate=gate)
        manager = RecognitionEngineManager(lambda language: engine)

        async def scenario() -> None:
            await manager.ensure_engine("en")
            task = asyncio.ensure_future(_collect(manager))
            while manager.state is not EngineState.BUSY:
                await asyncio.sleep(0)
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task

        asyncio.run(scenario())

        assert manager.state is EngineState.READY

    def test_ensure_engine_rejected_while_busy(self) -> None:
        gate = asyncio.Event()
        engine = _ScriptedEngine(gate=gate)
        manager = RecognitionEngineManager(lambda language: engine)

        async def scenario() -> None:
            await manager.ensure_engine("en")
            task = asyncio.ensure_future(_collect(manager))
            while manager.state is not EngineState.BUSY:
                await asyncio.sleep(0)
            with pytest.raises(EngineBusyError):
                await manager.ensure_engine("ja")
            gate.set()
            await task

        asyncio.run(scenario())


class TestTerminate:
    def test_terminate_is_idempotent(self) -> None:
        builder = _RecordingBuilder()
        manager = RecognitionEngineManager(builder)

        async def scenario() -> None:
            await manager.ensure_engine("en")
            await manager.terminate()
            await manager.terminate()

        asyncio.run(scenario())

        assert builder.stopped == ["en"]
        assert manager.state is EngineState.TERMINATED

    def test_ensure_after_terminate_builds_fresh(self) -> None:
        builder = _RecordingBuilder()
        manager = RecognitionEngineManager(builder)

        async def scenario() -> None:
            await manager.ensure_engine("en")
            await manager.terminate()
            await manager.ensure_engine("en")

        asyncio.run(scenario())

        assert builder.built == ["en", "en"]
        assert manager.state is EngineState.READY

    def test_terminate_without_engine(self) -> None:
        manager = RecognitionEngineManager(lambda language: ExampleEngine(language))
        asyncio.run(manager.terminate())
        assert manager.state is EngineState.TERMINATED
