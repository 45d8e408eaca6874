import asyncio
from collections.abc import Callable
from contextlib import aclosing
from dataclasses import replace
from types import TracebackType

from app.config.settings import Settings
from app.documents.models import Document, ValidatedImage
from app.documents.validator import DocumentValidator
from app.errors.classifier import ClassifiedError, classify_error
from app.errors.exceptions import ConfigurationError, ImageTextError, InputValidationError
from app.logging.logger import Log
from app.pipeline.exceptions import InvalidTransitionError, PipelineBusyError, PipelineClosedError
from app.pipeline.models import PipelineSnapshot, PipelineState, can_transition, is_settled
from app.recognition.exceptions import RecognitionError
from app.recognition.factory import RecognitionEngineFactory
from app.recognition.manager import RecognitionEngineManager
from app.recognition.models import RecognitionResult
from app.translation.client_base import BaseTranslationClient
from app.translation.factory import TranslationClientFactory
from app.translation.translator import validate_translation_input

ProgressObserver = Callable[[int], None]


class PipelineCoordinator:
    """Drives validate -> recognize -> translate for the current document.

    One extraction and one translation may each be in flight at most once,
    and the two stages never overlap. A second request for a running stage
    is rejected, never queued. Failures are classified and kept on the
    snapshot; run_extraction() and run_translation() never raise for them.
    """

    def __init__(
        self,
        *,
        validator: DocumentValidator,
        engine_manager: RecognitionEngineManager,
        translation_client: BaseTranslationClient | None,
        default_language: str = "en",
        on_progress: ProgressObserver | None = None,
    ) -> None:
        self._validator = validator
        self._engine_manager = engine_manager
        self._translation_client = translation_client
        self._default_language = default_language
        self._on_progress = on_progress

        self._state = PipelineState.IDLE
        self._document: Document | None = None
        self._text = ""
        self._translated_text = ""
        self._progress = 0
        self._error: ClassifiedError | None = None

        self._extracting = False
        self._translating = False
        self._extraction_task: asyncio.Task[PipelineSnapshot] | None = None
        self._translation_task: asyncio.Task[PipelineSnapshot] | None = None
        self._closed = False

    @property
    def state(self) -> PipelineState:
        return self._state

    @property
    def document(self) -> Document | None:
        return self._document

    def snapshot(self) -> PipelineSnapshot:
        return PipelineSnapshot(
            state=self._state,
            text=self._text,
            translated_text=self._translated_text,
            progress=self._progress,
            error=self._error,
        )

    def set_text(self, text: str) -> None:
        """Replace the editable text buffer."""
        self._text = text

    async def select_document(self, document: Document | None) -> PipelineSnapshot:
        """Make document current, aborting any in-flight stage, and return to IDLE."""
        await self._cancel_in_flight()
        self._reset(document)
        return self.snapshot()

    async def run_extraction(
        self,
        document: Document | None = None,
        language: str | None = None,
    ) -> PipelineSnapshot:
        """Validate and recognize the document.

        When document is given and is not the current one it replaces it.
        """
        rejection = self._check_available()
        if rejection is not None:
            return rejection

        self._extracting = True
        if document is not None and document is not self._document:
            self._reset(document)
        task = asyncio.ensure_future(
            self._extract(self.snapshot(), self._document, language or self._default_language)
        )
        self._extraction_task = task
        task.add_done_callback(self._extraction_finished)
        return await self._await_stage(task)

    async def run_translation(self, text: str, target_language: str) -> PipelineSnapshot:
        """Translate text, which also becomes the current text buffer."""
        rejection = self._check_available()
        if rejection is not None:
            return rejection

        previous = self.snapshot()
        self._text = text
        try:
            validate_translation_input(text, target_language)
            if self._translation_client is None:
                raise ConfigurationError("translation client is not configured")
        except ImageTextError as exc:
            self._error = classify_error(exc)
            Log.warning(f"Translation rejected: {self._error.message}")
            return self.snapshot()

        self._translating = True
        task = asyncio.ensure_future(
            self._translate(previous, self._translation_client, text, target_language)
        )
        self._translation_task = task
        task.add_done_callback(self._translation_finished)
        return await self._await_stage(task)

    async def close(self) -> None:
        """Abort in-flight work and terminate the engine. Idempotent."""
        if self._closed:
            return
        self._closed = True
        await self._cancel_in_flight()
        await self._engine_manager.terminate()
        Log.info("Pipeline coordinator closed")

    async def __aenter__(self) -> "PipelineCoordinator":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def _extract(
        self,
        previous: PipelineSnapshot,
        document: Document | None,
        language: str,
    ) -> PipelineSnapshot:
        try:
            self._transition(PipelineState.VALIDATING)
            self._text = ""
            self._translated_text = ""
            self._progress = 0
            self._error = None
            try:
                image = self._validator.validate(document)
            except InputValidationError as exc:
                return self._fail(PipelineState.EXTRACTION_FAILED, exc)

            self._transition(PipelineState.EXTRACTING)
            try:
                await self._engine_manager.ensure_engine(language)
                text = await self._collect_text(image)
            except Exception as exc:
                return self._fail(PipelineState.EXTRACTION_FAILED, exc)

            self._text = text
            self._translated_text = ""
            self._progress = 100
            self._transition(PipelineState.EXTRACTED)
            return self.snapshot()
        except asyncio.CancelledError:
            Log.info("Extraction cancelled")
            self._restore(previous)
            raise

    async def _collect_text(self, image: ValidatedImage) -> str:
        text: str | None = None
        async with aclosing(self._engine_manager.recognize(image)) as events:
            async for event in events:
                if isinstance(event, RecognitionResult):
                    text = event.text
                    continue
                self._progress = event.percent
                self._notify(event.percent)
        if text is None:
            raise RecognitionError("recognition finished without text")
        return text

    async def _translate(
        self,
        previous: PipelineSnapshot,
        client: BaseTranslationClient,
        text: str,
        target_language: str,
    ) -> PipelineSnapshot:
        try:
            self._transition(PipelineState.TRANSLATING)
            self._translated_text = ""
            self._error = None
            try:
                translated = await client.translate(text, target_language)
            except Exception as exc:
                return self._fail(PipelineState.TRANSLATION_FAILED, exc)

            self._translated_text = translated
            self._transition(PipelineState.TRANSLATED)
            return self.snapshot()
        except asyncio.CancelledError:
            Log.info("Translation cancelled")
            self._restore(previous)
            raise

    def _extraction_finished(self, task: "asyncio.Task[PipelineSnapshot]") -> None:
        self._extracting = False
        if self._extraction_task is task:
            self._extraction_task = None

    def _translation_finished(self, task: "asyncio.Task[PipelineSnapshot]") -> None:
        self._translating = False
        if self._translation_task is task:
            self._translation_task = None

    async def _await_stage(self, task: "asyncio.Task[PipelineSnapshot]") -> PipelineSnapshot:
        try:
            await asyncio.wait({task})
        except asyncio.CancelledError:
            task.cancel()
            await asyncio.wait({task})
            raise
        if task.cancelled():
            return self.snapshot()
        return task.result()

    async def _cancel_in_flight(self) -> None:
        current = asyncio.current_task()
        for task in (self._extraction_task, self._translation_task):
            if task is None or task.done() or task is current:
                continue
            task.cancel()
            await asyncio.wait({task})

    def _check_available(self) -> PipelineSnapshot | None:
        if self._closed:
            return self._reject(PipelineClosedError("pipeline coordinator is closed"))
        if self._extracting:
            return self._reject(PipelineBusyError("extraction already in progress"))
        if self._translating:
            return self._reject(PipelineBusyError("translation already in progress"))
        return None

    def _reject(self, exc: ImageTextError) -> PipelineSnapshot:
        classified = classify_error(exc)
        Log.warning(f"Request rejected: {classified.message}")
        return replace(self.snapshot(), error=classified)

    def _reset(self, document: Document | None) -> None:
        self._document = document
        self._state = PipelineState.IDLE
        self._text = ""
        self._translated_text = ""
        self._progress = 0
        self._error = None

    def _restore(self, previous: PipelineSnapshot) -> None:
        self._state = previous.state if is_settled(previous.state) else PipelineState.IDLE
        self._text = previous.text
        self._translated_text = previous.translated_text
        self._progress = previous.progress
        self._error = previous.error

    def _fail(self, state: PipelineState, exc: BaseException) -> PipelineSnapshot:
        self._error = classify_error(exc)
        Log.warning(f"{state.value}: {self._error.kind}: {self._error.message}")
        self._transition(state)
        return self.snapshot()

    def _transition(self, target: PipelineState) -> None:
        if not can_transition(self._state, target):
            raise InvalidTransitionError(f"{self._state.value} -> {target.value}")
        Log.debug(f"Pipeline state {self._state.value} -> {target.value}")
        self._state = target

    def _notify(self, percent: int) -> None:
        if self._on_progress is None:
            return
        try:
            self._on_progress(percent)
        except Exception as exc:
            Log.warning(f"Progress observer failed: {exc}")


def build_coordinator(
    settings: Settings,
    *,
    on_progress: ProgressObserver | None = None,
    translation_client: BaseTranslationClient | None = None,
) -> PipelineCoordinator:
    """Build a PipelineCoordinator with the configured adapters."""
    if translation_client is None:
        try:
            translation_client = TranslationClientFactory.create(settings)
        except ConfigurationError as exc:
            Log.warning(f"Translation unavailable: {exc}")
    return PipelineCoordinator(
        validator=DocumentValidator(settings.max_upload_bytes),
        engine_manager=RecognitionEngineManager(RecognitionEngineFactory.builder(settings)),
        translation_client=translation_client,
        default_language=settings.ocr_default_language,
        on_progress=on_progress,
    )
