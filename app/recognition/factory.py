from collections.abc import Callable

from app.config.settings import Settings
from app.recognition.base import BaseRecognitionEngine
from app.recognition.example_engine import ExampleEngine
from app.recognition.tesseract_adapter import TesseractEngine

EngineBuilder = Callable[[str], BaseRecognitionEngine]


class RecognitionEngineFactory:
    """Creates the configured recognition engine for a language."""

    ENGINES: tuple[str, ...] = ("tesseract", "example")

    @classmethod
    def create(cls, settings: Settings, language: str) -> BaseRecognitionEngine:
        engine = settings.ocr_engine.lower()
        if engine == "tesseract":
            return TesseractEngine(language, tesseract_cmd=settings.tesseract_cmd)
        if engine == "example":
            return ExampleEngine(language)
        raise ValueError(
            f"Unknown OCR engine '{engine}'. Choose from: {list(cls.ENGINES)}"
        )

    @classmethod
    def builder(cls, settings: Settings) -> EngineBuilder:
        """Return a per-language constructor bound to settings.

        The engine name is checked eagerly so a misconfiguration surfaces at startup.
        """
        engine = settings.ocr_engine.lower()
        if engine not in cls.ENGINES:
            raise ValueError(
                f"Unknown OCR engine '{engine}'. Choose from: {list(cls.ENGINES)}"
            )

        def build(language: str) -> BaseRecognitionEngine:
            return cls.create(settings, language)

        return build
