import asyncio
import io
from collections.abc import AsyncIterator

import pytesseract
from PIL import Image, UnidentifiedImageError

from app.documents.models import ValidatedImage
from app.logging.logger import Log
from app.recognition.base import BaseRecognitionEngine
from app.recognition.exceptions import EngineInitError, RecognitionError
from app.recognition.languages import resolve_tesseract_language
from app.recognition.models import RecognitionEvent, RecognitionProgress, RecognitionResult


def _decode_image(data: bytes) -> Image.Image:
    image = Image.open(io.BytesIO(data))
    image.load()
    if image.mode not in ("RGB", "L"):
        image = image.convert("RGB")
    return image


class TesseractEngine(BaseRecognitionEngine):
    """Recognizes text with the tesseract binary through pytesseract.

    Tesseract work runs in a worker thread so the event loop only sees
    progress events and the final text.
    """

    def __init__(self, language: str, tesseract_cmd: str = "") -> None:
        super().__init__(language)
        self._pack = resolve_tesseract_language(language)
        self._tesseract_cmd = tesseract_cmd
        self._started = False

    async def start(self) -> None:
        try:
            await asyncio.to_thread(self._check_installation)
        except EngineInitError:
            raise
        except Exception as exc:
            raise EngineInitError(f"tesseract initialization failed: {exc}") from exc
        self._started = True

    def _check_installation(self) -> None:
        if self._tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = self._tesseract_cmd
        version = pytesseract.get_tesseract_version()
        installed = set(pytesseract.get_languages(config=""))
        if self._pack not in installed:
            raise EngineInitError(
                f"tesseract language pack '{self._pack}' is not installed"
            )
        Log.info(f"Tesseract {version} ready for '{self._pack}'")

    async def recognize(self, image: ValidatedImage) -> AsyncIterator[RecognitionEvent]:
        if not self._started:
            raise RecognitionError("tesseract engine is not started")
        yield RecognitionProgress(0)

        try:
            picture = await asyncio.to_thread(_decode_image, image.data)
        except (UnidentifiedImageError, OSError) as exc:
            raise RecognitionError(f"cannot decode image: {exc}") from exc
        yield RecognitionProgress(20)

        try:
            raw_text = await asyncio.to_thread(
                pytesseract.image_to_string, picture, lang=self._pack
            )
        except RecognitionError:
            raise
        except Exception as exc:
            raise RecognitionError(f"tesseract recognition failed: {exc}") from exc
        yield RecognitionProgress(90)

        yield RecognitionResult(text=str(raw_text).strip())

    async def stop(self) -> None:
        if self._started:
            Log.debug(f"Tesseract engine for '{self._pack}' stopped")
        self._started = False
