import io

import pytest
from PIL import Image, ImageDraw

from app.documents.models import Document


def _png_bytes(size: tuple[int, int] = (64, 32), text: str | None = None) -> bytes:
    buf = io.BytesIO()
    image = Image.new("RGB", size, color="white")
    if text:
        ImageDraw.Draw(image).text((4, 4), text, fill="black")
    image.save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture()
def png_bytes() -> bytes:
    """A small valid PNG image."""
    return _png_bytes()


@pytest.fixture()
def text_png_bytes() -> bytes:
    """A PNG image with a line of dark text on white."""
    return _png_bytes(size=(400, 80), text="Hello World")


@pytest.fixture()
def png_document(png_bytes: bytes) -> Document:
    return Document.from_bytes(png_bytes, "image/png", filename="sample.png")


@pytest.fixture(autouse=True)
def _no_credential_in_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("DEEPSEEK", raising=False)
    monkeypatch.delenv("DEEPSEEK_API_KEY", raising=False)
