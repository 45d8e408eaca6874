import shutil

import pytest


@pytest.fixture(scope="session")
def tesseract_available() -> None:
    if shutil.which("tesseract") is None:
        pytest.skip("tesseract binary is not installed")
