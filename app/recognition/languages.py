from app.recognition.exceptions import UnsupportedLanguageError

# UI language code -> tesseract traineddata name
TESSERACT_LANGUAGES: dict[str, str] = {
    "ja": "jpn",
    "en": "eng",
    "zh": "chi_sim",
    "ko": "kor",
    "fr": "fra",
    "es": "spa",
}


def resolve_tesseract_language(language: str) -> str:
    """Map a UI language code to the tesseract language pack name.

    Raises:
        UnsupportedLanguageError: if the code is not supported.
    """
    code = (language or "").strip().lower()
    pack = TESSERACT_LANGUAGES.get(code)
    if pack is None:
        raise UnsupportedLanguageError(
            f"Unsupported recognition language '{language}'. "
            f"Choose from: {sorted(TESSERACT_LANGUAGES)}"
        )
    return pack
