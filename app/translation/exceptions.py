from app.errors.exceptions import InputValidationError
from app.upstream.exceptions import UpstreamStatusError


class EmptyTextError(InputValidationError):
    """Raised when the text to translate is empty or whitespace-only."""


class InvalidLanguageError(InputValidationError):
    """Raised when the target language code is missing or malformed."""


class TranslationError(UpstreamStatusError):
    """Raised when the translation service answers with a non-success status."""

    def __init__(self, http_status: int, raw_message: str, *, source: str = "Translation") -> None:
        super().__init__(http_status, raw_message, source=source)
