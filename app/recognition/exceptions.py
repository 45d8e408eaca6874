from app.errors.exceptions import InputValidationError, LocalProcessingError


class EngineInitError(LocalProcessingError):
    """Raised when the recognition engine cannot be constructed."""


class RecognitionError(LocalProcessingError):
    """Raised when the engine fails while recognizing an image."""


class EngineBusyError(LocalProcessingError):
    """Raised when the engine is already serving a recognition call."""


class UnsupportedLanguageError(InputValidationError):
    """Raised when no recognition language pack matches the requested code."""
