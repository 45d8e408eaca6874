from app.errors.exceptions import InputValidationError


class DocumentValidationError(InputValidationError):
    """Base exception for document acceptance failures."""


class MissingFileError(DocumentValidationError):
    """Raised when no file was supplied."""


class UnsupportedTypeError(DocumentValidationError):
    """Raised when the mime type does not start with image/."""


class TooLargeError(DocumentValidationError):
    """Raised when the file exceeds the configured maximum size."""
