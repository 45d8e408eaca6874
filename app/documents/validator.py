"""Acceptance rules for uploaded images."""

from app.documents.exceptions import MissingFileError, TooLargeError, UnsupportedTypeError
from app.documents.models import Document, ValidatedImage

_IMAGE_MIME_PREFIX = "image/"


def validate_document(document: Document | None, max_size_bytes: int) -> ValidatedImage:
    """Check a document against the acceptance rules.

    Args:
        document: The supplied file, or None when nothing was supplied.
        max_size_bytes: Inclusive upper bound for the file size.

    Returns:
        ValidatedImage carrying the same bytes and metadata.

    Raises:
        MissingFileError: if no document was supplied.
        UnsupportedTypeError: if the mime type does not start with image/.
        TooLargeError: if the size exceeds max_size_bytes.
    """
    if document is None:
        raise MissingFileError("file is required")
    mime_type = (document.mime_type or "").strip().lower()
    if not mime_type.startswith(_IMAGE_MIME_PREFIX):
        raise UnsupportedTypeError(
            f"file must be image/*, got '{document.mime_type or 'unknown'}'"
        )
    if document.size_bytes > max_size_bytes:
        raise TooLargeError(
            f"file is too large ({document.size_bytes} bytes, max {max_size_bytes} bytes)"
        )
    return ValidatedImage(
        data=document.data,
        mime_type=mime_type,
        size_bytes=document.size_bytes,
        filename=document.filename,
    )


class DocumentValidator:
    """Binds the configured maximum size to validate_document."""

    def __init__(self, max_size_bytes: int) -> None:
        self._max_size_bytes = max_size_bytes

    @property
    def max_size_bytes(self) -> int:
        return self._max_size_bytes

    def validate(self, document: Document | None) -> ValidatedImage:
        return validate_document(document, self._max_size_bytes)
