from dataclasses import dataclass


@dataclass(frozen=True)
class Document:
    """An incoming file as supplied by the caller, before validation."""

    data: bytes
    mime_type: str
    size_bytes: int
    filename: str = ""

    @classmethod
    def from_bytes(cls, data: bytes, mime_type: str, filename: str = "") -> "Document":
        return cls(data=data, mime_type=mime_type, size_bytes=len(data), filename=filename)


@dataclass(frozen=True)
class ValidatedImage:
    """A document that passed acceptance rules. Immutable once accepted."""

    data: bytes
    mime_type: str
    size_bytes: int
    filename: str = ""
