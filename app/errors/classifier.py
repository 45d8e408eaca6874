"""Maps heterogeneous failures into a uniform display taxonomy."""

from dataclasses import dataclass
from enum import Enum

from app.errors.exceptions import (
    ConfigurationError,
    InputValidationError,
    LocalProcessingError,
    UpstreamError,
)


class ErrorCategory(str, Enum):
    VALIDATION = "validation"
    LOCAL_PROCESSING = "local_processing"
    UPSTREAM = "upstream"
    CONFIGURATION = "configuration"


_STATUS_CODES: dict[ErrorCategory, int] = {
    ErrorCategory.VALIDATION: 400,
    ErrorCategory.LOCAL_PROCESSING: 500,
    ErrorCategory.UPSTREAM: 502,
    ErrorCategory.CONFIGURATION: 500,
}

_CATEGORIES: tuple[tuple[type[Exception], ErrorCategory], ...] = (
    (InputValidationError, ErrorCategory.VALIDATION),
    (ConfigurationError, ErrorCategory.CONFIGURATION),
    (UpstreamError, ErrorCategory.UPSTREAM),
    (LocalProcessingError, ErrorCategory.LOCAL_PROCESSING),
)


@dataclass(frozen=True)
class ClassifiedError:
    category: ErrorCategory
    message: str
    kind: str = ""

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self.category]

    @property
    def retryable(self) -> bool:
        return self.category in (ErrorCategory.LOCAL_PROCESSING, ErrorCategory.UPSTREAM)


def classify_error(exc: BaseException) -> ClassifiedError:
    """Classify an exception. Unknown exceptions count as local processing failures."""
    kind = type(exc).__name__
    for exc_type, category in _CATEGORIES:
        if isinstance(exc, exc_type):
            return ClassifiedError(category=category, message=_message(exc), kind=kind)
    return ClassifiedError(
        category=ErrorCategory.LOCAL_PROCESSING,
        message=f"Unexpected error: {_message(exc)}",
        kind=kind,
    )


def _message(exc: BaseException) -> str:
    text = str(exc).strip()
    return text or type(exc).__name__
