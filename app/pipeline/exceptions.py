from app.errors.exceptions import LocalProcessingError


class PipelineBusyError(LocalProcessingError):
    """Raised when the same stage is already running."""


class InvalidTransitionError(RuntimeError):
    """Raised when code attempts a state change the transition table forbids."""


class PipelineClosedError(LocalProcessingError):
    """Raised when work is requested after the coordinator was closed."""
