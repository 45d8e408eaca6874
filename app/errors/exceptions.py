class ImageTextError(Exception):
    """Base exception for every failure the pipeline knows how to classify."""


class InputValidationError(ImageTextError):
    """Bad client input. Never retried, immediately actionable."""


class LocalProcessingError(ImageTextError):
    """Local recognition failure. The caller may retry the operation."""


class UpstreamError(ImageTextError):
    """The remote translation or vision service could not serve the request."""


class ConfigurationError(ImageTextError):
    """Server configuration is incomplete. Not recoverable per request."""


class MissingCredentialError(ConfigurationError):
    """Raised when the upstream API credential is not configured."""
