from app.errors.exceptions import UpstreamError


class NetworkError(UpstreamError):
    """Raised when the upstream call cannot be completed at all."""


class UpstreamStatusError(UpstreamError):
    """Raised when the upstream service answers with a non-success status."""

    def __init__(self, http_status: int, raw_message: str, *, source: str = "Upstream") -> None:
        super().__init__(f"{source} {http_status}: {raw_message}")
        self.http_status = http_status
        self.raw_message = raw_message


class UpstreamResponseError(UpstreamError):
    """Raised when the upstream response does not match the expected schema."""
