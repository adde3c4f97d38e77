"""Exceptions raised by organization directory implementations.

The membership reconciler catches these and reports them as INTERNAL
outcomes. The resource enumerator lets them propagate to the webhook route.
"""


class DirectoryError(Exception):
    """Base class for failures talking to the organization directory."""

    pass


class DirectoryRequestFailed(DirectoryError):
    """Raised when the directory answers with a non-success status.

    Covers not-found, unauthorized and validation failures reported by the
    provider. The status code and provider message are kept for reporting.
    """

    def __init__(self, status_code: int, message: str, url: str | None = None):
        self.status_code = status_code
        self.message = message
        self.url = url
        super().__init__(f"HttpError: {message} (status {status_code})")


class DirectoryUnavailable(DirectoryError):
    """Raised when the directory cannot be reached at all."""

    pass
