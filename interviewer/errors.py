"""Error types shared across the interview client."""


class TransportError(Exception):
    """The chat request failed: network error, non-success status or unreadable body."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
