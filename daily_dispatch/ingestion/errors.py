"""Feed transport errors."""


class TransportError(Exception):
    """Raised when a feed URL cannot be retrieved."""


class FeedTimeoutError(TransportError):
    """Raised when a feed does not respond within the transport timeout."""


class RedirectLoopError(TransportError):
    """Raised when a feed redirects more times than allowed."""
