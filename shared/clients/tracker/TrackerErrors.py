"""Errors reported by tracker clients, from low level to high level.

A scroll only ever reports these on its error channel:

* :class:`IoReadError` - reading a response body failed before completion
* :class:`JsonDecodeError` - a page body is malformed or has an unexpected shape
* :class:`HttpError` - the server could not be reached (transient)
* :class:`ApiEndpointUrlFatalError` - the endpoint URL cannot be built;
  the base URL is most probably malformed, retrying will not help
* :class:`ScrollAbortedError` - any other failure; it ends the scroll
"""


class TrackerError(Exception):
    """Base class of all tracker client errors."""

    fatal: bool = False


class IoReadError(TrackerError):
    """Reading the response body failed."""


class JsonDecodeError(TrackerError):
    """The response body does not match the expected page schema.

    Attributes:
        status_code: HTTP status of the response the body came from, if known.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class HttpError(TrackerError):
    """Transport level failure: DNS, refused connection, unsupported scheme, timeout."""


class ApiEndpointUrlFatalError(TrackerError):
    """The endpoint URL could not be built from the configured base URL."""

    fatal = True


class ScrollAbortedError(TrackerError):
    """An unexpected failure ended the scroll. The original exception is the ``__cause__``."""

    fatal = True
