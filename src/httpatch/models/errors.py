from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .._response import Response


class HttpatchError(Exception):
    """Base class for errors raised by httpatch itself.

    Errors coming from collaborators (encoders, decoders and the transport)
    are propagated untouched and do not derive from this class.
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class InvalidMethodError(HttpatchError):
    """Raised when a request carries a method that is not a standard HTTP verb."""

    def __init__(self, method: str):
        self.method = method
        super().__init__(f"invalid request method: {method!r}")


class EncoderMissingError(HttpatchError):
    def __init__(
        self,
        message="request has body but no encoder set on client or request",
    ):
        super().__init__(message)


class ClientConfigurationError(HttpatchError):
    pass


class InvalidURLError(HttpatchError):
    """Raised when the base URL or a request URL cannot be parsed."""

    def __init__(self, url: str, reason: str = ""):
        self.url = url
        message = f"invalid URL {url!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class BadStatusError(HttpatchError):
    """Raised when the status validator rejects a response.

    The round-trip itself succeeded, so the wrapped response is attached and
    its status, headers and body can still be inspected.
    """

    def __init__(self, status_code: int, response: "Response"):
        self.status_code = status_code
        self.response = response
        super().__init__(f"unexpected status code: {status_code}")


class UnsupportedContentTypeError(HttpatchError):
    def __init__(self, content_type: str):
        self.content_type = content_type
        super().__init__(f"no decoder for content type {content_type!r}")
