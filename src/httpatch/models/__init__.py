from .errors import (
    BadStatusError,
    ClientConfigurationError,
    EncoderMissingError,
    HttpatchError,
    InvalidMethodError,
    InvalidURLError,
    UnsupportedContentTypeError,
)

__all__ = [
    "BadStatusError",
    "ClientConfigurationError",
    "EncoderMissingError",
    "HttpatchError",
    "InvalidMethodError",
    "InvalidURLError",
    "UnsupportedContentTypeError",
]
