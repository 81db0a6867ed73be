"""Boilerplate-free HTTP requests on top of httpx.

Requests are validated, body-encoded and sent through a pluggable transport.
Responses keep their body in memory after the first read and can be decoded
into several targets, each optionally tied to a range of status codes.
"""

from ._client import Client, Doer, StatusValidator, default_status_validator
from ._codecs import (
    Decoder,
    Encoder,
    FormEncoder,
    JSONDecoder,
    JSONEncoder,
    Ref,
    TextDecoder,
    infer_decoder,
)
from ._config import Config
from ._future import Future
from ._hooks import DecodeHook, on_2xx, on_4xx, on_5xx, on_non_2xx, on_status
from ._request import Method, Request, resolve_url
from ._response import ReplayableBody, Response
from ._utils import setup_logging
from ._utils.constants import DEFAULT_TIMEOUT
from .models.errors import (
    BadStatusError,
    ClientConfigurationError,
    EncoderMissingError,
    HttpatchError,
    InvalidMethodError,
    InvalidURLError,
    UnsupportedContentTypeError,
)

__all__ = [
    "DEFAULT_TIMEOUT",
    "BadStatusError",
    "Client",
    "ClientConfigurationError",
    "Config",
    "DecodeHook",
    "Decoder",
    "Doer",
    "Encoder",
    "EncoderMissingError",
    "FormEncoder",
    "Future",
    "HttpatchError",
    "InvalidMethodError",
    "InvalidURLError",
    "JSONDecoder",
    "JSONEncoder",
    "Method",
    "Ref",
    "ReplayableBody",
    "Request",
    "Response",
    "StatusValidator",
    "TextDecoder",
    "UnsupportedContentTypeError",
    "default_status_validator",
    "infer_decoder",
    "on_2xx",
    "on_4xx",
    "on_5xx",
    "on_non_2xx",
    "on_status",
    "resolve_url",
    "setup_logging",
]
