from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional, Sequence, Tuple, Union

from httpx import URL, InvalidURL, Timeout

from ._codecs import Encoder
from .models.errors import EncoderMissingError, InvalidMethodError, InvalidURLError

HeaderTypes = Union[Mapping[str, str], Sequence[Tuple[str, str]]]


class Method(str, Enum):
    GET = "GET"
    HEAD = "HEAD"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    CONNECT = "CONNECT"
    OPTIONS = "OPTIONS"
    TRACE = "TRACE"


_METHODS = frozenset(m.value for m in Method)


@dataclass(frozen=True)
class Request:
    """Description of a single outgoing call.

    Attributes:
        method: One of the standard HTTP verbs, upper case.
        url: Absolute URL, or a reference resolved against the client base URL.
        headers: Explicit headers. When given they are sent as-is.
        body: Value handed to the encoder. `None` means no body.
        encoder: Overrides the client default encoder for this call.
        timeout: Per-request deadline in seconds, enforced by the transport.
    """

    method: str
    url: str
    headers: Optional[HeaderTypes] = None
    body: Any = None
    encoder: Optional[Encoder] = None
    timeout: Optional[Union[float, Timeout]] = None

    def validate(self) -> None:
        if self.method not in _METHODS:
            raise InvalidMethodError(self.method)

    def prepare_body(
        self, default_encoder: Optional[Encoder]
    ) -> Tuple[Optional[bytes], str]:
        """Encode the body with the request encoder, falling back to the default.

        Returns:
            The encoded bytes and their content type, or `(None, "")` when the
            request has no body.
        """
        if self.body is None:
            return None, ""

        encoder = self.encoder if self.encoder is not None else default_encoder
        if encoder is None:
            raise EncoderMissingError()

        return encoder.encode(self.body), encoder.content_type


def _parse_url(url: str) -> URL:
    try:
        return URL(url)
    except InvalidURL as e:
        raise InvalidURLError(url, str(e)) from e


def resolve_url(base_url: Optional[str], url: str) -> URL:
    """Resolve `url` as an RFC 3986 reference against `base_url`.

    Without a base URL the request URL is used verbatim.
    """
    if not base_url:
        return _parse_url(url)

    base = _parse_url(base_url)
    ref = _parse_url(url)
    try:
        return base.join(ref)
    except InvalidURL as e:
        raise InvalidURLError(url, str(e)) from e
