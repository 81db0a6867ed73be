import io
from typing import Any, Optional

import httpx

from ._codecs import JSON_DECODER, Decoder, infer_decoder
from ._hooks import resolve_target
from ._utils.constants import HEADER_CONTENT_TYPE


class ReplayableBody:
    """Response body that is read from the transport once and replayed from memory.

    Starts unbuffered, backed by the live transport stream. The first `read`
    drains the stream into a buffer, closes the raw response and switches to
    the buffered state for good.
    """

    def __init__(self, raw: httpx.Response) -> None:
        self._raw = raw
        self._buffer: Optional[bytes] = None

    @property
    def buffered(self) -> bool:
        return self._buffer is not None

    def read(self) -> bytes:
        if self._buffer is not None:
            return self._buffer

        chunks = bytearray()
        try:
            for chunk in self._raw.iter_bytes():
                chunks.extend(chunk)
        finally:
            # whatever was received is kept, even if the stream broke midway
            self._buffer = bytes(chunks)
            self._raw.close()

        return self._buffer

    def open(self) -> io.BytesIO:
        return io.BytesIO(self.read())

    def close(self) -> None:
        """Release the transport stream without reading it.

        An unread body becomes buffered and empty. A body that was already
        read keeps its bytes and is not closed a second time.
        """
        if self._buffer is not None:
            return

        self._buffer = b""
        self._raw.close()


class Response:
    """A completed exchange: the raw `httpx.Response` plus a replayable body.

    Reading the body through `body_bytes`, `body_string` or any `decode*`
    method consumes the transport stream once; all later reads are served
    from memory. Body reads are not safe to race before the first one ends.

    A response whose body is never read holds its transport connection until
    `close` is called; use it as a context manager when the body may go unread.
    """

    def __init__(self, raw: httpx.Response) -> None:
        self.raw = raw
        self.body = ReplayableBody(raw)

    @property
    def status_code(self) -> int:
        return self.raw.status_code

    @property
    def headers(self) -> httpx.Headers:
        return self.raw.headers

    @property
    def url(self) -> httpx.URL:
        return self.raw.url

    @property
    def request(self) -> httpx.Request:
        return self.raw.request

    def body_bytes(self) -> bytes:
        return self.body.read()

    def body_string(self) -> str:
        return self.body_bytes().decode(self.raw.encoding or "utf-8", errors="replace")

    def decode(self, *targets: Any) -> None:
        """Decode the body into each target, choosing the decoder from `Content-Type`.

        Raises:
            UnsupportedContentTypeError: If the content type has no stock decoder.
        """
        decoder = infer_decoder(self.headers.get(HEADER_CONTENT_TYPE, ""))
        self.decode_using(decoder, *targets)

    def decode_json(self, *targets: Any) -> None:
        self.decode_using(JSON_DECODER, *targets)

    def decode_using(self, decoder: Decoder, *targets: Any) -> None:
        """Decode the body into each target in order using `decoder`.

        Hooks (`on_2xx`, `on_status`, ...) are evaluated against the status
        code and skipped when they do not match. Every remaining target gets
        its own full decode of the same bytes. The first decode error is
        raised as-is and the remaining targets are left untouched.

        Args:
            decoder (Decoder): Decoder applied to every target.
            *targets (Any): `Ref`, `dict` or `list` targets, or hooks wrapping them.
        """
        body = self.body_bytes()

        for target in targets:
            receiver = resolve_target(target, self.status_code)
            if receiver is None:
                continue
            decoder.decode(body, receiver)

    def close(self) -> None:
        self.body.close()

    def __enter__(self) -> "Response":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"<Response [{self.status_code}]>"
