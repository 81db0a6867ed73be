"""Body encoders, decoders and decode targets.

An encoder turns an outgoing value into bytes and names the content type
they are in. A decoder populates a caller-owned target from response bytes.
Targets are writable references: a `Ref`, a `dict` or a `list`. The caller
allocates them; decoders only fill them in.
"""

import json
from typing import Any, Generic, Optional, Protocol, TypeVar
from urllib.parse import urlencode

from pydantic import TypeAdapter
from pydantic_core import to_json

from ._utils.constants import CONTENT_TYPE_FORM, CONTENT_TYPE_JSON
from .models.errors import UnsupportedContentTypeError

T = TypeVar("T")


class Encoder(Protocol):
    content_type: str

    def encode(self, value: Any) -> bytes: ...


class Decoder(Protocol):
    def decode(self, data: bytes, target: Any) -> None: ...


class Ref(Generic[T]):
    """A slot a decoder writes into.

    The declared type drives validation, so `Ref(User)` ends up holding a
    `User` instance when `User` is a pydantic model or a dataclass.

    Examples:
        ```python
        user = Ref(User)
        client.get("/users/1", user)
        print(user.value.name)
        ```
    """

    def __init__(self, type_: Any = Any) -> None:
        self.type = type_
        self.value: Optional[T] = None
        self._adapter: TypeAdapter[T] = TypeAdapter(type_)

    def set_json(self, data: bytes) -> None:
        self.value = self._adapter.validate_json(data)

    def set_python(self, obj: Any) -> None:
        self.value = self._adapter.validate_python(obj)

    def __repr__(self) -> str:
        name = getattr(self.type, "__name__", repr(self.type))
        return f"Ref({name}, value={self.value!r})"


def _assign(target: Any, value: Any) -> None:
    if isinstance(target, Ref):
        target.set_python(value)
    elif isinstance(target, dict):
        if not isinstance(value, dict):
            raise TypeError(
                f"cannot decode {type(value).__name__} into a dict target"
            )
        target.clear()
        target.update(value)
    elif isinstance(target, list):
        if not isinstance(value, list):
            raise TypeError(
                f"cannot decode {type(value).__name__} into a list target"
            )
        target[:] = value
    else:
        raise TypeError(
            f"cannot decode into {type(target).__name__}; use a Ref, dict or list"
        )


class JSONEncoder:
    content_type = CONTENT_TYPE_JSON

    def encode(self, value: Any) -> bytes:
        # pydantic models, dataclasses, datetimes and UUIDs are handled natively
        return to_json(value)


class FormEncoder:
    content_type = CONTENT_TYPE_FORM

    def encode(self, value: Any) -> bytes:
        return urlencode(value, doseq=True).encode("ascii")


class JSONDecoder:
    def decode(self, data: bytes, target: Any) -> None:
        if isinstance(target, Ref):
            target.set_json(data)
            return
        _assign(target, json.loads(data))


class TextDecoder:
    """Decodes the body as UTF-8 text; only `Ref` targets are supported."""

    def decode(self, data: bytes, target: Any) -> None:
        if not isinstance(target, Ref):
            raise TypeError(
                f"cannot decode text into {type(target).__name__}; use a Ref"
            )
        target.set_python(data.decode("utf-8"))


JSON_DECODER = JSONDecoder()
TEXT_DECODER = TextDecoder()


def infer_decoder(content_type: str) -> Decoder:
    """Pick a decoder for a `Content-Type` header value.

    A missing content type is treated as JSON.

    Raises:
        UnsupportedContentTypeError: If no stock decoder handles the media type.
    """
    media_type = content_type.split(";", 1)[0].strip().lower()

    if not media_type or media_type == CONTENT_TYPE_JSON:
        return JSON_DECODER
    if media_type.endswith("+json"):
        return JSON_DECODER
    if media_type.startswith("text/"):
        return TEXT_DECODER

    raise UnsupportedContentTypeError(content_type)
