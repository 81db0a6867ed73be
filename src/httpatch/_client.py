import asyncio
import contextvars
import threading
from logging import getLogger
from typing import Any, Callable, Optional, Protocol, Sequence, Union

import httpx

from ._codecs import Encoder, JSONEncoder
from ._config import Config
from ._future import Future
from ._request import HeaderTypes, Method, Request, resolve_url
from ._response import Response
from ._utils.constants import HEADER_CONTENT_TYPE, LOGGER_NAME
from .models.errors import BadStatusError, ClientConfigurationError
from .tracing import record_status, traced_send

StatusValidator = Callable[[int], bool]
TimeoutTypes = Union[float, httpx.Timeout]


class Doer(Protocol):
    """Anything that can perform a single request/response exchange.

    `httpx.Client` satisfies this protocol. Wrapping one in another `Doer`
    is how middleware is layered in.
    """

    def send(self, request: httpx.Request, *, stream: bool = False) -> httpx.Response: ...


def default_status_validator(status: int) -> bool:
    """Accept 2xx statuses only."""
    return 200 <= status < 300


_DEFAULT_ENCODER = JSONEncoder()


class Client:
    """HTTP client that prepares requests, sends them through a `Doer` and wraps the results.

    The configuration is fixed at construction. Clients hold no other state,
    so one instance can be shared by any number of threads.

    Examples:
        ```python
        from httpatch import Client, Ref, on_2xx, on_4xx

        with Client(base_url="https://api.example.com/v1/") as client:
            user = Ref(User)
            client.get("users/1", user)
            client.post("users", {"name": "Ada"}, user)

        lenient = Client(status_validator=None)
        user, problem = Ref(User), Ref(Problem)
        lenient.get("https://api.example.com/v1/users/2", on_2xx(user), on_4xx(problem))
        ```
    """

    def __init__(
        self,
        *,
        base_url: Optional[str] = None,
        timeout: Optional[TimeoutTypes] = None,
        status_validator: Optional[StatusValidator] = default_status_validator,
        encoder: Optional[Encoder] = _DEFAULT_ENCODER,
        base_client: Optional[Doer] = None,
    ) -> None:
        """
        Initialize a new client.

        Args:
            base_url (Optional[str]): Base that request URLs are resolved against.
            timeout (Optional[TimeoutTypes]): Transport timeout in seconds. Only
                applicable when the transport is an `httpx.Client`.
            status_validator (Optional[StatusValidator]): Predicate on the status
                code; a False result raises `BadStatusError`. None accepts all.
            encoder (Optional[Encoder]): Encoder for request bodies that do not
                carry their own. Defaults to JSON.
            base_client (Optional[Doer]): Transport. A new `httpx.Client` is
                created (and owned) when omitted.

        Raises:
            ClientConfigurationError: If a timeout is given for a transport that
                is not an `httpx.Client`.
        """
        self._logger = getLogger(LOGGER_NAME)
        self._config = Config(base_url=base_url)
        self._status_validator = status_validator
        self._encoder = encoder
        self._owns_base_client = base_client is None

        if base_client is None:
            base_client = httpx.Client(
                timeout=timeout if timeout is not None else self._config.timeout
            )
        elif timeout is not None:
            if not isinstance(base_client, httpx.Client):
                raise ClientConfigurationError(
                    f"cannot set timeout on base client of type {type(base_client).__name__}"
                )
            base_client.timeout = timeout  # type: ignore[assignment]

        self._base_client = base_client

    @classmethod
    def from_env(cls, **kwargs: Any) -> "Client":
        """Create a client configured from `HTTPATCH_BASE_URL` and `HTTPATCH_TIMEOUT`.

        Keyword arguments are passed to the constructor; `base_url` and
        `timeout` given here take precedence over the environment.
        """
        config = Config.from_env(
            base_url=kwargs.pop("base_url", None),
            timeout=kwargs.pop("timeout", None),
        )
        if "timeout" in config.model_fields_set:
            kwargs["timeout"] = config.timeout

        return cls(base_url=config.base_url, **kwargs)

    @property
    def base_url(self) -> Optional[str]:
        return self._config.base_url

    @property
    def default_encoder(self) -> Optional[Encoder]:
        return self._encoder

    @property
    def status_validator(self) -> Optional[StatusValidator]:
        return self._status_validator

    @property
    def base_client(self) -> Doer:
        return self._base_client

    def get(
        self,
        url: str,
        *targets: Any,
        headers: Optional[HeaderTypes] = None,
        timeout: Optional[TimeoutTypes] = None,
    ) -> Response:
        """Perform a GET request, decoding the body into `targets` on success."""
        return self._call(Method.GET, url, None, targets, headers, timeout)

    def head(
        self,
        url: str,
        *,
        headers: Optional[HeaderTypes] = None,
        timeout: Optional[TimeoutTypes] = None,
    ) -> Response:
        """Perform a HEAD request; the returned response is already closed."""
        return self._call(Method.HEAD, url, None, (), headers, timeout)

    def options(
        self,
        url: str,
        *targets: Any,
        headers: Optional[HeaderTypes] = None,
        timeout: Optional[TimeoutTypes] = None,
    ) -> Response:
        return self._call(Method.OPTIONS, url, None, targets, headers, timeout)

    def post(
        self,
        url: str,
        body: Any = None,
        *targets: Any,
        headers: Optional[HeaderTypes] = None,
        timeout: Optional[TimeoutTypes] = None,
    ) -> Response:
        """Perform a POST request with an encoded `body`, decoding the reply into `targets` on success."""
        return self._call(Method.POST, url, body, targets, headers, timeout)

    def put(
        self,
        url: str,
        body: Any = None,
        *targets: Any,
        headers: Optional[HeaderTypes] = None,
        timeout: Optional[TimeoutTypes] = None,
    ) -> Response:
        return self._call(Method.PUT, url, body, targets, headers, timeout)

    def patch(
        self,
        url: str,
        body: Any = None,
        *targets: Any,
        headers: Optional[HeaderTypes] = None,
        timeout: Optional[TimeoutTypes] = None,
    ) -> Response:
        return self._call(Method.PATCH, url, body, targets, headers, timeout)

    def delete(
        self,
        url: str,
        body: Any = None,
        *targets: Any,
        headers: Optional[HeaderTypes] = None,
        timeout: Optional[TimeoutTypes] = None,
    ) -> Response:
        return self._call(Method.DELETE, url, body, targets, headers, timeout)

    def _call(
        self,
        method: Method,
        url: str,
        body: Any,
        targets: Sequence[Any],
        headers: Optional[HeaderTypes],
        timeout: Optional[TimeoutTypes],
    ) -> Response:
        request = Request(
            method=method.value, url=url, headers=headers, body=body, timeout=timeout
        )
        try:
            response = self.send(request).response()
        except BadStatusError as e:
            # the rejected body stays readable and its connection goes back to the pool
            e.response.body_bytes()
            raise

        response.body_bytes()
        if targets:
            response.decode(*targets)

        return response

    def send(self, request: Request) -> Future:
        """Start sending `request` on a background thread.

        Returns:
            Future: Completes with the response, or with the first error
            raised while preparing, sending or validating the request.

        The response body is left on the wire. Read it or close the response
        to release the connection.
        """
        future = Future()
        # the caller's contextvars (and its current span) follow the request
        ctx = contextvars.copy_context()
        thread = threading.Thread(
            target=ctx.run,
            args=(self._run, request, future),
            name="httpatch-send",
            daemon=True,
        )
        thread.start()
        return future

    async def send_async(self, request: Request) -> Response:
        """Send `request` from asyncio code without blocking the event loop."""
        return await asyncio.to_thread(self._send, request)

    def _run(self, request: Request, future: Future) -> None:
        try:
            response = self._send(request)
        except BaseException as e:
            future._set_result(None, e)
        else:
            future._set_result(response, None)

    def do(self, request: httpx.Request) -> Response:
        """Dispatch a prepared request through the transport and validate its status.

        Raises:
            BadStatusError: If the status validator rejects the status code.
        """
        self._logger.debug(f"Request: {request.method} {request.url}")

        raw = self._base_client.send(request, stream=True)
        response = Response(raw)
        record_status(raw.status_code)

        self._logger.debug(f"Response: {raw.status_code} {request.method} {request.url}")

        if self._status_validator is not None and not self._status_validator(
            raw.status_code
        ):
            self._logger.debug(
                f"Status {raw.status_code} rejected for {request.method} {request.url}"
            )
            raise BadStatusError(raw.status_code, response)

        return response

    def _send(self, request: Request) -> Response:
        with traced_send(request.method, request.url) as span:
            request.validate()

            url = resolve_url(self.base_url, request.url)
            span.set_attribute("url.full", str(url))

            content, content_type = request.prepare_body(self._encoder)

            extensions = {}
            if request.timeout is not None:
                extensions["timeout"] = httpx.Timeout(request.timeout).as_dict()

            http_request = httpx.Request(
                request.method,
                url,
                headers=request.headers,
                content=content,
                extensions=extensions,
            )

            # an explicit Content-Type from the caller wins over the encoder's
            if content_type and HEADER_CONTENT_TYPE not in http_request.headers:
                http_request.headers[HEADER_CONTENT_TYPE] = content_type

            return self.do(http_request)

    def close(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_base_client and isinstance(self._base_client, httpx.Client):
            self._base_client.close()

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()
