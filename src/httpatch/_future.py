import threading
from typing import Optional, cast

from ._response import Response


class Future:
    """Handle for a send running in the background.

    The result is written exactly once by the sending thread. After that the
    handle is read-only, so any number of threads may wait on it and all of
    them observe the same response or the same error.
    """

    def __init__(self) -> None:
        self._done = threading.Event()
        self._response: Optional[Response] = None
        self._error: Optional[BaseException] = None

    def _set_result(
        self, response: Optional[Response], error: Optional[BaseException]
    ) -> None:
        if self._done.is_set():
            raise RuntimeError("future already completed")
        self._response = response
        self._error = error
        self._done.set()

    def done(self) -> bool:
        return self._done.is_set()

    def _wait(self, timeout: Optional[float]) -> None:
        if not self._done.wait(timeout):
            raise TimeoutError(f"response not available after {timeout}s")

    def response(self, timeout: Optional[float] = None) -> Response:
        """Block until the send completes and return its response.

        Args:
            timeout (Optional[float]): Seconds to wait. Waits forever when None.

        Returns:
            Response: The wrapped response.

        Raises:
            TimeoutError: If the send is still running after `timeout` seconds.
            BadStatusError: If the status validator rejected the response;
                the response is available as `error.response`.
            Exception: Any validation, encoding or transport error, as raised.
        """
        self._wait(timeout)
        if self._error is not None:
            raise self._error
        return cast(Response, self._response)

    def exception(self, timeout: Optional[float] = None) -> Optional[BaseException]:
        self._wait(timeout)
        return self._error

    def __repr__(self) -> str:
        state = "finished" if self.done() else "pending"
        return f"<Future [{state}]>"
