from contextlib import contextmanager
from typing import Iterator

from opentelemetry import trace
from opentelemetry.trace import Span, SpanKind

_tracer = trace.get_tracer("httpatch")

SPAN_NAME = "httpatch.send"


@contextmanager
def traced_send(method: str, url: str) -> Iterator[Span]:
    """Wrap one send pipeline run in a client span.

    Exceptions escaping the block are recorded on the span and mark it as
    failed before being re-raised.
    """
    with _tracer.start_as_current_span(
        SPAN_NAME,
        kind=SpanKind.CLIENT,
        attributes={"http.request.method": method, "url.full": url},
    ) as span:
        yield span


def record_status(status_code: int) -> None:
    trace.get_current_span().set_attribute("http.response.status_code", status_code)
