import httpx
import pytest

from httpatch import (
    JSONDecoder,
    Ref,
    Response,
    UnsupportedContentTypeError,
    on_2xx,
    on_4xx,
    on_status,
)
from tests.utils.doers import make_raw_response


class RecordingDecoder:
    """Decoder that records its targets and fails on chosen ones."""

    def __init__(self, fail_on=()):
        self.fail_on = {id(t): e for t, e in fail_on}
        self.decoded = []

    def decode(self, data: bytes, target) -> None:
        self.decoded.append(target)
        if id(target) in self.fail_on:
            raise self.fail_on[id(target)]


class TestReplayableBody:
    def test_reads_twice_and_closes_once(self):
        raw = make_raw_response(chunks=[b"hello ", b"world"])
        response = Response(raw)

        first = response.body_bytes()
        second = response.body_bytes()

        assert first == second == b"hello world"
        assert raw.stream.iterations == 1
        assert raw.stream.close_calls == 1

    def test_state_transition(self):
        response = Response(make_raw_response(chunks=[b"abc"]))

        assert not response.body.buffered
        response.body_string()
        assert response.body.buffered

    def test_open_returns_independent_readers(self):
        response = Response(make_raw_response(chunks=[b"abc"]))

        assert response.body.open().read() == b"abc"
        assert response.body.open().read() == b"abc"

    def test_body_string_uses_charset(self):
        raw = make_raw_response(
            chunks=["héllo".encode("latin-1")],
            headers={"Content-Type": "text/plain; charset=latin-1"},
        )

        assert Response(raw).body_string() == "héllo"

    def test_empty_body(self):
        response = Response(make_raw_response(chunks=[]))

        assert response.body_bytes() == b""
        assert response.body_string() == ""

    def test_broken_stream_keeps_partial_bytes(self):
        raw = make_raw_response(chunks=[b"par", b"tial"], fail_after=1)
        response = Response(raw)

        with pytest.raises(httpx.ReadError):
            response.body_bytes()

        assert response.body_bytes() == b"par"
        assert raw.stream.close_calls == 1

    def test_close_before_read_releases_stream(self):
        raw = make_raw_response(chunks=[b"unread"])
        response = Response(raw)

        response.close()

        assert response.body.buffered
        assert response.body_bytes() == b""
        assert raw.stream.iterations == 0
        assert raw.stream.close_calls == 1

    def test_close_after_read_keeps_body(self):
        raw = make_raw_response(chunks=[b"kept"])
        response = Response(raw)

        response.body_bytes()
        response.close()
        response.close()

        assert response.body_bytes() == b"kept"
        assert raw.stream.close_calls == 1

    def test_context_manager_closes(self):
        raw = make_raw_response(chunks=[b"abc"])

        with Response(raw) as response:
            assert response.status_code == 200

        assert raw.stream.iterations == 0
        assert raw.stream.close_calls == 1


class TestDecodeUsing:
    def test_every_target_gets_a_full_decode(self):
        response = Response(make_raw_response(chunks=[b'{"id": 1}']))
        first, second = {}, {"old": True}

        response.decode_using(JSONDecoder(), first, second)

        assert first == {"id": 1}
        assert second == {"id": 1}
        assert first is not second

    def test_non_matching_hooks_are_skipped(self):
        response = Response(make_raw_response(status_code=404, chunks=[b"{}"]))
        success, problem, conflict = {}, {}, {}
        decoder = RecordingDecoder()

        response.decode_using(
            decoder, on_2xx(success), on_4xx(problem), on_status(409, conflict)
        )

        assert decoder.decoded == [problem]

    def test_first_error_stops_remaining_targets(self):
        response = Response(make_raw_response(chunks=[b"{}"]))
        first, second, third = {}, {}, {}
        error = ValueError("bad payload")
        decoder = RecordingDecoder(fail_on=[(second, error)])

        with pytest.raises(ValueError) as exc_info:
            response.decode_using(decoder, first, second, third)

        assert exc_info.value is error
        assert decoder.decoded == [first, second]

    def test_reads_body_even_without_targets(self):
        raw = make_raw_response(chunks=[b"{}"])

        Response(raw).decode_using(JSONDecoder())

        assert raw.stream.close_calls == 1

    def test_body_is_read_once_across_decodes(self):
        raw = make_raw_response(chunks=[b'{"id": 1}'])
        response = Response(raw)

        response.decode_json({})
        response.decode_json({})
        response.body_bytes()

        assert raw.stream.iterations == 1


class TestDecode:
    def test_infers_json(self):
        raw = make_raw_response(
            chunks=[b'{"id": 1}'], headers={"Content-Type": "application/json"}
        )
        target = {}

        Response(raw).decode(target)

        assert target == {"id": 1}

    def test_infers_text(self):
        raw = make_raw_response(
            chunks=[b"plain words"], headers={"Content-Type": "text/plain"}
        )
        text = Ref(str)

        Response(raw).decode(text)

        assert text.value == "plain words"

    def test_unsupported_content_type(self):
        raw = make_raw_response(
            chunks=[b"\x00"], headers={"Content-Type": "application/octet-stream"}
        )

        with pytest.raises(UnsupportedContentTypeError):
            Response(raw).decode({})

    def test_decode_json_ignores_content_type(self):
        raw = make_raw_response(
            chunks=[b'{"id": 1}'], headers={"Content-Type": "text/plain"}
        )
        target = {}

        Response(raw).decode_json(target)

        assert target == {"id": 1}


def test_response_exposes_raw_attributes():
    raw = make_raw_response(status_code=201, headers={"X-Trace": "abc"})
    response = Response(raw)

    assert response.status_code == 201
    assert response.headers["x-trace"] == "abc"
    assert response.url == httpx.URL("https://example.com/")
    assert response.request is raw.request
    assert repr(response) == "<Response [201]>"
