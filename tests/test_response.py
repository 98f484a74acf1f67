import io

import pytest
import requests
from urllib3 import HTTPHeaderDict

from visearch import NetworkError, ResponseEnvelope, SystemError
from visearch.response import wrap_response


class _StubRaw:
    def __init__(self, headers, body=b"", fail_read=None):
        self.headers = headers
        self._body = io.BytesIO(body)
        self._fail_read = fail_read
        self.closed = False

    def read(self, amt=None, **kwargs):
        if self._fail_read is not None:
            raise self._fail_read
        return self._body.read(amt)

    def close(self):
        self.closed = True


class _BrokenHeaders:
    def iteritems(self):
        raise ValueError("header line without colon")


def _response(raw, status=200):
    resp = requests.Response()
    resp.status_code = status
    resp.raw = raw
    return resp


def test_wrap_copies_status_and_headers_last_value_wins():
    headers = HTTPHeaderDict()
    headers.add("X-Log-Id", "first")
    headers.add("Content-Type", "application/json")
    headers.add("X-Log-Id", "second")
    raw = _StubRaw(headers, body=b'{"status":"OK"}')

    envelope = wrap_response(_response(raw, status=201))

    assert envelope.status_code == 201
    assert envelope.headers == {"X-Log-Id": "second", "Content-Type": "application/json"}
    assert envelope.body is raw
    assert raw._body.tell() == 0


def test_absent_header_list_gives_empty_mapping():
    envelope = wrap_response(_response(_StubRaw(None)))
    assert envelope.headers == {}


def test_header_failure_raises_system_error_and_releases_response():
    raw = _StubRaw(_BrokenHeaders())
    with pytest.raises(SystemError) as exc_info:
        wrap_response(_response(raw))
    assert isinstance(exc_info.value.cause, ValueError)
    assert exc_info.value.code == "system_error"
    assert raw.closed


def test_read_consumes_body_and_releases():
    raw = _StubRaw(HTTPHeaderDict(), body=b"payload")
    envelope = wrap_response(_response(raw))
    assert envelope.read() == b"payload"
    assert raw._body.tell() == len(b"payload")


def test_read_failure_is_network_error():
    raw = _StubRaw(HTTPHeaderDict(), fail_read=ConnectionResetError("reset"))
    envelope = wrap_response(_response(raw))
    with pytest.raises(NetworkError) as exc_info:
        envelope.read()
    assert isinstance(exc_info.value.cause, ConnectionResetError)
    assert raw.closed


def test_envelope_without_response_reads_plain_stream():
    body = io.BytesIO("héllo".encode("utf-8"))
    with ResponseEnvelope(status_code=200, headers={}, body=body) as envelope:
        assert envelope.text() == "héllo"
    assert body.closed
