import pytest
import requests
from requests.adapters import HTTPAdapter

from visearch import ClientConfig, NetworkError, Transport
from visearch.request_building import build_get_request


class _StubSession:
    def __init__(self, response=None, exc=None):
        self._response = response
        self._exc = exc
        self.mounted = {}
        self.sent = []
        self.closed = False

    def mount(self, prefix, adapter):
        self.mounted[prefix] = adapter

    def merge_environment_settings(self, url, proxies, stream, verify, cert):
        return {"proxies": proxies, "stream": stream, "verify": True, "cert": None}

    def send(self, request, **kwargs):
        self.sent.append((request, kwargs))
        if self._exc is not None:
            raise self._exc
        return self._response

    def close(self):
        self.closed = True


def _request():
    return build_get_request("http://api.example.com/search", {"q": "cat"})


def test_pool_is_sized_by_max_connection():
    transport = Transport(ClientConfig(max_connection=7))
    adapter = transport._session.get_adapter("https://api.example.com/")
    assert adapter is transport._session.get_adapter("http://api.example.com/")
    assert adapter._pool_connections == 7
    assert adapter._pool_maxsize == 7
    assert adapter._pool_block is True
    assert adapter.max_retries.total == 0
    transport.close()


def test_execute_applies_timeouts_and_streams_body():
    response = requests.Response()
    response.status_code = 204
    session = _StubSession(response=response)
    transport = Transport(ClientConfig(connection_timeout=1500, socket_timeout=2500), session=session)

    assert transport.execute(_request()) is response
    _, kwargs = session.sent[0]
    assert kwargs["timeout"] == (1.5, 2.5)
    assert kwargs["stream"] is True
    assert session.mounted == {}


@pytest.mark.parametrize(
    "exc",
    [
        requests.ConnectionError("connection refused"),
        requests.ConnectTimeout("connect timed out"),
        requests.ReadTimeout("read timed out"),
        ConnectionResetError("reset by peer"),
    ],
)
def test_io_failures_become_network_error(exc):
    transport = Transport(session=_StubSession(exc=exc))
    with pytest.raises(NetworkError) as exc_info:
        transport.execute(_request())
    assert exc_info.value.cause is exc
    assert exc_info.value.code == "network_error"


def test_context_manager_closes_session():
    session = _StubSession()
    with Transport(session=session) as transport:
        assert transport.config == ClientConfig()
    assert session.closed


def test_caller_session_keeps_its_own_adapters():
    session = requests.Session()
    custom = HTTPAdapter(pool_maxsize=3)
    session.mount("https://", custom)

    transport = Transport(ClientConfig(max_connection=50), session=session)

    assert transport._session.get_adapter("https://api.example.com/") is custom
    session.close()
