"""Pytest fixtures for ittypy tests."""
import json

import pytest

from ittypy.core.api import APIConfig, AsyncAPIClient


class FakeResponse:
    """Stands in for aiohttp.ClientResponse."""

    def __init__(self, status=200, body=None):
        self.status = status
        if body is None:
            self._body = b''
        elif isinstance(body, bytes):
            self._body = body
        elif isinstance(body, str):
            self._body = body.encode('utf-8')
        else:
            self._body = json.dumps(body).encode('utf-8')

    async def text(self, encoding='utf-8', errors='strict'):
        return self._body.decode(encoding, errors)


class FakeRequestContext:
    """Async context manager returned by FakeSession.request/put."""

    def __init__(self, outcome):
        self._outcome = outcome

    async def __aenter__(self):
        if isinstance(self._outcome, BaseException):
            raise self._outcome
        return self._outcome

    async def __aexit__(self, exc_type, exc, tb):
        return False


class FakeSession:
    """
    Records outbound calls and replays queued responses in order.

    Queue entries are FakeResponse objects or exceptions to raise.
    """

    def __init__(self):
        self.closed = False
        self.calls = []
        self._queue = []

    def queue(self, status=200, body=None):
        self._queue.append(FakeResponse(status, body))
        return self

    def queue_error(self, error):
        self._queue.append(error)
        return self

    def request(self, method, url, **kwargs):
        data = kwargs.get('data')
        self.calls.append({
            'method': method,
            'url': url,
            'json': kwargs.get('json'),
            'params': kwargs.get('params'),
            'headers': dict(kwargs.get('headers') or {}),
            'proxy': kwargs.get('proxy'),
            'data_len': len(data) if data is not None else None,
        })
        if not self._queue:
            raise AssertionError(f"Unexpected {method} {url}")
        return FakeRequestContext(self._queue.pop(0))

    def put(self, url, **kwargs):
        return self.request('PUT', url, **kwargs)

    def calls_for(self, method):
        return [c for c in self.calls if c['method'] == method]

    async def close(self):
        self.closed = True


@pytest.fixture
def fake_session():
    """Returns an empty FakeSession."""
    return FakeSession()


@pytest.fixture
def api_config():
    """Configuration with a test credential."""
    return APIConfig(api_key='sk_test_123')


@pytest.fixture
def api_client(api_config, fake_session):
    """API client wired to the fake session."""
    return AsyncAPIClient(api_config, session=fake_session)


@pytest.fixture
def keyless_client(fake_session):
    """API client without a credential."""
    return AsyncAPIClient(APIConfig(), session=fake_session)
