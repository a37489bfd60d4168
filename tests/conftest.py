"""Pytest configuration and fixtures."""

import httpx
import pytest

from easyfetch.sdk.client import HTTPClient
from easyfetch.sdk.config import ClientConfig


class ChunkedStream(httpx.AsyncByteStream):
    """Async body stream yielding fixed chunks, optionally failing part way."""

    def __init__(self, chunks, error=None):
        self.chunks = list(chunks)
        self.error = error
        self.iterations = 0
        self.closed = False

    async def __aiter__(self):
        self.iterations += 1
        for chunk in self.chunks:
            yield chunk
        if self.error is not None:
            raise self.error

    async def aclose(self):
        self.closed = True


@pytest.fixture
def base_url():
    """Fixture URL used by client tests."""
    return "https://api.test.easyfetch.dev/items"


@pytest.fixture
def config():
    """Default configuration, independent of the environment."""
    return ClientConfig()


@pytest.fixture
def chunked_stream():
    """Factory for multi-chunk response bodies."""
    return ChunkedStream


@pytest.fixture
def make_client(config):
    """Build an HTTPClient whose requests are answered by ``handler``."""

    def _make(handler):
        return HTTPClient(config, transport=httpx.MockTransport(handler))

    return _make


@pytest.fixture
def recorded():
    """Requests seen by a recording handler."""
    return []


@pytest.fixture
def recording_handler(recorded):
    """Handler that records every request and answers 200 with a JSON body."""

    def _handler(request):
        recorded.append(request)
        return httpx.Response(200, json={"ok": True})

    return _handler
