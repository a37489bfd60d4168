"""Exception classes for the easyfetch SDK.

This module defines the errors raised by the client and by response body
accessors. Transport failures are not wrapped: they surface as the native
``httpx.TransportError`` raised by the transport layer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import httpx

    from .response import HTTPResponse


class EasyFetchError(Exception):
    """Base exception for all easyfetch SDK errors.

    All custom exceptions in the SDK inherit from this base class,
    allowing applications to catch all SDK-specific errors with a
    single except clause if desired.
    """

    pass


class HTTPError(EasyFetchError):
    """Raised when a request completes with a status code of 400 or above.

    The exception carries the fully-formed response wrapper, so a failed
    response is inspected exactly like a successful one: status, headers
    and the body accessors are all available on the exception itself.

    Attributes
    ----------
    response : HTTPResponse
        The wrapped response whose status triggered the error
    method : str
        HTTP method of the failed request
    url : str
        Resolved URL of the failed request
    """

    def __init__(self, response: "HTTPResponse", method: str = "", url: str = ""):
        self.response = response
        self.method = method
        self.url = url
        target = f" for {method} {url}" if method else ""
        super().__init__(f"HTTP {response.status_code}{target}")

    @property
    def status_code(self) -> int:
        return self.response.status_code

    @property
    def headers(self) -> "httpx.Headers":
        return self.response.headers

    async def data(self) -> bytes:
        return await self.response.data()

    async def text(self) -> str:
        return await self.response.text()

    async def json(self) -> Any:
        return await self.response.json()


class BodyConsumedError(EasyFetchError):
    """Raised when a response body can no longer be produced.

    This happens when the body stream failed part way through a previous
    read, or when the response was closed before its body was read.
    """

    pass


class InvalidRequestError(EasyFetchError, ValueError):
    """Raised when a request cannot be built.

    Covers unsupported methods, relative or malformed URLs and bodies that
    cannot be serialized as JSON. Nothing is sent over the network.
    """

    pass
