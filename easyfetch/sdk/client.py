"""Thin async HTTP client built on httpx."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Union

import httpx
from pydantic import ValidationError

from ._http import create_async_client, encode_body, parse_url
from .config import ClientConfig, get_config
from .exceptions import HTTPError, InvalidRequestError
from .models import HTTPMethod, HTTPRequest, ParamValue, RequestOptions
from .response import JSON_MEDIA_TYPE, HTTPResponse

logger = logging.getLogger(__name__)

Params = Optional[Mapping[str, ParamValue]]
Options = Optional[Union[RequestOptions, Mapping[str, Any]]]


class HTTPClient:
    """Async client issuing one request per call.

    Every call is a single attempt: there are no retries, redirects are only
    followed when configured, and no timeout applies unless one is set in the
    configuration or in the request options.

    Parameters
    ----------
    config : ClientConfig, optional
        Client configuration. Defaults to the global configuration read
        from the environment
    transport : httpx.AsyncBaseTransport, optional
        Transport to send requests through instead of the network

    Examples
    --------
    >>> async with HTTPClient() as client:
    ...     response = await client.get("https://example.com")
    ...     print(await response.text())
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.config = config or get_config()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "HTTPClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def request(
        self,
        url: str,
        method: Union[HTTPMethod, str],
        params: Params = None,
        body: Any = None,
        options: Options = None,
    ) -> HTTPResponse:
        """Send a request and wrap its response.

        Parameters
        ----------
        url : str
            Absolute base URL. The encoded query string is always appended,
            so a URL without params ends in ``?``
        method : HTTPMethod or str
            One of GET, POST, PUT, PATCH, DELETE
        params : Mapping[str, str | int | float], optional
            Query parameters
        body : Any, optional
            Value serialized as JSON and sent as the payload for any method
        options : RequestOptions or Mapping, optional
            Headers, timeout and redirect behaviour for this request

        Returns
        -------
        HTTPResponse
            The wrapped response when the status code is below 400

        Raises
        ------
        HTTPError
            If the status code is 400 or above. The error carries the
            wrapped response
        httpx.TransportError
            If no response was received, raised unchanged from httpx
        InvalidRequestError
            If the request cannot be built
        """
        req = self._build_request(url, method, params, body, options)
        resolved_url = req.resolved_url
        parse_url(resolved_url)

        headers = httpx.Headers(req.options.headers)
        content = None
        if req.body is not None:
            content = encode_body(req.body)
            if "content-type" not in headers:
                headers["Content-Type"] = JSON_MEDIA_TYPE

        client = self._get_client()
        timeout = (
            httpx.USE_CLIENT_DEFAULT if req.options.timeout is None else req.options.timeout
        )
        follow_redirects = (
            httpx.USE_CLIENT_DEFAULT
            if req.options.follow_redirects is None
            else req.options.follow_redirects
        )
        http_request = client.build_request(
            req.method.value,
            resolved_url,
            content=content,
            headers=headers,
            timeout=timeout,
        )

        logger.debug("%s %s", req.method.value, resolved_url)
        try:
            raw = await client.send(http_request, stream=True, follow_redirects=follow_redirects)
        except httpx.RequestError as exc:
            logger.debug("%s %s failed: %r", req.method.value, resolved_url, exc)
            raise

        response = HTTPResponse(raw)
        logger.debug("%s %s -> %d", req.method.value, resolved_url, response.status_code)
        if response.status_code >= 400:
            raise HTTPError(response, req.method.value, resolved_url)
        return response

    async def get(self, url: str, params: Params = None, options: Options = None) -> HTTPResponse:
        """Send a GET request. See :meth:`request`."""
        return await self.request(url, HTTPMethod.GET, params, None, options)

    async def post(
        self, url: str, params: Params = None, body: Any = None, options: Options = None
    ) -> HTTPResponse:
        """Send a POST request. See :meth:`request`."""
        return await self.request(url, HTTPMethod.POST, params, body, options)

    async def put(
        self, url: str, params: Params = None, body: Any = None, options: Options = None
    ) -> HTTPResponse:
        """Send a PUT request. See :meth:`request`."""
        return await self.request(url, HTTPMethod.PUT, params, body, options)

    async def patch(
        self, url: str, params: Params = None, body: Any = None, options: Options = None
    ) -> HTTPResponse:
        """Send a PATCH request. See :meth:`request`."""
        return await self.request(url, HTTPMethod.PATCH, params, body, options)

    async def delete(
        self, url: str, params: Params = None, body: Any = None, options: Options = None
    ) -> HTTPResponse:
        """Send a DELETE request. See :meth:`request`."""
        return await self.request(url, HTTPMethod.DELETE, params, body, options)

    async def close(self) -> None:
        """Close the underlying HTTP client and release resources."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def aclose(self) -> None:
        """Alias for close() to match expected interface."""
        await self.close()

    # ---------------- internal -----------------

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = create_async_client(
                self.config.timeout_config(),
                follow_redirects=self.config.follow_redirects,
                verify=self.config.verify_tls,
                headers={"User-Agent": self.config.user_agent},
                transport=self._transport,
            )
        return self._client

    @staticmethod
    def _build_request(
        url: str,
        method: Union[HTTPMethod, str],
        params: Params,
        body: Any,
        options: Options,
    ) -> HTTPRequest:
        try:
            if options is None:
                options = RequestOptions()
            elif not isinstance(options, RequestOptions):
                options = RequestOptions.model_validate(dict(options))
            return HTTPRequest(
                url=url,
                method=method,
                params=dict(params) if params is not None else None,
                body=body,
                options=options,
            )
        except ValidationError as exc:
            raise InvalidRequestError(f"Invalid request: {exc}") from exc
