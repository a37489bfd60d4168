"""Response wrapper for the easyfetch SDK.

:class:`HTTPResponse` presents a completed response's metadata
synchronously and its body asynchronously. The body stream can only be
drained once, so the wrapper tracks its consumption state and caches the
materialized buffer for every later call.
"""

from __future__ import annotations

import asyncio
import codecs
import json
import logging
from typing import Any

import httpx

from .exceptions import BodyConsumedError
from .models import BodyState

logger = logging.getLogger(__name__)

JSON_MEDIA_TYPE = "application/json"
DEFAULT_ENCODING = "utf-8"


class HTTPResponse:
    """Wraps one streaming ``httpx.Response``.

    Status code and headers are captured once at construction. The body is
    read on the first call to :meth:`data`, :meth:`text` or :meth:`json` and
    cached; concurrent callers wait for the in-flight read and share its
    result.

    Parameters
    ----------
    response : httpx.Response
        A response opened with ``stream=True`` whose body has not been read

    Notes
    -----
    If reading the body fails, or the response is closed before the body was
    read, every body accessor raises :class:`BodyConsumedError` from then on.
    """

    def __init__(self, response: httpx.Response):
        self._response = response
        self._headers = httpx.Headers(response.headers)
        self._status_code = response.status_code
        self._state = BodyState.UNCONSUMED
        self._body: bytes | None = None
        self._lock = asyncio.Lock()

    def __repr__(self) -> str:
        return f"<HTTPResponse [{self._status_code}]>"

    async def __aenter__(self) -> "HTTPResponse":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    @property
    def headers(self) -> httpx.Headers:
        """A copy of the headers captured when the response arrived."""
        return self._headers.copy()

    @property
    def status_code(self) -> int:
        return self._status_code

    @property
    def state(self) -> BodyState:
        return self._state

    async def data(self) -> bytes:
        """Return the full body as bytes.

        Returns
        -------
        bytes
            The decoded chunks of the body concatenated in arrival order

        Raises
        ------
        httpx.TransportError
            If the transport fails while the body is streaming
        BodyConsumedError
            If the body can no longer be produced
        """
        async with self._lock:
            if self._state is BodyState.CONSUMED:
                if self._body is None:
                    raise BodyConsumedError(
                        "Response body was already consumed and is no longer available"
                    )
                return self._body

            self._state = BodyState.CONSUMING
            chunks: list[bytes] = []
            try:
                async for chunk in self._response.aiter_bytes():
                    chunks.append(chunk)
            except BaseException:
                self._state = BodyState.CONSUMED
                raise
            finally:
                await self._response.aclose()

            self._body = b"".join(chunks)
            self._state = BodyState.CONSUMED
            logger.debug("Read %d body bytes in %d chunks", len(self._body), len(chunks))
            return self._body

    async def text(self) -> str:
        """Return the body decoded with the declared charset, or UTF-8."""
        body = await self.data()
        return body.decode(self._encoding(), errors="replace")

    async def json(self) -> Any:
        """Return the parsed JSON body.

        Returns ``None`` without reading the body when the captured
        ``Content-Type`` is not ``application/json``.

        Raises
        ------
        json.JSONDecodeError
            If the content type is JSON but the body is not
        """
        if not self._is_json():
            return None
        return json.loads(await self.text())

    async def aclose(self) -> None:
        """Release the underlying stream.

        A body that was already read stays available. An unread body is
        discarded.
        """
        async with self._lock:
            if self._state is BodyState.UNCONSUMED:
                self._state = BodyState.CONSUMED
            await self._response.aclose()

    # ---------------- internal -----------------

    def _is_json(self) -> bool:
        content_type = self._headers.get("content-type", "")
        media_type = content_type.split(";", 1)[0].strip().lower()
        return media_type == JSON_MEDIA_TYPE

    def _encoding(self) -> str:
        charset = self._response.charset_encoding
        if charset:
            try:
                codecs.lookup(charset)
            except LookupError:
                logger.debug("Unknown charset %r, falling back to %s", charset, DEFAULT_ENCODING)
            else:
                return charset
        return DEFAULT_ENCODING
