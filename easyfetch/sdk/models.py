"""Request descriptor models for the easyfetch SDK."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictFloat,
    StrictInt,
    StrictStr,
    field_validator,
)

from ._http import build_url

# Strict so booleans and other values are rejected instead of coerced
ParamValue = Union[StrictStr, StrictInt, StrictFloat]


class HTTPMethod(str, Enum):
    """The request methods supported by :class:`~easyfetch.sdk.client.HTTPClient`."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


class BodyState(str, Enum):
    """Consumption state of a response body stream."""

    UNCONSUMED = "unconsumed"
    CONSUMING = "consuming"
    CONSUMED = "consumed"


class RequestOptions(BaseModel):
    """Per-request transport options.

    Options carry no ``method`` field and reject unknown fields, so the
    method fixed by the calling operation cannot be overridden here.

    Attributes
    ----------
    headers : dict[str, str]
        Extra request headers
    timeout : float, optional
        Timeout in seconds applied to connect, read, write and pool waits.
        ``None`` uses the client default
    follow_redirects : bool, optional
        Whether to follow redirects. ``None`` uses the client default
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    headers: Dict[str, str] = Field(default_factory=dict)
    timeout: Optional[float] = Field(default=None, gt=0)
    follow_redirects: Optional[bool] = Field(default=None)


class HTTPRequest(BaseModel):
    """A single logical request, built per call and never persisted."""

    model_config = ConfigDict(frozen=True)

    url: str
    method: HTTPMethod
    params: Optional[Dict[str, ParamValue]] = None
    body: Any = None
    options: RequestOptions = Field(default_factory=RequestOptions)

    @field_validator("method", mode="before")
    @classmethod
    def _normalize_method(cls, value: Any) -> Any:
        if isinstance(value, str) and not isinstance(value, HTTPMethod):
            return value.upper()
        return value

    @property
    def resolved_url(self) -> str:
        """The base URL with the encoded query string appended."""
        return build_url(self.url, self.params)
