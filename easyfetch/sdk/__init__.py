"""easyfetch SDK public interface."""

from ._version import __version__
from .client import HTTPClient
from .config import ClientConfig, get_config, load_dotenv_for_sdk
from .exceptions import BodyConsumedError, EasyFetchError, HTTPError, InvalidRequestError
from .models import BodyState, HTTPMethod, HTTPRequest, RequestOptions
from .response import HTTPResponse

__all__ = [
    "__version__",
    "HTTPClient",
    "HTTPResponse",
    "HTTPMethod",
    "HTTPRequest",
    "RequestOptions",
    "BodyState",
    "ClientConfig",
    "get_config",
    "load_dotenv_for_sdk",
    "EasyFetchError",
    "HTTPError",
    "BodyConsumedError",
    "InvalidRequestError",
]
