"""easyfetch - a minimal async HTTP client wrapper."""

from .sdk import *  # noqa: F401,F403
from .sdk import __all__, __version__  # noqa: F401
