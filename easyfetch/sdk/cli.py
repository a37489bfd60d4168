"""Command-line fetch utility for the easyfetch SDK.

Fetches a URL and prints the response body, e.g.::

    easyfetch https://example.com
    easyfetch https://httpbin.org/post -X POST -d '{"a": 1}' -i
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import Optional

import httpx

from .client import HTTPClient
from .config import get_config, load_dotenv_for_sdk
from .exceptions import EasyFetchError, HTTPError
from .models import HTTPMethod, RequestOptions
from .response import HTTPResponse

logger = logging.getLogger(__name__)


def _parse_pairs(values: list[str], separator: str, what: str) -> dict[str, str]:
    """Split ``KEY<sep>VALUE`` arguments into a dict."""
    pairs = {}
    for item in values:
        key, sep, value = item.partition(separator)
        if not sep or not key.strip():
            raise argparse.ArgumentTypeError(f"Invalid {what} {item!r}, expected KEY{separator}VALUE")
        pairs[key.strip()] = value.strip() if what == "header" else value
    return pairs


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="easyfetch", description="Fetch a URL and print the response")
    parser.add_argument("url", help="Absolute URL to request")
    parser.add_argument(
        "-X",
        "--method",
        type=str.upper,
        choices=[m.value for m in HTTPMethod],
        default=HTTPMethod.GET.value,
        help="HTTP method",
    )
    parser.add_argument(
        "-p", "--param", action="append", default=[], metavar="KEY=VALUE", help="Query parameter"
    )
    parser.add_argument(
        "-H", "--header", action="append", default=[], metavar="NAME:VALUE", help="Request header"
    )
    parser.add_argument("-d", "--data", metavar="JSON", help="JSON request body")
    parser.add_argument("--timeout", type=float, help="Timeout in seconds")
    parser.add_argument(
        "-L", "--location", action="store_true", default=None, help="Follow redirects"
    )
    parser.add_argument(
        "-i", "--include", action="store_true", help="Print status line and headers"
    )
    return parser


async def _print_response(response: HTTPResponse, include: bool) -> None:
    if include:
        print(f"HTTP {response.status_code}")
        for name, value in response.headers.multi_items():
            print(f"{name}: {value}")
        print()
    print(await response.text())


async def fetch(args: argparse.Namespace, client: Optional[HTTPClient] = None) -> int:
    """Perform the request described by ``args`` and print the result.

    Returns the process exit code: 0 on success, 1 when the server answered
    with an error status. Transport errors propagate.
    """
    params = _parse_pairs(args.param, "=", "param")
    headers = _parse_pairs(args.header, ":", "header")
    body = json.loads(args.data) if args.data is not None else None
    options = RequestOptions(
        headers=headers, timeout=args.timeout, follow_redirects=args.location
    )

    owns_client = client is None
    if client is None:
        client = HTTPClient(get_config())

    try:
        try:
            response = await client.request(args.url, args.method, params or None, body, options)
            exit_code = 0
        except HTTPError as exc:
            logger.info("%s", exc)
            response = exc.response
            exit_code = 1
        await _print_response(response, args.include)
        return exit_code
    finally:
        if owns_client:
            await client.aclose()


def main(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        load_dotenv_for_sdk()
        cfg = get_config()
        logging.basicConfig(level=cfg.log_level, format="%(levelname)s %(name)s: %(message)s")
        return asyncio.run(fetch(args))
    except KeyboardInterrupt:
        print("\nOperation cancelled by user", file=sys.stderr)
        return 1
    except (argparse.ArgumentTypeError, ValueError) as e:
        # ValueError covers bad settings, malformed JSON and rejected options or URLs
        logging.error("Invalid input: %s", e)
        return 1
    except (httpx.HTTPError, EasyFetchError) as e:
        logging.error("Request failed: %s", e)
        return 1


def cli_main() -> None:
    """Entry point for the easyfetch command."""
    sys.exit(main())


if __name__ == "__main__":
    cli_main()
