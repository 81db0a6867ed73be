import json
from typing import List, Optional, Tuple

import click
import httpx
from rich.console import Console

from .._client import Client
from .._request import Request
from .._response import Response
from .._utils import setup_logging
from .._utils.constants import HEADER_CONTENT_TYPE
from ..models.errors import BadStatusError, HttpatchError


def _parse_header(value: str) -> Tuple[str, str]:
    name, sep, content = value.partition(":")
    if not sep or not name.strip():
        raise click.BadParameter(
            f"expected 'Name: value', got {value!r}", param_hint="--header"
        )
    return name.strip(), content.strip()


def _print_response(console: Console, response: Response) -> None:
    console.print(
        f"HTTP {response.status_code} {response.raw.reason_phrase}", style="bold"
    )
    with response:
        text = response.body_string()
    if not text:
        return

    content_type = response.headers.get(HEADER_CONTENT_TYPE, "")
    if "json" in content_type:
        try:
            console.print_json(data=json.loads(text))
            return
        except ValueError:
            pass
    console.out(text)


@click.command()
@click.argument("method")
@click.argument("url")
@click.option("--base-url", help="Base URL the request URL is resolved against")
@click.option(
    "--header", "-H", "headers", multiple=True, help="Request header, 'Name: value'"
)
@click.option("--data", "-d", help="JSON request body")
@click.option("--timeout", type=float, help="Timeout in seconds")
@click.option(
    "--allow-any-status", is_flag=True, help="Do not fail on non-2xx responses"
)
@click.option("--debug", is_flag=True, help="Enable debug logging")
def request(
    method: str,
    url: str,
    base_url: Optional[str],
    headers: Tuple[str, ...],
    data: Optional[str],
    timeout: Optional[float],
    allow_any_status: bool,
    debug: bool,
) -> None:
    """Send a METHOD request to URL and print the response."""
    setup_logging(debug)
    console = Console()

    parsed_headers: List[Tuple[str, str]] = [_parse_header(h) for h in headers]
    body = None
    if data:
        try:
            body = json.loads(data)
        except ValueError as e:
            raise click.BadParameter(f"invalid JSON: {e}", param_hint="--data") from e

    kwargs = {}
    if allow_any_status:
        kwargs["status_validator"] = None

    with Client.from_env(base_url=base_url, timeout=timeout, **kwargs) as client:
        req = Request(
            method=method.upper(),
            url=url,
            headers=parsed_headers or None,
            body=body,
        )
        try:
            response = client.send(req).response()
        except BadStatusError as e:
            _print_response(console, e.response)
            raise click.ClickException(e.message) from e
        except (HttpatchError, httpx.HTTPError) as e:
            raise click.ClickException(str(e)) from e

        _print_response(console, response)
