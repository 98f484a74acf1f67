"""ViSearch CLI utilities built with Typer + Rich."""

from __future__ import annotations

import json
import sys
from dataclasses import replace
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional, Tuple

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .client import ViSearchHttpClient
from .config import settings
from .errors import ViSearchError
from .response import ResponseEnvelope

console = Console()
app = typer.Typer(help="Send raw requests to the ViSearch API.")


class OutputFormat(str, Enum):
    TEXT = "text"
    JSON = "json"


def _parse_params(values: Optional[List[str]]) -> List[Tuple[str, str]]:
    pairs: List[Tuple[str, str]] = []
    for item in values or []:
        key, sep, value = item.partition("=")
        if not sep or not key:
            console.print(Panel(f"Expected key=value, got {item!r}", title="Params", border_style="red"))
            raise typer.Exit(code=2)
        pairs.append((key, value))
    return pairs


def _make_client(endpoint: Optional[str], access_key: Optional[str], secret_key: Optional[str]) -> ViSearchHttpClient:
    s = settings()
    overrides = {"endpoint": endpoint, "access_key": access_key, "secret_key": secret_key}
    s = replace(s, **{k: v for k, v in overrides.items() if v is not None})
    return ViSearchHttpClient.from_settings(s)


def _print_response(envelope: ResponseEnvelope, output: OutputFormat) -> None:
    body = envelope.text()
    if output is OutputFormat.JSON:
        payload = {"status_code": envelope.status_code, "headers": envelope.headers, "body": body}
        typer.echo(json.dumps(payload, indent=2))
        return
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("header")
    table.add_column("value")
    for name, value in envelope.headers.items():
        table.add_row(name, value)
    style = "green" if envelope.status_code < 400 else "red"
    console.print(Panel(table, title=f"Status {envelope.status_code}", border_style=style))
    typer.echo(body)


def _run(
    call: Callable[[ViSearchHttpClient], ResponseEnvelope],
    endpoint: Optional[str],
    access_key: Optional[str],
    secret_key: Optional[str],
    output: OutputFormat,
) -> None:
    try:
        with _make_client(endpoint, access_key, secret_key) as client:
            envelope = call(client)
            _print_response(envelope, output)
    except ViSearchError as exc:
        console.print(Panel(str(exc), title=f"Error: {exc.code}", border_style="red"))
        raise typer.Exit(code=1)


@app.command()
def get(
    path: str = typer.Argument(..., help="Request path appended to the endpoint, e.g. /search."),
    param: Optional[List[str]] = typer.Option(None, "--param", "-p", help="Request parameter as key=value; repeatable."),
    endpoint: Optional[str] = typer.Option(None, help="API base URL (env: VISEARCH_ENDPOINT)."),
    access_key: Optional[str] = typer.Option(None, help="Access key (env: VISEARCH_ACCESS_KEY)."),
    secret_key: Optional[str] = typer.Option(None, help="Secret key (env: VISEARCH_SECRET_KEY)."),
    output_format: OutputFormat = typer.Option(
        OutputFormat.TEXT,
        "--format",
        "-f",
        case_sensitive=False,
        help="Output format (text or json).",
    ),
):
    """Send a GET request with query parameters."""
    params = _parse_params(param)
    _run(lambda client: client.get(path, params), endpoint, access_key, secret_key, output_format)


@app.command()
def post(
    path: str = typer.Argument(..., help="Request path appended to the endpoint."),
    param: Optional[List[str]] = typer.Option(None, "--param", "-p", help="Request parameter as key=value; repeatable."),
    endpoint: Optional[str] = typer.Option(None, help="API base URL (env: VISEARCH_ENDPOINT)."),
    access_key: Optional[str] = typer.Option(None, help="Access key (env: VISEARCH_ACCESS_KEY)."),
    secret_key: Optional[str] = typer.Option(None, help="Secret key (env: VISEARCH_SECRET_KEY)."),
    output_format: OutputFormat = typer.Option(
        OutputFormat.TEXT,
        "--format",
        "-f",
        case_sensitive=False,
        help="Output format (text or json).",
    ),
):
    """Send a form-encoded POST request."""
    params = _parse_params(param)
    _run(lambda client: client.post(path, params), endpoint, access_key, secret_key, output_format)


@app.command()
def upload(
    path: str = typer.Argument(..., help="Request path appended to the endpoint, e.g. /uploadsearch."),
    image: str = typer.Argument(..., help="Image file to upload, or '-' to read from stdin."),
    param: Optional[List[str]] = typer.Option(None, "--param", "-p", help="Request parameter as key=value; repeatable."),
    filename: str = typer.Option("image", "--filename", help="Filename sent with stdin uploads."),
    endpoint: Optional[str] = typer.Option(None, help="API base URL (env: VISEARCH_ENDPOINT)."),
    access_key: Optional[str] = typer.Option(None, help="Access key (env: VISEARCH_ACCESS_KEY)."),
    secret_key: Optional[str] = typer.Option(None, help="Secret key (env: VISEARCH_SECRET_KEY)."),
    output_format: OutputFormat = typer.Option(
        OutputFormat.TEXT,
        "--format",
        "-f",
        case_sensitive=False,
        help="Output format (text or json).",
    ),
):
    """Upload an image as multipart form data."""
    params = _parse_params(param)
    if image == "-":
        stream = sys.stdin.buffer
        _run(
            lambda client: client.post_image_stream(path, params, stream, filename),
            endpoint,
            access_key,
            secret_key,
            output_format,
        )
        return
    image_path = Path(image)
    if not image_path.is_file():
        console.print(Panel(f"Expected image file, received: {image}", title="Upload", border_style="red"))
        raise typer.Exit(code=2)
    _run(lambda client: client.post_image(path, params, image_path), endpoint, access_key, secret_key, output_format)


def main():  # pragma: no cover
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
