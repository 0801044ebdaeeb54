"""Click CLI for Debug Bundle.

Commands:
- serve: Run the HTTP server exposing the bundle endpoint
- dump: Build the default bundle locally and save it
- fetch: Download a bundle from a running server
- sources: List the default source names
"""

import asyncio
import io
import logging
import sys
import zipfile
from pathlib import Path
from typing import Optional

import click
import httpx
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from debug_bundle import __version__
from debug_bundle.bundle import ZIP_FILE_NAME
from debug_bundle.config import (
    BundleConfig,
    DEFAULT_HOST,
    DEFAULT_PATH,
    DEFAULT_PORT,
    DEFAULT_PROFILE_DURATION,
)
from debug_bundle.sources import (
    DEFAULT_HEAP_TOP,
    DEFAULT_SAMPLE_INTERVAL,
    DEFAULT_SOURCE_NAMES,
    new_zip_writer_with_default_sources,
)
from debug_bundle.utils.errors import DebugBundleError
from debug_bundle.utils.logger import setup_logging

console = Console()
logger = logging.getLogger(__name__)


def run_async(coro):
    """Run async function in sync context."""
    return asyncio.run(coro)


def _validation_message(e: ValidationError) -> str:
    return "; ".join(err["msg"] for err in e.errors())


def print_entries(content: bytes, title: str) -> None:
    """Print the entries of a zip archive as a table."""
    with zipfile.ZipFile(io.BytesIO(content)) as zf:
        infos = zf.infolist()

    table = Table(title=f"{title} ({len(infos)} entries)")
    table.add_column("Entry")
    table.add_column("Size", justify="right")
    table.add_column("Compressed", justify="right")

    for info in infos:
        table.add_row(info.filename, str(info.file_size), str(info.compress_size))

    console.print(table)


def profile_options(func):
    """Shared options that shape the default source set."""
    options = [
        click.option(
            "--duration",
            "profile_duration",
            type=float,
            default=DEFAULT_PROFILE_DURATION,
            envvar="DEBUG_BUNDLE_PROFILE_DURATION",
            show_default=True,
            help="CPU profile capture window in seconds",
        ),
        click.option(
            "--sample-interval",
            type=float,
            default=DEFAULT_SAMPLE_INTERVAL,
            envvar="DEBUG_BUNDLE_SAMPLE_INTERVAL",
            show_default=True,
            help="Seconds between CPU profile samples",
        ),
        click.option(
            "--heap-top",
            type=int,
            default=DEFAULT_HEAP_TOP,
            envvar="DEBUG_BUNDLE_HEAP_TOP",
            show_default=True,
            help="Number of heap entries to report",
        ),
        click.option(
            "--trace-malloc",
            is_flag=True,
            envvar="DEBUG_BUNDLE_TRACE_MALLOC",
            help="Start tracemalloc for allocation-site heap profiles",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--debug",
    is_flag=True,
    help="Enable debug logging",
)
def cli(debug: bool):
    """Debug Bundle - download diagnostic zips from running services."""
    setup_logging(level="DEBUG" if debug else None, debug_http=debug)


@cli.command()
@click.option("--host", default=DEFAULT_HOST, envvar="DEBUG_BUNDLE_HOST", help="Bind address")
@click.option("--port", type=int, default=DEFAULT_PORT, envvar="DEBUG_BUNDLE_PORT", help="Bind port")
@click.option("--path", default=DEFAULT_PATH, envvar="DEBUG_BUNDLE_PATH", help="Bundle endpoint path")
@profile_options
def serve(
    host: str,
    port: int,
    path: str,
    profile_duration: float,
    sample_interval: float,
    heap_top: int,
    trace_malloc: bool,
):
    """Run the debug bundle HTTP server."""
    from debug_bundle.web.server import run_server

    try:
        config = BundleConfig(
            host=host,
            port=port,
            path=path,
            profile_duration=profile_duration,
            sample_interval=sample_interval,
            heap_top=heap_top,
            trace_malloc=trace_malloc,
        )
    except ValidationError as e:
        console.print(f"[red]Invalid configuration: {_validation_message(e)}[/]")
        sys.exit(1)

    console.print(f"[bold green]Serving debug bundle on http://{host}:{port}{path}[/]")
    try:
        run_server(config)
    except DebugBundleError as e:
        console.print(f"[red]Error: {e}[/]")
        sys.exit(1)


@cli.command()
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=ZIP_FILE_NAME,
    show_default=True,
    help="File to write the bundle to",
)
@profile_options
def dump(
    output: Path,
    profile_duration: float,
    sample_interval: float,
    heap_top: int,
    trace_malloc: bool,
):
    """Build the default bundle locally and save it."""
    try:
        writer = new_zip_writer_with_default_sources(
            profile_duration,
            sample_interval=sample_interval,
            heap_top=heap_top,
            trace_malloc=trace_malloc,
        )
        with console.status(f"Capturing bundle ({profile_duration:.1f}s CPU profile)..."):
            content = writer.build()
    except DebugBundleError as e:
        console.print(f"[red]Error: {e}[/]")
        sys.exit(1)

    output.write_bytes(content)
    console.print(f"[green]Wrote {len(content)} bytes to {output}[/]")
    print_entries(content, str(output))


@cli.command()
@click.argument("url")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=ZIP_FILE_NAME,
    show_default=True,
    help="File to write the bundle to",
)
@click.option("--timeout", type=float, default=120.0, show_default=True, help="Request timeout in seconds")
def fetch(url: str, output: Path, timeout: float):
    """Download a bundle from a running server."""

    async def _fetch() -> Optional[bytes]:
        async with httpx.AsyncClient(timeout=timeout) as client:
            with console.status(f"Fetching {url}..."):
                try:
                    resp = await client.get(url)
                except httpx.HTTPError as e:
                    console.print(f"[red]Request failed: {escape(str(e))}[/]")
                    return None

        if resp.status_code != 200:
            console.print(f"[red]Server returned {resp.status_code}: {escape(resp.text)}[/]")
            return None
        return resp.content

    content = run_async(_fetch())
    if content is None:
        sys.exit(1)

    try:
        print_entries(content, str(output))
    except zipfile.BadZipFile:
        console.print("[red]Response is not a valid zip archive[/]")
        sys.exit(1)

    output.write_bytes(content)
    console.print(f"[green]Wrote {len(content)} bytes to {output}[/]")


@cli.command()
def sources():
    """List the default source names."""
    for name in DEFAULT_SOURCE_NAMES:
        console.print(name)


def main():
    """Main entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
