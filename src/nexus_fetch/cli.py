"""Command-line interface for nexus_fetch.

Fetches Maven artifacts from a Nexus repository, either directly from
fully-specified coordinates or by searching for partial ones.

Exit codes:
    0 - Success
    1 - Transport failure, malformed response or too many artifacts
    2 - Wrong usage
    3 - Truncated search (with --abort-on-truncated)
    4 - Nothing found (with --abort-on-not-found)
"""

import asyncio
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.markup import escape

from nexus_fetch.client import DEFAULT_TIMEOUT, NexusClient
from nexus_fetch.exceptions import NexusFetchError, UsageError
from nexus_fetch.models import (
    FetchConfig,
    FetchResult,
    Gav,
    NexusInstance,
    NexusRepository,
)
from nexus_fetch.strategy import ResolutionStrategy

app = typer.Typer(
    name="nexus-fetch",
    help="Resolve and download Maven artifacts from a Nexus repository.",
)

console = Console()
err_console = Console(stderr=True)

# Configure logging
logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s: %(message)s",
)
logger = logging.getLogger("nexus_fetch")

DEFAULT_SERVER = "localhost"
DEFAULT_PORT = "8081"
DEFAULT_CONTEXT_ROOT = "nexus/"
DEFAULT_USERNAME = "admin"
DEFAULT_PASSWORD = "admin123"
DEFAULT_REPOSITORY = "releases"


def _setup_logging(verbose: bool) -> None:
    """Configure logging level based on verbosity flag."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.getLogger("nexus_fetch").setLevel(level)


def build_gav(
    coordinates: Optional[str],
    group: str,
    artifact: str,
    version: str,
    classifier: str,
    packaging: str,
) -> Gav:
    """Build the requested coordinate from either concise notation or flags.

    Raises:
        UsageError: If both forms are given or the notation is malformed.
    """
    flags = Gav(group, artifact, version, classifier, packaging)
    if coordinates is None:
        return flags
    if flags != Gav():
        raise UsageError(
            "Give coordinates either in concise notation or as options, not both"
        )
    try:
        return Gav.from_concise(coordinates)
    except ValueError as e:
        raise UsageError(str(e)) from e


async def _run(config: FetchConfig, timeout: float) -> FetchResult:
    async with NexusClient(config.repository.instance, timeout=timeout) as client:
        return await ResolutionStrategy(config, client).run()


def _report(result: FetchResult) -> None:
    if result.metadata is not None:
        console.print(result.metadata, markup=False, highlight=False, soft_wrap=True)
    if result.truncated:
        console.print(
            "[yellow]Warning:[/yellow] search result truncated by the server, "
            "results are incomplete"
        )
    if result.not_found:
        console.print("[yellow]Artifact not found[/yellow]")
    if result.mode == "search":
        console.print(f"Found [bold]{len(result.locations)}[/bold] artifact files")
    for fqa, url in result.targets:
        console.print(f"{escape(str(fqa))} {escape(url)}", highlight=False, soft_wrap=True)
    for path in result.written:
        console.print(f"[green]Written:[/green] {escape(str(path))}")


@app.command()
def fetch(
    coordinates: Annotated[
        Optional[str],
        typer.Argument(
            help="Coordinates in concise notation, group:artifact:version[:classifier]@packaging",
            show_default=False,
        ),
    ] = None,
    protocol: Annotated[str, typer.Option(help="Nexus protocol")] = "http",
    server: Annotated[str, typer.Option(help="Nexus server name")] = DEFAULT_SERVER,
    port: Annotated[str, typer.Option(help="Nexus port")] = DEFAULT_PORT,
    contextroot: Annotated[
        str, typer.Option(help="Nexus context root")
    ] = DEFAULT_CONTEXT_ROOT,
    username: Annotated[
        str, typer.Option(envvar="NEXUS_USERNAME", help="Nexus user")
    ] = DEFAULT_USERNAME,
    password: Annotated[
        str, typer.Option(envvar="NEXUS_PASSWORD", help="Nexus password")
    ] = DEFAULT_PASSWORD,
    repository: Annotated[
        str,
        typer.Option(help="Nexus repository ID, empty for global search"),
    ] = DEFAULT_REPOSITORY,
    group: Annotated[str, typer.Option("--group", "-g", help="Maven group")] = "",
    artifact: Annotated[str, typer.Option("--artifact", "-a", help="Maven artifact")] = "",
    version: Annotated[str, typer.Option("--version", "-V", help="Maven version")] = "",
    packaging: Annotated[str, typer.Option("--packaging", "-p", help="Maven packaging")] = "",
    classifier: Annotated[
        str, typer.Option("--classifier", "-c", help="Maven classifier")
    ] = "",
    abort_on_not_found: Annotated[
        bool,
        typer.Option("--abort-on-not-found", help="Exit with 4 if nothing is found"),
    ] = False,
    abort_on_truncated: Annotated[
        bool,
        typer.Option(
            "--abort-on-truncated", help="Exit with 3 if the search result is truncated"
        ),
    ] = False,
    do_fetch: Annotated[
        bool,
        typer.Option(
            "--fetch/--no-fetch",
            help="Download files found, or only resolve and print metadata",
        ),
    ] = True,
    output_dir: Annotated[
        Path,
        typer.Option("--output-dir", "-o", help="Download directory"),
    ] = Path("."),
    output_filename: Annotated[
        str,
        typer.Option(
            "--output-filename",
            help="Download filename, defaults to the original artifact name",
        ),
    ] = "",
    max_results: Annotated[
        Optional[int],
        typer.Option(
            "--max-results",
            min=0,
            help="Exit with 1 if a search matches more artifacts than this",
        ),
    ] = None,
    timeout: Annotated[
        float,
        typer.Option(help="Request timeout in seconds"),
    ] = DEFAULT_TIMEOUT,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output",
        ),
    ] = False,
) -> None:
    """Fetch or resolve a Maven artifact.

    Fully specified coordinates (repository, group, artifact and version)
    are fetched directly; anything less is searched for first and every
    match is downloaded. POM files are skipped.
    """
    _setup_logging(verbose)

    try:
        gav = build_gav(coordinates, group, artifact, version, classifier, packaging)
    except UsageError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(code=e.exit_code)

    instance = NexusInstance(
        protocol=protocol,
        server=server,
        port=port,
        context_root=contextroot,
        username=username,
        password=password,
    )
    logger.debug("Base URL: %s", instance.base_url)
    config = FetchConfig(
        repository=NexusRepository(instance, repository),
        gav=gav,
        fetch=do_fetch,
        abort_on_not_found=abort_on_not_found,
        abort_on_truncated=abort_on_truncated,
        output_dir=output_dir,
        output_filename=output_filename,
        max_results=max_results,
    )

    try:
        result = asyncio.run(_run(config, timeout))
    except NexusFetchError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(code=e.exit_code)

    _report(result)
    raise typer.Exit(code=0)


def main() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    main()
