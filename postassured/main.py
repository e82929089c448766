"""
postassured CLI - Postman collection to RestAssured test converter

Main entry point for the postassured command line tool.
"""

import logging
import sys

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from . import __version__
from .converter import ArtifactWriteError, convert, write_artifacts
from .extractor import extract_semantics
from .models import BasicCredentials, BearerCredentials, ConversionConfig
from .postman import PostmanParseError, PostmanParser, flatten_items


console = Console()
error_console = Console(stderr=True)

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool, quiet: bool = False) -> None:
    """Configure logging based on CLI flags."""
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=error_console, show_time=False, show_path=False)],
        force=True,
    )


def load_collection(collection_path: str):
    """Load a collection, exiting with status 1 if it cannot be read."""
    try:
        return PostmanParser(collection_path).parse()
    except PostmanParseError as e:
        error_console.print(f"[red]Failed to read collection file: {escape(str(e))}[/red]", soft_wrap=True)
        sys.exit(1)


def describe_auth(auth) -> str:
    """Short label for resolved credentials."""
    if isinstance(auth, BearerCredentials):
        return "bearer"
    if isinstance(auth, BasicCredentials):
        return "basic"
    return "-"


@click.group()
@click.version_option(version=__version__)
def cli():
    """postassured - Convert Postman collections into RestAssured tests."""
    pass


@cli.command(name='convert')
@click.argument('collection', type=click.Path(dir_okay=False))
@click.argument('output_dir', type=click.Path(file_okay=False))
@click.option(
    '--allure/--no-allure',
    default=True,
    envvar='POSTASSURED_ALLURE',
    show_default=True,
    help='Include Allure reporting dependencies and annotations'
)
@click.option(
    '--verbose', '-v',
    is_flag=True,
    help='Enable verbose output'
)
@click.option(
    '--quiet', '-q',
    is_flag=True,
    help='Only print errors'
)
def convert_cmd(collection: str, output_dir: str, allure: bool, verbose: bool, quiet: bool):
    """
    Convert a Postman collection into a Maven RestAssured project.

    Example:
        postassured convert collection.json ./generated --no-allure
    """
    setup_logging(verbose, quiet)
    out = Console(quiet=True) if quiet else console

    config = ConversionConfig(
        collection_path=collection,
        output_dir=output_dir,
        enable_allure=allure,
        verbose=verbose
    )

    parsed = load_collection(config.collection_path)
    logger.debug("Loaded collection %r (schema %s)", parsed.name, parsed.version or "unknown")

    result = convert(parsed, enable_allure=config.enable_allure)

    try:
        written = write_artifacts(result.artifacts, config.output_dir)
    except ArtifactWriteError as e:
        error_console.print(f"[red]{escape(str(e))}[/red]", soft_wrap=True)
        sys.exit(1)

    for path in written:
        out.print(f"Generated: [cyan]{escape(str(path))}[/cyan]", soft_wrap=True)

    if config.verbose:
        for flat in result.requests:
            out.print(f"  • {flat.request.method.upper()} {escape(flat.name or '-')}", soft_wrap=True)

    out.print(
        f"\n[green]Successfully converted {result.request_count} request(s) "
        f"from \"{escape(result.collection_name)}\" to RestAssured tests.[/green]",
        soft_wrap=True
    )


@cli.command()
@click.argument('collection', type=click.Path(dir_okay=False))
def inspect(collection: str):
    """Inspect a Postman collection.

    Shows every request as it will be converted, without writing files.
    """
    parsed = load_collection(collection)
    requests = flatten_items(parsed.items)

    console.print(f"\n[bold]Collection: {escape(parsed.name)}[/bold]")
    console.print(f"Schema: {parsed.version or 'unknown'}\n")

    table = Table(title=f"Requests ({len(requests)} found)")
    table.add_column("Folder", style="magenta")
    table.add_column("Name", style="white")
    table.add_column("Method", style="cyan")
    table.add_column("Base URI", style="green")
    table.add_column("Path", style="green")
    table.add_column("Auth", style="yellow")
    table.add_column("Content-Type", style="blue")

    for flat in requests:
        semantics = extract_semantics(flat.request)
        table.add_row(
            escape(flat.folder_name or "-"),
            escape(flat.name or "-"),
            flat.request.method.upper(),
            escape(semantics.base_uri),
            escape(semantics.path),
            describe_auth(semantics.auth),
            semantics.content_type or "-"
        )

    console.print(table)


def main():
    """Main entry point."""
    cli()


if __name__ == '__main__':
    main()
