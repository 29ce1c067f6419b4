"""
Main CLI Application
Typer application converting the images of whole directory trees
"""

import platform
from pathlib import Path
from typing import Annotated, List, Optional

import typer
from rich.console import Console
from rich.table import Table

from imgconv import __version__
from imgconv.cli.utils.errors import handle_error
from imgconv.config import settings
from imgconv.core.conversion.converter import FormatConverter
from imgconv.core.conversion.registry import format_registry
from imgconv.core.exceptions import ImageConverterError
from imgconv.models.conversion import ConversionSettings
from imgconv.services.batch_service import BatchService
from imgconv.utils.logging import setup_logging

NO_DIRECTORY_MESSAGE = "対象ディレクトリを指定してください"

app = typer.Typer(
    name="imgconv",
    help="Convert every image of one format in a directory tree into another format",
    no_args_is_help=True,
    pretty_exceptions_enable=False,
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)

console = Console()
err_console = Console(stderr=True)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"imgconv {__version__} (Python {platform.python_version()})")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            "-v",
            callback=_version_callback,
            is_eager=True,
            help="Show version",
        ),
    ] = None,
):
    """
    imgconv - replace images in a directory tree with another format

    The format of each file is detected from its content, not its extension.

    [bold green]Example:[/bold green]

      [cyan]imgconv convert photos/ -b jpeg -a png[/cyan]
    """


@app.command()
def convert(
    directories: Annotated[
        Optional[List[Path]],
        typer.Argument(help="Directories to convert, processed in order"),
    ] = None,
    before: Annotated[
        Optional[str],
        typer.Option("-b", "--before", help="Format before conversion (gif, jpeg, png)"),
    ] = None,
    after: Annotated[
        Optional[str],
        typer.Option("-a", "--after", help="Format after conversion (gif, jpeg, png)"),
    ] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", help="Enable verbose output")
    ] = False,
    debug: Annotated[
        bool, typer.Option("--debug", help="Enable debug mode with detailed errors")
    ] = False,
    json_logs: Annotated[
        bool, typer.Option("--json-logs", help="Emit logs as JSON on stderr")
    ] = False,
):
    """
    Convert every image whose content is in the BEFORE format.

    Each converted file keeps its name with the extension of the AFTER
    format; the original file is deleted.

    Examples:
      imgconv convert photos/
      imgconv convert scans/ archive/ -b gif -a png
    """
    log_level = settings.log_level
    if verbose:
        log_level = "INFO"
    if debug:
        log_level = "DEBUG"
    setup_logging(
        log_level=log_level,
        json_logs=json_logs or settings.json_logs,
        enable_file_logging=settings.logging_enabled,
        log_dir=settings.log_dir,
        max_log_size_mb=settings.max_log_size_mb,
        backup_count=settings.log_backup_count,
    )

    if not directories:
        typer.echo(NO_DIRECTORY_MESSAGE)
        raise typer.Exit(1)

    source_format = before if before is not None else settings.default_source_format
    target_format = after if after is not None else settings.default_target_format

    service = BatchService(
        converter=FormatConverter(
            settings=ConversionSettings.from_settings(settings),
            reporter=typer.echo,
            language=settings.language,
        )
    )

    for directory in directories:
        try:
            service.run(directory, source_format, target_format)
        except ImageConverterError as e:
            handle_error(e, err_console, debug=debug)
            raise typer.Exit(1)


@app.command()
def formats():
    """List the supported formats"""
    table = Table(title="Supported Formats", show_header=True)
    table.add_column("Format", style="cyan")
    table.add_column("Extension", style="green")
    table.add_column("Decoder", style="dim")

    for token in format_registry.supported_formats():
        handler = format_registry.get_handler(token)
        table.add_row(token, f".{handler.extension}", handler.pil_format)

    console.print(table)


def run() -> None:
    """Console script entry point."""
    app()
