# ABOUTME: Main CLI application entry point using asyncclick for native async support
# ABOUTME: Provides commands for converting hotel document batches and inspecting logging

from pathlib import Path

import asyncclick as click
from rich.console import Console

from hotel_converter.config import get_config
from hotel_converter.core.converter import HotelConverterService
from hotel_converter.core.handler import ConversionResponse, ErrorResponse, convert_uploads
from hotel_converter.persistence import FileSystemOutputSink
from hotel_converter.utils.logging import (
    LoggingMode,
    configure_logging,
    get_logger,
    get_logging_status,
)
from hotel_converter.utils.rich_tables import (
    create_batch_result_table,
    create_error_table,
    create_logging_status_table,
    print_rich_table,
)

console = Console()

EXIT_PROCESSING_ERROR = 1
EXIT_VALIDATION_ERROR = 2


def _exit_code(response: ConversionResponse) -> int:
    if response.ok:
        return 0
    return EXIT_VALIDATION_ERROR if response.status < 500 else EXIT_PROCESSING_ERROR


def _display_response(response: ConversionResponse, json_output: bool) -> None:
    """Print the batch outcome as JSON on stdout or as a rich table."""
    if json_output:
        click.echo(response.body.model_dump_json(indent=2))
        return

    if isinstance(response.body, ErrorResponse):
        print_rich_table(console, create_error_table(response.body))
    else:
        print_rich_table(console, create_batch_result_table(response.body))


@click.command()
@click.argument(
    "files",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(file_okay=False, path_type=Path),
    help="Base output directory (defaults to HOTEL_CONVERTER_OUTPUT_DIR)",
)
@click.pass_context
async def convert(ctx, files: tuple[Path, ...], output_dir: Path | None):
    """
    🏨 Merge GIATA and COAH hotel files and download their images.

    Files must be named <hotelId>-giata.<json|xml> or <hotelId>-coah.<json|xml>.
    Each run writes hotels.json and an images/ directory into a timestamped
    subdirectory of the output directory.
    """
    json_output = ctx.obj["json_output"]
    logger = get_logger(__name__)

    uploads = [(path.name, path.read_bytes()) for path in files]
    logger.info("Converting files", count=len(uploads))

    service = HotelConverterService(sink=FileSystemOutputSink(output_dir))

    if json_output:
        response = await convert_uploads(uploads, service)
    else:
        with console.status(f"🧳 Converting {len(uploads)} file(s)..."):
            response = await convert_uploads(uploads, service)

    _display_response(response, json_output)

    exit_code = _exit_code(response)
    if exit_code:
        ctx.exit(exit_code)


def _initialize_logging(json_output: bool, log_level: str | None = None, log_file: str | None = None) -> None:
    """Initialize logging configuration."""
    try:
        config = get_config()
        mode = LoggingMode.PRODUCTION if json_output else LoggingMode.INTERACTIVE

        # Use config defaults when CLI parameters are not provided
        final_log_level = log_level or config.log_level
        final_log_file = log_file or (str(config.log_file) if config.log_file else None)

        configure_logging(mode=mode, log_level=final_log_level, log_file=final_log_file)
    except (FileNotFoundError, PermissionError, OSError):
        # Log directory not writable, fall back to stderr-only logging
        configure_logging(mode=LoggingMode.PRODUCTION, log_level=log_level or "INFO", log_file=None)


@click.command(name="logging-status")
def logging_status():
    """
    📊 Show current logging configuration and status.
    """
    status = get_logging_status()
    logging_table = create_logging_status_table(status)
    print_rich_table(console, logging_table)


@click.group(invoke_without_command=True)
@click.option("--json", is_flag=True, help="Output structured JSON instead of rich tables")
@click.option("--log-level", default=None, help="Logging level (DEBUG, INFO, WARNING, ERROR)")
@click.option("--log-file", help="Custom log file path")
@click.pass_context
def app(ctx, json: bool, log_level: str | None, log_file: str | None):
    """
    🏨 Hotel Converter - merge provider hotel data and collect verified images
    """
    ctx.ensure_object(dict)
    ctx.obj["json_output"] = json

    _initialize_logging(json, log_level, log_file)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


app.add_command(convert)
app.add_command(logging_status)


if __name__ == "__main__":
    app()
