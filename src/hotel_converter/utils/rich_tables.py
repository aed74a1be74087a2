# ABOUTME: Rich table utilities for styled CLI output
# ABOUTME: Provides pre-configured table generators for batch results and logging status

from typing import Any

from rich.box import ROUNDED, SIMPLE
from rich.console import Console
from rich.table import Table

from hotel_converter.core.handler import ErrorResponse
from hotel_converter.core.models import BatchResult


def create_key_value_table(
    title: str,
    data: dict[str, str],
    title_style: str = "bold cyan",
    key_style: str = "bold blue",
    value_style: str = "green",
    box_style=ROUNDED,
) -> Table:
    """Create a two-column key-value table.

    Args:
        title: Table title with emoji/styling
        data: Dictionary of key-value pairs to display
        title_style: Style for the table title
        key_style: Style for the key column
        value_style: Style for the value column
        box_style: Border style for the table

    Returns:
        Formatted Rich table ready for printing
    """
    table = Table(
        title=f"[{title_style}]{title}[/{title_style}]",
        box=box_style,
        show_header=True,
        header_style="bold magenta",
        border_style="cyan",
        title_justify="left",
        expand=False,
    )

    table.add_column("Field", style=key_style, width=None, no_wrap=False)
    table.add_column("Value", style=value_style, width=None, no_wrap=False)

    for key, value in data.items():
        table.add_row(key, str(value))

    return table


def create_batch_result_table(result: BatchResult) -> Table:
    """Create a summary table for a completed conversion batch.

    Args:
        result: Outcome of the batch

    Returns:
        Styled summary table with output locations and counts
    """
    summary_data = {
        "📁 Output": str(result.output_location),
        "📄 Result File": str(result.result_file),
        "🖼️ Images": str(result.images_location),
        "📅 Started At": result.timestamp.strftime("%Y-%m-%d %H:%M:%S"),
        "📚 Documents": f"{result.document_count:,}",
        "✅ Downloaded Images": f"{result.successful_image_count:,}",
    }

    return create_key_value_table(
        title="🏨 Conversion Complete",
        data=summary_data,
        title_style="bold green",
        key_style="cyan",
        value_style="white",
    )


def create_error_table(error: ErrorResponse) -> Table:
    """Create a table describing a failed batch."""
    error_data = {
        "🚨 Status": f"{error.status} {error.error}",
        "💬 Message": error.message,
        "📅 At": error.timestamp.strftime("%Y-%m-%d %H:%M:%S"),
    }

    return create_key_value_table(
        title="❌ Conversion Failed",
        data=error_data,
        title_style="bold red",
        key_style="red",
        value_style="white",
        box_style=SIMPLE,
    )


def create_logging_status_table(status: dict[str, Any]) -> Table:
    """Create a logging configuration status table.

    Args:
        status: Logging status dictionary

    Returns:
        Styled logging configuration table
    """
    logging_data = {
        "🔧 Mode": status["mode"].title(),
        "📁 Log Directory": status["log_directory"] or "N/A (production mode)",
        "🔇 Suppressed Libraries": ", ".join(status["third_party_suppressed"]),
    }

    if status["log_files"]["main"]:
        logging_data["📝 Main Log"] = status["log_files"]["main"]
    if status["log_files"]["json"]:
        logging_data["📊 JSON Log"] = status["log_files"]["json"]
    if status["log_files"]["errors"]:
        logging_data["🚨 Error Log"] = status["log_files"]["errors"]

    return create_key_value_table(
        title="🔍 Logging Configuration",
        data=logging_data,
        title_style="bold green",
        key_style="blue",
        value_style="white",
    )


def print_rich_table(console: Console, table: Table) -> None:
    """Print a rich table with consistent spacing.

    Args:
        console: Rich console instance
        table: Configured table to print
    """
    console.print()
    console.print(table)
    console.print()
