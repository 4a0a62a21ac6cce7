"""CLI output helpers."""

import os
from typing import List, Optional

import click


def get_terminal_width() -> int:
    """Get terminal width for formatting output."""
    try:
        return os.get_terminal_size().columns
    except OSError:
        return 80


def truncate(text: str, width: int) -> str:
    """Cut text to width, marking the cut with an ellipsis."""
    if len(text) <= width:
        return text
    if width <= 3:
        return text[:width]
    return text[: width - 3] + "..."


def print_table(headers: List[str], rows: List[List[str]], max_width: Optional[int] = None):
    """Print a formatted table to the console."""
    if not rows:
        return

    if max_width is None:
        max_width = get_terminal_width()

    col_widths = [len(header) for header in headers]
    for row in rows:
        for i, cell in enumerate(row):
            if i < len(col_widths):
                col_widths[i] = max(col_widths[i], len(str(cell)))

    # Shrink proportionally when the table does not fit
    total_width = sum(col_widths) + len(headers) * 3 - 1
    if total_width > max_width:
        reduction_factor = max_width / total_width
        col_widths = [max(int(w * reduction_factor), 4) for w in col_widths]

    header_row = " | ".join(
        header.ljust(col_widths[i]) for i, header in enumerate(headers)
    )
    click.echo(header_row)
    click.echo("-" * len(header_row))

    for row in rows:
        click.echo(
            " | ".join(
                truncate(str(cell), col_widths[i]).ljust(col_widths[i])
                for i, cell in enumerate(row)
            )
        )


def print_status_indicator(status: str, message: str, details: Optional[str] = None):
    """Print a colored status line with optional details."""
    status_colors = {
        "success": "green",
        "warning": "yellow",
        "error": "red",
        "info": "blue",
    }

    click.secho(message, fg=status_colors.get(status, "white"))
    if details:
        click.echo(f"   {details}")
