"""
Report rendering for dirgrep.

Prints search reports to a rich console. Matches are styled when the console
supports colour and printed as plain text otherwise.
"""

import json
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.text import Text

from .models.config import OutputFormat
from .models.search_results import FileSearchResult, SearchReport


def create_console(stderr: bool = False) -> Console:
    """Create a console that never wraps lines, highlights numbers, or replaces emoji codes."""
    return Console(stderr=stderr, highlight=False, emoji=False, soft_wrap=True)


def render_plain(report: SearchReport) -> str:
    """
    Render a report as plain text without styling.

    Each file is printed as its name followed by one ``<line>: <text>`` line per
    match and a blank separator line.

    Args:
        report: Report to render

    Returns:
        Plain text report
    """
    blocks = []
    for file_result in report.results:
        lines = [file_result.file_name]
        lines.extend(result.plain_text() for result in file_result.search_results)
        blocks.append("\n".join(lines) + "\n")
    return "\n".join(blocks)


class ReportPrinter:
    """Prints search reports and timing lines to a console."""

    def __init__(self, console: Optional[Console] = None,
                 output_format: OutputFormat = OutputFormat.TEXT):
        self.console = console or create_console()
        self.output_format = output_format

    def print_report(self, report: SearchReport) -> None:
        """Print a report in the configured format."""
        if self.output_format == OutputFormat.JSON:
            self.console.out(json.dumps(report.to_dict(), indent=2), highlight=False)
            return

        for file_result in report.results:
            self.print_file_result(file_result)

    def print_file_result(self, file_result: FileSearchResult) -> None:
        self.console.print(escape(file_result.file_name))
        for result in file_result.search_results:
            self.console.print(result.to_rich_text())
        self.console.print()

    def print_timings(self, concurrent_report: SearchReport, sequential_report: SearchReport) -> None:
        """Print the elapsed time of both search paths in nanoseconds."""
        self.console.print(Text(f"Time elapsed for multi-threaded search: {concurrent_report.elapsed_ns} ns"))
        self.console.print(Text(f"Time elapsed for single-threaded search: {sequential_report.elapsed_ns} ns"))
