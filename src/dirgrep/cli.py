"""
Command-line interface for dirgrep.

Searches the files of one directory for a literal pattern, prints every
matching line, then compares the concurrent run against a sequential run.
"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.text import Text

from . import __version__
from .config.parser import build_search_query, create_config_template, load_config
from .engine import GrepEngine
from .errors import DirgrepError
from .models.config import DirgrepConfig, OutputFormat, check_thread_count
from .reporter import ReportPrinter, create_console


logger = logging.getLogger(__name__)

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

app = typer.Typer(add_completion=False, help="Search the files of a directory for a literal pattern.")


def _fail(message: str) -> None:
    create_console(stderr=True).print(Text(f"Error: {message}"))
    raise typer.Exit(code=1)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"dirgrep {__version__}")
        raise typer.Exit()


def _init_config_callback(value: Optional[Path]) -> None:
    if value is None:
        return
    try:
        create_config_template(value)
    except DirgrepError as e:
        _fail(str(e))
    typer.echo(f"Configuration template written to {value}")
    raise typer.Exit()


def _configure_logging(config: DirgrepConfig, verbose: bool) -> None:
    level = logging.DEBUG if verbose else config.logging.get_level_number()
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("dirgrep").setLevel(level)


@app.command()
def main(
    pattern: Annotated[str, typer.Argument(help="The pattern to search against")],
    directory: Annotated[Optional[str], typer.Option(
        "--directory", "-d",
        help="The directory to search, e.g. '.' for the current directory")] = None,
    file: Annotated[Optional[str], typer.Option(
        "--file", "-f",
        help="Only search files whose path contains this text; '*' searches every file")] = None,
    threads: Annotated[Optional[int], typer.Option(
        "--threads", "-t",
        help="The number of files to search at the same time")] = None,
    config_path: Annotated[Optional[Path], typer.Option(
        "--config", "-c",
        help="Path to a YAML configuration file")] = None,
    sequential: Annotated[bool, typer.Option(
        "--sequential",
        help="Search files one at a time and skip the timing comparison")] = False,
    timings: Annotated[Optional[bool], typer.Option(
        "--timings/--no-timings",
        help="Print concurrent and sequential timings after the report")] = None,
    output_format: Annotated[Optional[OutputFormat], typer.Option(
        "--format",
        case_sensitive=False,
        help="Report format")] = None,
    init_config: Annotated[Optional[Path], typer.Option(
        "--init-config",
        callback=_init_config_callback,
        is_eager=True,
        help="Write a configuration template to this path and exit")] = None,
    verbose: Annotated[bool, typer.Option(
        "--verbose",
        help="Enable debug logging")] = False,
    version: Annotated[Optional[bool], typer.Option(
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit")] = None,
) -> None:
    """Search the files of a directory for a literal pattern."""
    try:
        parse_result = load_config(config_path)
        config = parse_result.config
        _configure_logging(config, verbose)
        for warning in parse_result.warnings:
            logger.warning(warning)

        query = build_search_query(pattern, config, directory=directory, file_filter=file, threads=threads)
        if threads is not None:
            thread_warning = check_thread_count(query.threads)
            if thread_warning:
                logger.warning(thread_warning)

        output_updates = {}
        if output_format is not None:
            output_updates['format'] = output_format
        if timings is not None:
            output_updates['show_timings'] = timings
        if output_updates:
            config = config.model_copy(update={'output': config.output.model_copy(update=output_updates)})

        engine = GrepEngine(query, config)
        printer = ReportPrinter(create_console(), config.output.format)

        if sequential:
            printer.print_report(engine.run_sequential())
            return

        concurrent_report = engine.run_concurrent()
        printer.print_report(concurrent_report)

        if config.output.show_timings and config.output.format == OutputFormat.TEXT:
            sequential_report = engine.run_sequential()
            printer.print_timings(concurrent_report, sequential_report)

    except DirgrepError as e:
        _fail(str(e))
