"""
Single-file matcher for dirgrep.

Scans the lines of one file for a literal pattern and builds the search
results for every line that contains it.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union
from rich.markup import escape

from .line_reader import read_numbered_lines, DEFAULT_ENCODING
from ..models.search_results import FileSearchResult, SearchResult


logger = logging.getLogger(__name__)

DEFAULT_HIGHLIGHT_STYLE = "bold red"


def _escape_segment(text: str, before_tag: bool) -> str:
    # Trailing backslashes are doubled only when a tag follows them.
    body = text.rstrip("\\")
    trailing = text[len(body):]
    if before_tag:
        trailing *= 2
    return escape(body) + trailing


def highlight_match(line: str, start: int, end: int, style: str = DEFAULT_HIGHLIGHT_STYLE) -> str:
    """
    Build rich console markup for a line with one span emphasized.

    Text outside the span is escaped so that brackets in file content are
    never interpreted as markup.

    Args:
        line: Line text
        start: Start of the highlighted span
        end: End of the highlighted span
        style: Rich style for the span

    Returns:
        Markup string
    """
    before = _escape_segment(line[:start], before_tag=True)
    match = _escape_segment(line[start:end], before_tag=True)
    after = _escape_segment(line[end:], before_tag=False)
    return f"{before}[{style}]{match}[/{style}]{after}"


def match_line(line: str, line_number: int, pattern: str,
               style: str = DEFAULT_HIGHLIGHT_STYLE) -> Optional[SearchResult]:
    """
    Match a single line against a literal pattern.

    Only the first occurrence in the line is reported.

    Args:
        line: Line text
        line_number: Zero-based line number
        pattern: Literal pattern
        style: Rich style for the match

    Returns:
        SearchResult if the line contains the pattern, otherwise None
    """
    index = line.find(pattern)
    if index < 0:
        return None

    end = index + len(pattern)
    return SearchResult(
        line_number=line_number,
        line=line,
        match_start=index,
        match_end=end,
        match_text=highlight_match(line, index, end, style),
        highlight_style=style,
    )


def search_file(file_path: Union[str, Path], pattern: str,
                style: str = DEFAULT_HIGHLIGHT_STYLE,
                encoding: str = DEFAULT_ENCODING) -> Optional[FileSearchResult]:
    """
    Search one file for a literal pattern.

    Files that cannot be read behave like files without matches.

    Args:
        file_path: File to search
        pattern: Literal pattern, must not be empty
        style: Rich style for the match
        encoding: Text encoding of the file

    Returns:
        FileSearchResult with every matching line, or None if nothing matched

    Raises:
        ValueError: If the pattern is empty
    """
    if not pattern:
        raise ValueError("Search pattern cannot be empty")

    matches: List[SearchResult] = []
    for line_number, line in read_numbered_lines(file_path, encoding):
        result = match_line(line, line_number, pattern, style)
        if result is not None:
            matches.append(result)

    if not matches:
        return None

    logger.debug(f"Found {len(matches)} matching lines in {file_path}")
    return FileSearchResult(file_name=str(file_path), search_results=matches)
