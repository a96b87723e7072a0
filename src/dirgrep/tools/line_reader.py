"""
Line reader for dirgrep.

Produces the text lines of a file lazily. A file that cannot be opened or
read yields no lines instead of raising, and a line that cannot be decoded
is skipped without affecting the rest of the file.
"""

import logging
from pathlib import Path
from typing import Iterator, Tuple, Union


logger = logging.getLogger(__name__)

DEFAULT_ENCODING = "utf-8"


def read_numbered_lines(file_path: Union[str, Path], encoding: str = DEFAULT_ENCODING) -> Iterator[Tuple[int, str]]:
    """
    Yield ``(line_number, text)`` pairs from a file.

    Line numbers are zero-based and physical: a skipped undecodable line still
    consumes its number. Trailing ``\\n`` and ``\\r\\n`` are removed.

    Args:
        file_path: File to read
        encoding: Text encoding used to decode each line

    Yields:
        Tuples of line number and decoded line text
    """
    try:
        handle = open(file_path, 'rb')
    except OSError as e:
        logger.debug(f"Cannot open {file_path}, treating as empty: {e}")
        return

    with handle:
        try:
            for line_number, raw_line in enumerate(handle):
                try:
                    text = raw_line.decode(encoding)
                except UnicodeDecodeError as e:
                    logger.debug(f"Skipping undecodable line {line_number} in {file_path}: {e}")
                    continue
                yield line_number, _strip_line_ending(text)
        except OSError as e:
            logger.debug(f"Error reading {file_path}, stopping early: {e}")


def read_lines(file_path: Union[str, Path], encoding: str = DEFAULT_ENCODING) -> Iterator[str]:
    """
    Yield the decoded text lines of a file.

    Args:
        file_path: File to read
        encoding: Text encoding used to decode each line

    Yields:
        Line text without line endings
    """
    for _, text in read_numbered_lines(file_path, encoding):
        yield text


def _strip_line_ending(text: str) -> str:
    if text.endswith("\n"):
        text = text[:-1]
        if text.endswith("\r"):
            text = text[:-1]
    return text
