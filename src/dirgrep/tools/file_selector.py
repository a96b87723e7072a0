"""
File selector for dirgrep.

This module lists the immediate entries of a directory and picks the regular
files whose path contains a filter substring. There is no recursion into
subdirectories. Failure to list the directory is fatal for the whole run.
"""

import os
import logging
from pathlib import Path
from typing import Dict, List, Union

from ..errors import DirectoryAccessError
from ..models.search_query import WILDCARD_FILTER


logger = logging.getLogger(__name__)


class FileSelector:
    """
    Selects candidate files from a single directory level.

    Candidates are returned sorted by path so that every search path
    presents files in the same order.
    """

    def __init__(self, skip_unreadable_entries: bool = False):
        """
        Initialize the file selector.

        Args:
            skip_unreadable_entries: Log and skip entries that cannot be inspected
                instead of raising DirectoryAccessError
        """
        self.skip_unreadable_entries = skip_unreadable_entries
        self._stats = {
            'entries_listed': 0,
            'files_selected': 0,
            'entries_skipped': 0,
        }

    def select(self, directory: Union[str, Path], file_filter: str = WILDCARD_FILTER) -> List[str]:
        """
        List candidate files of a directory.

        Args:
            directory: Directory to list
            file_filter: Substring the file path must contain, or "*" for all files

        Returns:
            Sorted list of candidate paths, as produced by the directory listing

        Raises:
            DirectoryAccessError: If the directory or one of its entries cannot be read
        """
        logger.info(f"Listing directory: {directory}")
        candidates = []

        try:
            with os.scandir(directory) as entries:
                for entry in entries:
                    self._stats['entries_listed'] += 1
                    if not self._is_regular_file(entry, directory):
                        continue

                    if not matches_filter(entry.path, file_filter):
                        logger.debug(f"Filtered out: {entry.path}")
                        continue

                    candidates.append(entry.path)
                    self._stats['files_selected'] += 1
        except OSError as e:
            raise DirectoryAccessError(directory, e.strerror or str(e)) from e

        candidates.sort()
        logger.info(f"Selected {len(candidates)} candidate files in {directory}")
        return candidates

    def _is_regular_file(self, entry: os.DirEntry, directory: Union[str, Path]) -> bool:
        """
        Check whether a directory entry is a regular file, following symlinks.

        Raises:
            DirectoryAccessError: If the entry cannot be inspected and skipping is disabled
        """
        try:
            return entry.is_file()
        except OSError as e:
            if not self.skip_unreadable_entries:
                raise DirectoryAccessError(directory, f"cannot inspect entry {entry.name}: {e}") from e
            logger.warning(f"Skipping unreadable entry {entry.path}: {e}")
            self._stats['entries_skipped'] += 1
            return False

    def get_stats(self) -> Dict[str, int]:
        """
        Get statistics about the selection operation.

        Returns:
            Dictionary containing operation statistics
        """
        return self._stats.copy()

    def reset_stats(self) -> None:
        """Reset the statistics counters."""
        self._stats = {
            'entries_listed': 0,
            'files_selected': 0,
            'entries_skipped': 0,
        }


def matches_filter(file_path: Union[str, Path], file_filter: str) -> bool:
    """
    Check whether a file path passes the filter.

    Args:
        file_path: Candidate path
        file_filter: Literal substring, or "*" to accept everything

    Returns:
        True if the file should be searched
    """
    if file_filter == WILDCARD_FILTER:
        return True
    return file_filter in str(file_path)


def select_candidates(directory: Union[str, Path], file_filter: str = WILDCARD_FILTER,
                      skip_unreadable_entries: bool = False) -> List[str]:
    """
    Convenience function to select candidate files.

    Args:
        directory: Directory to list
        file_filter: Substring the file path must contain, or "*" for all files
        skip_unreadable_entries: Skip entries that cannot be inspected

    Returns:
        Sorted list of candidate file paths
    """
    selector = FileSelector(skip_unreadable_entries=skip_unreadable_entries)
    return selector.select(directory, file_filter)
