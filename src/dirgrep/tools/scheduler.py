"""
Concurrency scheduler for dirgrep.

Runs the single-file matcher over every candidate with at most ``max_workers``
searches in flight. A new search starts as soon as any running one finishes.
Outcomes are collected in completion order and, optionally, restored to the
order of the candidate list afterwards.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union

from ..errors import ConfigurationError
from ..models.search_results import FileSearchResult
from .matcher import search_file


logger = logging.getLogger(__name__)

SearchFunction = Callable[[Union[str, Path], str], Optional[FileSearchResult]]


class ConcurrentScheduler:
    """
    Bounded fan-out of per-file searches over a thread pool.

    Each task receives its own path and pattern arguments; tasks share no
    mutable state apart from the statistics counters, which are guarded by
    a lock.
    """

    def __init__(self, max_workers: int, search_fn: Optional[SearchFunction] = None,
                 preserve_order: bool = True):
        """
        Initialize the scheduler.

        Args:
            max_workers: Concurrency cap, must be greater than zero
            search_fn: Callable searching one file, defaults to ``search_file``
            preserve_order: Return outcomes in candidate order instead of completion order

        Raises:
            ConfigurationError: If max_workers is not positive
        """
        if max_workers <= 0:
            raise ConfigurationError(f"Number of threads must be greater than 0, got {max_workers}")

        self.max_workers = max_workers
        self.search_fn = search_fn or search_file
        self.preserve_order = preserve_order
        self._lock = threading.Lock()
        self._in_flight = 0
        self._stats = {
            'dispatched': 0,
            'completed': 0,
            'matched': 0,
            'peak_in_flight': 0,
        }

    def run(self, candidates: Sequence[Union[str, Path]], pattern: str) -> List[Optional[FileSearchResult]]:
        """
        Search every candidate and wait for all searches to finish.

        Args:
            candidates: Files to search
            pattern: Literal pattern shared read-only by every task

        Returns:
            One outcome per candidate; None for files without matches
        """
        if not candidates:
            return []

        completed: List[Tuple[int, Optional[FileSearchResult]]] = []

        with ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="dirgrep") as executor:
            futures = {}
            for index, path in enumerate(candidates):
                future = executor.submit(self._run_task, path, pattern)
                futures[future] = index
                self._increment('dispatched')

            logger.debug(f"Dispatched {len(futures)} searches with {self.max_workers} workers")

            for future in as_completed(futures):
                completed.append((futures[future], future.result()))

        if self.preserve_order:
            completed.sort(key=lambda item: item[0])

        return [outcome for _, outcome in completed]

    def _run_task(self, path: Union[str, Path], pattern: str) -> Optional[FileSearchResult]:
        with self._lock:
            self._in_flight += 1
            if self._in_flight > self._stats['peak_in_flight']:
                self._stats['peak_in_flight'] = self._in_flight

        try:
            outcome = self.search_fn(path, pattern)
        finally:
            with self._lock:
                self._in_flight -= 1
                self._stats['completed'] += 1

        if outcome is not None:
            self._increment('matched')
        logger.debug(f"Finished {path}")
        return outcome

    def _increment(self, key: str) -> None:
        with self._lock:
            self._stats[key] += 1

    def get_stats(self) -> Dict[str, int]:
        """
        Get statistics about the last runs.

        Returns:
            Dictionary containing scheduling statistics
        """
        with self._lock:
            return self._stats.copy()

    def reset_stats(self) -> None:
        """Reset the statistics counters."""
        with self._lock:
            self._stats = {
                'dispatched': 0,
                'completed': 0,
                'matched': 0,
                'peak_in_flight': 0,
            }
