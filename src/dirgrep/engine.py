"""
Search engine for dirgrep.

Ties file selection, per-file matching and scheduling together. Two search
paths are provided over the same inputs: a concurrent one that fans files out
to a bounded worker pool, and a sequential one that searches them one by one.
"""

import logging
import time
from functools import partial
from typing import Iterable, List, Optional, Tuple

from .models.config import DirgrepConfig
from .models.search_query import SearchQuery
from .models.search_results import FileSearchResult, SearchMode, SearchReport
from .tools.file_selector import FileSelector
from .tools.matcher import search_file
from .tools.scheduler import ConcurrentScheduler


logger = logging.getLogger(__name__)


def aggregate(outcomes: Iterable[Optional[FileSearchResult]]) -> List[FileSearchResult]:
    """
    Drop files without matches, keeping the order of the remaining results.

    Args:
        outcomes: Per-file outcomes, None for files without matches

    Returns:
        List of file results
    """
    return [outcome for outcome in outcomes if outcome is not None]


class GrepEngine:
    """
    Runs a search query over a directory.

    The engine is stateless between runs apart from the statistics exposed by
    its selector and scheduler.
    """

    def __init__(self, query: SearchQuery, config: Optional[DirgrepConfig] = None):
        """
        Initialize the engine.

        Args:
            query: Validated search query
            config: Configuration supplying output and selection settings
        """
        self.query = query
        self.config = config or DirgrepConfig()
        self.selector = FileSelector(skip_unreadable_entries=self.config.search.skip_unreadable_entries)
        self._search_fn = partial(search_file, style=self.config.output.highlight_style)
        self.scheduler = ConcurrentScheduler(
            max_workers=query.threads,
            search_fn=self._search_fn,
            preserve_order=self.config.output.preserve_order,
        )

    def run_concurrent(self) -> SearchReport:
        """
        Search all candidates with at most ``query.threads`` files in flight.

        Raises:
            DirectoryAccessError: If the directory cannot be listed
        """
        logger.info(f"Starting concurrent search: {self.query}")
        start = time.perf_counter_ns()

        candidates = self.selector.select(self.query.directory, self.query.file_filter)
        results = aggregate(self.scheduler.run(candidates, self.query.pattern))

        elapsed = time.perf_counter_ns() - start
        return SearchReport(
            results=results,
            mode=SearchMode.CONCURRENT,
            elapsed_ns=elapsed,
            files_scanned=len(candidates),
        )

    def run_sequential(self) -> SearchReport:
        """
        Search all candidates one after another in candidate order.

        Raises:
            DirectoryAccessError: If the directory cannot be listed
        """
        logger.info(f"Starting sequential search: {self.query}")
        start = time.perf_counter_ns()

        candidates = self.selector.select(self.query.directory, self.query.file_filter)
        results = aggregate(self._search_fn(path, self.query.pattern) for path in candidates)

        elapsed = time.perf_counter_ns() - start
        return SearchReport(
            results=results,
            mode=SearchMode.SEQUENTIAL,
            elapsed_ns=elapsed,
            files_scanned=len(candidates),
        )

    def benchmark(self) -> Tuple[SearchReport, SearchReport]:
        """
        Run the concurrent search followed by the sequential one.

        Returns:
            Tuple of (concurrent report, sequential report)
        """
        concurrent_report = self.run_concurrent()
        sequential_report = self.run_sequential()
        logger.info(
            f"Concurrent: {concurrent_report.elapsed_ns} ns, sequential: {sequential_report.elapsed_ns} ns"
        )
        return concurrent_report, sequential_report


def grep_concurrent(query: SearchQuery, config: Optional[DirgrepConfig] = None) -> SearchReport:
    """Convenience function to run a concurrent search."""
    return GrepEngine(query, config).run_concurrent()


def grep_sequential(query: SearchQuery, config: Optional[DirgrepConfig] = None) -> SearchReport:
    """Convenience function to run a sequential search."""
    return GrepEngine(query, config).run_sequential()
