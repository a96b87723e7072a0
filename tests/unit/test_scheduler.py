"""
Unit tests for the concurrency scheduler.

Tests the concurrency cap, rejection of invalid caps, completeness of the
collected outcomes and restoration of candidate order.
"""

import threading
import time
from pathlib import Path
import pytest

from dirgrep.errors import ConfigurationError
from dirgrep.models.search_results import FileSearchResult, SearchResult
from dirgrep.tools.scheduler import ConcurrentScheduler


def _file_result(path: Path) -> FileSearchResult:
    result = SearchResult(line_number=0, line="hit", match_start=0, match_end=3, match_text="[b]hit[/b]")
    return FileSearchResult(file_name=str(path), search_results=[result])


class InstrumentedSearch:
    """Search function stub that records how many calls overlap."""

    def __init__(self, delay: float = 0.02, matching=None, delays=None):
        self.delay = delay
        self.delays = delays or {}
        self.matching = matching
        self.lock = threading.Lock()
        self.active = 0
        self.max_active = 0
        self.calls = []

    def __call__(self, path: Path, pattern: str):
        with self.lock:
            self.active += 1
            self.max_active = max(self.max_active, self.active)
            self.calls.append((path, pattern))
        try:
            time.sleep(self.delays.get(path.name, self.delay))
        finally:
            with self.lock:
                self.active -= 1
        if self.matching is None or path.name in self.matching:
            return _file_result(path)
        return None


class TestConcurrentScheduler:
    """Test cases for the ConcurrentScheduler class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.candidates = [Path(f"/data/file{i:02d}.txt") for i in range(12)]

    @pytest.mark.parametrize("cap", [1, 2, 3, 5])
    def test_never_exceeds_cap(self, cap):
        """Test no more than the cap of searches run at the same time."""
        search = InstrumentedSearch()
        scheduler = ConcurrentScheduler(cap, search_fn=search)

        scheduler.run(self.candidates, "hit")

        assert search.max_active <= cap
        assert scheduler.get_stats()['peak_in_flight'] <= cap

    def test_uses_available_slots(self):
        """Test searches overlap when the cap allows it."""
        search = InstrumentedSearch(delay=0.05)
        scheduler = ConcurrentScheduler(4, search_fn=search)

        scheduler.run(self.candidates, "hit")

        assert search.max_active > 1

    def test_free_slot_is_reused_while_slow_file_runs(self):
        """Test a new search starts as soon as any slot frees, not per batch."""
        candidates = [Path("/data/slow.txt")] + [Path(f"/data/fast{i}.txt") for i in range(9)]
        search = InstrumentedSearch(delay=0.05, delays={"slow.txt": 0.6})
        scheduler = ConcurrentScheduler(2, search_fn=search, preserve_order=False)

        start = time.perf_counter()
        outcomes = scheduler.run(candidates, "hit")
        elapsed = time.perf_counter() - start

        # Fixed batches of two would take at least 0.6 + 4 * 0.05 seconds.
        assert elapsed < 0.75
        assert outcomes[-1].file_name == "/data/slow.txt"
        assert search.max_active == 2

    @pytest.mark.parametrize("cap", [0, -1])
    def test_rejects_non_positive_cap(self, cap):
        """Test an invalid cap fails before any search is dispatched."""
        search = InstrumentedSearch()
        with pytest.raises(ConfigurationError, match="greater than 0"):
            ConcurrentScheduler(cap, search_fn=search)
        assert search.calls == []

    def test_every_candidate_searched_once(self):
        """Test each candidate is searched exactly once with the same pattern."""
        search = InstrumentedSearch(delay=0)
        scheduler = ConcurrentScheduler(3, search_fn=search)

        outcomes = scheduler.run(self.candidates, "needle")

        assert len(outcomes) == len(self.candidates)
        assert sorted(path for path, _ in search.calls) == sorted(self.candidates)
        assert {pattern for _, pattern in search.calls} == {"needle"}

    def test_collects_none_outcomes(self):
        """Test files without matches are returned as None."""
        search = InstrumentedSearch(delay=0, matching={"file03.txt"})
        scheduler = ConcurrentScheduler(4, search_fn=search)

        outcomes = scheduler.run(self.candidates, "hit")

        assert len([o for o in outcomes if o is not None]) == 1
        assert outcomes.count(None) == len(self.candidates) - 1

    def test_preserves_candidate_order(self):
        """Test outcomes are restored to candidate order after collection."""
        delays = {path: 0.005 * (len(self.candidates) - i) for i, path in enumerate(self.candidates)}

        def search(path, pattern):
            time.sleep(delays[path])
            return _file_result(path)

        scheduler = ConcurrentScheduler(len(self.candidates), search_fn=search)
        outcomes = scheduler.run(self.candidates, "hit")

        assert [o.file_name for o in outcomes] == [str(p) for p in self.candidates]

    def test_completion_order_when_not_preserving(self):
        """Test all outcomes are returned when order is not restored."""
        search = InstrumentedSearch(delay=0.001)
        scheduler = ConcurrentScheduler(4, search_fn=search, preserve_order=False)

        outcomes = scheduler.run(self.candidates, "hit")

        assert sorted(o.file_name for o in outcomes) == sorted(str(p) for p in self.candidates)

    def test_empty_candidates(self):
        """Test no candidates yields no outcomes."""
        search = InstrumentedSearch()
        scheduler = ConcurrentScheduler(2, search_fn=search)
        assert scheduler.run([], "hit") == []
        assert search.calls == []

    def test_stats(self):
        """Test dispatch and completion counters."""
        search = InstrumentedSearch(delay=0, matching={"file00.txt", "file01.txt"})
        scheduler = ConcurrentScheduler(2, search_fn=search)

        scheduler.run(self.candidates, "hit")
        stats = scheduler.get_stats()

        assert stats['dispatched'] == 12
        assert stats['completed'] == 12
        assert stats['matched'] == 2
        assert 1 <= stats['peak_in_flight'] <= 2

        scheduler.reset_stats()
        assert scheduler.get_stats()['dispatched'] == 0

    def test_search_errors_propagate(self):
        """Test an unexpected exception in a search is not swallowed."""
        def search(path, pattern):
            raise RuntimeError("boom")

        scheduler = ConcurrentScheduler(2, search_fn=search)
        with pytest.raises(RuntimeError, match="boom"):
            scheduler.run(self.candidates[:3], "hit")

    def test_default_search_function(self, tmp_path):
        """Test the real matcher is used when no search function is given."""
        (tmp_path / "a.txt").write_text("hello world\n")
        (tmp_path / "b.txt").write_text("bye\n")
        scheduler = ConcurrentScheduler(2)

        outcomes = scheduler.run([tmp_path / "a.txt", tmp_path / "b.txt"], "hello")

        assert outcomes[0].file_name == str(tmp_path / "a.txt")
        assert outcomes[1] is None
