"""
Unit tests for the line reader.

Tests lazy line iteration, line ending handling and the absorption of
open and decode failures.
"""

import os
import tempfile
import shutil
from pathlib import Path
import pytest

from dirgrep.tools.line_reader import read_lines, read_numbered_lines


class TestLineReader:
    """Test cases for read_lines and read_numbered_lines."""

    def setup_method(self):
        """Set up test fixtures."""
        self.temp_dir = tempfile.mkdtemp()
        self.test_root = Path(self.temp_dir)

    def teardown_method(self):
        """Clean up test fixtures."""
        if os.path.exists(self.temp_dir):
            shutil.rmtree(self.temp_dir)

    def _write(self, name: str, content: bytes) -> Path:
        path = self.test_root / name
        path.write_bytes(content)
        return path

    def test_reads_lines_in_order(self):
        """Test lines come back in file order without line endings."""
        path = self._write("a.txt", b"first\nsecond\nthird\n")
        assert list(read_lines(path)) == ["first", "second", "third"]

    def test_last_line_without_newline(self):
        """Test a final line without a trailing newline is returned."""
        path = self._write("a.txt", b"first\nsecond")
        assert list(read_lines(path)) == ["first", "second"]

    def test_crlf_line_endings_are_stripped(self):
        """Test Windows line endings are removed."""
        path = self._write("a.txt", b"one\r\ntwo\r\n")
        assert list(read_lines(path)) == ["one", "two"]

    def test_empty_lines_are_kept(self):
        """Test blank lines are yielded and counted."""
        path = self._write("a.txt", b"one\n\nthree\n")
        assert list(read_numbered_lines(path)) == [(0, "one"), (1, ""), (2, "three")]

    def test_empty_file(self):
        """Test an empty file yields nothing."""
        path = self._write("empty.txt", b"")
        assert list(read_lines(path)) == []

    def test_missing_file_yields_nothing(self):
        """Test a missing file behaves like an empty file."""
        assert list(read_lines(self.test_root / "missing.txt")) == []

    def test_directory_yields_nothing(self):
        """Test a directory path behaves like an empty file."""
        (self.test_root / "sub").mkdir()
        assert list(read_lines(self.test_root / "sub")) == []

    @pytest.mark.skipif(os.name != 'posix' or (hasattr(os, 'geteuid') and os.geteuid() == 0),
                        reason="permission bits are not enforced")
    def test_unreadable_file_yields_nothing(self):
        """Test a file without read permission behaves like an empty file."""
        path = self._write("secret.txt", b"hello\n")
        path.chmod(0o000)
        try:
            assert list(read_lines(path)) == []
        finally:
            path.chmod(0o644)

    def test_undecodable_line_is_skipped(self):
        """Test an invalid UTF-8 line is skipped and the rest of the file is read."""
        path = self._write("mixed.txt", b"good one\n\xff\xfe bad\ngood two\n")
        assert list(read_lines(path)) == ["good one", "good two"]

    def test_skipped_line_keeps_its_number(self):
        """Test line numbers stay physical when a line is skipped."""
        path = self._write("mixed.txt", b"good one\n\xff\xfe bad\ngood two\n")
        assert list(read_numbered_lines(path)) == [(0, "good one"), (2, "good two")]

    def test_utf8_content(self):
        """Test multi-byte characters are decoded."""
        path = self._write("utf8.txt", "café\n日本\n".encode("utf-8"))
        assert list(read_lines(path)) == ["café", "日本"]

    def test_is_lazy(self):
        """Test the reader returns an iterator that reads on demand."""
        path = self._write("a.txt", b"first\nsecond\n")
        lines = read_lines(path)
        assert next(lines) == "first"
        assert next(lines) == "second"
        with pytest.raises(StopIteration):
            next(lines)

    def test_accepts_string_path(self):
        """Test string paths are accepted."""
        path = self._write("a.txt", b"x\n")
        assert list(read_lines(str(path))) == ["x"]
