"""
Search results data models for dirgrep.

This module defines the data structures produced by a search run: a single
matching line, the collection of matching lines for one file, and the
aggregated report for a whole directory.
"""

from typing import Dict, List, Any
from datetime import datetime
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, model_validator
from rich.text import Text


class SearchMode(Enum):
    """Enumeration of the search code paths."""
    CONCURRENT = "concurrent"
    SEQUENTIAL = "sequential"


class SearchResult(BaseModel):
    """
    A single line that contains the search pattern.

    Attributes:
        line_number: Zero-based line number within the file
        line: The line text without its line ending
        match_start: Character position where the first occurrence starts
        match_end: Character position where the first occurrence ends
        match_text: The line as rich console markup, with the match styled
        highlight_style: Rich style applied to the match when rendering
    """

    model_config = ConfigDict(frozen=True)

    line_number: int = Field(..., ge=0, description="Zero-based line number")
    line: str = Field(..., description="The line text without its line ending")
    match_start: int = Field(..., ge=0, description="Character position where match starts")
    match_end: int = Field(..., ge=0, description="Character position where match ends")
    match_text: str = Field(..., description="Line with the match marked up for display")
    highlight_style: str = Field("bold red", description="Rich style for the matched span")

    @model_validator(mode='after')
    def validate_match_span(self):
        """Validate that the match span lies within the line."""
        if self.match_end < self.match_start:
            raise ValueError("Invalid match position")
        if self.match_end > len(self.line):
            raise ValueError("Match end position exceeds line length")
        return self

    def get_matched_substring(self) -> str:
        """Get the text of the match itself."""
        return self.line[self.match_start:self.match_end]

    def plain_text(self) -> str:
        """Get the display line without any markup."""
        return f"{self.line_number}: {self.line}"

    def to_rich_text(self) -> Text:
        """Render the display line as a rich Text object."""
        prefix = f"{self.line_number}: "
        text = Text(prefix + self.line)
        text.stylize(self.highlight_style, len(prefix) + self.match_start, len(prefix) + self.match_end)
        return text

    def to_dict(self) -> Dict[str, Any]:
        """Convert search result to dictionary representation."""
        data = self.model_dump(exclude={"highlight_style"})
        data['match'] = self.get_matched_substring()
        return data

    def __str__(self) -> str:
        return f"{self.line_number}: {self.match_text}"


class FileSearchResult(BaseModel):
    """
    All matching lines found in one file.

    Only created when at least one line matched, so ``search_results`` is
    never empty. Results are kept in ascending line order.

    Attributes:
        file_name: Path of the searched file as text
        search_results: Matching lines in file order
    """

    model_config = ConfigDict(frozen=True)

    file_name: str = Field(..., min_length=1, description="Path of the searched file")
    search_results: List[SearchResult] = Field(..., min_length=1, description="Matching lines in file order")

    @model_validator(mode='after')
    def validate_line_order(self):
        """Ensure results are in strictly ascending line order."""
        numbers = [result.line_number for result in self.search_results]
        if any(later <= earlier for earlier, later in zip(numbers, numbers[1:])):
            raise ValueError("Search results must be in ascending line order")
        return self

    def get_match_count(self) -> int:
        """Get the number of matching lines in this file."""
        return len(self.search_results)

    def get_line_numbers(self) -> List[int]:
        """Get the line numbers of all matches."""
        return [result.line_number for result in self.search_results]

    def to_dict(self) -> Dict[str, Any]:
        """Convert file result to dictionary representation."""
        return {
            'file_name': self.file_name,
            'match_count': self.get_match_count(),
            'search_results': [result.to_dict() for result in self.search_results],
        }

    def __str__(self) -> str:
        lines = [self.file_name]
        lines.extend(str(result) for result in self.search_results)
        return "\n".join(lines) + "\n"


class SearchReport(BaseModel):
    """
    Aggregated results of one search run over a directory.

    Attributes:
        results: Files with at least one match
        mode: Which search path produced the report
        elapsed_ns: Wall-clock duration of the run in nanoseconds
        files_scanned: Number of candidate files searched
        timestamp: When the search was executed
    """

    results: List[FileSearchResult] = Field(default_factory=list, description="Files with matches")
    mode: SearchMode = Field(SearchMode.CONCURRENT, description="Search path that produced the report")
    elapsed_ns: int = Field(0, ge=0, description="Duration of the run in nanoseconds")
    files_scanned: int = Field(0, ge=0, description="Number of candidate files searched")
    timestamp: datetime = Field(default_factory=datetime.now, description="When the search was executed")

    def get_file_count(self) -> int:
        """Get the number of files that matched."""
        return len(self.results)

    def get_match_count(self) -> int:
        """Get the total number of matching lines across all files."""
        return sum(result.get_match_count() for result in self.results)

    def get_file_names(self) -> List[str]:
        """Get matched file names in report order."""
        return [result.file_name for result in self.results]

    def sort_by_file_name(self) -> None:
        """Sort results alphabetically by file name."""
        self.results.sort(key=lambda r: r.file_name)

    def to_dict(self) -> Dict[str, Any]:
        """Convert report to dictionary representation."""
        return {
            'mode': self.mode.value,
            'elapsed_ns': self.elapsed_ns,
            'files_scanned': self.files_scanned,
            'file_count': self.get_file_count(),
            'match_count': self.get_match_count(),
            'timestamp': self.timestamp.isoformat(),
            'results': [result.to_dict() for result in self.results],
        }

    def __str__(self) -> str:
        parts = [f"Found {self.get_match_count()} matches in {self.get_file_count()} files"]
        parts.append(f"Scanned {self.files_scanned} files")
        parts.append(f"Mode: {self.mode.value}")
        parts.append(f"Took {self.elapsed_ns} ns")
        return " | ".join(parts)
