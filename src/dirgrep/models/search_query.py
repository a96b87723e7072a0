"""
Search query data model for dirgrep.

This module defines the validated parameters of a single search run:
the literal pattern, the directory to scan, the file name filter and the
concurrency cap.
"""

from typing import Dict, Any
from pydantic import BaseModel, Field, field_validator


WILDCARD_FILTER = "*"


class SearchQuery(BaseModel):
    """
    Represents a search query with all parameters and constraints.

    Attributes:
        pattern: Literal text to look for; matched without regex or case folding
        directory: Directory whose immediate files are searched
        file_filter: Substring a file path must contain, or "*" for every file
        threads: Maximum number of files searched at the same time
    """

    pattern: str = Field(..., description="Literal search pattern")
    directory: str = Field(".", min_length=1, description="Directory to search")
    file_filter: str = Field(WILDCARD_FILTER, min_length=1, description="File path substring filter")
    threads: int = Field(4, gt=0, description="Maximum concurrent file searches")

    @field_validator('pattern')
    @classmethod
    def validate_pattern(cls, v: str) -> str:
        """Reject empty patterns; whitespace is a valid literal and is kept as-is."""
        if v == "":
            raise ValueError("Search pattern cannot be empty")
        return v

    @field_validator('directory')
    @classmethod
    def validate_directory(cls, v: str) -> str:
        """Validate the directory path."""
        if not v.strip():
            raise ValueError("Directory cannot be empty")
        return v

    def is_wildcard(self) -> bool:
        """Check if the file filter accepts every file."""
        return self.file_filter == WILDCARD_FILTER

    def to_dict(self) -> Dict[str, Any]:
        """Convert the search query to a dictionary representation."""
        return self.model_dump()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SearchQuery':
        """Create a SearchQuery instance from a dictionary."""
        return cls.model_validate(data)

    def __str__(self) -> str:
        parts = [f"Pattern: '{self.pattern}'"]
        parts.append(f"Directory: {self.directory}")
        if not self.is_wildcard():
            parts.append(f"Filter: '{self.file_filter}'")
        parts.append(f"Threads: {self.threads}")
        return " | ".join(parts)
