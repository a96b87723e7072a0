"""
Configuration data models for dirgrep.

This module defines the configuration structure loaded from YAML files:
search defaults, output preferences and logging settings, together with
validation of the raw configuration dictionary.
"""

from typing import Dict, List, Any, Optional
from enum import Enum
import logging
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from rich.errors import StyleSyntaxError
from rich.style import Style

from .search_query import WILDCARD_FILTER


HIGH_THREAD_COUNT = 64


def check_thread_count(threads: int) -> Optional[str]:
    """Return a warning if the thread count is high enough to exhaust open file handles."""
    if threads > HIGH_THREAD_COUNT:
        return f"Very high thread count ({threads}) may exhaust open file handles"
    return None


class OutputFormat(Enum):
    """Supported report formats."""
    TEXT = "text"
    JSON = "json"


class SearchConfig(BaseModel):
    """
    Default search parameters, overridable from the command line.

    Attributes:
        directory: Directory to search when none is given
        file_filter: File path substring filter, "*" for every file
        threads: Maximum number of files searched at the same time
        skip_unreadable_entries: Skip directory entries that cannot be inspected
            instead of aborting the run
    """

    model_config = ConfigDict(extra='forbid')

    directory: str = Field(".", min_length=1, description="Directory to search")
    file_filter: str = Field(WILDCARD_FILTER, min_length=1, description="File path substring filter")
    threads: int = Field(4, gt=0, description="Maximum concurrent file searches")
    skip_unreadable_entries: bool = Field(False, description="Skip unreadable directory entries")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return self.model_dump()


class OutputConfig(BaseModel):
    """
    Configuration for report rendering.

    Attributes:
        format: Report format written to standard output
        highlight_style: Rich style applied to the matched text
        preserve_order: Restore candidate order after a concurrent run
        show_timings: Print concurrent vs sequential timing lines
    """

    model_config = ConfigDict(extra='forbid')

    format: OutputFormat = Field(OutputFormat.TEXT, description="Report format")
    highlight_style: str = Field("bold red", description="Rich style for the matched text")
    preserve_order: bool = Field(True, description="Restore candidate order after a concurrent run")
    show_timings: bool = Field(True, description="Print timing comparison lines")

    @field_validator('format', mode='before')
    @classmethod
    def validate_format(cls, v) -> OutputFormat:
        """Ensure format is an OutputFormat enum."""
        if isinstance(v, str):
            try:
                return OutputFormat(v.lower())
            except ValueError:
                raise ValueError(f"Invalid output format: {v}")
        return v

    @field_validator('highlight_style')
    @classmethod
    def validate_highlight_style(cls, v: str) -> str:
        """Check the style parses as a rich style definition."""
        v = v.strip()
        if not v:
            raise ValueError("Highlight style cannot be empty")
        try:
            Style.parse(v)
        except StyleSyntaxError as e:
            raise ValueError(f"Invalid highlight style '{v}': {e}")
        return v

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        data = self.model_dump()
        data['format'] = self.format.value
        return data


class LoggingConfig(BaseModel):
    """Logging settings."""

    model_config = ConfigDict(extra='forbid')

    level: str = Field("WARNING", description="Root log level")

    @field_validator('level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Normalize and validate the log level name."""
        level = v.strip().upper()
        if level not in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
            raise ValueError(f"Invalid log level: {v}")
        return level

    def get_level_number(self) -> int:
        """Get the numeric logging level."""
        return logging.getLevelName(self.level)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return self.model_dump()


class DirgrepConfig(BaseModel):
    """
    Main configuration for dirgrep.

    Attributes:
        search: Default search parameters
        output: Report rendering preferences
        logging: Logging settings
    """

    model_config = ConfigDict(extra='forbid')

    search: SearchConfig = Field(default_factory=SearchConfig, description="Default search parameters")
    output: OutputConfig = Field(default_factory=OutputConfig, description="Report rendering preferences")
    logging: LoggingConfig = Field(default_factory=LoggingConfig, description="Logging settings")

    def validate_configuration(self) -> List[str]:
        """
        Check for settings that are valid but likely unintended.

        Returns:
            List of warning messages
        """
        warnings = []

        thread_warning = check_thread_count(self.search.threads)
        if thread_warning:
            warnings.append(thread_warning)

        if self.search.skip_unreadable_entries:
            warnings.append("Unreadable directory entries will be skipped; results may be incomplete")

        return warnings

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            'search': self.search.to_dict(),
            'output': self.output.to_dict(),
            'logging': self.logging.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DirgrepConfig':
        """Create a configuration from a dictionary."""
        return cls.model_validate(data)

    def __str__(self) -> str:
        parts = [f"Directory: {self.search.directory}"]
        parts.append(f"Filter: '{self.search.file_filter}'")
        parts.append(f"Threads: {self.search.threads}")
        parts.append(f"Format: {self.output.format.value}")
        return " | ".join(parts)


def validate_config_dict(config_data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Validate a configuration dictionary using Pydantic.

    Args:
        config_data: Dictionary containing configuration data

    Returns:
        Validated and normalized configuration dictionary

    Raises:
        ValueError: If configuration is invalid
    """
    for section in ('search', 'output', 'logging'):
        value = config_data.get(section)
        if value is not None and not isinstance(value, dict):
            raise ValueError(f"Section '{section}' must be a mapping, got {type(value).__name__}")

    # Empty sections in YAML load as None
    cleaned = {key: value for key, value in config_data.items() if value is not None}

    try:
        return DirgrepConfig.from_dict(cleaned).to_dict()
    except ValidationError as e:
        raise ValueError(str(e)) from e
