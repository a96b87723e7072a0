"""
Data models for dirgrep.

This module contains the core data structures used throughout the system.
"""

from .search_query import SearchQuery, WILDCARD_FILTER
from .search_results import SearchResult, FileSearchResult, SearchReport, SearchMode
from .config import DirgrepConfig, OutputFormat

__all__ = [
    'SearchQuery',
    'WILDCARD_FILTER',
    'SearchResult',
    'FileSearchResult',
    'SearchReport',
    'SearchMode',
    'DirgrepConfig',
    'OutputFormat',
]
