"""
Search tools for dirgrep.

This module contains the components of a search run: reading lines from a
file, matching a literal pattern, selecting candidate files and scheduling
per-file searches under a concurrency cap.
"""
