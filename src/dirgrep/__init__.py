"""
dirgrep - Core Package

A directory-scoped literal text search tool that scans the files of a single
directory concurrently and reports every matching line with the match highlighted.
"""

__version__ = "0.1.0"
__author__ = "dirgrep Team"
