"""Batch processing module: walking a directory tree for conversion candidates."""

from .scanner import DirectoryScanner, directory_scanner, scan, walk_files

__all__ = [
    "DirectoryScanner",
    "directory_scanner",
    "scan",
    "walk_files",
]
