"""
Core duplicate detection engine: scanner, hasher, grouper, and pipeline orchestrator.

This package contains the performance-critical foundation of pdfdupes:
- FileScannerImpl: recursive PDF traversal with hidden/system directory pruning
- HasherImpl: xxHash64 partial fingerprint and MD5 full-content digest
- FileGrouperImpl: size and digest grouping with unreadable-file skipping
- DeduplicatorImpl: pipeline (size → partial hash → full hash → assemble)
- Models: FileEntry, FileInfo, DuplicateGroup and configuration objects

All components are pure Python with no UI dependencies.
"""

from .config import ScanConfig
from .scanner import FileScannerImpl
from .grouper import FileGrouperImpl
from .hasher import HasherImpl, XXHashAlgorithmImpl, MD5AlgorithmImpl
from .deduplicator import DeduplicatorImpl
from .sorter import Sorter
from .models import (
    FileEntry, FileInfo, CandidateGroup, DuplicateGroup, DeduplicationParams,
    DeduplicationStats, SortOrder, Stage)

__all__ = [
    "ScanConfig",
    "FileScannerImpl",
    "FileGrouperImpl",
    "HasherImpl",
    "XXHashAlgorithmImpl",
    "MD5AlgorithmImpl",
    "DeduplicatorImpl",
    "Sorter",
    "FileEntry",
    "FileInfo",
    "CandidateGroup",
    "DuplicateGroup",
    "DeduplicationParams",
    "DeduplicationStats",
    "SortOrder",
    "Stage",
]
