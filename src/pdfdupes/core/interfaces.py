"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/interfaces.py

Core interfaces (Protocols) used throughout the duplicate finder.
Structural typing keeps the scanner, hasher, grouper and pipeline swappable
in tests without inheritance.

Key Components:
---------------
- HashAlgorithm: Incremental digest factory (xxHash64, MD5, ...).
- Hasher: Computes the partial fingerprint and the full-content digest of a file.
- FileScanner: Walks a root directory and yields matching file entries.
- FileGrouper: Groups entries by size, partial digest or full digest.
- Deduplicator: Runs the whole pipeline.
"""

from typing import Protocol, List, Dict, DefaultDict, Iterable, Iterator, Tuple, Optional, Callable
from pdfdupes.core.models import (
    FileEntry,
    FileInfo,
    CandidateGroup,
    DuplicateGroup,
    DeduplicationStats,
)


class Digest(Protocol):
    """Running digest object as returned by hashlib / xxhash constructors."""
    def update(self, data: bytes) -> None: ...
    def hexdigest(self) -> str: ...


class HashAlgorithm(Protocol):
    """
    Interface for hash algorithms.

    Allows plugging in different hashing functions like MD5 or xxHash
    without affecting the rest of the pipeline.
    """
    name: str

    def new(self) -> Digest:
        """Returns a fresh incremental digest object."""
        ...

    def hash(self, data: bytes) -> str:
        """Computes the hex digest of the provided byte data."""
        ...


class Hasher(Protocol):
    """Interface for hashing the partial window and the full content of a file."""
    def compute_partial_hash(self, file: FileEntry) -> str: ...
    def compute_full_hash(self, file: FileEntry) -> str: ...


class FileScanner(Protocol):
    """Interface for walking a root directory and collecting PDF entries."""
    def iter_entries(
        self,
        stopped_flag: Optional[Callable[[], bool]] = None,
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> Iterator[FileEntry]:
        ...

    def scan(self) -> List[str]:
        ...

    def scan_with_info(self) -> List[FileInfo]:
        ...


class FileGrouper(Protocol):
    """Interface for grouping entries by size or digest."""
    def group_by_size(self, files: Iterable[FileEntry]) -> Dict[int, List[FileEntry]]:
        ...

    def group_by_partial_hash(self, files: List[FileEntry]) -> Dict[str, List[FileEntry]]:
        ...

    def group_by_full_hash(
        self,
        groups: Iterable[CandidateGroup],
        into: Optional[DefaultDict[str, List[FileEntry]]] = None
    ) -> Dict[str, List[FileEntry]]:
        ...


class Deduplicator(Protocol):
    """
    Interface for the main deduplication engine.
    Coordinates size → partial hash → full hash → assembly.
    """
    def find_duplicates(
        self,
        files: Iterable[FileEntry],
        stopped_flag: Optional[Callable[[], bool]] = None,
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> Tuple[List[DuplicateGroup], DeduplicationStats]:
        ...
