"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/scanner.py
Implements the tree walker and extension filter.
Features:
- Uses os.walk with in-place pruning so excluded directories are never entered
- Never follows symbolic links (no cycles, no escaping the root)
- Skips unreadable entries and paths that are not valid UTF-8 instead of aborting the walk
- Yields FileEntry objects lazily
"""

import os
import stat
import time
import logging
from typing import List, Iterator, Iterable, Optional, Callable, FrozenSet

from pdfdupes.core.config import ScanConfig
from pdfdupes.core.models import FileEntry, FileInfo, Stage
from pdfdupes.core.interfaces import FileScanner
from pdfdupes.exceptions import ScanRootError

logger = logging.getLogger(__name__)


class FileScannerImpl(FileScanner):
    """
    Walks a root directory recursively and yields regular files with the target extension.

    Attributes:
        root_dir: Root directory to scan
        extension: Target extension without the dot, compared case-insensitively
        excluded_dir_names: Directory names never descended into
    """

    PROGRESS_INTERVAL = 5000  # Report progress every N accepted files

    def __init__(
        self,
        root_dir: str,
        extension: str = ScanConfig.EXTENSION,
        excluded_dir_names: Iterable[str] = ScanConfig.EXCLUDED_DIR_NAMES
    ):
        self.root_dir = os.fspath(root_dir)
        self.extension = extension.lower().lstrip(".")
        self.excluded_dir_names: FrozenSet[str] = frozenset(excluded_dir_names)

    def iter_entries(
        self,
        stopped_flag: Optional[Callable[[], bool]] = None,
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> Iterator[FileEntry]:
        """
        Validates the root directory immediately, then returns a lazy iterator of entries.

        Raises:
            ScanRootError: if the root does not exist, is not a directory, or cannot be opened.
        """
        self._validate_root()
        return self._walk(stopped_flag, progress_callback)

    def scan(
        self,
        stopped_flag: Optional[Callable[[], bool]] = None,
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> List[str]:
        """Returns the paths of all matching files under the root."""
        start_time = time.time()
        paths = [entry.path for entry in self.iter_entries(stopped_flag, progress_callback)]
        if stopped_flag and stopped_flag():
            logger.debug("Scan interrupted by user")
            return []
        logger.debug(f"Found {len(paths)} PDF files in {time.time() - start_time:.2f}s")
        return paths

    def scan_with_info(
        self,
        stopped_flag: Optional[Callable[[], bool]] = None,
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> List[FileInfo]:
        """Returns path, size and modification time of all matching files under the root."""
        start_time = time.time()
        infos = [FileInfo.from_entry(entry) for entry in self.iter_entries(stopped_flag, progress_callback)]
        if stopped_flag and stopped_flag():
            logger.debug("Scan interrupted by user")
            return []
        logger.debug(f"Found {len(infos)} PDF files with info in {time.time() - start_time:.2f}s")
        return infos

    def _validate_root(self) -> None:
        if not os.path.exists(self.root_dir):
            error_msg = f"Directory does not exist: {self.root_dir}"
            logger.error(error_msg)
            raise ScanRootError(error_msg)
        if not os.path.isdir(self.root_dir):
            error_msg = f"Not a directory: {self.root_dir}"
            logger.error(error_msg)
            raise ScanRootError(error_msg)
        try:
            with os.scandir(self.root_dir):
                pass
        except OSError as e:
            error_msg = f"Cannot open directory {self.root_dir}: {e}"
            logger.error(error_msg)
            raise ScanRootError(error_msg) from e

    def _walk(
        self,
        stopped_flag: Optional[Callable[[], bool]],
        progress_callback: Optional[Callable[[str, int, object], None]]
    ) -> Iterator[FileEntry]:
        logger.debug(f"Scanning directory: {self.root_dir}")
        found = 0

        for root, dirs, files in os.walk(self.root_dir, onerror=self._on_walk_error, followlinks=False):
            if stopped_flag and stopped_flag():
                logger.debug("Scan interrupted by user")
                return

            # Prune BEFORE os.walk descends
            dirs[:] = [d for d in dirs if not self._is_excluded_dir(d)]

            for filename in files:
                if not self.matches(filename):
                    continue
                path = os.path.join(root, filename)
                if not self._is_utf8(path):
                    logger.debug(f"Skipping path that is not valid UTF-8: {path!r}")
                    continue
                entry = self._process_file(path)
                if entry is None:
                    continue
                found += 1
                if progress_callback and found % self.PROGRESS_INTERVAL == 0:
                    progress_callback(Stage.SCAN.value, found, None)
                yield entry

        if progress_callback:
            progress_callback(Stage.SCAN.value, found, None)

    def matches(self, filename: str) -> bool:
        """True if a file name is visible and carries the target extension."""
        if filename.startswith(ScanConfig.HIDDEN_PREFIX):
            return False
        _, dot, ext = filename.rpartition(".")
        return bool(dot) and ext.lower() == self.extension

    def _is_excluded_dir(self, name: str) -> bool:
        if name.startswith(ScanConfig.HIDDEN_PREFIX):
            logger.debug(f"Skipping hidden directory: {name}")
            return True
        if name in self.excluded_dir_names:
            logger.debug(f"Skipping excluded directory: {name}")
            return True
        return False

    @staticmethod
    def _is_utf8(path: str) -> bool:
        """False for names os.walk had to surrogate-escape."""
        try:
            path.encode("utf-8")
        except UnicodeEncodeError:
            return False
        return True

    @staticmethod
    def _on_walk_error(error: OSError) -> None:
        logger.debug(f"Skipping unreadable directory {error.filename}: {error}")

    @staticmethod
    def _process_file(path: str) -> Optional[FileEntry]:
        """
        Stat a candidate without following links.
        Returns None for symlinks, non-regular files and entries that vanish or cannot be read.
        """
        try:
            st = os.lstat(path)
        except OSError as e:
            logger.debug(f"Could not stat {path}: {e}")
            return None

        if stat.S_ISLNK(st.st_mode):
            logger.debug(f"Skipping symbolic link: {path}")
            return None
        if not stat.S_ISREG(st.st_mode):
            return None

        return FileEntry(path=path, size=st.st_size, modified_ms=FileScannerImpl._mtime_ms(st))

    @staticmethod
    def _mtime_ms(st: os.stat_result) -> int:
        try:
            return max(0, st.st_mtime_ns // 1_000_000)
        except (AttributeError, OverflowError):
            return 0
