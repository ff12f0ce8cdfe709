"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/grouper.py
Implements grouping of FileEntry objects by size, partial digest and full digest.
All groupings share one insert-or-append helper built on defaultdict(list),
so members keep their discovery order.
"""

import logging
from typing import List, Dict, DefaultDict, Any, Callable, Iterable, Optional
from collections import defaultdict

from pdfdupes.core.interfaces import FileGrouper, Hasher
from pdfdupes.core.models import FileEntry, CandidateGroup
from pdfdupes.core.hasher import HasherImpl

logger = logging.getLogger(__name__)


class FileGrouperImpl(FileGrouper):
    """
    A concrete implementation of FileGrouper.
    Uses an injected Hasher instance for flexibility and testability.

    `skipped_files` counts files dropped because they could not be read.
    """

    def __init__(self, hasher: Hasher = None):
        self.hasher = hasher or HasherImpl()
        self.skipped_files = 0

    def group_by_size(self, files: Iterable[FileEntry]) -> Dict[int, List[FileEntry]]:
        """Groups files by exact byte length. Singletons are dropped."""
        return self._keep_duplicates(self._group_by(files, lambda f: f.size))

    def group_by_partial_hash(self, files: List[FileEntry]) -> Dict[str, List[FileEntry]]:
        """Groups files of one size bucket by partial fingerprint. Singletons are dropped."""
        return self._keep_duplicates(self._group_by(files, self.hasher.compute_partial_hash))

    def group_by_full_hash(
            self,
            groups: Iterable[CandidateGroup],
            into: Optional[DefaultDict[str, List[FileEntry]]] = None
    ) -> Dict[str, List[FileEntry]]:
        """
        Groups the files of all candidate groups into ONE mapping by full-content digest.
        Pass a defaultdict(list) as `into` to keep accumulating into it.
        Singletons are kept; dropping them is the assembler's job.
        """
        mapping = into if into is not None else defaultdict(list)
        for group in groups:
            self._group_by(group.files, self.hasher.compute_full_hash, mapping)
        return mapping

    def _group_by(
            self,
            files: Iterable[FileEntry],
            key_func: Callable[[FileEntry], Any],
            groups: Optional[DefaultDict[Any, List[FileEntry]]] = None
    ) -> Dict[Any, List[FileEntry]]:
        """
        Helper method to group files by any computed key.
        Args:
            files: Files to group
            key_func: Function that computes a hashable key from a FileEntry
            groups: Existing defaultdict(list) to accumulate into (a new one if omitted)
        Returns:
            Dict[key, List[FileEntry]]
        """
        if groups is None:
            groups = defaultdict(list)
        skipped_files = 0
        for file in files:
            try:
                key = key_func(file)
            except OSError as e:
                logger.debug(f"Skipping unreadable file {file.path}: {e}")
                skipped_files += 1
                continue
            groups[key].append(file)

        if skipped_files > 0:
            logger.warning(f"Skipped {skipped_files} files due to read errors")
            self.skipped_files += skipped_files

        return groups

    @staticmethod
    def _keep_duplicates(groups: Dict[Any, List[FileEntry]]) -> Dict[Any, List[FileEntry]]:
        return {key: group for key, group in groups.items() if len(group) >= 2}
