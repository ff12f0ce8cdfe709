import os
import logging
from typing import List, Iterable, Tuple

from pdfdupes.core.models import DuplicateGroup, FileEntry, SortOrder
from pdfdupes.core.sorter import Sorter

logger = logging.getLogger(__name__)


class DuplicateService:
    @staticmethod
    def load_entries(group: DuplicateGroup) -> List[FileEntry]:
        """
        Re-stats every path of a group and returns entries sorted newest first.
        Paths that vanished since the scan are left out.
        """
        entries = []
        for path in group.paths:
            try:
                st = os.stat(path)
            except OSError as e:
                logger.debug(f"Could not stat {path}: {e}")
                continue
            entries.append(FileEntry(path=path, size=st.st_size, modified_ms=max(0, st.st_mtime_ns // 1_000_000)))
        return Sorter.sort_files(entries, SortOrder.NEWEST_FIRST)

    @staticmethod
    def select_all_except_newest(entries: List[FileEntry]) -> List[str]:
        """
        Paths to remove so that only the most recently modified file survives.

        Args:
            entries: group members, any order
        """
        ordered = Sorter.sort_files(entries, SortOrder.NEWEST_FIRST)
        return [f.path for f in ordered[1:]]

    @staticmethod
    def select_all_except_oldest(entries: List[FileEntry]) -> List[str]:
        """Paths to remove so that only the least recently modified file survives."""
        ordered = Sorter.sort_files(entries, SortOrder.OLDEST_FIRST)
        return [f.path for f in ordered[1:]]

    @staticmethod
    def select_for_deletion(
            groups: List[DuplicateGroup],
            keep: SortOrder = SortOrder.NEWEST_FIRST
    ) -> Tuple[List[str], List[List[FileEntry]]]:
        """
        Keeps one file per group and marks the rest for deletion.
        Returns:
            - List of file paths to be deleted
            - Per-group entries sorted with the preserved file first
        """
        select = (DuplicateService.select_all_except_oldest if keep == SortOrder.OLDEST_FIRST
                  else DuplicateService.select_all_except_newest)
        files_to_delete = []
        sorted_groups = []
        for group in groups:
            entries = DuplicateService.load_entries(group)
            if len(entries) < 2:
                continue
            sorted_groups.append(Sorter.sort_files(entries, keep))
            files_to_delete.extend(select(entries))
        return files_to_delete, sorted_groups

    @staticmethod
    def calculate_total_size(paths: Iterable[str]) -> int:
        """Total size in bytes; unreadable paths count as 0."""
        total = 0
        for path in paths:
            try:
                total += os.path.getsize(path)
            except OSError:
                logger.debug(f"Could not get size of {path}")
        return total

    @staticmethod
    def reclaimable_bytes(entry_groups: List[List[FileEntry]]) -> int:
        """Space freed by keeping one file per group."""
        return sum(f.size for entries in entry_groups for f in entries[1:])

    @staticmethod
    def remove_paths_from_groups(groups: List[DuplicateGroup], file_paths: Iterable[str]) -> List[DuplicateGroup]:
        """
        Removes the given paths from all duplicate groups.
        Groups that contain fewer than 2 files after removal are discarded.
        """
        removed = set(file_paths)
        updated_groups = []
        for group in groups:
            remaining = tuple(p for p in group.paths if p not in removed)
            if len(remaining) >= 2:
                updated_groups.append(DuplicateGroup(digest=group.digest, paths=remaining))
        return updated_groups
