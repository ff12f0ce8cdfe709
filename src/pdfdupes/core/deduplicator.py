"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/deduplicator.py
Implements the pipeline-based duplicate finder:
    size → partial hash (head + tail) → full hash → assemble
"""
import time
import logging
from typing import List, Tuple, Iterable, Optional, Callable

from pdfdupes.core.models import FileEntry, DuplicateGroup, DeduplicationStats
from pdfdupes.core.grouper import FileGrouperImpl
from pdfdupes.core.interfaces import Deduplicator
from pdfdupes.core.stages import SizeStageImpl, PartialHashStage, FullHashStage, AssemblerStage

logger = logging.getLogger(__name__)


# =============================
# Main Deduplicator Class
# =============================
class DeduplicatorImpl(Deduplicator):
    """
    Implements multi-stage duplicate detection using a pipeline architecture.
    Collects per-stage statistics.
    """
    def __init__(self, grouper: FileGrouperImpl = None):
        self.grouper = grouper or FileGrouperImpl()

    def find_duplicates(
        self,
        files: Iterable[FileEntry],
        stopped_flag: Optional[Callable[[], bool]] = None,
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> Tuple[List[DuplicateGroup], DeduplicationStats]:
        """
        Main deduplication pipeline.
        Args:
            files: Scanned entries; may be a lazy iterator straight from the walker
            stopped_flag: Function that returns True if operation should be stopped.
            progress_callback: Reports progress per stage.
        Returns:
            Tuple[List[DuplicateGroup], DeduplicationStats]
        """
        stats = DeduplicationStats()
        total_start_time = time.time()
        skipped_before = self.grouper.skipped_files

        start_time = time.time()
        size_groups = SizeStageImpl(self.grouper).process(
            files, stopped_flag=stopped_flag, progress_callback=progress_callback
        )
        self._update_stats(stats, "size", start_time, len(size_groups), sum(len(g.files) for g in size_groups))

        start_time = time.time()
        partial_groups = PartialHashStage(self.grouper).process(
            size_groups, stopped_flag=stopped_flag, progress_callback=progress_callback
        )
        self._update_stats(stats, "partial", start_time, len(partial_groups), sum(len(g.files) for g in partial_groups))

        start_time = time.time()
        digest_map = FullHashStage(self.grouper).process(
            partial_groups, stopped_flag=stopped_flag, progress_callback=progress_callback
        )
        self._update_stats(stats, "full", start_time, len(digest_map), sum(len(f) for f in digest_map.values()))

        start_time = time.time()
        duplicates = AssemblerStage.process(digest_map, progress_callback=progress_callback)
        self._update_stats(stats, "assemble", start_time, len(duplicates), sum(g.duplicate_count for g in duplicates))

        if stopped_flag and stopped_flag():
            logger.debug("Deduplication interrupted by user")
            duplicates = []

        stats.skipped_files = self.grouper.skipped_files - skipped_before
        stats.total_time = time.time() - total_start_time
        logger.debug(f"Found {len(duplicates)} duplicate groups in {stats.total_time:.3f}s")

        return duplicates, stats

    @staticmethod
    def _update_stats(stats: DeduplicationStats, stage: str, start_time: float, groups: int, files: int) -> None:
        stats.update_stage(
            stage_name=stage,
            groups_found=groups,
            files_processed=files,
            duration=time.time() - start_time
        )
