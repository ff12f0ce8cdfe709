"""
Unified command orchestrator for scanning and duplicate detection.
This is the SINGLE source of truth for business logic, used by both the API and the CLI.
"""
from typing import List, Optional, Callable, Tuple

from pdfdupes.core.models import DuplicateGroup, DeduplicationStats, DeduplicationParams, FileInfo
from pdfdupes.core.scanner import FileScannerImpl
from pdfdupes.core.deduplicator import DeduplicatorImpl


class DeduplicationCommand:
    """
    Orchestrates the workflow:
    1. Build the scanner for the root directory
    2. Stream its entries into the deduplication pipeline
    3. Return groups and statistics

    Usage:
        params = DeduplicationParams(root_dir="/sdcard")
        command = DeduplicationCommand()
        groups, stats = command.execute(
            params,
            progress_callback=cli_progress_printer,
            stopped_flag=signal_handler_check
        )
    """

    def __init__(self, deduplicator: DeduplicatorImpl = None):
        self._deduplicator = deduplicator or DeduplicatorImpl()

    def execute(
            self,
            params: DeduplicationParams,
            progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None,
            stopped_flag: Optional[Callable[[], bool]] = None
    ) -> Tuple[List[DuplicateGroup], DeduplicationStats]:
        """
        Find duplicate PDFs under params.root_dir.

        Returns:
            Tuple of (duplicate_groups, statistics)

        Raises:
            ScanRootError: If the root directory cannot be scanned
        """
        scanner = FileScannerImpl(root_dir=params.root_dir)

        # Root is validated here, before any hashing starts
        entries = scanner.iter_entries(
            stopped_flag=stopped_flag,
            progress_callback=progress_callback
        )

        return self._deduplicator.find_duplicates(
            entries,
            stopped_flag=stopped_flag,
            progress_callback=progress_callback
        )

    @staticmethod
    def scan(
            params: DeduplicationParams,
            progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None,
            stopped_flag: Optional[Callable[[], bool]] = None
    ) -> List[str]:
        """Paths of all PDF files under params.root_dir."""
        return FileScannerImpl(root_dir=params.root_dir).scan(
            stopped_flag=stopped_flag,
            progress_callback=progress_callback
        )

    @staticmethod
    def scan_with_info(
            params: DeduplicationParams,
            progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None,
            stopped_flag: Optional[Callable[[], bool]] = None
    ) -> List[FileInfo]:
        """PDF files under params.root_dir with size and modification time."""
        return FileScannerImpl(root_dir=params.root_dir).scan_with_info(
            stopped_flag=stopped_flag,
            progress_callback=progress_callback
        )
