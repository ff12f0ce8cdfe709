"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

api.py

Public entry points. Each call is a single, self-contained scan of one root
directory and returns plain records (str paths, FileInfo, DuplicateGroup);
converting them for another runtime is left to the caller.

- scan(root)            -> List[str]
- scan_with_info(root)  -> List[FileInfo]
- find_duplicates(root) -> List[DuplicateGroup]

All three raise ScanRootError if the root cannot be scanned.
"""
import os
import time
import logging
from typing import List, Union

from pdfdupes.commands import DeduplicationCommand
from pdfdupes.core.models import DeduplicationParams, DuplicateGroup, FileInfo

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


def scan(root: PathLike) -> List[str]:
    """All PDF files under root."""
    start_time = time.time()
    result = DeduplicationCommand.scan(DeduplicationParams(root_dir=os.fspath(root)))
    logger.debug(f"scan found {len(result)} PDFs in {(time.time() - start_time) * 1000:.0f}ms")
    return result


def scan_with_info(root: PathLike) -> List[FileInfo]:
    """All PDF files under root with size and modification time."""
    start_time = time.time()
    result = DeduplicationCommand.scan_with_info(DeduplicationParams(root_dir=os.fspath(root)))
    logger.debug(f"scan_with_info found {len(result)} PDFs in {(time.time() - start_time) * 1000:.0f}ms")
    return result


def find_duplicates(root: PathLike) -> List[DuplicateGroup]:
    """Groups of byte-identical PDF files under root."""
    start_time = time.time()
    groups, _ = DeduplicationCommand().execute(DeduplicationParams(root_dir=os.fspath(root)))
    logger.debug(f"find_duplicates found {len(groups)} groups in {(time.time() - start_time) * 1000:.0f}ms")
    return groups
