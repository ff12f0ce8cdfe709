"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models for PDF scanning and duplicate detection.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Tuple, Union, Optional
import logging
import os
from enum import Enum

logger = logging.getLogger(__name__)


# =============================
# Enums
# =============================

class Stage(str, Enum):
    SCAN = "Scanning"
    SIZE = "Size grouping"
    PARTIAL = "Partial Hash"
    FULL = "Full Hash"
    ASSEMBLE = "Assemble groups"


class SortOrder(Enum):
    NEWEST_FIRST = "newest"
    OLDEST_FIRST = "oldest"


# ======================
#  Core Data Models
# ======================

@dataclass(frozen=True)
class FileEntry:
    """
    A regular file found during traversal.
    Immutable: later stages regroup entries but never change them.
    """
    path: str
    size: int  # in bytes
    modified_ms: int = 0  # milliseconds since epoch, 0 if unavailable

    @property
    def name(self) -> str:
        return os.path.basename(self.path)

    def __repr__(self):
        return f"<FileEntry path={self.path}, size={self.size}>"


@dataclass(frozen=True)
class FileInfo:
    """Plain record returned by scan_with_info()."""
    path: str
    size_bytes: int
    modified_at_millis: int

    @classmethod
    def from_entry(cls, entry: FileEntry) -> "FileInfo":
        return cls(path=entry.path, size_bytes=entry.size, modified_at_millis=entry.modified_ms)


@dataclass
class CandidateGroup:
    """
    Intermediate group of potential duplicates.
    `key` is the grouping value of the stage that built it (size or partial digest).
    All files share the same size.
    """
    key: Union[int, str]
    size: int
    files: List[FileEntry] = field(default_factory=list)

    def __repr__(self):
        return f"<CandidateGroup key={self.key!r}, size={self.size}, count={len(self.files)}>"


@dataclass(frozen=True)
class DuplicateGroup:
    """
    Confirmed duplicates: two or more paths with the same full-content digest.
    """
    digest: str
    paths: Tuple[str, ...]

    def __post_init__(self):
        if len(self.paths) < 2:
            raise ValueError("DuplicateGroup needs at least two paths")

    @property
    def duplicate_count(self) -> int:
        """How many files are in this group."""
        return len(self.paths)

    def __repr__(self):
        return f"<DuplicateGroup digest={self.digest}, count={len(self.paths)}>"


@dataclass
class DeduplicationParams:
    """Parameters for a scan or duplicate search, validated on creation."""
    root_dir: str

    def __post_init__(self):
        if not self.root_dir:
            raise ValueError("Root directory cannot be empty")
        self.root_dir = os.fspath(self.root_dir)


class DeduplicationStats:
    """
    Statistics collected during the deduplication process.
    """
    def __init__(self):
        self.total_time: float = 0.0
        self.skipped_files: int = 0
        self.stage_stats: Dict[str, Dict[str, Union[int, float]]] = {}

    def update_stage(
            self,
            stage_name: str,
            groups_found: int,
            files_processed: int,
            duration: float
    ) -> None:
        if stage_name not in self.stage_stats:
            self.stage_stats[stage_name] = {
                "groups": 0,
                "files": 0,
                "time": 0.0
            }
        self.stage_stats[stage_name]["groups"] += groups_found
        self.stage_stats[stage_name]["files"] += files_processed
        self.stage_stats[stage_name]["time"] += duration
        logger.debug(
            f"{stage_name}: {groups_found} groups, {files_processed} files in {duration:.3f}s"
        )

    def get_stage(self, stage_name: str) -> Optional[Dict[str, Union[int, float]]]:
        return self.stage_stats.get(stage_name)

    def print_summary(self) -> str:
        labels = {
            "size": "Size Groups",
            "partial": "Partial Hash Groups",
            "full": "Full Content Hash Groups",
            "assemble": "Duplicate Groups",
        }

        lines = [
            "Deduplication Statistics:",
            f"Total Execution Time: {self.total_time:.3f}s\n",
            "Stage: GROUPS / FILES / TIME"
        ]

        for stage, data in self.stage_stats.items():
            label = labels.get(stage.lower(), stage.title())
            lines.append(f"{label}: {data['groups']} / {data['files']} / {data['time']:.3f}s")

        if self.skipped_files:
            lines.append(f"Skipped (unreadable): {self.skipped_files}")

        return "\n".join(lines)
