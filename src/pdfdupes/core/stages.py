"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/stages.py
Pipeline stages of the duplicate finder.

STAGES
------
SizeStageImpl      : Buckets the streamed entries by exact byte length
PartialHashStage   : Splits each size bucket by head/tail fingerprint
FullHashStage      : Merges all partial groups into one mapping by full-content digest
AssemblerStage     : Emits a DuplicateGroup per full digest shared by 2+ files

Each stage narrows the candidate set; none widens it. A stage fully drains
its input before returning, except the size stage, which consumes the
walker's lazy stream.

STAGE CONTRACTS
---------------
  • process() accepts the previous stage's output and returns its own
  • progress_callback(stage name, processed count, total count)
  • stopped_flag() returning True makes a stage return an empty result
"""

from typing import List, Dict, Iterable, Optional, Callable
from collections import defaultdict

from pdfdupes.core.models import FileEntry, CandidateGroup, DuplicateGroup, Stage
from pdfdupes.core.grouper import FileGrouperImpl


class SizeStageImpl:
    def __init__(self, grouper: FileGrouperImpl):
        self.grouper = grouper

    def process(
            self,
            files: Iterable[FileEntry],
            stopped_flag: Optional[Callable[[], bool]] = None,
            progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> List[CandidateGroup]:
        """
        Group by file size.
        Returns list of CandidateGroups with 2+ files of same size.
        """
        if stopped_flag and stopped_flag():
            return []

        size_groups = self.grouper.group_by_size(files)

        if stopped_flag and stopped_flag():
            return []

        groups = [
            CandidateGroup(key=size, size=size, files=files_list)
            for size, files_list in size_groups.items()
        ]

        if progress_callback:
            total_files = sum(len(g.files) for g in groups)
            progress_callback(Stage.SIZE.value, total_files, total_files)

        return groups


class PartialHashStage:
    def __init__(self, grouper: FileGrouperImpl):
        self.grouper = grouper

    def process(
            self,
            groups: List[CandidateGroup],
            stopped_flag: Optional[Callable[[], bool]] = None,
            progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> List[CandidateGroup]:
        """
        Splits every size bucket by partial fingerprint.
        Grouping never crosses bucket boundaries.
        """
        if stopped_flag and stopped_flag():
            return []

        new_groups = []
        total_files = sum(len(group.files) for group in groups)
        processed_files = 0

        for group in groups:
            if stopped_flag and stopped_flag():
                return []

            hash_groups = self.grouper.group_by_partial_hash(group.files)
            for digest, files in hash_groups.items():
                new_groups.append(CandidateGroup(key=digest, size=group.size, files=files))

            processed_files += len(group.files)
            if progress_callback:
                progress_callback(Stage.PARTIAL.value, processed_files, total_files)

        return new_groups


class FullHashStage:
    def __init__(self, grouper: FileGrouperImpl):
        self.grouper = grouper

    def process(
            self,
            groups: List[CandidateGroup],
            stopped_flag: Optional[Callable[[], bool]] = None,
            progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> Dict[str, List[FileEntry]]:
        """
        Hashes the full content of every file in the partial groups.
        Returns a single mapping across all buckets: equal content implies equal size,
        so the size key is no longer needed.
        """
        if stopped_flag and stopped_flag():
            return {}

        mapping: Dict[str, List[FileEntry]] = defaultdict(list)
        total_files = sum(len(g.files) for g in groups)
        processed_files = 0

        for group in groups:
            if stopped_flag and stopped_flag():
                return {}

            self.grouper.group_by_full_hash([group], into=mapping)

            processed_files += len(group.files)
            if progress_callback:
                progress_callback(Stage.FULL.value, processed_files, total_files)

        return dict(mapping)


class AssemblerStage:
    @staticmethod
    def process(
            mapping: Dict[str, List[FileEntry]],
            progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> List[DuplicateGroup]:
        """One DuplicateGroup per digest with 2+ files; member order is discovery order."""
        groups = [
            DuplicateGroup(digest=digest, paths=tuple(f.path for f in files))
            for digest, files in mapping.items()
            if len(files) >= 2
        ]
        if progress_callback:
            progress_callback(Stage.ASSEMBLE.value, len(groups), len(groups))
        return groups
