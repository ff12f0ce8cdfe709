"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/sorter.py
Pure sorting logic for duplicate groups: zero dependencies outside core.
Orders the members of each group by modification time so that "keep newest"
and "keep oldest" selections only have to look at the ends of the list.
"""
from typing import List, Optional

from pdfdupes.core.models import FileEntry, SortOrder


class Sorter:
    """
    Sorts files inside duplicate groups according to specified order.
    Ties on modification time keep discovery order (sort is stable).
    """

    @staticmethod
    def sort_files(files: List[FileEntry], sort_order: Optional[SortOrder] = None) -> List[FileEntry]:
        """Returns a new list; the input is not modified."""
        if sort_order is None:
            sort_order = SortOrder.NEWEST_FIRST
        reverse = sort_order == SortOrder.NEWEST_FIRST
        return sorted(files, key=lambda f: f.modified_ms or 0, reverse=reverse)

