"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/file_service.py
Safe file removal: duplicates are moved to the system trash, never erased.
"""
import logging
from pathlib import Path
from typing import List

from send2trash import send2trash

logger = logging.getLogger(__name__)


class FileService:
    """
    Cross-platform trash operations.
    """

    @staticmethod
    def move_to_trash(file_path: str):
        """Moves a file to the system trash."""
        path = Path(file_path).resolve()

        if not path.exists():
            raise RuntimeError(f"File not found: {path}")

        try:
            send2trash(str(path))
        except Exception as e:
            raise RuntimeError(f"Failed to move to trash: {e}") from e
        logger.debug(f"Moved to trash: {path}")

    @classmethod
    def move_multiple_to_trash(cls, file_paths: List[str]) -> int:
        """
        Moves multiple files to trash with error aggregation.
        Returns the number of files moved; raises RuntimeError listing failures, if any.
        """
        errors = []
        moved = 0
        for path in file_paths:
            try:
                cls.move_to_trash(path)
                moved += 1
            except RuntimeError as e:
                errors.append((path, str(e)))

        if errors:
            error_summary = "\n".join(
                f"  • {Path(p).name}: {msg.split(':')[-1].strip()}"
                for p, msg in errors[:5]
            )
            if len(errors) > 5:
                error_summary += f"\n  • ...and {len(errors) - 5} more files"
            raise RuntimeError(
                f"Failed to move {len(errors)} file(s) to trash ({moved} moved):\n{error_summary}"
            )
        return moved
