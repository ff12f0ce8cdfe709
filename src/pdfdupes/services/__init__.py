"""File operations and duplicate group management services."""

from .file_service import FileService
from .duplicate_service import DuplicateService

__all__ = ["FileService", "DuplicateService"]
