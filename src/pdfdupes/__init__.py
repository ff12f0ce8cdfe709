"""
pdfdupes: fast content-based duplicate PDF finder.

Core features:
- Walks a storage tree, skipping hidden directories and Android/ and data/
- Finds duplicates in phases: size → head/tail xxHash64 → full MD5
- Safe deletion to system trash (via send2trash)
- CLI interface for headless usage
"""

# Get version
try:
    from importlib.metadata import version as _version
    __version__ = _version("pdfdupes")
except Exception:
    try:
        import tomllib  # Python 3.11+
    except ImportError:
        import tomli as tomllib  # Python < 3.11: pip install tomli

    try:
        with open("pyproject.toml", "rb") as f:
            __version__ = tomllib.load(f)["project"]["version"]
    except (OSError, KeyError, tomllib.TOMLDecodeError):
        __version__ = "0.0.0"

# Public API: only what users should import directly
from pdfdupes.api import scan, scan_with_info, find_duplicates
from pdfdupes.commands import DeduplicationCommand
from pdfdupes.core import DeduplicationParams, SortOrder, FileEntry, FileInfo, DuplicateGroup, ScanConfig
from pdfdupes.exceptions import ScanRootError
from pdfdupes.utils.convert_utils import ConvertUtils
from pdfdupes.services import DuplicateService, FileService

__all__ = [
    "scan",
    "scan_with_info",
    "find_duplicates",
    "DeduplicationCommand",
    "DeduplicationParams",
    "SortOrder",
    "FileEntry",
    "FileInfo",
    "DuplicateGroup",
    "ScanConfig",
    "ScanRootError",
    "ConvertUtils",
    "DuplicateService",
    "FileService",
    "__version__",
]
