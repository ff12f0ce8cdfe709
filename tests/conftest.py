"""
Shared fixtures for pdfdupes tests.
Creates isolated directory trees with controlled PDF content.
"""
import os
import pytest
from pathlib import Path
from typing import Dict


def write_file(path: Path, content: bytes, mtime_ms: int = None) -> Path:
    """Writes content, creating parent directories; optionally sets mtime."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)
    if mtime_ms is not None:
        ns = mtime_ms * 1_000_000
        os.utime(path, ns=(ns, ns))
    return path


def patterned(size: int, seed: int = 0) -> bytes:
    """Deterministic non-uniform content of the given size."""
    return bytes((i * 31 + seed) % 251 for i in range(size))


@pytest.fixture
def pdf_tree(tmp_path) -> Dict[str, Path]:
    """
    Creates a tree covering the duplicate-detection scenarios:
    - a.pdf / b.pdf: identical 10KB content (duplicates)
    - c.pdf: different 10KB content
    - nested/deep/a_copy.PDF: third copy of a.pdf, upper-case extension
    - y.txt: same bytes as a.pdf but wrong extension
    - .trash/a_trashed.pdf: copy of a.pdf inside a hidden directory
    - Android/media/a_android.pdf and data/a_data.pdf: copies in excluded directories
    - unique.pdf: 3KB, no counterpart
    """
    content_a = patterned(10 * 1024, seed=1)
    content_c = patterned(10 * 1024, seed=2)

    files = {
        "a": write_file(tmp_path / "a.pdf", content_a),
        "b": write_file(tmp_path / "b.pdf", content_a),
        "c": write_file(tmp_path / "c.pdf", content_c),
        "a_copy": write_file(tmp_path / "nested" / "deep" / "a_copy.PDF", content_a),
        "y_txt": write_file(tmp_path / "y.txt", content_a),
        "trashed": write_file(tmp_path / ".trash" / "a_trashed.pdf", content_a),
        "android": write_file(tmp_path / "Android" / "media" / "a_android.pdf", content_a),
        "data": write_file(tmp_path / "data" / "a_data.pdf", content_a),
        "unique": write_file(tmp_path / "unique.pdf", patterned(3 * 1024, seed=3)),
    }
    files["root"] = tmp_path
    return files


def write_raw_name(directory: Path, raw_name: bytes, content: bytes) -> None:
    """Creates a file whose name is raw bytes (may be invalid UTF-8)."""
    with open(os.path.join(os.fsencode(directory), raw_name), "wb") as f:
        f.write(content)
