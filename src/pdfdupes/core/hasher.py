"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/hasher.py
Implements file hashing with pluggable hash algorithms.

- Partial fingerprint: xxHash64 over the head chunk, plus the tail chunk
  when the file is larger than ScanConfig.TAIL_THRESHOLD
- Full digest: MD5 over the entire content, streamed in blocks

Every read happens inside a `with open(...)` block so handles are released
on error paths too. Short reads raise OSError; callers treat them as
unreadable files.
"""

import os
import hashlib
import logging

import xxhash

from pdfdupes.core.config import ScanConfig
from pdfdupes.core.models import FileEntry
from pdfdupes.core.interfaces import Hasher, HashAlgorithm, Digest

logger = logging.getLogger(__name__)


# Use the same way to implement and use any other hashing algorithm
class XXHashAlgorithmImpl(HashAlgorithm):
    name = "xxh64"

    def new(self) -> Digest:
        return xxhash.xxh64()

    def hash(self, data: bytes) -> str:
        return xxhash.xxh64(data).hexdigest()


class MD5AlgorithmImpl(HashAlgorithm):
    name = "md5"

    def new(self) -> Digest:
        return hashlib.md5()

    def hash(self, data: bytes) -> str:
        return hashlib.md5(data).hexdigest()


class HasherImpl(Hasher):
    """
    Computes the partial fingerprint and the full-content digest of a file.

    Args:
        partial_algorithm: fast digest for the head/tail window (xxHash64 by default)
        full_algorithm: digest over the whole file (MD5 by default)
    """

    def __init__(self, partial_algorithm: HashAlgorithm = None, full_algorithm: HashAlgorithm = None):
        self.partial_algorithm = partial_algorithm or XXHashAlgorithmImpl()
        self.full_algorithm = full_algorithm or MD5AlgorithmImpl()

    def compute_partial_hash(self, file: FileEntry) -> str:
        """Hex digest of the head (and, for large files, tail) window."""
        return self.partial_algorithm.hash(self.read_partial_window(file.path))

    def compute_full_hash(self, file: FileEntry) -> str:
        """Hex digest of the entire file content."""
        digest = self.full_algorithm.new()
        with open(file.path, 'rb') as f:
            for block in iter(lambda: f.read(ScanConfig.FULL_READ_BLOCK_SIZE), b''):
                digest.update(block)
        return digest.hexdigest()

    @staticmethod
    def read_partial_window(path: str) -> bytes:
        """
        Returns head + tail bytes used for the partial fingerprint.

        The head is min(CHUNK_SIZE, size) bytes. The tail (last CHUNK_SIZE bytes)
        is appended only when size > TAIL_THRESHOLD. Size is taken from the open
        handle, so the window reflects the file as it is at read time.
        """
        with open(path, 'rb') as f:
            size = os.fstat(f.fileno()).st_size
            data = HasherImpl._read_exact(f, ScanConfig.head_length(size), path)
            if ScanConfig.has_tail_chunk(size):
                f.seek(-ScanConfig.CHUNK_SIZE, os.SEEK_END)
                data += HasherImpl._read_exact(f, ScanConfig.CHUNK_SIZE, path)
        return data

    @staticmethod
    def _read_exact(f, length: int, path: str) -> bytes:
        data = f.read(length)
        if len(data) != length:
            raise OSError(f"Short read from {path}: expected {length} bytes, got {len(data)}")
        return data
