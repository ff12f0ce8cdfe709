"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/config.py
Fixed scan and hashing constants. Nothing here is exposed as a runtime option.
"""


class ScanConfig:
    # Target documents (compared case-insensitively)
    EXTENSION = "pdf"

    # Any entry whose name starts with this prefix is pruned before descending
    HIDDEN_PREFIX = "."

    # Non-document system directories on device storage
    EXCLUDED_DIR_NAMES = frozenset({"Android", "data"})

    # Partial fingerprint window: head chunk, plus tail chunk when size > TAIL_THRESHOLD
    CHUNK_SIZE = 4096
    TAIL_THRESHOLD = 2 * CHUNK_SIZE

    # Block size for streaming full-content digests
    FULL_READ_BLOCK_SIZE = 64 * 1024

    @staticmethod
    def has_tail_chunk(file_size: int) -> bool:
        """True if the partial fingerprint of a file this size includes the tail chunk."""
        return file_size > ScanConfig.TAIL_THRESHOLD

    @staticmethod
    def head_length(file_size: int) -> int:
        return min(ScanConfig.CHUNK_SIZE, file_size)
