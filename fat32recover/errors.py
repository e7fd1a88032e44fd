#!/usr/bin/env python3
"""
Error types for FAT32 Recovery Tool
Các loại lỗi cho công cụ khôi phục FAT32
"""


class UsageError(Exception):
    """Malformed or out-of-range command line arguments"""


class ImageBoundsError(IndexError):
    """A read or write would fall outside the mapped disk image"""

    def __init__(self, offset: int, length: int, size: int):
        super().__init__(
            f"Access of {length} bytes at offset {offset} is outside the image ({size} bytes)"
        )
        self.offset = offset
        self.length = length
        self.size = size


class RecoveryError(Exception):
    """Base class for a failed recovery; renders the one-line diagnostic"""

    reason = "recovery failed"

    def __init__(self, filename: str):
        super().__init__(f"{filename}: {self.reason}")
        self.filename = filename


class FileNotFound(RecoveryError):
    """No deleted entry (or no candidate content) matches the request"""

    reason = "file not found"


class AmbiguousCandidates(RecoveryError):
    """Several deleted entries match and no SHA-1 was given to pick one"""

    reason = "multiple candidates found"


class TooManyCandidates(RecoveryError):
    reason = "too many candidates found"
