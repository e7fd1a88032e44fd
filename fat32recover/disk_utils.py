#!/usr/bin/env python3
"""
Disk image utilities for FAT32 Recovery Tool
Các tiện ích xử lý ảnh đĩa cho công cụ khôi phục FAT32
"""

import logging
import mmap
import os
import struct

from .constants import BOOT_SECTOR_SIZE
from .errors import ImageBoundsError


class DiskImage:
    """Lớp sở hữu vùng ánh xạ bộ nhớ của ảnh đĩa"""

    def __init__(self, image_path: str, writable: bool = False):
        self.image_path = image_path
        self.writable = writable
        self._file = None
        self._map = None

    def open(self) -> "DiskImage":
        """Open and memory-map the image"""
        mode = 'r+b' if self.writable else 'rb'
        access = mmap.ACCESS_WRITE if self.writable else mmap.ACCESS_READ
        try:
            self._file = open(self.image_path, mode)
        except OSError as e:
            raise IOError(f"Cannot open disk image {self.image_path}: {e.strerror}") from e

        if os.fstat(self._file.fileno()).st_size == 0:
            self._file.close()
            self._file = None
            raise ValueError(f"Disk image {self.image_path} is empty")

        self._map = mmap.mmap(self._file.fileno(), 0, access=access)
        logging.debug(f"Mapped {self.image_path}: {len(self._map)} bytes, writable={self.writable}")
        return self

    def close(self) -> None:
        if self._map is not None:
            if self.writable:
                self._map.flush()
            self._map.close()
            self._map = None
        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self) -> "DiskImage":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def size(self) -> int:
        return len(self._mapped())

    def _mapped(self) -> mmap.mmap:
        if self._map is None:
            raise ValueError("Disk image is not open")
        return self._map

    def _check_bounds(self, offset: int, length: int) -> None:
        size = len(self._mapped())
        if offset < 0 or length < 0 or offset + length > size:
            raise ImageBoundsError(offset, length, size)

    def read(self, offset: int, length: int) -> bytes:
        """Đọc length byte tại offset, kiểm tra giới hạn trước"""
        self._check_bounds(offset, length)
        return self._map[offset:offset + length]

    def write(self, offset: int, data: bytes) -> None:
        """Ghi data tại offset, kiểm tra giới hạn trước mỗi lần ghi"""
        if not self.writable:
            raise PermissionError(f"Disk image {self.image_path} was opened read-only")
        self._check_bounds(offset, len(data))
        self._map[offset:offset + len(data)] = data

    def read_byte(self, offset: int) -> int:
        return self.read(offset, 1)[0]

    def write_byte(self, offset: int, value: int) -> None:
        self.write(offset, bytes((value,)))

    def read_u32(self, offset: int) -> int:
        return struct.unpack('<I', self.read(offset, 4))[0]

    def write_u32(self, offset: int, value: int) -> None:
        self.write(offset, struct.pack('<I', value))

    def read_sector(self, sector_num: int, num_sectors: int = 1,
                    bytes_per_sector: int = BOOT_SECTOR_SIZE) -> bytes:
        """Đọc sector từ ảnh đĩa"""
        return self.read(sector_num * bytes_per_sector, num_sectors * bytes_per_sector)


def hex_dump(data: bytes, start_offset: int = 0, max_bytes: int = 64) -> str:
    """Trả về hex dump của data"""
    lines = [f"Hex dump (first {min(max_bytes, len(data))} bytes):"]
    for i in range(0, min(max_bytes, len(data)), 16):
        offset = start_offset + i
        chunk = data[i:i+16]
        hex_str = ' '.join(f'{b:02X}' for b in chunk)
        ascii_str = ''.join(chr(b) if 32 <= b <= 126 else '.' for b in chunk)
        lines.append(f"{offset:04X}: {hex_str:<48} {ascii_str}")
    return '\n'.join(lines)
