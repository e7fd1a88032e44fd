#!/usr/bin/env python3
"""
Boot sector analysis for FAT32 Recovery Tool
Phân tích boot sector cho công cụ khôi phục FAT32
"""

import struct
from dataclasses import dataclass
from typing import List, Optional

from .constants import (
    BOOT_SECTOR_SIZE, BOOT_SIGNATURE, DIR_ENTRY_SIZE, FAT_ENTRY_SIZE, FIRST_DATA_CLUSTER,
    MAX_CLUSTER_SIZE, VALID_BYTES_PER_SECTOR, VALID_SECTORS_PER_CLUSTER
)


@dataclass(frozen=True)
class VolumeGeometry:
    """Sector/cluster geometry of a FAT32 volume, fixed for one run"""

    bytes_per_sector: int
    sectors_per_cluster: int
    reserved_sectors: int
    num_fats: int
    sectors_per_fat: int
    root_cluster: int

    @property
    def cluster_size(self) -> int:
        return self.bytes_per_sector * self.sectors_per_cluster

    @property
    def entries_per_cluster(self) -> int:
        return self.cluster_size // DIR_ENTRY_SIZE

    @property
    def fat_size(self) -> int:
        """Size of one FAT copy in bytes"""
        return self.sectors_per_fat * self.bytes_per_sector

    @property
    def fat_entry_count(self) -> int:
        return self.fat_size // FAT_ENTRY_SIZE

    @property
    def first_data_sector(self) -> int:
        return self.reserved_sectors + self.num_fats * self.sectors_per_fat

    @property
    def data_offset(self) -> int:
        return self.first_data_sector * self.bytes_per_sector

    def fat_offset(self, copy: int) -> int:
        """Byte offset of FAT copy number `copy` (0-based)"""
        return (self.reserved_sectors + copy * self.sectors_per_fat) * self.bytes_per_sector


class BootSectorParser:
    """Lớp phân tích boot sector"""

    @staticmethod
    def parse_boot_sector(boot_data: bytes) -> VolumeGeometry:
        """Phân tích boot sector và trích xuất hình học của volume"""
        if len(boot_data) < BOOT_SECTOR_SIZE:
            raise ValueError(f"Boot sector needs {BOOT_SECTOR_SIZE} bytes, got {len(boot_data)}")

        bytes_per_sector = struct.unpack('<H', boot_data[11:13])[0]
        sectors_per_cluster = boot_data[13]
        reserved_sectors = struct.unpack('<H', boot_data[14:16])[0]
        num_fats = boot_data[16]
        sectors_per_fat = struct.unpack('<I', boot_data[36:40])[0]
        root_cluster = struct.unpack('<I', boot_data[44:48])[0]

        # Every later offset divides or multiplies by these two
        if bytes_per_sector == 0:
            raise ValueError("bytes_per_sector = 0, boot sector is corrupt")
        if sectors_per_cluster == 0:
            raise ValueError("sectors_per_cluster = 0, boot sector is corrupt")

        return VolumeGeometry(
            bytes_per_sector=bytes_per_sector,
            sectors_per_cluster=sectors_per_cluster,
            reserved_sectors=reserved_sectors,
            num_fats=num_fats,
            sectors_per_fat=sectors_per_fat,
            root_cluster=root_cluster,
        )


class BootSectorValidator:
    """Lớp kiểm tra tính hợp lệ của boot sector"""

    @staticmethod
    def validate_boot_sector(geometry: VolumeGeometry, boot_data: Optional[bytes] = None) -> List[str]:
        """Kiểm tra boot sector và trả về danh sách cảnh báo"""
        warnings = []

        if boot_data is not None and boot_data[510:512] != BOOT_SIGNATURE:
            warnings.append(f"Boot signature is {boot_data[510:512].hex().upper()}, expected 55AA")

        if geometry.bytes_per_sector not in VALID_BYTES_PER_SECTOR:
            warnings.append(f"Bytes per sector is non-standard: {geometry.bytes_per_sector} (expected one of {VALID_BYTES_PER_SECTOR})")

        if geometry.sectors_per_cluster not in VALID_SECTORS_PER_CLUSTER:
            warnings.append(f"Sectors per cluster is non-standard: {geometry.sectors_per_cluster} (expected one of {VALID_SECTORS_PER_CLUSTER})")

        if geometry.cluster_size > MAX_CLUSTER_SIZE:
            warnings.append(f"Cluster size {geometry.cluster_size} exceeds {MAX_CLUSTER_SIZE} bytes")

        if geometry.num_fats == 0:
            warnings.append("Number of FATs is 0")

        if geometry.sectors_per_fat == 0:
            warnings.append("Sectors per FAT (32-bit) is 0, volume is probably not FAT32")

        if geometry.root_cluster < FIRST_DATA_CLUSTER:
            warnings.append(f"Root cluster {geometry.root_cluster} is reserved (must be >= {FIRST_DATA_CLUSTER})")

        return warnings
