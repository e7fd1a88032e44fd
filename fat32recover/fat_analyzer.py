#!/usr/bin/env python3
"""
FAT32 Analysis and Recovery Module
Module phân tích và khôi phục FAT32
"""

import logging
from typing import Dict, List, Optional, Tuple

from .boot_sector import BootSectorParser, BootSectorValidator, VolumeGeometry
from .disk_utils import DiskImage, hex_dump
from .fat.directory import list_directory
from .fat.reader import FatTables
from .recovery.chain import reconstruct
from .recovery.resolver import collect_candidates, resolve_candidate


class FATAnalyzer:
    """Lớp phân tích volume FAT32 và khôi phục file đã xóa"""

    def __init__(self, image: DiskImage):
        self.image = image
        self.boot_sector = image.read_sector(0)
        logging.debug(hex_dump(self.boot_sector, max_bytes=64))
        self.geometry: VolumeGeometry = BootSectorParser.parse_boot_sector(self.boot_sector)
        self.fat = FatTables(image, self.geometry)
        logging.debug(f"Geometry: {self.geometry}")

    def validate(self) -> List[str]:
        """Log and return boot sector warnings"""
        warnings = BootSectorValidator.validate_boot_sector(self.geometry, self.boot_sector)
        for warning in warnings:
            logging.warning(warning)
        return warnings

    def volume_info(self) -> Dict[str, int]:
        return {
            'num_fats': self.geometry.num_fats,
            'bytes_per_sector': self.geometry.bytes_per_sector,
            'sectors_per_cluster': self.geometry.sectors_per_cluster,
            'reserved_sectors': self.geometry.reserved_sectors,
        }

    def list_root(self) -> Tuple[List[str], int]:
        """Listing lines and entry count for the root directory"""
        return list_directory(self.image, self.fat, self.geometry.root_cluster)

    def fat_chain(self, start_cluster: int) -> List[int]:
        return list(self.fat.follow_chain(start_cluster))

    def recover(self, filename: str, sha1: Optional[bytes] = None) -> List[int]:
        """Recover a deleted root-directory file assumed to be stored contiguously.

        Raises FileNotFound, AmbiguousCandidates or TooManyCandidates without
        touching the image. On success returns the clusters linked in the FAT.
        """
        candidates = collect_candidates(self.image, self.fat, self.geometry.root_cluster, filename)
        entry = resolve_candidate(self.image, self.fat, candidates, sha1)
        clusters = reconstruct(self.image, self.fat, entry, filename)
        logging.info(f"{filename}: recovered entry at offset 0x{entry.offset:X} ({len(clusters)} cluster(s))")
        return clusters

    def recover_non_contiguous(self, filename: str, sha1: bytes) -> List[int]:
        """Recover a possibly non-contiguous file.

        Uses the same contiguous chain rebuild as recover(); only the SHA-1
        is mandatory here.
        """
        if sha1 is None:
            raise ValueError("A SHA-1 digest is required to recover a possibly non-contiguous file")
        return self.recover(filename, sha1)
