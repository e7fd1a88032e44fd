#!/usr/bin/env python3
"""
Package initialization for FAT32 Recovery Tool
Khởi tạo package cho công cụ khôi phục FAT32
"""

from .fat_analyzer import FATAnalyzer
from .boot_sector import BootSectorParser, BootSectorValidator, VolumeGeometry
from .disk_utils import DiskImage, hex_dump
from .errors import (
    AmbiguousCandidates, FileNotFound, ImageBoundsError, RecoveryError,
    TooManyCandidates, UsageError
)
from .cli import FATRecoveryCLI

__version__ = "1.0.0"
__author__ = "FAT Recovery Tool Team"

# Export main classes
__all__ = [
    'FATAnalyzer',
    'BootSectorParser',
    'BootSectorValidator',
    'VolumeGeometry',
    'DiskImage',
    'FATRecoveryCLI',
    'RecoveryError',
    'FileNotFound',
    'AmbiguousCandidates',
    'TooManyCandidates',
    'ImageBoundsError',
    'UsageError',
    'hex_dump'
]
