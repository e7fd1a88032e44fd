#!/usr/bin/env python3
"""
Constants and configuration for FAT32 Recovery Tool
Các hằng số và cấu hình cho công cụ khôi phục FAT32
"""

# Boot sector signature
BOOT_SIGNATURE = b'\x55\xAA'

# Minimum boot sector length
BOOT_SECTOR_SIZE = 512

# Valid bytes per sector values
VALID_BYTES_PER_SECTOR = [512, 1024, 2048, 4096]

# Valid sectors per cluster values
VALID_SECTORS_PER_CLUSTER = [1, 2, 4, 8, 16, 32, 64, 128]

# Cluster size must be 32KB or smaller
MAX_CLUSTER_SIZE = 32 * 1024

# Clusters 0 and 1 are reserved
FIRST_DATA_CLUSTER = 2

# Directory entry layout
DIR_ENTRY_SIZE = 32
DIR_NAME_SIZE = 11
DIR_BASE_SIZE = 8
DIR_EXT_SIZE = 3

# First name byte markers
DELETED_MARKER = 0xE5
END_OF_DIRECTORY = 0x00

# Attribute bits
ATTR_READ_ONLY = 0x01
ATTR_HIDDEN = 0x02
ATTR_SYSTEM = 0x04
ATTR_VOLUME_ID = 0x08
ATTR_DIRECTORY = 0x10
ATTR_ARCHIVE = 0x20
ATTR_LONG_NAME = ATTR_READ_ONLY | ATTR_HIDDEN | ATTR_SYSTEM | ATTR_VOLUME_ID

# FAT32 table entries
FAT_ENTRY_SIZE = 4
FAT32_CLUSTER_MASK = 0x0FFFFFFF
FREE_CLUSTER = 0x00000000
END_OF_CHAIN_MIN = 0x0FFFFFF8
END_OF_CHAIN = 0x0FFFFFFF

# Matching deleted entries in one directory pass
MAX_CANDIDATES = 100

# SHA-1 digest sizes
SHA1_DIGEST_SIZE = 20
SHA1_HEX_LENGTH = 40
