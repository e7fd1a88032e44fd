#!/usr/bin/env python3
"""
FAT32 Recovery Tool - Main Entry Point
Công cụ khôi phục FAT32 - Điểm vào chính
"""

import sys

from fat32recover.cli import main

if __name__ == "__main__":
    sys.exit(main())
