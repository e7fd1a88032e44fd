#!/usr/bin/env python3
"""
Command Line Interface for FAT32 Recovery Tool
Giao diện dòng lệnh cho công cụ khôi phục FAT32
"""

import argparse
import logging
import string
import sys

from .constants import SHA1_HEX_LENGTH
from .disk_utils import DiskImage
from .errors import RecoveryError, UsageError
from .fat_analyzer import FATAnalyzer

USAGE = """Usage: fat32recover disk <options>
  -i                     Print the file system information.
  -l                     List the root directory.
  -r filename [-s sha1]  Recover a contiguous file.
  -R filename -s sha1    Recover a possibly non-contiguous file.
"""


class _UsageArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        raise UsageError(message)


def parse_sha1(text: str) -> bytes:
    """40 hex characters -> 20 raw bytes"""
    if len(text) != SHA1_HEX_LENGTH or any(c not in string.hexdigits for c in text):
        raise UsageError(f"SHA-1 must be {SHA1_HEX_LENGTH} hex characters: {text!r}")
    return bytes.fromhex(text)


class FATRecoveryCLI:
    """Lớp xử lý giao diện dòng lệnh"""

    def __init__(self, stdout=None):
        self.parser = self._create_parser()
        self.stdout = stdout or sys.stdout

    def _create_parser(self) -> argparse.ArgumentParser:
        """Tạo argument parser"""
        parser = _UsageArgumentParser(
            prog='fat32recover',
            description="FAT32 Data Recovery Tool - inspect a FAT32 image and recover deleted files",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  fat32recover fat32.disk -i                 # File system information
  fat32recover fat32.disk -l                 # List the root directory
  fat32recover fat32.disk -r HELLO.TXT       # Recover a contiguous file
  fat32recover fat32.disk -R HELLO.TXT -s c91761a2cc1562d36585614c8c680ecf5712e875
            """
        )

        parser.add_argument('disk', help='Path to the FAT32 disk image')
        mode = parser.add_mutually_exclusive_group(required=True)
        mode.add_argument('-i', dest='info', action='store_true',
                          help='Print the file system information')
        mode.add_argument('-l', dest='list', action='store_true',
                          help='List the root directory')
        mode.add_argument('-r', dest='recover', metavar='filename',
                          help='Recover a contiguous file')
        mode.add_argument('-R', dest='recover_non_contiguous', metavar='filename',
                          help='Recover a possibly non-contiguous file')
        parser.add_argument('-s', dest='sha1', metavar='sha1',
                            help='SHA-1 of the file content (40 hex characters)')
        parser.add_argument('-v', '--verbose', action='store_true',
                            help='Log diagnostics to stderr')

        return parser

    def run(self, args=None) -> int:
        """Chạy CLI với các tham số"""
        try:
            parsed_args = self._parse(args)
        except UsageError:
            self._print(USAGE, end='')
            return 1

        logging.basicConfig(
            level=logging.DEBUG if parsed_args.verbose else logging.WARNING,
            format='%(levelname)s: %(message)s',
        )

        try:
            return self._execute(parsed_args)
        except RecoveryError as e:
            self._print(str(e))
            return 1
        except KeyboardInterrupt:
            self._print("\nCancelled.")
            return 1
        except Exception as e:
            self._print(f"Error: {str(e)}")
            return 1

    def _parse(self, args) -> argparse.Namespace:
        parsed = self.parser.parse_args(args)
        recovering = parsed.recover is not None or parsed.recover_non_contiguous is not None
        if parsed.sha1 is not None and not recovering:
            raise UsageError("-s is only valid with -r or -R")
        if parsed.recover_non_contiguous is not None and parsed.sha1 is None:
            raise UsageError("-R requires -s")
        parsed.digest = parse_sha1(parsed.sha1) if parsed.sha1 is not None else None
        return parsed

    def _execute(self, args) -> int:
        """Thực thi lệnh"""
        writable = not (args.info or args.list)
        with DiskImage(args.disk, writable=writable) as image:
            analyzer = FATAnalyzer(image)
            if args.info:
                return self._handle_info(analyzer)
            if args.list:
                return self._handle_list(analyzer)
            if args.recover is not None:
                return self._handle_recovery(args.recover, analyzer.recover(args.recover, args.digest), args.digest)
            name = args.recover_non_contiguous
            return self._handle_recovery(name, analyzer.recover_non_contiguous(name, args.digest), args.digest)

    def _handle_info(self, analyzer: FATAnalyzer) -> int:
        analyzer.validate()
        info = analyzer.volume_info()
        self._print(f"Number of FATs = {info['num_fats']}")
        self._print(f"Number of bytes per sector = {info['bytes_per_sector']}")
        self._print(f"Number of sectors per cluster = {info['sectors_per_cluster']}")
        self._print(f"Number of reserved sectors = {info['reserved_sectors']}")
        return 0

    def _handle_list(self, analyzer: FATAnalyzer) -> int:
        lines, count = analyzer.list_root()
        for line in lines:
            self._print(line)
        self._print(f"Total number of entries = {count}")
        return 0

    def _handle_recovery(self, filename: str, clusters, digest) -> int:
        logging.debug(f"{filename}: linked clusters {clusters}")
        if digest is not None:
            self._print(f"{filename}: successfully recovered with SHA-1")
        else:
            self._print(f"{filename}: successfully recovered")
        return 0

    def _print(self, text: str, end: str = '\n') -> None:
        print(text, end=end, file=self.stdout)


def main() -> int:
    """Hàm main để chạy công cụ khôi phục FAT32"""
    cli = FATRecoveryCLI()
    return cli.run()
