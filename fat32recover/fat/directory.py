import struct
from dataclasses import dataclass
from typing import Iterator, List, Tuple

from ..constants import (
    ATTR_DIRECTORY, ATTR_LONG_NAME, ATTR_VOLUME_ID, DELETED_MARKER, DIR_BASE_SIZE,
    DIR_ENTRY_SIZE, DIR_NAME_SIZE, END_OF_DIRECTORY
)
from ..disk_utils import DiskImage
from .reader import FatTables, cluster_to_offset


@dataclass(frozen=True)
class DirectoryEntry:
    """A 32-byte short directory entry and where it lives in the image"""

    offset: int
    name: bytes
    attr: int
    start_cluster: int
    file_size: int

    @classmethod
    def from_bytes(cls, offset: int, entry: bytes) -> "DirectoryEntry":
        start_cluster_high = struct.unpack('<H', entry[20:22])[0]
        start_cluster_low = struct.unpack('<H', entry[26:28])[0]
        return cls(
            offset=offset,
            name=bytes(entry[0:DIR_NAME_SIZE]),
            attr=entry[11],
            start_cluster=(start_cluster_high << 16) | start_cluster_low,
            file_size=struct.unpack('<I', entry[28:32])[0],
        )

    @property
    def is_deleted(self) -> bool:
        return self.name[0] == DELETED_MARKER

    @property
    def is_long_name(self) -> bool:
        return (self.attr & ATTR_LONG_NAME) == ATTR_LONG_NAME

    @property
    def is_volume_label(self) -> bool:
        return bool(self.attr & ATTR_VOLUME_ID) and not self.is_long_name

    @property
    def is_directory(self) -> bool:
        return bool(self.attr & ATTR_DIRECTORY)

    @property
    def display_name(self) -> str:
        """8.3 name as shown in listings: NAME/, NAME.EXT or NAME"""
        base = self.name[0:DIR_BASE_SIZE].split(b' ', 1)[0]
        text = base.decode('ascii', errors='replace')
        if self.is_directory:
            return text + '/'
        ext = self.name[DIR_BASE_SIZE:DIR_NAME_SIZE]
        if ext[0:1] != b' ':
            text += '.' + ext.split(b' ', 1)[0].decode('ascii', errors='replace')
        return text


def iter_directory_entries(image: DiskImage, fat: FatTables,
                           start_cluster: int) -> Iterator[DirectoryEntry]:
    """Yield every entry of a directory in on-disk order.

    A 0x00 name byte ends the current cluster; a cluster is never scanned
    past its entries-per-cluster bound. Deleted and long-name entries are
    yielded too, callers filter them.
    """
    geometry = fat.geometry
    for cluster in fat.follow_chain(start_cluster):
        base = cluster_to_offset(geometry, cluster)
        for index in range(geometry.entries_per_cluster):
            offset = base + index * DIR_ENTRY_SIZE
            raw = image.read(offset, DIR_ENTRY_SIZE)
            if raw[0] == END_OF_DIRECTORY:
                break
            yield DirectoryEntry.from_bytes(offset, raw)


def format_listing_line(entry: DirectoryEntry) -> str:
    if entry.is_directory:
        return f"{entry.display_name} (starting cluster = {entry.start_cluster})"
    if entry.file_size == 0:
        return f"{entry.display_name} (size = 0)"
    return f"{entry.display_name} (size = {entry.file_size}, starting cluster = {entry.start_cluster})"


def list_directory(image: DiskImage, fat: FatTables, start_cluster: int) -> Tuple[List[str], int]:
    """Render the live entries of a directory; returns (lines, entry count)"""
    lines = []
    for entry in iter_directory_entries(image, fat, start_cluster):
        if entry.is_deleted or entry.is_long_name or entry.is_volume_label:
            continue
        lines.append(format_listing_line(entry))
    return lines, len(lines)
