import logging
from typing import List, Union

from ..constants import END_OF_CHAIN, FIRST_DATA_CLUSTER
from ..disk_utils import DiskImage
from ..fat.directory import DirectoryEntry
from ..fat.reader import FatTables
from .matcher import encode_filename


def cluster_count(file_size: int, cluster_size: int) -> int:
    """Number of clusters a file of `file_size` bytes occupies"""
    return (file_size + cluster_size - 1) // cluster_size


def restore_first_char(image: DiskImage, entry: DirectoryEntry, filename: Union[str, bytes]) -> None:
    """Put the original first character back over the 0xE5 marker"""
    first = encode_filename(filename)[0]
    image.write_byte(entry.offset, first)
    logging.debug(f"Restored name byte 0x{first:02X} at offset 0x{entry.offset:X}")


def rebuild_contiguous_chain(fat: FatTables, start_cluster: int, file_size: int) -> List[int]:
    """Link `start_cluster` onwards as one contiguous chain in every FAT copy.

    Returns the clusters written, empty for a zero-length file.
    """
    count = cluster_count(file_size, fat.geometry.cluster_size)
    clusters = list(range(start_cluster, start_cluster + count))
    for k, cluster in enumerate(clusters):
        next_value = END_OF_CHAIN if k == count - 1 else cluster + 1
        fat.write_entry(cluster, next_value)
    logging.info(f"Rebuilt chain of {count} cluster(s) from cluster {start_cluster}")
    return clusters


def check_chain_fits(fat: FatTables, start_cluster: int, file_size: int) -> None:
    """Raise ValueError when the chain would touch reserved or out-of-table FAT entries"""
    count = cluster_count(file_size, fat.geometry.cluster_size)
    if count == 0:
        return
    if start_cluster < FIRST_DATA_CLUSTER:
        raise ValueError(f"File of {file_size} bytes starts at reserved cluster {start_cluster}")
    if start_cluster + count > fat.geometry.fat_entry_count:
        raise ValueError(f"Clusters {start_cluster}..{start_cluster + count - 1} run past the end of the FAT")


def reconstruct(image: DiskImage, fat: FatTables, entry: DirectoryEntry,
                filename: Union[str, bytes]) -> List[int]:
    # Checked up front so a refused recovery leaves the image untouched
    check_chain_fits(fat, entry.start_cluster, entry.file_size)
    restore_first_char(image, entry, filename)
    return rebuild_contiguous_chain(fat, entry.start_cluster, entry.file_size)
