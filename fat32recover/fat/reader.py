import logging

from ..boot_sector import VolumeGeometry
from ..constants import (
    END_OF_CHAIN_MIN, FAT32_CLUSTER_MASK, FAT_ENTRY_SIZE, FIRST_DATA_CLUSTER, FREE_CLUSTER
)
from ..disk_utils import DiskImage


def cluster_to_offset(geometry: VolumeGeometry, cluster: int) -> int:
    """Byte offset in the image of the first byte of a data cluster"""
    if cluster < FIRST_DATA_CLUSTER:
        raise ValueError(f"Cluster {cluster} is reserved and has no data")
    sector = (cluster - 2) * geometry.sectors_per_cluster + geometry.first_data_sector
    return sector * geometry.bytes_per_sector


def fat_entry_offset(geometry: VolumeGeometry, cluster: int, copy: int = 0) -> int:
    """Byte offset of the FAT entry for a cluster inside FAT copy `copy`"""
    return geometry.fat_offset(copy) + cluster * FAT_ENTRY_SIZE


def is_end_of_chain(value: int) -> bool:
    return value >= END_OF_CHAIN_MIN


class FatTables:
    """Access to every FAT copy of the volume"""

    def __init__(self, image: DiskImage, geometry: VolumeGeometry):
        self.image = image
        self.geometry = geometry

    def read_entry(self, cluster: int, copy: int = 0) -> int:
        """Read a specific entry from the FAT"""
        value = self.image.read_u32(fat_entry_offset(self.geometry, cluster, copy))
        return value & FAT32_CLUSTER_MASK

    def write_entry(self, cluster: int, value: int) -> None:
        """Write the same link value into every FAT copy"""
        for copy in range(self.geometry.num_fats):
            self.image.write_u32(fat_entry_offset(self.geometry, cluster, copy), value)
        logging.debug(f"FAT[{cluster}] = 0x{value:08X} in {self.geometry.num_fats} copies")

    def follow_chain(self, start_cluster: int):
        """Yield the clusters of a chain, following FAT copy 0"""
        seen = set()
        cluster = start_cluster
        while cluster != FREE_CLUSTER and not is_end_of_chain(cluster):
            if cluster < FIRST_DATA_CLUSTER:
                logging.warning(f"Chain from cluster {start_cluster} points at reserved cluster {cluster}")
                return
            if cluster in seen:
                logging.warning(f"Chain from cluster {start_cluster} loops back to cluster {cluster}")
                return
            seen.add(cluster)
            yield cluster
            cluster = self.read_entry(cluster)

    def copies_identical(self) -> bool:
        """Compare every FAT copy against copy 0"""
        if self.geometry.num_fats < 2:
            return True
        size = self.geometry.fat_size
        primary = self.image.read(self.geometry.fat_offset(0), size)
        for copy in range(1, self.geometry.num_fats):
            if self.image.read(self.geometry.fat_offset(copy), size) != primary:
                logging.debug(f"FAT copy {copy + 1} differs from primary FAT")
                return False
        return True
