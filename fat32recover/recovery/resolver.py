import hashlib
import logging
from typing import List, Optional

from ..constants import FIRST_DATA_CLUSTER, MAX_CANDIDATES, SHA1_DIGEST_SIZE
from ..disk_utils import DiskImage
from ..errors import AmbiguousCandidates, FileNotFound, ImageBoundsError, TooManyCandidates
from ..fat.directory import DirectoryEntry, iter_directory_entries
from ..fat.reader import FatTables, cluster_to_offset
from .matcher import matches_deleted_entry


class CandidateSet:
    """Deleted entries matching one filename, in scan order, bounded in size"""

    def __init__(self, filename: str, capacity: int = MAX_CANDIDATES):
        self.filename = filename
        self.capacity = capacity
        self._entries: List[DirectoryEntry] = []

    def add(self, entry: DirectoryEntry) -> None:
        if len(self._entries) >= self.capacity:
            raise TooManyCandidates(self.filename)
        self._entries.append(entry)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)

    def __getitem__(self, index: int) -> DirectoryEntry:
        return self._entries[index]


def collect_candidates(image: DiskImage, fat: FatTables, dir_cluster: int,
                       filename: str, capacity: int = MAX_CANDIDATES) -> CandidateSet:
    """Scan a directory and keep every deleted entry whose name matches"""
    candidates = CandidateSet(filename, capacity)
    # Long-name fragments are visited as well; the matcher only looks at raw name bytes
    for entry in iter_directory_entries(image, fat, dir_cluster):
        if matches_deleted_entry(entry.name, filename):
            logging.debug(f"Candidate at offset 0x{entry.offset:X}: cluster {entry.start_cluster}, size {entry.file_size}")
            candidates.add(entry)
    logging.info(f"{filename}: {len(candidates)} candidate(s) in directory cluster {dir_cluster}")
    return candidates


def content_sha1(image: DiskImage, fat: FatTables, entry: DirectoryEntry) -> bytes:
    """SHA-1 of `file_size` bytes read from the entry's starting cluster onwards"""
    if entry.file_size == 0:
        return hashlib.sha1(b'').digest()
    if entry.start_cluster < FIRST_DATA_CLUSTER:
        raise ValueError(f"Entry at offset 0x{entry.offset:X} has {entry.file_size} bytes but no data cluster")
    offset = cluster_to_offset(fat.geometry, entry.start_cluster)
    return hashlib.sha1(image.read(offset, entry.file_size)).digest()


def resolve_candidate(image: DiskImage, fat: FatTables, candidates: CandidateSet,
                      sha1: Optional[bytes] = None) -> DirectoryEntry:
    """Pick the single entry to recover, or raise why none can be picked"""
    if sha1 is None:
        if len(candidates) == 0:
            raise FileNotFound(candidates.filename)
        if len(candidates) > 1:
            raise AmbiguousCandidates(candidates.filename)
        return candidates[0]

    if len(sha1) != SHA1_DIGEST_SIZE:
        raise ValueError(f"SHA-1 digest must be {SHA1_DIGEST_SIZE} bytes, got {len(sha1)}")

    for entry in candidates:
        try:
            digest = content_sha1(image, fat, entry)
        except (ValueError, ImageBoundsError) as e:
            logging.warning(f"Skipping candidate at offset 0x{entry.offset:X}: {e}")
            continue
        logging.debug(f"Candidate at offset 0x{entry.offset:X} has SHA-1 {digest.hex()}")
        if digest == sha1:
            return entry
    raise FileNotFound(candidates.filename)
