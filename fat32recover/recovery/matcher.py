from typing import Optional, Tuple, Union

from ..constants import DELETED_MARKER, DIR_BASE_SIZE, DIR_EXT_SIZE, DIR_NAME_SIZE

PAD = 0x20


def encode_filename(filename: Union[str, bytes]) -> bytes:
    """User filename as bytes; raises UnicodeEncodeError outside ASCII"""
    if isinstance(filename, bytes):
        return filename
    return filename.encode('ascii')


def split_filename(filename: bytes) -> Tuple[bytes, Optional[bytes]]:
    """Split at the first '.' into (base, extension); extension is None without a dot"""
    base, dot, ext = filename.partition(b'.')
    return base, (ext if dot else None)


def _is_padding(field: bytes) -> bool:
    return all(b == PAD for b in field)


def matches_deleted_entry(name: bytes, filename: Union[str, bytes]) -> bool:
    """Tell whether a deleted 8.3 name could have been `filename`.

    The first name byte was overwritten with 0xE5 when the file was deleted,
    so position 0 of the base always matches and is never read.
    """
    if len(name) != DIR_NAME_SIZE or name[0] != DELETED_MARKER:
        return False

    try:
        encoded = encode_filename(filename)
    except UnicodeEncodeError:
        return False

    base, ext = split_filename(encoded)
    if not 1 <= len(base) <= DIR_BASE_SIZE:
        return False

    for i in range(1, len(base)):
        if base[i] != name[i]:
            return False
    if not _is_padding(name[len(base):DIR_BASE_SIZE]):
        return False

    entry_ext = name[DIR_BASE_SIZE:DIR_NAME_SIZE]
    if ext is None:
        return _is_padding(entry_ext)
    if len(ext) > DIR_EXT_SIZE:
        return False
    return entry_ext[:len(ext)] == ext and _is_padding(entry_ext[len(ext):])
