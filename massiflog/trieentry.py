"""Trie entries: the per leaf companion records stored in a massif blob.

Each entry is 64 bytes: a 32 byte trie key H(DOMAIN || LOGID || APPID),
24 extra bytes and an 8 byte big endian idtimestamp.
"""

import hashlib

TRIE_ENTRY_BYTES = 32 * 2
TRIE_KEY_BYTES = 32
TRIE_KEY_END = TRIE_KEY_BYTES
TRIE_ENTRY_ID_TIMESTAMP_START = 32 + 24
TRIE_ENTRY_SNOWFLAKE_ID_BYTES = 8
TRIE_ENTRY_ID_TIMESTAMP_END = TRIE_ENTRY_ID_TIMESTAMP_START + TRIE_ENTRY_SNOWFLAKE_ID_BYTES
TRIE_ENTRY_EXTRA_BYTES_START = 32
TRIE_ENTRY_EXTRA_BYTES_SIZE = 24
TRIE_ENTRY_EXTRA_BYTES_END = TRIE_ENTRY_EXTRA_BYTES_START + TRIE_ENTRY_EXTRA_BYTES_SIZE


def trie_entry_offset(index_start: int, leaf_index: int) -> int:
    """Return the byte offset of the trie entry for a leaf index."""
    return index_start + leaf_index * TRIE_ENTRY_BYTES


def _field(trie_data, index_start: int, trie_index: int, start: int, end: int) -> bytes:
    offset = trie_entry_offset(index_start, trie_index)
    if offset + end > len(trie_data):
        raise IndexError(
            f"trie entry {trie_index} is beyond the end of the data ({len(trie_data)} bytes)"
        )
    return bytes(trie_data[offset + start:offset + end])


def get_trie_entry(trie_data, index_start: int, trie_index: int) -> bytes:
    """Return the whole 64 byte trie entry."""
    return _field(trie_data, index_start, trie_index, 0, TRIE_ENTRY_BYTES)


def get_trie_key(trie_data, index_start: int, trie_index: int) -> bytes:
    """Return the 32 byte trie key."""
    return _field(trie_data, index_start, trie_index, 0, TRIE_KEY_END)


def get_idtimestamp(trie_data, index_start: int, trie_index: int) -> bytes:
    """Return the 8 byte big endian idtimestamp."""
    return _field(
        trie_data,
        index_start,
        trie_index,
        TRIE_ENTRY_ID_TIMESTAMP_START,
        TRIE_ENTRY_ID_TIMESTAMP_END,
    )


def get_extra_bytes(trie_data, index_start: int, trie_index: int) -> bytes:
    """Return the 24 extra bytes of the trie value."""
    return _field(
        trie_data,
        index_start,
        trie_index,
        TRIE_ENTRY_EXTRA_BYTES_START,
        TRIE_ENTRY_EXTRA_BYTES_END,
    )


def _copy_into(trie_data: bytearray, start: int, size: int, source: bytes) -> None:
    count = min(size, len(source))
    trie_data[start:start + count] = source[:count]


def set_trie_entry(
    trie_data: bytearray,
    index_start: int,
    trie_index: int,
    id_timestamp: int,
    extra_bytes: bytes | None,
    trie_key: bytes,
) -> None:
    """Write the trie key, extra bytes and idtimestamp in place.

    Longer sources are truncated to their field; shorter ones overwrite only
    their own length. Extra bytes are left untouched when None.
    """
    offset = trie_entry_offset(index_start, trie_index)
    if offset + TRIE_ENTRY_BYTES > len(trie_data):
        raise IndexError(
            f"trie entry {trie_index} is beyond the end of the data ({len(trie_data)} bytes)"
        )
    _copy_into(trie_data, offset, TRIE_KEY_END, trie_key)
    if extra_bytes is not None:
        _copy_into(
            trie_data,
            offset + TRIE_ENTRY_EXTRA_BYTES_START,
            TRIE_ENTRY_EXTRA_BYTES_SIZE,
            extra_bytes,
        )
    trie_data[
        offset + TRIE_ENTRY_ID_TIMESTAMP_START:offset + TRIE_ENTRY_ID_TIMESTAMP_END
    ] = id_timestamp.to_bytes(TRIE_ENTRY_SNOWFLAKE_ID_BYTES, "big")


def new_trie_key(domain: int, log_id: bytes, app_id: bytes) -> bytes:
    """Return SHA-256(DOMAIN || LOGID || APPID) as the 32 byte trie key."""
    domain = int(domain)
    if not 0 <= domain <= 255:
        raise ValueError(f"domain must fit in one byte: {domain}")
    digest = hashlib.sha256()
    digest.update(bytes([domain]))
    digest.update(log_id)
    digest.update(app_id)
    return digest.digest()


def new_empty_trie_entry() -> bytearray:
    """Return a zeroed trie entry."""
    return bytearray(TRIE_ENTRY_BYTES)