"""Blob tag helpers; values are zero padded hex so they sort lexically."""

import re

TAG_KEY_FIRST_INDEX = "firstindex"
TAG_KEY_LAST_ID = "lastid"

_HEX = re.compile(r"(?:[0-9a-fA-F]{2})*")
_UINT64_LIMIT = 1 << 64


class Hex64TagOverflowError(ValueError):
    """Raised when a 64 bit hex tag value holds more than 8 bytes."""


class MissingFirstIndexTagError(LookupError):
    """Raised when the required 'firstindex' tag is missing."""


def decode_tag_hex64(tag_value: str) -> int:
    """Decode a big endian hexadecimal tag value into an integer."""
    if not _HEX.fullmatch(tag_value):
        raise ValueError(f"invalid hex tag value: {tag_value!r}")
    data = bytes.fromhex(tag_value)
    if len(data) > 8:
        raise Hex64TagOverflowError(
            "a tag value expected to be 64 bit hex had more than 8 bytes of data: "
            f"{tag_value}"
        )
    if len(data) < 8:
        raise ValueError(f"tag value must hold 8 bytes of data: {tag_value!r}")
    return int.from_bytes(data, "big")


def encode_tag_hex64(tag_value: int) -> str:
    """Encode an unsigned 64 bit integer as 16 hex digits."""
    if not 0 <= tag_value < _UINT64_LIMIT:
        raise ValueError(f"value out of unsigned 64 bit range: {tag_value}")
    return f"{tag_value:016x}"


def get_first_index(tags: dict[str, str]) -> int:
    """Return the decoded 'firstindex' tag."""
    try:
        value = tags[TAG_KEY_FIRST_INDEX]
    except KeyError:
        raise MissingFirstIndexTagError(
            "the required tag 'firstindex' is missing"
        ) from None
    return decode_tag_hex64(value)


def get_last_id_hex(tags: dict[str, str]) -> str:
    """Return the raw 'lastid' tag, or an empty string if absent."""
    return tags.get(TAG_KEY_LAST_ID, "")


def set_first_index(first_index: int, tags: dict[str, str]) -> None:
    """Store the first index in the tags, zero padded to preserve sort order."""
    tags[TAG_KEY_FIRST_INDEX] = encode_tag_hex64(first_index)