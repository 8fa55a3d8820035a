"""The fixed 32 byte header record at the start of every massif blob.

Layout (big endian):

    bytes 0-7    reserved
    bytes 8-15   last idtimestamp
    bytes 16-20  reserved
    bytes 21-22  version
    bytes 23-26  commitment epoch
    byte  27     massif height
    bytes 28-31  massif index
"""

import struct
from dataclasses import dataclass
from enum import IntEnum

from massiflog.massifindex import leaf_minus_spur_sum, mmr_index

VALUE_BYTES = 32
START_HEADER_SIZE = 32

MASSIF_START_KEY_LAST_ID_FIRST_BYTE = 8
MASSIF_START_KEY_LAST_ID_SIZE = 8
MASSIF_START_KEY_LAST_ID_END = MASSIF_START_KEY_LAST_ID_FIRST_BYTE + MASSIF_START_KEY_LAST_ID_SIZE
MASSIF_START_KEY_VERSION_FIRST_BYTE = 21
MASSIF_START_KEY_VERSION_SIZE = 2
MASSIF_START_KEY_VERSION_END = MASSIF_START_KEY_VERSION_FIRST_BYTE + MASSIF_START_KEY_VERSION_SIZE
MASSIF_START_KEY_EPOCH_FIRST_BYTE = MASSIF_START_KEY_VERSION_END
MASSIF_START_KEY_EPOCH_SIZE = 4
MASSIF_START_KEY_EPOCH_END = MASSIF_START_KEY_EPOCH_FIRST_BYTE + MASSIF_START_KEY_EPOCH_SIZE
MASSIF_START_KEY_MASSIF_HEIGHT_FIRST_BYTE = MASSIF_START_KEY_EPOCH_END
MASSIF_START_KEY_MASSIF_HEIGHT_SIZE = 1
MASSIF_START_KEY_MASSIF_HEIGHT_END = (
    MASSIF_START_KEY_MASSIF_HEIGHT_FIRST_BYTE + MASSIF_START_KEY_MASSIF_HEIGHT_SIZE
)
MASSIF_START_KEY_MASSIF_FIRST_BYTE = MASSIF_START_KEY_MASSIF_HEIGHT_END
MASSIF_START_KEY_MASSIF_SIZE = 4
MASSIF_START_KEY_MASSIF_END = MASSIF_START_KEY_MASSIF_FIRST_BYTE + MASSIF_START_KEY_MASSIF_SIZE
MASSIF_START_KEY_FIRST_INDEX_FIRST_BYTE = MASSIF_START_KEY_MASSIF_END

MASSIF_CURRENT_VERSION = 0


class KeyType(IntEnum):
    """Entry type codes; the first eight are reserved for the application."""

    APPLICATION_CONTENT = 0
    APPLICATION_LAST = 8
    MASSIF_START = 9
    MAX = 255


class MassifHeaderError(ValueError):
    """Raised when the fixed massif header is missing or malformed."""


def massif_first_leaf(massif_height: int, massif_index: int) -> int:
    """Return the MMR index of the first leaf in the given massif."""
    node_count = (1 << massif_height) - 1
    leaves_per_massif = (node_count + 1) // 2
    return mmr_index(leaves_per_massif * massif_index)


def encode_massif_start(
    last_id: int, version: int, epoch: int, massif_height: int, massif_index: int
) -> bytes:
    """Encode the massif details as a 32 byte header record."""
    start = bytearray(START_HEADER_SIZE)
    try:
        struct.pack_into(">Q", start, MASSIF_START_KEY_LAST_ID_FIRST_BYTE, last_id)
        struct.pack_into(">H", start, MASSIF_START_KEY_VERSION_FIRST_BYTE, version)
        struct.pack_into(">I", start, MASSIF_START_KEY_EPOCH_FIRST_BYTE, epoch)
        struct.pack_into("B", start, MASSIF_START_KEY_MASSIF_HEIGHT_FIRST_BYTE, massif_height)
        struct.pack_into(">I", start, MASSIF_START_KEY_MASSIF_FIRST_BYTE, massif_index)
    except struct.error as exc:
        raise ValueError(f"massif start field out of range: {exc}") from None
    return bytes(start)


@dataclass
class MassifStart:
    """The values encoded in the header record of a massif blob."""

    reserved: int = 0
    massif_height: int = 0
    data_epoch: int = 0
    version: int = MASSIF_CURRENT_VERSION
    commitment_epoch: int = 0
    massif_index: int = 0
    first_index: int = 0
    last_id: int = 0
    peak_stack_len: int = 0

    def to_bytes(self) -> bytes:
        """Encode as the 32 byte header record."""
        return encode_massif_start(
            self.last_id,
            self.version,
            self.commitment_epoch,
            self.massif_height,
            self.massif_index,
        )

    @classmethod
    def from_bytes(cls, data) -> "MassifStart":
        """Decode from data beginning with a header record."""
        return decode_massif_start(data)


def decode_massif_start(start) -> MassifStart:
    """Decode a header record, deriving the first index and peak stack length."""
    if len(start) < VALUE_BYTES:
        raise MassifHeaderError("the fixed header for the massif has the wrong type code")
    data = bytes(start[:START_HEADER_SIZE])
    (reserved,) = struct.unpack_from(">Q", data, 0)
    (last_id,) = struct.unpack_from(">Q", data, MASSIF_START_KEY_LAST_ID_FIRST_BYTE)
    (version,) = struct.unpack_from(">H", data, MASSIF_START_KEY_VERSION_FIRST_BYTE)
    (epoch,) = struct.unpack_from(">I", data, MASSIF_START_KEY_EPOCH_FIRST_BYTE)
    massif_height = data[MASSIF_START_KEY_MASSIF_HEIGHT_FIRST_BYTE]
    (massif_index,) = struct.unpack_from(">I", data, MASSIF_START_KEY_MASSIF_FIRST_BYTE)
    return MassifStart(
        reserved=reserved,
        massif_height=massif_height,
        version=version,
        commitment_epoch=epoch,
        massif_index=massif_index,
        first_index=massif_first_leaf(massif_height, massif_index),
        last_id=last_id,
        peak_stack_len=leaf_minus_spur_sum(massif_index),
    )


def new_massif_start(
    last_id: int,
    commitment_epoch: int,
    massif_height: int,
    massif_index: int,
    first_index: int,
) -> MassifStart:
    """Create a header at the current format version."""
    return MassifStart(
        massif_height=massif_height,
        data_epoch=0,
        version=MASSIF_CURRENT_VERSION,
        commitment_epoch=commitment_epoch,
        massif_index=massif_index,
        first_index=first_index,
        last_id=last_id,
    )