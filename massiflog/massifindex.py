"""Merkle mountain range index arithmetic and massif location helpers.

MMR indices and leaf indices are both zero based. A massif of height h
(one based) holds 2**(h-1) leaves.
"""


def _all_ones(value: int) -> bool:
    return value > 0 and value & (value + 1) == 0


def height_index_leaf_count(height_index: int) -> int:
    """Return the number of leaves under a perfect tree of the given height index."""
    if height_index < 0:
        raise ValueError(f"height index must not be negative: {height_index}")
    return 1 << height_index


def _leaf_count(mmr_size: int) -> int:
    """Return the number of leaves in an MMR of the given size.

    The result is the bitmap of the perfect trees that make up the MMR,
    one bit per peak, which is numerically the leaf count.
    """
    if mmr_size <= 0:
        return 0
    remaining = mmr_size
    peak_size = (1 << mmr_size.bit_length()) - 1
    peak_map = 0
    while peak_size > 0:
        peak_map <<= 1
        if remaining >= peak_size:
            remaining -= peak_size
            peak_map |= 1
        peak_size >>= 1
    return peak_map


def leaf_index(mmr_index: int) -> int:
    """Return the leaf index of the last leaf added at or before mmr_index."""
    if mmr_index < 0:
        raise ValueError(f"mmr index must not be negative: {mmr_index}")
    return _leaf_count(mmr_index + 1) - 1


def mmr_index(leaf_index: int) -> int:
    """Return the MMR index of the leaf with the given leaf index."""
    if leaf_index < 0:
        raise ValueError(f"leaf index must not be negative: {leaf_index}")
    total = 0
    remaining = leaf_index
    while remaining > 0:
        height = remaining.bit_length()
        total += (1 << height) - 1
        remaining -= 1 << (height - 1)
    return total


def index_height(mmr_index: int) -> int:
    """Return the zero based height of the node at mmr_index."""
    if mmr_index < 0:
        raise ValueError(f"mmr index must not be negative: {mmr_index}")
    pos = mmr_index + 1
    while not _all_ones(pos):
        # jump left to the same position in the perfect tree to the left
        pos = pos - (1 << (pos.bit_length() - 1)) + 1
    return pos.bit_length() - 1


def peaks(mmr_index: int) -> list[int]:
    """Return the MMR indices of the peaks of the MMR whose last node is mmr_index.

    Peaks are listed from the highest (left most) to the lowest.
    """
    if mmr_index < 0:
        raise ValueError(f"mmr index must not be negative: {mmr_index}")
    remaining = mmr_index + 1
    peak_size = (1 << remaining.bit_length()) - 1
    found = []
    position = 0
    while peak_size > 0:
        if remaining >= peak_size:
            position += peak_size
            found.append(position - 1)
            remaining -= peak_size
        peak_size >>= 1
    return found


def leaf_minus_spur_sum(leaf_index: int) -> int:
    """Return the leaf index less the sum of its spurs.

    This is the length of the peak stack carried by the massif with the same
    index, and equals the number of set bits in leaf_index.
    """
    if leaf_index < 0:
        raise ValueError(f"leaf index must not be negative: {leaf_index}")
    return bin(leaf_index).count("1")


def _massif_max_leaves(massif_height: int) -> int:
    if massif_height < 1:
        raise ValueError(f"massif height must be at least 1: {massif_height}")
    return height_index_leaf_count(massif_height - 1)


def massif_index_from_leaf_index(massif_height: int, leaf_index: int) -> int:
    """Return the index of the massif that stores the given leaf index."""
    return leaf_index // _massif_max_leaves(massif_height)


def massif_index_from_mmr_index(massif_height: int, mmr_index: int) -> int:
    """Return the index of the massif that stores the given MMR index."""
    return massif_index_from_leaf_index(massif_height, leaf_index(mmr_index))


def massif_from_leaf(massif_height: int, leaf_index: int) -> int:
    """Return the massif index for a leaf index and one based massif height."""
    return leaf_index // _massif_max_leaves(massif_height)