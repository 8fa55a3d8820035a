"""Mapping of MMR indices to entries in a massif peak stack."""

from massiflog.massifindex import index_height, peaks


def peak_stack_map(massif_height: int, mmr_index: int) -> dict[int, int] | None:
    """Map the peaks that belong in the peak stack to their stack positions.

    massif_height is one based. Only peaks at least as high as a full massif
    are carried in the stack. Returns None for a massif height of zero.
    """
    if massif_height == 0:
        return None
    return {
        peak: position
        for position, peak in enumerate(peaks(mmr_index))
        if index_height(peak) >= massif_height - 1
    }