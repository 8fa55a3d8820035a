"""Configuration for the snowflake id generator.

The generator produces timestamp_committed values as time ordered snowflake
ids. The ids give a total ordering of all log entries. That ordering matches
the ordering of the leaves, both over all logs and within one tenant's log.
Each id maps to exactly one log position, and no id appears in more than one
tenant log. An id is 64 bits, so it fits wherever a time ordered integer
timestamp is expected. It can also be composed into a 256 bit key for data
recovery and limited proof of exclusion.
"""

from dataclasses import dataclass

# Bits of the id reserved for the millisecond timestamp. With millisecond
# precision this gives an epoch of roughly 34 years.
TIME_BITS = 40
TIME_SHIFT = 64 - TIME_BITS

TIME_MASK = ((1 << TIME_BITS) - 1) << TIME_SHIFT

_UINT8_LIMIT = 1 << 8


@dataclass(frozen=True)
class Config:
    """Settings for an id generator.

    commitment_epoch selects the reference zero time; the current epoch is 1.
    worker_cidr picks the bits of pod_ip, a private address, that make up the
    worker id. allow_spins bounds the retries of a contended update; zero
    means a single attempt.
    """

    commitment_epoch: int = 0
    worker_cidr: str = ""
    pod_ip: str = ""
    allow_spins: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.commitment_epoch < _UINT8_LIMIT:
            raise ValueError(
                f"commitment epoch must fit in one byte: {self.commitment_epoch}"
            )
        if not 0 <= self.allow_spins < _UINT8_LIMIT:
            raise ValueError(f"allow spins must fit in one byte: {self.allow_spins}")