"""Time ordered, unique and monotonic snowflake id generation."""

import threading
import time
from datetime import datetime, timezone

from massiflog.snowflakeid.config import TIME_MASK, TIME_SHIFT
from massiflog.snowflakeid.idtime import epoch_ms, epoch_time_utc
from massiflog.snowflakeid.privateip import (
    MAX_WORKER_BITS,
    MIN_WORKER_BITS,
    worker_id_sequence_bits,
)

# Upper bound on the retries of a contended update of the generator state.
MAX_SPINS = 100

NANOS = 1_000_000

_UINT64_MASK = (1 << 64) - 1
_UINT16_LIMIT = 1 << 16

# A year before nanosecond unix time overflows a signed 64 bit integer. A clock
# reading past this point indicates a serious clock configuration problem.
_UNIX_NANO_EPOCH_END_SENTINEL = (
    int(datetime(2261, 1, 1, 1, 1, 1, tzinfo=timezone.utc).timestamp()) * 1_000_000_000 + 1
)


class WorkerBitRangeError(ValueError):
    """Raised when the worker id and sequence bits overflow their reserved space."""


class OverloadedError(RuntimeError):
    """Raised when the generator is overloaded for its configuration."""


class ClockError(RuntimeError):
    """Raised when the system time reading makes no realistic sense."""


class SequenceViolationError(RuntimeError):
    """Raised when two consecutive values break the monotonic or unique promise."""


class IDState:
    """Generator state for a unique, time ordered series of 64 bit ids.

    Ids hold a 40 bit millisecond timestamp followed by the worker id and a
    sequence counter. Time is sampled from a monotonic clock aligned with the
    wall clock when the generator is created.
    """

    def __init__(self, worker_id: int, seq_bits: int, commitment_epoch: int) -> None:
        if not 0 <= worker_id < _UINT16_LIMIT:
            raise ValueError(f"worker id must fit in 16 bits: {worker_id}")
        self._allow_spins = 0
        self._lock = threading.Lock()
        self._init_time(commitment_epoch)
        self._init_state(worker_id, seq_bits)

    @classmethod
    def from_config(cls, cfg) -> "IDState":
        """Create a generator from a Config."""
        worker_id, seq_bits = worker_id_sequence_bits(cfg)
        state = cls(worker_id, seq_bits, cfg.commitment_epoch)
        state._allow_spins = cfg.allow_spins
        return state

    def _init_time(self, epoch: int) -> None:
        wall_ns = time.time_ns()
        self._mono_start_ns = time.monotonic_ns()
        if wall_ns > _UNIX_NANO_EPOCH_END_SENTINEL:
            raise ClockError(
                "the clock reading is close to overflowing the limit of an int64: "
                "the reading from system time doesn't make any realistic sense"
            )
        self._epoch = epoch
        self._epoch_start = epoch_time_utc(epoch)
        self._start_wall_offset_ns = wall_ns - epoch_ms(epoch) * NANOS

    def _init_state(self, worker_id: int, seq_bits: int) -> None:
        if seq_bits > MAX_WORKER_BITS or MAX_WORKER_BITS - seq_bits < MIN_WORKER_BITS:
            raise WorkerBitRangeError(
                f"sequence bit count {seq_bits} is to large (check your CIDR config)"
            )
        if seq_bits < MIN_WORKER_BITS:
            raise WorkerBitRangeError(
                f"sequence bit count {seq_bits} is to small (check your CIDR config)"
            )
        self.worker_id_mask = ((1 << (MAX_WORKER_BITS - seq_bits)) - 1) << seq_bits
        self.masked_worker_id = worker_id << seq_bits
        self.seq_mask = (1 << seq_bits) - 1
        self.seq_bits = seq_bits
        self._monotonic = 0

    def _millisecond_now(self) -> int:
        elapsed = time.monotonic_ns() - self._mono_start_ns
        return ((elapsed + self._start_wall_offset_ns) // NANOS) & _UINT64_MASK

    def _compare_and_swap(self, old: int, new: int) -> bool:
        with self._lock:
            if self._monotonic != old:
                return False
            self._monotonic = new
            return True

    def next_id(self) -> int:
        """Return the next id in the series.

        Raises OverloadedError when the state could not be updated within the
        allowed number of retries; the caller may sleep briefly and retry.
        """
        for _ in range(self._allow_spins + 1):
            now = self._millisecond_now()
            last = self._monotonic

            last_time = last >> TIME_SHIFT
            last_seq = last & self.seq_mask

            if now > last_time:
                nxt = (now << TIME_SHIFT) & _UINT64_MASK
            elif last_seq == self.seq_mask:
                # sequence exhausted: force the next millisecond past the last one
                nxt = ((last_time + 1) << TIME_SHIFT) & _UINT64_MASK
            else:
                nxt = last + 1

            if nxt <= last:
                raise SequenceViolationError(
                    f"{last:016x}:{nxt:016x} {last_seq:02x}:{self.seq_mask:02x} "
                    f"{last_time}:{now}: the generator produced two consecutive values "
                    "that violate either the monotonic or the uniqueness promises"
                )

            if self._compare_and_swap(last, nxt):
                return nxt | self.masked_worker_id

        raise OverloadedError("the id generator is over loaded for its configuration")

    def epoch_start(self) -> datetime:
        """Return the wall clock start of the generator's commitment epoch."""
        return self._epoch_start

    @staticmethod
    def time_bits(id_: int) -> int:
        """Return the timestamp field of an id, still in place."""
        return id_ & TIME_MASK


def new_id_state(cfg) -> IDState:
    """Create a generator from a Config."""
    return IDState.from_config(cfg)