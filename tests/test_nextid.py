import time
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from unittest import mock

import pytest

from massiflog.snowflakeid.config import TIME_SHIFT, Config
from massiflog.snowflakeid.idtime import id_time, id_unix_milli
from massiflog.snowflakeid.nextid import (
    ClockError,
    IDState,
    OverloadedError,
    WorkerBitRangeError,
    new_id_state,
)


def _config():
    return Config(
        commitment_epoch=1,
        worker_cidr="0.0.0.0/16",
        pod_ip="10.0.0.1",
        allow_spins=100,
    )


def test_init_state_sequence_bits_maxed():
    state = IDState(0, 16, 1)
    assert state.seq_mask == 0xFFFF
    assert state.seq_bits == 16


@pytest.mark.parametrize("seq_bits", [25, 17, 7])
def test_init_state_sequence_bits_rejected(seq_bits):
    with pytest.raises(WorkerBitRangeError):
        IDState(0, seq_bits, 1)


def test_worker_id_out_of_range():
    with pytest.raises(ValueError):
        IDState(1 << 16, 8, 1)


def test_masks_for_worker():
    state = IDState(3, 8, 1)
    assert state.masked_worker_id == 3 << 8
    assert state.worker_id_mask == 0xFFFF << 8


def test_ids_strictly_increase_and_carry_worker_id():
    state = IDState.from_config(_config())
    ids = [state.next_id() for _ in range(2000)]
    assert all(a < b for a, b in zip(ids, ids[1:]))
    assert all((i >> 8) & 0xFFFF == 1 for i in ids)


def test_id_time_close_to_wall_clock():
    state = new_id_state(_config())
    before = time.time_ns() // 1_000_000
    ms = id_unix_milli(state.next_id(), 1)
    after = time.time_ns() // 1_000_000
    assert before - 2000 <= ms <= after + 2000


def test_epoch_start_for_epoch_one():
    state = new_id_state(_config())
    assert state.epoch_start() == datetime(
        2004, 11, 3, 19, 53, 47, 775000, tzinfo=timezone.utc
    )


def test_id_time_monotonic():
    state = new_id_state(_config())
    ids = [state.next_id() for _ in range(500)]
    times = [id_time(i, state.epoch_start()) for i in ids]
    assert times == sorted(times)


def test_sequence_exhaustion_forces_next_millisecond():
    with mock.patch("time.monotonic_ns", return_value=5_000_000_000):
        state = IDState(0, 8, 1)
        ids = [state.next_id() for _ in range(257)]
    first_time = ids[0] >> TIME_SHIFT
    assert [i & 0xFF for i in ids[:256]] == list(range(256))
    assert all(i >> TIME_SHIFT == first_time for i in ids[:256])
    assert ids[256] >> TIME_SHIFT == first_time + 1
    assert ids[256] & 0xFF == 0


def test_clock_past_sentinel_rejected():
    far_future_ns = int(
        datetime(2262, 1, 1, tzinfo=timezone.utc).timestamp()
    ) * 1_000_000_000
    with mock.patch("time.time_ns", return_value=far_future_ns):
        with pytest.raises(ClockError):
            IDState(0, 8, 1)


def _collect(state, count):
    local = []
    while len(local) < count:
        try:
            local.append(state.next_id())
        except OverloadedError:
            time.sleep(0.001)
    return local


def test_ids_unique_across_threads():
    state = IDState.from_config(_config())
    with ThreadPoolExecutor(max_workers=4) as pool:
        batches = list(pool.map(lambda _: _collect(state, 500), range(4)))
    results = [i for batch in batches for i in batch]
    assert len(results) == 2000
    assert len(set(results)) == 2000
    assert all((i >> 8) & 0xFFFF == 1 for i in results)
    assert state.next_id() > max(results)