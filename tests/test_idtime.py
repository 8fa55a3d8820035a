from datetime import datetime, timezone

import pytest

from massiflog.snowflakeid.idtime import (
    epoch_ms,
    epoch_time_utc,
    id_milli_split,
    id_time,
    id_unix_milli,
)


@pytest.mark.parametrize(
    "id_, want_ms, want_seq",
    [
        ((1 << 64) - 1, (1 << 40) - 1, 0xFFFFFF),
        ((1 << 24) | (1 << 8) | 1, 1, 257),
    ],
)
def test_id_milli_split(id_, want_ms, want_seq):
    assert id_milli_split(id_) == (want_ms, want_seq)


@pytest.mark.parametrize("id_", [-1, 1 << 64])
def test_id_milli_split_rejects_out_of_range(id_):
    with pytest.raises(ValueError):
        id_milli_split(id_)


def test_epoch_ms():
    assert epoch_ms(0) == 0
    assert epoch_ms(1) == (1 << 40) - 1


def test_epoch_ms_rejects_wide_epoch():
    with pytest.raises(ValueError):
        epoch_ms(256)


def test_epoch_time_utc_zero_is_unix_epoch():
    assert epoch_time_utc(0) == datetime(1970, 1, 1, tzinfo=timezone.utc)


def test_epoch_time_utc_matches_epoch_ms():
    start = epoch_time_utc(1)
    assert start.tzinfo == timezone.utc
    assert round(start.timestamp() * 1000) == epoch_ms(1)


def test_id_time_ignores_sequence_bits():
    start = epoch_time_utc(1)
    with_seq = id_time((5 << 24) | 0xABCDEF, start)
    without_seq = id_time(5 << 24, start)
    assert with_seq == without_seq
    assert round((with_seq - start).total_seconds() * 1000) == 5


def test_id_unix_milli_epoch_zero():
    assert id_unix_milli((5 << 24) | 3, 0) == 5


def test_id_unix_milli_epoch_one():
    assert id_unix_milli((1 << 24) | 7, 1) == 1 << 40


def test_id_unix_milli_agrees_with_id_time():
    id_ = (123456 << 24) | 42
    moment = id_time(id_, epoch_time_utc(1))
    assert round(moment.timestamp() * 1000) == id_unix_milli(id_, 1)