"""Conversions between snowflake ids and times."""

from datetime import datetime, timedelta, timezone

from massiflog.snowflakeid.config import TIME_BITS, TIME_MASK, TIME_SHIFT

_UINT64_LIMIT = 1 << 64
_INT64_MAX = (1 << 63) - 1
_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class MilliEpochOverflowError(OverflowError):
    """Raised when an id's milliseconds overflow the epoch range."""


def _check_id(id_: int) -> None:
    if not 0 <= id_ < _UINT64_LIMIT:
        raise ValueError(f"id out of unsigned 64 bit range: {id_}")


def epoch_ms(epoch: int) -> int:
    """Return the unix time in milliseconds at which the given epoch starts."""
    if not 0 <= epoch < 256:
        raise ValueError(f"epoch must fit in one byte: {epoch}")
    return epoch * ((1 << TIME_BITS) - 1)


def epoch_time_utc(epoch: int) -> datetime:
    """Return the start of the given epoch as an aware UTC datetime."""
    return _UNIX_EPOCH + timedelta(milliseconds=epoch_ms(epoch))


def id_time(id_: int, epoch_start: datetime) -> datetime:
    """Return the time encoded in an id, relative to the epoch start."""
    _check_id(id_)
    return epoch_start + timedelta(milliseconds=id_ >> TIME_SHIFT)


def id_milli_split(id_: int) -> tuple[int, int]:
    """Split an id into milliseconds since the epoch and machine/sequence bits.

    The second value is always below 2**24.
    """
    _check_id(id_)
    return id_ >> TIME_SHIFT, id_ & ~TIME_MASK & 0xFFFFFFFF


def id_unix_milli(id_: int, epoch: int) -> int:
    """Return the unix time in milliseconds encoded in an id."""
    ms, _ = id_milli_split(id_)
    total = ms + epoch_ms(epoch)
    if total > _INT64_MAX:
        raise MilliEpochOverflowError(
            f"{ms} to large (when added to epoch start): "
            "our epoch allows for up to 2^40 milliseconds"
        )
    return total