import pytest

from massiflog.tags import (
    Hex64TagOverflowError,
    MissingFirstIndexTagError,
    decode_tag_hex64,
    encode_tag_hex64,
    get_first_index,
    get_last_id_hex,
    set_first_index,
)


@pytest.mark.parametrize("value", [0, 1, 7, 0x0102030405060708, (1 << 64) - 1])
def test_hex64_round_trip(value):
    encoded = encode_tag_hex64(value)
    assert len(encoded) == 16
    assert decode_tag_hex64(encoded) == value


def test_encode_is_zero_padded():
    assert encode_tag_hex64(0x0102030405060708) == "0102030405060708"


def test_encoding_sorts_lexically_like_numbers():
    values = [5, 300, 16, 1 << 40, 0]
    encoded = sorted(encode_tag_hex64(v) for v in values)
    assert [decode_tag_hex64(e) for e in encoded] == sorted(values)


def test_decode_accepts_upper_case():
    assert decode_tag_hex64("00000000000000FF") == decode_tag_hex64("00000000000000ff")


def test_decode_overflow():
    with pytest.raises(Hex64TagOverflowError):
        decode_tag_hex64("010203040506070809")


@pytest.mark.parametrize("value", ["zz", "abc", "", "01"])
def test_decode_invalid(value):
    with pytest.raises(ValueError):
        decode_tag_hex64(value)


@pytest.mark.parametrize("value", [-1, 1 << 64])
def test_encode_out_of_range(value):
    with pytest.raises(ValueError):
        encode_tag_hex64(value)


def test_set_and_get_first_index():
    tags = {}
    set_first_index(22, tags)
    assert get_first_index(tags) == 22
    assert len(tags["firstindex"]) == 16


def test_get_first_index_missing():
    with pytest.raises(MissingFirstIndexTagError):
        get_first_index({"lastid": "0000000000000001"})


def test_get_last_id_hex():
    assert get_last_id_hex({"lastid": "0102030405060708"}) == "0102030405060708"
    assert get_last_id_hex({}) == ""