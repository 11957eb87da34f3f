import pytest

from pymp4_struct import Fixed16, Fixed32, decode_fixed16, decode_fixed32, encode_fixed16, encode_fixed32


def test_decode_fixed32_splits_parts():
    rate = decode_fixed32(bytes.fromhex("00018000"))
    assert rate.integer == 1
    assert rate.fraction == 0x8000
    assert float(rate) == 1.5
    assert str(rate) == "1"


def test_decode_fixed16_splits_parts():
    volume = decode_fixed16(bytes.fromhex("0140"))
    assert volume.integer == 1
    assert volume.fraction == 0x40
    assert float(volume) == 1.25


@pytest.mark.parametrize("raw", [0, 1, 0x0100, 0x7FFF, 0x8000, 0xFFFF])
def test_fixed16_round_trip(raw):
    value = Fixed16(raw)
    assert decode_fixed16(encode_fixed16(value)) == value
    data = raw.to_bytes(2, "big")
    assert encode_fixed16(decode_fixed16(data)) == data


@pytest.mark.parametrize("raw", [0, 1, 0x00010000, 0x0001FFFF, 0xFFFF0000, 0xFFFFFFFF])
def test_fixed32_round_trip(raw):
    value = Fixed32(raw)
    assert decode_fixed32(encode_fixed32(value)) == value
    data = raw.to_bytes(4, "big")
    assert encode_fixed32(decode_fixed32(data)) == data


def test_from_parts():
    assert Fixed32.from_parts(1, 0) == Fixed32(0x00010000)
    assert Fixed16.from_parts(2, 0x80).to_bytes() == b"\x02\x80"
    with pytest.raises(ValueError):
        Fixed16.from_parts(256)
    with pytest.raises(ValueError):
        Fixed32.from_parts(0, 1 << 16)


def test_raw_value_must_fit():
    with pytest.raises(ValueError):
        Fixed16(1 << 16)
    with pytest.raises(ValueError):
        Fixed32(-1)


def test_formats_do_not_compare_equal():
    assert Fixed16(0x0100) != Fixed32(0x0100)
