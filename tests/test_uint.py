import json

import pytest

from ethtypes.uint import H64, H128, H160, H256, FixedHash, U64, U128, U256, Uint


def _sample(size):
    arr = bytearray(size)
    arr[size - 1] = 0
    arr[size - 2] = 15
    arr[size - 3] = 1
    arr[size - 4] = 0
    arr[size - 5] = 10
    return arr


def test_should_compare_correctly():
    arr = _sample(32)
    a = U256.from_bytes_be(arr)
    arr[27] = 9
    b = U256.from_bytes_be(arr)
    c = U256(0)
    d = U256(10_000)

    assert b < a
    assert d < a
    assert d < b
    assert c < a
    assert c < b
    assert c < d


def test_should_display_correctly():
    a = U256.from_bytes_be(_sample(32))
    b = U256(1023)
    c = U256(0)
    d = U256(10000)

    assert repr(a) == "42949742336"
    assert repr(b) == "1023"
    assert repr(c) == "0"
    assert repr(d) == "10000"

    assert str(a) == "42949742336"
    assert str(b) == "1023"
    assert str(c) == "0"
    assert str(d) == "10000"

    assert format(a, "x") == "a00010f00"
    assert format(b, "x") == "3ff"
    assert format(c, "x") == "0"
    assert format(d, "x") == "2710"

    assert format(a, "#x") == "0xa00010f00"
    assert format(b, "#x") == "0x3ff"
    assert format(c, "#x") == "0x0"
    assert format(d, "#x") == "0x2710"


def test_should_display_hash_correctly():
    a = H128.from_uint(U128.from_bytes_be(_sample(16)))
    b = H128.from_uint(U128(1023))
    c = H128.from_uint(U128(0))
    d = H128.from_uint(U128(10000))

    assert a.to_json() == "0x00000000000000000000000a00010f00"
    assert b.to_json() == "0x000000000000000000000000000003ff"
    assert c.to_json() == "0x00000000000000000000000000000000"
    assert d.to_json() == "0x00000000000000000000000000002710"

    assert str(a) == "0x0000…0f00"
    assert str(b) == "0x0000…03ff"
    assert str(c) == "0x0000…0000"
    assert str(d) == "0x0000…2710"

    assert format(a, "x") == "00000000000000000000000a00010f00"
    assert format(b, "x") == "000000000000000000000000000003ff"
    assert format(c, "x") == "00000000000000000000000000000000"
    assert format(d, "x") == "00000000000000000000000000002710"


def test_should_deserialize_hash_correctly():
    deserialized = H128.from_json(json.loads('"0x00000000000000000000000a00010f00"'))
    assert deserialized == H128.from_low_u64_be(0xA00010F00)


def test_should_serialize_u256():
    assert json.dumps(U256(0).to_json()) == '"0x0"'
    assert json.dumps(U256(1).to_json()) == '"0x1"'
    assert json.dumps(U256(16).to_json()) == '"0x10"'
    assert json.dumps(U256(256).to_json()) == '"0x100"'


@pytest.mark.parametrize("text", ["", "0", "10", "1000000", "1000000000000000000"])
def test_should_fail_to_deserialize_decimals(text):
    with pytest.raises(ValueError):
        U256.from_json(text)


def test_should_deserialize_u256():
    with pytest.raises(ValueError):
        U256.from_json("0x")
    assert U256.from_json("0x0") == 0
    assert U256.from_json("0x1") == 1
    assert U256.from_json("0x01") == 1
    assert U256.from_json("0x100") == 256


@pytest.mark.parametrize("value", [1, 11, 111])
def test_to_from_u64(value):
    assert U256(value).low_u64() == value


def test_uint_bounds():
    with pytest.raises(OverflowError):
        U64(1 << 64)
    with pytest.raises(OverflowError):
        U256(-1)
    with pytest.raises(ValueError):
        U64.from_json("0x1" + "0" * 16)
    with pytest.raises(TypeError):
        Uint(1)


def test_uint_from_bytes_rejects_too_long():
    with pytest.raises(ValueError):
        U64.from_bytes_be(bytes(9))


def test_uint_json_round_trip():
    value = U256((1 << 256) - 1)
    assert U256.from_json(value.to_json()) == value


def test_hash_json_round_trip_and_hex_forms():
    h = H256.from_low_u64_be(0xDEADBEEF)
    assert H256.from_json(h.to_json()) == h
    assert H256.from_hex(h.to_json()) == H256.from_hex(format(h, "x"))
    assert h.to_uint() == 0xDEADBEEF
    assert H256.from_uint(h.to_uint()) == h


def test_hash_requires_prefix_and_length():
    with pytest.raises(ValueError):
        H256.from_json("00" * 32)
    with pytest.raises(ValueError):
        H256.from_json("0x" + "00" * 31)
    with pytest.raises(ValueError):
        H160.from_json("0x" + "zz" * 20)
    with pytest.raises(ValueError):
        H256.from_slice(bytes(31))


def test_hash_zero_and_ordering():
    zero = H160.zero()
    one = H160.from_low_u64_be(1)
    assert zero.is_zero()
    assert not one.is_zero()
    assert zero < one
    assert sorted([one, zero]) == [zero, one]
    assert bytes(one)[-1] == 1


def test_hashes_of_different_widths_are_not_equal():
    assert (H64.from_low_u64_be(1) == H128.from_low_u64_be(1)) is False
    with pytest.raises(TypeError):
        FixedHash()