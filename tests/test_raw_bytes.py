import pytest

from ethtypes.raw_bytes import Bytes


def test_serialises_as_prefixed_hex():
    assert Bytes([1, 2, 3]).to_json() == "0x010203"


def test_empty_bytes_serialise_to_bare_prefix():
    assert Bytes().to_json() == "0x"
    assert Bytes.from_json("0x") == b""


@pytest.mark.parametrize("payload", [b"", b"\x00", b"\x01\x02\x03", bytes(range(256))])
def test_round_trip(payload):
    decoded = Bytes.from_json(Bytes(payload).to_json())
    assert decoded == payload
    assert isinstance(decoded, Bytes)


def test_accepts_upper_case_digits():
    assert Bytes.from_json("0xABcd") == bytes([0xAB, 0xCD])


@pytest.mark.parametrize("bad", ["010203", "0x123", "0xzz", "0x01 02", "", "x0"])
def test_rejects_malformed_strings(bad):
    with pytest.raises(ValueError):
        Bytes.from_json(bad)


def test_rejects_non_strings():
    with pytest.raises(ValueError):
        Bytes.from_json(123)