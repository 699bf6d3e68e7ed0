import pytest

from ethtypes.raw_bytes import Bytes
from ethtypes.signed import SignedData, TransactionParameters
from ethtypes.transaction_request import CallRequest
from ethtypes.uint import H160, H256, U256


def test_verify_transaction_default_gas():
    assert TransactionParameters().gas == U256(100_000)


def test_defaults():
    params = TransactionParameters()
    assert params.value == 0
    assert params.data == b""
    assert params.to is None


def test_from_call_request_with_zero_address():
    call = CallRequest(to=H160.zero())
    params = TransactionParameters.from_call_request(call)
    assert params.to is None
    assert params.gas == U256(100_000)
    assert params.value == 0
    assert params.data == Bytes()


def test_from_call_request_keeps_fields():
    call = CallRequest(
        to=H160.from_low_u64_be(5),
        gas=U256(21_000),
        gas_price=U256(7),
        value=U256(9),
        data=Bytes(b"\x01"),
    )
    params = TransactionParameters.from_call_request(call)
    assert params.to == H160.from_low_u64_be(5)
    assert params.gas == 21_000
    assert params.gas_price == 7
    assert params.value == 9
    assert params.data == b"\x01"
    assert params.nonce is None
    assert params.chain_id is None


def test_to_call_request():
    params = TransactionParameters(value=U256(3), data=Bytes(b"\x02"))
    call = params.to_call_request()
    assert call == CallRequest(
        to=H160.zero(), gas=U256(100_000), gas_price=None, value=U256(3), data=Bytes(b"\x02")
    )


def test_signed_data_json_round_trip():
    signed = SignedData(
        message=b"Some data",
        message_hash=H256.from_low_u64_be(1),
        v=28,
        r=H256.from_low_u64_be(2),
        s=H256.from_low_u64_be(3),
        signature=Bytes(b"\xaa\xbb"),
    )
    encoded = signed.to_json()
    assert encoded["message"] == list(b"Some data")
    assert encoded["signature"] == "0xaabb"
    assert encoded["v"] == 28
    assert SignedData.from_json(encoded) == signed


def test_signed_data_rejects_large_v():
    encoded = {
        "message": [],
        "messageHash": "0x" + "0" * 64,
        "v": 300,
        "r": "0x" + "0" * 64,
        "s": "0x" + "0" * 64,
        "signature": "0x",
    }
    with pytest.raises(ValueError):
        SignedData.from_json(encoded)