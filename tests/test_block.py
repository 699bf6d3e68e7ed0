import pytest

from ethtypes.block import Block, BlockHeader, BlockId, BlockNumber
from ethtypes.uint import H64, H160, H256, H2048, U64, U256


def _header_json():
    return {
        "hash": H256.from_low_u64_be(1).to_json(),
        "parentHash": H256.from_low_u64_be(2).to_json(),
        "sha3Uncles": H256.from_low_u64_be(3).to_json(),
        "author": H160.from_low_u64_be(4).to_json(),
        "stateRoot": H256.from_low_u64_be(5).to_json(),
        "transactionsRoot": H256.from_low_u64_be(6).to_json(),
        "receiptsRoot": H256.from_low_u64_be(7).to_json(),
        "number": "0x1b4",
        "gasUsed": "0x5208",
        "gasLimit": "0x1c9c380",
        "baseFeePerGas": "0x7",
        "extraData": "0x0102",
        "logsBloom": H2048.zero().to_json(),
        "timestamp": "0x5f5e100",
        "difficulty": "0x2",
        "mixHash": H256.from_low_u64_be(8).to_json(),
        "nonce": H64.from_low_u64_be(42).to_json(),
    }


def test_header_round_trip():
    data = _header_json()
    header = BlockHeader.from_json(data)
    assert header.number == U64(0x1B4)
    assert header.parent_hash == H256.from_low_u64_be(2)
    assert header.to_json() == data


def test_header_missing_celo_fields_take_defaults():
    data = _header_json()
    for key in ("sha3Uncles", "gasLimit", "difficulty", "author"):
        del data[key]
    header = BlockHeader.from_json(data)
    assert header.uncles_hash == H256.zero()
    assert header.gas_limit == 0
    assert header.difficulty == 0
    assert header.author.is_zero()


def test_header_pending_has_no_number_or_hash():
    data = _header_json()
    data["number"] = None
    del data["hash"]
    header = BlockHeader.from_json(data)
    assert header.number is None
    assert header.hash is None


@pytest.mark.parametrize("key", ["parentHash", "stateRoot", "gasUsed", "extraData", "logsBloom"])
def test_header_missing_required_field_fails(key):
    data = _header_json()
    del data[key]
    with pytest.raises(ValueError):
        BlockHeader.from_json(data)


def test_header_null_required_field_fails():
    data = _header_json()
    data["parentHash"] = None
    with pytest.raises(ValueError):
        BlockHeader.from_json(data)


def test_block_with_hashes_round_trip():
    data = _header_json()
    tx_hashes = [H256.from_low_u64_be(100).to_json(), H256.from_low_u64_be(101).to_json()]
    data.update(
        {
            "totalDifficulty": "0x10",
            "sealFields": [],
            "uncles": [H256.from_low_u64_be(9).to_json()],
            "transactions": tx_hashes,
            "size": "0x220",
        }
    )
    block = Block.from_json(data, H256.from_json)
    assert block.transactions == [H256.from_low_u64_be(100), H256.from_low_u64_be(101)]
    assert block.uncles == [H256.from_low_u64_be(9)]
    assert block.to_json(lambda tx: tx.to_json()) == data
    assert block.to_json() == data


def test_block_optional_bloom_and_default_lists():
    data = _header_json()
    del data["logsBloom"]
    data["transactions"] = [{"any": "thing"}]
    block = Block.from_json(data)
    assert block.logs_bloom is None
    assert block.seal_fields == []
    assert block.uncles == []
    assert block.transactions == [{"any": "thing"}]


def test_block_requires_transactions():
    with pytest.raises(ValueError):
        Block.from_json(_header_json())


def test_block_default_is_empty():
    block = Block()
    assert block.number is None
    assert block.transactions == []
    assert block.gas_used == U256(0)


def test_block_number_tags():
    assert BlockNumber.LATEST.to_json() == "latest"
    assert BlockNumber.EARLIEST.to_json() == "earliest"
    assert BlockNumber.PENDING.to_json() == "pending"


def test_block_number_as_hex():
    assert BlockNumber.number(0x10).to_json() == "0x10"
    assert BlockNumber.number(0).to_json() == U64(0).to_json()


def test_block_number_validation():
    with pytest.raises(ValueError):
        BlockNumber("number")
    with pytest.raises(ValueError):
        BlockNumber("finalised")
    with pytest.raises(OverflowError):
        BlockNumber.number(-1)


def test_block_id_by_hash_serialises_as_object():
    block_hash = H256.from_low_u64_be(77)
    assert BlockId.from_hash(block_hash).to_json() == {"blockHash": block_hash.to_json()}


def test_block_id_by_number():
    assert BlockId.from_number(BlockNumber.PENDING).to_json() == "pending"
    assert BlockId.from_number(5) == BlockId.from_number(BlockNumber.number(5))
    assert BlockId.from_number(5).to_json() == BlockNumber.number(5).to_json()


def test_block_id_needs_exactly_one_form():
    with pytest.raises(ValueError):
        BlockId()
    with pytest.raises(ValueError):
        BlockId(block_hash=H256.zero(), number=BlockNumber.LATEST)