import pytest

from ethtypes.block import BlockId, BlockNumber
from ethtypes.transaction_id import TransactionId
from ethtypes.uint import H256, U64


def test_by_hash_keeps_hash():
    tx_hash = H256.from_low_u64_be(3)
    tid = TransactionId.by_hash(tx_hash)
    assert tid.tx_hash == tx_hash
    assert tid.block is None
    assert tid.index is None


def test_by_block_converts_index():
    tid = TransactionId.by_block(BlockId.from_number(BlockNumber.LATEST), 2)
    assert tid.index == U64(2)
    assert tid.block == BlockId.from_number(BlockNumber.LATEST)
    assert tid.tx_hash is None


def test_by_block_accepts_number_and_hash():
    assert TransactionId.by_block(7, 0).block == BlockId.from_number(7)
    block_hash = H256.from_low_u64_be(9)
    assert TransactionId.by_block(block_hash, 0).block == BlockId.from_hash(block_hash)


def test_equality_follows_contents():
    first = TransactionId.by_block(BlockNumber.PENDING, 1)
    assert first == TransactionId.by_block(BlockNumber.PENDING, 1)
    assert (first == TransactionId.by_block(BlockNumber.PENDING, 2)) is False


def test_invalid_combinations_fail():
    with pytest.raises(ValueError):
        TransactionId()
    with pytest.raises(ValueError):
        TransactionId(block=BlockId.from_number(1))
    with pytest.raises(ValueError):
        TransactionId(tx_hash=H256.zero(), block=BlockId.from_number(1), index=U64(0))
    with pytest.raises(OverflowError):
        TransactionId.by_block(1, -1)