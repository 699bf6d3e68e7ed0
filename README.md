# ethtypes

Typed models for the data exchanged with an Ethereum node over JSON-RPC.
Each model has a `from_json` class method that accepts the plain values a
JSON decoder produces (dicts, lists, strings, numbers, booleans, `None`)
and a `to_json` method that returns such values again. This means the
models work with any JSON library or HTTP client.

Malformed input raises `ValueError`. The error types in
`ethtypes.recovery` are subclasses of it.

## Modules

- `ethtypes.uint`: fixed-size hashes `H64`, `H128`, `H160`, `H256`,
  `H512`, `H520` and `H2048` (all subclasses of `FixedHash`), and bounded
  unsigned integers `U64`, `U128` and `U256` (subclasses of `Uint`, itself
  an `int`). Both are written as `0x`-prefixed hex. Reading a `Uint`
  requires the `0x` prefix and at least one digit. `"0x"` and plain
  decimal strings are rejected.
- `ethtypes.raw_bytes`: `Bytes`, a `bytes` subclass written as
  `0x`-prefixed hex.
- `ethtypes.block`:
  - `BlockHeader`.
  - `Block`. Its transactions are kept as raw JSON values unless you pass
    a `parse_transaction` callable to `Block.from_json`.
  - `BlockNumber`, which is either `LATEST`, `EARLIEST`, `PENDING` or
    `BlockNumber.number(n)`.
  - `BlockId`, built with `from_hash` or `from_number`.
- `ethtypes.transaction_id`: `TransactionId.by_hash` and
  `TransactionId.by_block`.
- `ethtypes.transaction_request`:
  - `CallRequest` and `TransactionRequest`. Fields left as `None` are
    omitted from their JSON.
  - `TransactionCondition.block` and `TransactionCondition.timestamp`.
- `ethtypes.log`:
  - `Log`, with `is_removed()`.
  - `Topic` and `TopicFilter`.
  - `Filter` and `FilterBuilder`. Each builder setter returns a new
    builder, and trailing unset topic positions are dropped.
- `ethtypes.signed`:
  - `SignedData` and `SignedTransaction`.
  - `TransactionParameters`. Its default gas is 100 000. It converts to
    and from `CallRequest`, and a zero `to` address stands for contract
    creation.
- `ethtypes.recovery`:
  - `Recovery`, built directly, with `from_raw_signature` (65 bytes:
    `r`, `s`, `v`), or from signed data or a signed transaction.
  - `RecoveryMessage`.
  - `RecoverableSignature`.
  - The errors `ParseSignatureError` and `Secp256k1Error`.
- `ethtypes.sync_state`: `SyncInfo` and `SyncState`. `SyncState` accepts
  `false`, an RPC info object, or a subscription object of the form
  `{"syncing": ..., "status": ...}`.
- `ethtypes.trace_filtering`:
  - `TraceFilter` and `TraceFilterBuilder`.
  - `Trace`.
  - The actions `Call`, `Create`, `Suicide` and `Reward`.
  - The results `CallResult` and `CreateResult`.
  - The enums `ActionType`, `CallType` and `RewardType`.
  - The functions `parse_action`, `parse_result`, `dump_action` and
    `dump_result`.
- `ethtypes.traces`:
  - `BlockTrace`, `TransactionTrace` and `TraceType`.
  - State diffs: `StateDiff`, `AccountDiff`, `Diff`, `DiffKind` and
    `ChangedType`.
  - VM traces: `VMTrace`, `VMOperation`, `VMExecutedOperation`,
    `MemoryDiff` and `StorageDiff`.
- `ethtypes.transaction`: `Transaction`, `Receipt`, `RawTransaction` and
  `RawTransactionDetails`.
- `ethtypes.parity_peers`:
  - `ParityPeerType` and `ParityPeerInfo`.
  - `PeerNetworkInfo` and `PeerProtocolsInfo`.
  - `EthProtocolInfo` and `PipProtocolInfo`.
- `ethtypes.work`: `Work`, a mining work package. It is read from an
  array of three hashes, optionally followed by a block number.

## Examples

Integers and hashes:

```python
from ethtypes.uint import H160, U256

U256(256).to_json()                   # '0x100'
U256.from_json("0x01") == 1           # True

address = H160.from_low_u64_be(5)
address.to_json()                     # '0x0000000000000000000000000000000000000005'
```

A call request for a JSON-RPC body:

```python
from ethtypes.raw_bytes import Bytes
from ethtypes.transaction_request import CallRequest
from ethtypes.uint import H160, U256

request = CallRequest(
    to=H160.from_low_u64_be(5),
    gas=U256(21_000),
    value=U256(5_000_000),
    data=Bytes(b"\x01\x02\x03"),
)
request.to_json()
# {'to': '0x0000000000000000000000000000000000000005',
#  'gas': '0x5208', 'value': '0x4c4b40', 'data': '0x010203'}
```

A log filter:

```python
from ethtypes.block import BlockNumber
from ethtypes.log import FilterBuilder

log_filter = (
    FilterBuilder()
    .from_block(BlockNumber.number(1))
    .to_block(BlockNumber.LATEST)
    .limit(10)
    .build()
)
log_filter.to_json()
# {'fromBlock': '0x1', 'toBlock': 'latest', 'limit': 10}
```

Reading what a node sent back:

```python
from ethtypes.sync_state import SyncState

SyncState.from_json(False).is_syncing            # False
state = SyncState.from_json({
    "startingBlock": "0x0",
    "currentBlock": "0x42",
    "highestBlock": "0x9001",
})
state.info.current_block                         # 66
```

## What the package does not do

- It is a set of data models only. It does not open connections or send
  requests to a node, and it has no command-line tool.
- It does no cryptography. `Recovery` works out the recovery id from `v`
  and checks that `r` and `s` lie below the secp256k1 curve order, but it
  does not recover a public key or address. Nothing in the package
  computes keccak hashes or signs anything.
- `Receipt` reads the cumulative gas used only from a key named
  `cumulative_gas_used`. If a node sends `cumulativeGasUsed`, that key is
  ignored and the field is zero.

## Running the tests

```
pip install -e ".[test]"
pytest
```