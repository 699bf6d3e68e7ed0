import json

import pytest

from ethtypes.sync_state import SyncInfo, SyncState
from ethtypes.uint import U256

EXPECTED = SyncState.syncing(
    SyncInfo(starting_block=U256(0x0), current_block=U256(0x42), highest_block=U256(0x9001))
)

RPC_STATUS = {"startingBlock": "0x0", "currentBlock": "0x42", "highestBlock": "0x9001", "knownStates": "0x1337", "pulledStates": "0x13"}

# Subscription payloads carry the same numbers under PascalCase keys.
SUBSCRIPTION_STATUS = {key[0].upper() + key[1:]: number for key, number in RPC_STATUS.items()}


def test_rpc_object_is_syncing():
    assert SyncState.from_json(json.loads(json.dumps(RPC_STATUS))) == EXPECTED


def test_subscription_object_is_syncing():
    assert SyncState.from_json({"syncing": True, "status": SUBSCRIPTION_STATUS}) == EXPECTED


def test_false_is_not_syncing():
    assert SyncState.from_json(False) == SyncState.not_syncing()


def test_subscription_flag_false_is_not_syncing():
    assert SyncState.from_json({"syncing": False}) == SyncState.not_syncing()


def test_true_is_rejected():
    with pytest.raises(ValueError, match="got `true`"):
        SyncState.from_json(True)


def test_subscription_syncing_without_status_is_rejected():
    with pytest.raises(ValueError, match="syncing = true"):
        SyncState.from_json({"syncing": True})


def test_subscription_not_syncing_with_status_is_rejected():
    with pytest.raises(ValueError):
        SyncState.from_json({"syncing": False, "status": SUBSCRIPTION_STATUS})


def test_rejects_unrelated_values():
    with pytest.raises(ValueError):
        SyncState.from_json({"other": 1})
    with pytest.raises(ValueError):
        SyncState.from_json(42)


def test_serialize_not_syncing_is_false():
    assert SyncState.not_syncing().to_json() is False


def test_serialize_syncing_uses_camel_case():
    assert EXPECTED.to_json() == {
        "startingBlock": "0x0",
        "currentBlock": "0x42",
        "highestBlock": "0x9001",
    }


@pytest.mark.parametrize("state", [EXPECTED, SyncState.not_syncing()])
def test_round_trip(state):
    assert SyncState.from_json(state.to_json()) == state


def test_is_syncing_flag():
    assert EXPECTED.is_syncing is True
    assert SyncState.not_syncing().is_syncing is False


def test_sync_info_requires_fields():
    with pytest.raises(ValueError, match="highestBlock"):
        SyncInfo.from_json({"startingBlock": "0x0", "currentBlock": "0x1"})