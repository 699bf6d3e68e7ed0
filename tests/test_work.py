import pytest

from ethtypes.uint import H256, U256
from ethtypes.work import Work

POW = "0x" + "11" * 32
SEED = "0x" + "22" * 32
TARGET = "0x" + "33" * 32


def test_parse_without_number():
    work = Work.from_json([POW, SEED, TARGET])
    assert work.pow_hash == H256.from_hex(POW)
    assert work.seed_hash == H256.from_hex(SEED)
    assert work.target == H256.from_hex(TARGET)
    assert work.number is None


def test_parse_with_number():
    work = Work.from_json([POW, SEED, TARGET, 1234])
    assert work.number == 1234
    assert work.target == H256.from_hex(TARGET)


def test_round_trip_without_number():
    work = Work.from_json([POW, SEED, TARGET])
    assert work.to_json() == [POW, SEED, TARGET]
    assert Work.from_json(work.to_json()) == work


def test_serialises_number_as_hex_quantity():
    work = Work(H256.from_hex(POW), H256.from_hex(SEED), H256.from_hex(TARGET), 1234)
    out = work.to_json()
    assert out[:3] == [POW, SEED, TARGET]
    assert U256.from_json(out[3]) == 1234


def test_hex_number_is_not_accepted_on_input():
    with pytest.raises(ValueError, match="Cannot deserialize Work"):
        Work.from_json([POW, SEED, TARGET, "0x4d2"])


@pytest.mark.parametrize(
    "value",
    [
        [POW, SEED],
        [POW, SEED, TARGET, 1, 2],
        [POW, SEED, "0x1234"],
        [POW, SEED, TARGET, -1],
        [POW, SEED, TARGET, 1 << 64],
        {"pow": POW},
        "nope",
    ],
)
def test_rejects_malformed(value):
    with pytest.raises(ValueError, match="Cannot deserialize Work"):
        Work.from_json(value)


def test_equality():
    a = Work.from_json([POW, SEED, TARGET, 7])
    b = Work.from_json([POW, SEED, TARGET, 7])
    c = Work.from_json([POW, SEED, TARGET])
    assert a == b
    assert not a == c