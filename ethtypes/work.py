"""A miner's work package."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .uint import H256, U256

_U64_LIMIT = 1 << 64


def _parse_number(raw: Any) -> int:
    if isinstance(raw, bool) or not isinstance(raw, int) or not 0 <= raw < _U64_LIMIT:
        raise ValueError(f"expected an unsigned 64-bit integer, got {raw!r}")
    return raw


@dataclass(frozen=True)
class Work:
    """Proof-of-work hash, seed hash, target and, when known, the block number."""

    pow_hash: H256
    seed_hash: H256
    target: H256
    number: int | None = None

    @classmethod
    def from_json(cls, value: Any) -> Work:
        """Parse ``[pow, seed, target, number]`` or ``[pow, seed, target]``."""
        try:
            if not isinstance(value, list) or len(value) not in (3, 4):
                raise ValueError(f"expected an array of 3 or 4 elements, got {value!r}")
            pow_hash, seed_hash, target = (H256.from_json(item) for item in value[:3])
            number = _parse_number(value[3]) if len(value) == 4 else None
        except ValueError as exc:
            raise ValueError(f"Cannot deserialize Work: {exc}") from exc
        return cls(pow_hash, seed_hash, target, number)

    def to_json(self) -> list[str]:
        """The hashes, followed by the block number as a hex quantity if set."""
        out = [self.pow_hash.to_json(), self.seed_hash.to_json(), self.target.to_json()]
        if self.number is not None:
            out.append(U256(self.number).to_json())
        return out