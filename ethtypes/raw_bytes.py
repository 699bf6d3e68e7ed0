"""Raw byte strings carried as 0x-prefixed hex in JSON."""

from __future__ import annotations

import re
from typing import Any

_EVEN_HEX = re.compile(r"(?:[0-9a-fA-F]{2})*")


class Bytes(bytes):
    """Arbitrary binary data serialised as a 0x-prefixed hex string."""

    def to_json(self) -> str:
        return "0x" + self.hex()

    @classmethod
    def from_json(cls, value: Any) -> Bytes:
        if not isinstance(value, str):
            raise ValueError(
                f"expected a 0x-prefixed hex-encoded vector of bytes, got {type(value).__name__}"
            )
        if not value.startswith("0x"):
            raise ValueError(f"invalid value {value!r}: expected 0x prefix")
        digits = value[2:]
        if not _EVEN_HEX.fullmatch(digits):
            raise ValueError(f"Invalid hex: {digits!r}")
        return cls(bytes.fromhex(digits))

    def __repr__(self) -> str:
        return f"Bytes('{self.to_json()}')"