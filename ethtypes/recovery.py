"""Data for recovering the signer of a signed message or transaction."""

from __future__ import annotations

import operator
from dataclasses import dataclass
from typing import Any

from .signed import SignedData, SignedTransaction
from .uint import H256

_CURVE_ORDER = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141


class Secp256k1Error(ValueError):
    """A signature or recovery id that secp256k1 does not accept."""


class ParseSignatureError(ValueError):
    """A raw signature of the wrong length."""

    def __init__(self) -> None:
        super().__init__("error parsing raw signature: wrong number of bytes, expected 65")


@dataclass(frozen=True)
class RecoverableSignature:
    """A compact 64-byte signature together with its recovery id."""

    data: bytes
    recovery_id: int

    @classmethod
    def from_compact(cls, data: bytes, recovery_id: int) -> RecoverableSignature:
        if not 0 <= recovery_id <= 3:
            raise Secp256k1Error(f"invalid recovery id {recovery_id}")
        raw = bytes(data)
        if len(raw) != 64:
            raise Secp256k1Error("malformed signature: expected 64 bytes")
        r = int.from_bytes(raw[:32], "big")
        s = int.from_bytes(raw[32:], "big")
        if r >= _CURVE_ORDER or s >= _CURVE_ORDER:
            raise Secp256k1Error("malformed signature: value exceeds the curve order")
        return cls(raw, recovery_id)


@dataclass(frozen=True)
class RecoveryMessage:
    """Either message bytes, hashed before recovery, or a precomputed hash."""

    data: bytes | None = None
    hash: H256 | None = None

    def __post_init__(self) -> None:
        if (self.data is None) == (self.hash is None):
            raise ValueError("a recovery message needs exactly one of data or a hash")
        if self.data is not None:
            object.__setattr__(self, "data", bytes(self.data))

    @classmethod
    def of(cls, value: Any) -> RecoveryMessage:
        """Wrap text, bytes or a hash as a recovery message."""
        if isinstance(value, RecoveryMessage):
            return value
        if isinstance(value, H256):
            return cls(hash=value)
        if isinstance(value, str):
            return cls(data=value.encode("utf-8"))
        if isinstance(value, (bytes, bytearray, memoryview, list)):
            return cls(data=bytes(value))
        raise TypeError(f"cannot build a recovery message from {type(value).__name__}")


@dataclass(frozen=True)
class Recovery:
    """Signature parts with ``v`` in Electrum notation, possibly replay-protected."""

    message: RecoveryMessage
    v: int
    r: H256
    s: H256

    def __post_init__(self) -> None:
        object.__setattr__(self, "message", RecoveryMessage.of(self.message))
        v = operator.index(self.v)
        if v < 0:
            raise ValueError("v must not be negative")
        object.__setattr__(self, "v", v)

    @classmethod
    def from_raw_signature(cls, message: Any, raw_signature: bytes) -> Recovery:
        """Split 65 bytes into ``r`` (32), ``s`` (32) and ``v`` (1)."""
        raw = bytes(raw_signature)
        if len(raw) != 65:
            raise ParseSignatureError()
        return cls(message, raw[64], H256.from_slice(raw[:32]), H256.from_slice(raw[32:64]))

    @classmethod
    def from_signed_data(cls, signed: SignedData) -> Recovery:
        return cls(signed.message_hash, signed.v, signed.r, signed.s)

    @classmethod
    def from_signed_transaction(cls, tx: SignedTransaction) -> Recovery:
        return cls(tx.message_hash, tx.v, tx.r, tx.s)

    def recovery_id(self) -> int:
        if self.v == 27:
            standard_v = 0
        elif self.v == 28:
            standard_v = 1
        elif self.v >= 35:
            standard_v = (self.v - 1) % 2
        else:
            standard_v = 4
        if not 0 <= standard_v <= 3:
            raise Secp256k1Error(f"invalid recovery id for v = {self.v}")
        return standard_v

    def as_signature(self) -> RecoverableSignature:
        recovery_id = self.recovery_id()
        return RecoverableSignature.from_compact(bytes(self.r) + bytes(self.s), recovery_id)