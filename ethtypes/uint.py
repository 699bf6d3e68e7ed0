"""Fixed-size hashes and bounded unsigned integers used by the JSON-RPC types."""

from __future__ import annotations

import operator
import re
from functools import total_ordering
from typing import Any, ClassVar

_HEX_DIGITS = re.compile(r"[0-9a-fA-F]*")
_QUANTITY = re.compile(r"0x[0-9a-fA-F]+")
_U64_MAX = (1 << 64) - 1


@total_ordering
class FixedHash:
    """An immutable, fixed-length byte string such as a hash or an address."""

    SIZE: ClassVar[int] = 0
    __slots__ = ("_data",)

    def __init__(self, data: bytes | bytearray | memoryview | None = None) -> None:
        if type(self).SIZE == 0:
            raise TypeError("FixedHash is abstract; use one of its sized subclasses")
        if data is None:
            raw = bytes(self.SIZE)
        else:
            if isinstance(data, (int, str)):
                raise TypeError(f"{type(self).__name__} needs bytes, not {type(data).__name__}")
            raw = bytes(data)
        if len(raw) != self.SIZE:
            raise ValueError(f"{type(self).__name__} needs {self.SIZE} bytes, got {len(raw)}")
        object.__setattr__(self, "_data", raw)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    @classmethod
    def from_hex(cls, text: str) -> FixedHash:
        """Parse hex digits, with or without a ``0x`` prefix."""
        if not isinstance(text, str):
            raise ValueError(f"expected a hex string, got {type(text).__name__}")
        digits = text[2:] if text.startswith("0x") else text
        if len(digits) != 2 * cls.SIZE:
            raise ValueError(f"invalid length {len(digits)}, expected {2 * cls.SIZE} hex digits")
        if not _HEX_DIGITS.fullmatch(digits):
            raise ValueError(f"invalid hex character in {text!r}")
        return cls(bytes.fromhex(digits))

    @classmethod
    def from_slice(cls, data: bytes) -> FixedHash:
        """Build from exactly ``SIZE`` bytes."""
        return cls(data)

    @classmethod
    def from_low_u64_be(cls, value: int) -> FixedHash:
        """Place a 64-bit value, big-endian, in the lowest bytes."""
        value = operator.index(value)
        if not 0 <= value <= _U64_MAX:
            raise OverflowError(f"{value} does not fit in 64 bits")
        tail = value.to_bytes(8, "big")
        if cls.SIZE >= 8:
            return cls(bytes(cls.SIZE - 8) + tail)
        return cls(tail[8 - cls.SIZE:])

    @classmethod
    def from_uint(cls, value: int) -> FixedHash:
        """Big-endian encoding of an unsigned integer."""
        value = operator.index(value)
        if value < 0:
            raise OverflowError("negative values cannot be encoded")
        return cls(value.to_bytes(cls.SIZE, "big"))

    @classmethod
    def zero(cls) -> FixedHash:
        return cls()

    def is_zero(self) -> bool:
        return not any(self._data)

    def to_uint(self) -> int:
        return int.from_bytes(self._data, "big")

    def to_json(self) -> str:
        return "0x" + self._data.hex()

    @classmethod
    def from_json(cls, value: Any) -> FixedHash:
        if not isinstance(value, str):
            raise ValueError(f"expected a 0x-prefixed hex string, got {type(value).__name__}")
        if not value.startswith("0x"):
            raise ValueError(f"{value!r} lacks the 0x prefix")
        return cls.from_hex(value)

    def __bytes__(self) -> bytes:
        return self._data

    def __len__(self) -> int:
        return self.SIZE

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._data == other._data

    def __lt__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._data < other._data

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._data))

    def __str__(self) -> str:
        text = self._data.hex()
        return f"0x{text[:4]}…{text[-4:]}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}('{self.to_json()}')"

    def __format__(self, spec: str) -> str:
        if spec == "":
            return str(self)
        if spec == "x":
            return self._data.hex()
        if spec == "#x":
            return self.to_json()
        raise ValueError(f"unsupported format spec {spec!r} for {type(self).__name__}")


class H64(FixedHash):
    SIZE = 8
    __slots__ = ()


class H128(FixedHash):
    SIZE = 16
    __slots__ = ()


class H160(FixedHash):
    SIZE = 20
    __slots__ = ()


class H256(FixedHash):
    SIZE = 32
    __slots__ = ()


class H512(FixedHash):
    SIZE = 64
    __slots__ = ()


class H520(FixedHash):
    SIZE = 65
    __slots__ = ()


class H2048(FixedHash):
    """A 2048-bit logs bloom."""

    SIZE = 256
    __slots__ = ()


class Uint(int):
    """An unsigned integer bounded to ``BITS`` bits."""

    BITS: ClassVar[int] = 0

    def __new__(cls, value: int = 0) -> Uint:
        if cls.BITS == 0:
            raise TypeError("Uint is abstract; use U64, U128 or U256")
        value = operator.index(value)
        if value < 0 or value >> cls.BITS:
            raise OverflowError(f"{value} does not fit in {cls.__name__}")
        return super().__new__(cls, value)

    @classmethod
    def from_bytes_be(cls, data: bytes) -> Uint:
        """Decode a big-endian byte string no longer than the type's width."""
        raw = bytes(data)
        if len(raw) > cls.BITS // 8:
            raise ValueError(f"{len(raw)} bytes do not fit in {cls.__name__}")
        return cls(int.from_bytes(raw, "big"))

    def low_u64(self) -> int:
        return int(self) & _U64_MAX

    def to_json(self) -> str:
        return f"{int(self):#x}"

    @classmethod
    def from_json(cls, value: Any) -> Uint:
        if not isinstance(value, str):
            raise ValueError(f"expected a 0x-prefixed hex quantity, got {type(value).__name__}")
        if not value.startswith("0x"):
            raise ValueError(f"{value!r} lacks the 0x prefix")
        if not _QUANTITY.fullmatch(value):
            raise ValueError(f"{value!r} is not a hex quantity")
        number = int(value[2:], 16)
        if number >> cls.BITS:
            raise ValueError(f"{value} does not fit in {cls.__name__}")
        return cls(number)


class U64(Uint):
    BITS = 64


class U128(Uint):
    BITS = 128


class U256(Uint):
    BITS = 256


Address = H160
Index = U64