from __future__ import annotations

"""
Solidity ABI head/tail codec for the types installation parameters use.

WHY THIS FILE EXISTS:
Installation buffers are hashed and compared by off-chain tooling, so the bytes
must match `abi.encode` exactly. Only uintN, address, string, T[] and tuples are
supported; that is all the setup payload needs.

Layout rules:
- every scalar is one 32-byte big-endian word, zero-padded on the left
- a tuple writes a head (static values inline, one offset word per dynamic value)
  followed by the tails of its dynamic values in order
- offsets are relative to the first byte of the enclosing tuple's head
- T[] is a length word followed by its elements encoded as a tuple
- string is a length word followed by UTF-8 bytes right-padded to a word
"""

from typing import Any, List, Sequence, Tuple

from vetogov.core.addresses import address_from_bytes, address_to_bytes
from vetogov.core.errors import MalformedParameters

WORD = 32


def _pad_right(data: bytes) -> bytes:
    rem = len(data) % WORD
    if rem == 0:
        return data
    return data + b"\x00" * (WORD - rem)


def encode_word(value: int) -> bytes:
    return int(value).to_bytes(WORD, "big")


def read_word(buf: bytes, pos: int) -> bytes:
    if pos < 0 or pos + WORD > len(buf):
        raise MalformedParameters("Buffer truncated while reading a word.", position=pos, size=len(buf))
    return buf[pos : pos + WORD]


def read_uint(buf: bytes, pos: int) -> int:
    return int.from_bytes(read_word(buf, pos), "big")


def read_offset(buf: bytes, pos: int, base: int) -> int:
    """Resolve an offset word at `pos` against `base` and bounds-check the target."""
    off = read_uint(buf, pos)
    target = base + off
    if off >= len(buf) or target + WORD > len(buf):
        raise MalformedParameters("Offset points outside the buffer.", position=pos, offset=off, size=len(buf))
    return target


class AbiType:
    name = "abstract"
    dynamic = False

    @property
    def head_size(self) -> int:
        return WORD

    def encode(self, value: Any) -> bytes:
        raise NotImplementedError

    def decode(self, buf: bytes, pos: int) -> Any:
        raise NotImplementedError


class UintType(AbiType):
    def __init__(self, bits: int = 256):
        if bits % 8 or not 8 <= bits <= 256:
            raise ValueError(f"invalid uint width: {bits}")
        self.bits = int(bits)
        self.name = f"uint{self.bits}"

    @property
    def max_value(self) -> int:
        return (1 << self.bits) - 1

    def encode(self, value: Any) -> bytes:
        v = int(value)
        if v < 0 or v > self.max_value:
            raise ValueError(f"{self.name} out of range: {v}")
        return encode_word(v)

    def decode(self, buf: bytes, pos: int) -> int:
        v = read_uint(buf, pos)
        if v > self.max_value:
            raise MalformedParameters(f"Value does not fit {self.name}.", position=pos)
        return v


class AddressType(AbiType):
    name = "address"

    def encode(self, value: Any) -> bytes:
        return b"\x00" * 12 + address_to_bytes(str(value))

    def decode(self, buf: bytes, pos: int) -> str:
        word = read_word(buf, pos)
        if any(word[:12]):
            raise MalformedParameters("Address has dirty upper bytes.", position=pos)
        return address_from_bytes(word[12:])


class BoolType(AbiType):
    name = "bool"

    def encode(self, value: Any) -> bytes:
        return encode_word(1 if value else 0)

    def decode(self, buf: bytes, pos: int) -> bool:
        v = read_uint(buf, pos)
        if v > 1:
            raise MalformedParameters("Bool is neither 0 nor 1.", position=pos)
        return bool(v)


class StringType(AbiType):
    name = "string"
    dynamic = True

    def encode(self, value: Any) -> bytes:
        raw = str(value).encode("utf-8")
        return encode_word(len(raw)) + _pad_right(raw)

    def decode(self, buf: bytes, pos: int) -> str:
        n = read_uint(buf, pos)
        start = pos + WORD
        if n > len(buf) or start + n > len(buf):
            raise MalformedParameters("String length exceeds the buffer.", position=pos, length=n)
        try:
            return buf[start : start + n].decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedParameters("String is not valid UTF-8.", position=pos) from e


class TupleType(AbiType):
    def __init__(self, components: Sequence[AbiType], name: str = ""):
        self.components: List[AbiType] = list(components)
        self.name = name or "(" + ",".join(c.name for c in self.components) + ")"
        self.dynamic = any(c.dynamic for c in self.components)

    @property
    def head_size(self) -> int:
        if self.dynamic:
            return WORD
        return sum(c.head_size for c in self.components)

    def encode(self, value: Any) -> bytes:
        values = list(value)
        if len(values) != len(self.components):
            raise ValueError(f"{self.name} expects {len(self.components)} values, got {len(values)}")
        heads: List[bytes] = []
        tails: List[bytes] = []
        head_len = sum(c.head_size for c in self.components)
        tail_len = 0
        for typ, v in zip(self.components, values):
            if typ.dynamic:
                heads.append(encode_word(head_len + tail_len))
                enc = typ.encode(v)
                tails.append(enc)
                tail_len += len(enc)
            else:
                heads.append(typ.encode(v))
        return b"".join(heads) + b"".join(tails)

    def decode(self, buf: bytes, pos: int) -> Tuple[Any, ...]:
        out: List[Any] = []
        head = pos
        for typ in self.components:
            if typ.dynamic:
                out.append(typ.decode(buf, read_offset(buf, head, pos)))
            else:
                out.append(typ.decode(buf, head))
            head += typ.head_size
        return tuple(out)


class ArrayType(AbiType):
    dynamic = True

    def __init__(self, item: AbiType):
        self.item = item
        self.name = f"{item.name}[]"

    def encode(self, value: Any) -> bytes:
        items = list(value)
        return encode_word(len(items)) + TupleType([self.item] * len(items)).encode(items)

    def decode(self, buf: bytes, pos: int) -> List[Any]:
        n = read_uint(buf, pos)
        start = pos + WORD
        # every element needs at least one head word; reject absurd lengths before allocating
        if n > (len(buf) - start) // WORD:
            raise MalformedParameters("Array length exceeds the buffer.", position=pos, length=n)
        return list(TupleType([self.item] * n).decode(buf, start))


UINT32 = UintType(32)
UINT64 = UintType(64)
UINT256 = UintType(256)
ADDRESS = AddressType()
BOOL = BoolType()
STRING = StringType()


def encode(types: Sequence[AbiType], values: Sequence[Any]) -> bytes:
    """Equivalent of `abi.encode(values...)`."""
    return TupleType(types).encode(values)


def decode(types: Sequence[AbiType], data: bytes) -> Tuple[Any, ...]:
    """Equivalent of `abi.decode(data, (types...))`. Trailing bytes are ignored."""
    return TupleType(types).decode(bytes(data), 0)
