"""
Type canonicalization
=====================

Maps declared ABI type strings to a closed set of canonical variants and,
from there, to (a) the signature token hashed into selectors and (b) the
Rust type used in emitted wrappers.

Variants (all frozen dataclasses, see `CanonicalType`):

    Address                  address       -> Address
    Boolean                  bool          -> bool
    UnsignedInt(bits)        uintN         -> U<N>
    SignedInt(bits)          intN          -> I<N>
    DynamicBytes             bytes         -> Vec<u8>
    FixedBytes(size)         bytesN        -> FixedBytes<N>
    String                   string        -> String
    Array(element, length)   T[] / T[N]    -> Vec<T> / [T; N]
    Tuple(fields)            (T1,T2,...)   -> (T1, T2, ...)

Each variant implements `token()`, `rust_type()` and `alloy_types()`, so the
token and target type are pure functions of the variant value. Aliases are
resolved at parse time: `uint` -> `uint256`, `int` -> `int256`,
`byte` -> `bytes1`.

Anything else raises `UnsupportedTypeError`; there is no fallback type.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import FrozenSet, Optional, Sequence, Union

from .errors import UnsupportedTypeError
from .model import Param

__all__ = [
    "Address",
    "Boolean",
    "UnsignedInt",
    "SignedInt",
    "DynamicBytes",
    "FixedBytes",
    "String",
    "Array",
    "Tuple",
    "CanonicalType",
    "canonicalize",
    "canonicalize_param",
]

_INT_RE = re.compile(r"^(?P<u>u?)int(?P<bits>\d*)$")
_BYTES_RE = re.compile(r"^bytes(?P<size>\d*)$")
_ARRAY_RE = re.compile(r"^(?P<base>.+?)(?P<dims>(\[\d*\])+)$")
_DIM_RE = re.compile(r"\[(\d*)\]")

DEFAULT_INT_BITS = 256


# -----------------
# Variants
# -----------------

@dataclass(frozen=True)
class Address:
    def token(self) -> str:
        return "address"

    def rust_type(self) -> str:
        return "Address"

    def alloy_types(self) -> FrozenSet[str]:
        return frozenset({"Address"})


@dataclass(frozen=True)
class Boolean:
    def token(self) -> str:
        return "bool"

    def rust_type(self) -> str:
        return "bool"

    def alloy_types(self) -> FrozenSet[str]:
        return frozenset()


@dataclass(frozen=True)
class UnsignedInt:
    bits: int = DEFAULT_INT_BITS

    def token(self) -> str:
        return f"uint{self.bits}"

    def rust_type(self) -> str:
        return f"U{self.bits}"

    def alloy_types(self) -> FrozenSet[str]:
        return frozenset({self.rust_type()})


@dataclass(frozen=True)
class SignedInt:
    bits: int = DEFAULT_INT_BITS

    def token(self) -> str:
        return f"int{self.bits}"

    def rust_type(self) -> str:
        return f"I{self.bits}"

    def alloy_types(self) -> FrozenSet[str]:
        return frozenset({self.rust_type()})


@dataclass(frozen=True)
class DynamicBytes:
    def token(self) -> str:
        return "bytes"

    def rust_type(self) -> str:
        return "Vec<u8>"

    def alloy_types(self) -> FrozenSet[str]:
        return frozenset()


@dataclass(frozen=True)
class FixedBytes:
    size: int

    def token(self) -> str:
        return f"bytes{self.size}"

    def rust_type(self) -> str:
        return f"FixedBytes<{self.size}>"

    def alloy_types(self) -> FrozenSet[str]:
        return frozenset({"FixedBytes"})


@dataclass(frozen=True)
class String:
    def token(self) -> str:
        return "string"

    def rust_type(self) -> str:
        return "String"

    def alloy_types(self) -> FrozenSet[str]:
        return frozenset()


@dataclass(frozen=True)
class Array:
    element: "CanonicalType"
    length: Optional[int] = None  # None => dynamic

    def token(self) -> str:
        suffix = f"[{self.length}]" if self.length is not None else "[]"
        return self.element.token() + suffix

    def rust_type(self) -> str:
        inner = self.element.rust_type()
        if self.length is None:
            return f"Vec<{inner}>"
        return f"[{inner}; {self.length}]"

    def alloy_types(self) -> FrozenSet[str]:
        return self.element.alloy_types()


@dataclass(frozen=True)
class Tuple:
    fields: tuple["CanonicalType", ...]

    def token(self) -> str:
        return "(" + ",".join(f.token() for f in self.fields) + ")"

    def rust_type(self) -> str:
        parts = [f.rust_type() for f in self.fields]
        if len(parts) == 1:
            # one-element Rust tuples need the trailing comma
            return f"({parts[0]},)"
        return "(" + ", ".join(parts) + ")"

    def alloy_types(self) -> FrozenSet[str]:
        out: FrozenSet[str] = frozenset()
        for f in self.fields:
            out = out | f.alloy_types()
        return out


CanonicalType = Union[
    Address, Boolean, UnsignedInt, SignedInt, DynamicBytes, FixedBytes, String, Array, Tuple
]


# -----------------
# Parsing
# -----------------

def canonicalize(declared: str, components: Sequence[Param] = ()) -> CanonicalType:
    """
    Resolve a declared type string (plus tuple components, if any) to its
    canonical variant.

    Raises:
        UnsupportedTypeError: naming `declared` when no mapping exists.
    """
    if not isinstance(declared, str):
        raise UnsupportedTypeError(repr(declared), reason="type must be a string")
    if declared != declared.strip():
        raise UnsupportedTypeError(declared, reason="surrounding whitespace")
    s = declared

    m = _ARRAY_RE.match(s)
    if m:
        ref = _canonicalize_base(m.group("base"), components, declared)
        for dim in _DIM_RE.findall(m.group("dims")):
            if dim == "":
                ref = Array(ref)
                continue
            length = int(dim)
            if length <= 0 or str(length) != dim:
                raise UnsupportedTypeError(declared, reason=f"invalid array length {dim!r}")
            ref = Array(ref, length)
        return ref

    return _canonicalize_base(s, components, declared)


def canonicalize_param(param: Param) -> CanonicalType:
    return canonicalize(param.type, param.components)


def _canonicalize_base(base: str, components: Sequence[Param], declared: str) -> CanonicalType:
    if base == "address":
        return Address()
    if base == "bool":
        return Boolean()
    if base == "string":
        return String()
    if base == "byte":
        return FixedBytes(1)

    im = _INT_RE.match(base)
    if im:
        bits = _parse_width(im.group("bits"), declared, default=DEFAULT_INT_BITS)
        if bits % 8 != 0 or not 8 <= bits <= 256:
            raise UnsupportedTypeError(declared, reason=f"invalid integer width {bits}")
        return UnsignedInt(bits) if im.group("u") else SignedInt(bits)

    bm = _BYTES_RE.match(base)
    if bm:
        if bm.group("size") == "":
            return DynamicBytes()
        size = _parse_width(bm.group("size"), declared, default=0)
        if not 1 <= size <= 32:
            raise UnsupportedTypeError(declared, reason=f"invalid fixed bytes width {size}")
        return FixedBytes(size)

    if base == "tuple":
        if not components:
            raise UnsupportedTypeError(declared, reason="tuple type requires components")
        return Tuple(tuple(canonicalize_param(c) for c in components))

    raise UnsupportedTypeError(declared)


def _parse_width(digits: str, declared: str, *, default: int) -> int:
    if digits == "":
        return default
    width = int(digits)
    if str(width) != digits:
        # leading zeros would change the canonical token
        raise UnsupportedTypeError(declared, reason=f"non-canonical width {digits!r}")
    return width


