from __future__ import annotations

import pytest

from stylus_bindgen.errors import UnsupportedTypeError
from stylus_bindgen.model import Param
from stylus_bindgen.types import (
    Address,
    Array,
    Boolean,
    DynamicBytes,
    FixedBytes,
    SignedInt,
    String,
    Tuple,
    UnsignedInt,
    canonicalize,
    canonicalize_param,
)


@pytest.mark.parametrize(
    "declared, variant, token, rust",
    [
        ("address", Address(), "address", "Address"),
        ("bool", Boolean(), "bool", "bool"),
        ("uint256", UnsignedInt(256), "uint256", "U256"),
        ("uint", UnsignedInt(256), "uint256", "U256"),
        ("uint8", UnsignedInt(8), "uint8", "U8"),
        ("int", SignedInt(256), "int256", "I256"),
        ("int64", SignedInt(64), "int64", "I64"),
        ("bytes", DynamicBytes(), "bytes", "Vec<u8>"),
        ("bytes4", FixedBytes(4), "bytes4", "FixedBytes<4>"),
        ("bytes32", FixedBytes(32), "bytes32", "FixedBytes<32>"),
        ("byte", FixedBytes(1), "bytes1", "FixedBytes<1>"),
        ("string", String(), "string", "String"),
    ],
)
def test_elementary_types(declared: str, variant: object, token: str, rust: str) -> None:
    t = canonicalize(declared)
    assert t == variant
    assert t.token() == token
    assert t.rust_type() == rust


def test_arrays_apply_dimensions_left_to_right() -> None:
    t = canonicalize("uint[][3]")
    assert t == Array(Array(UnsignedInt(256)), 3)
    assert t.token() == "uint256[][3]"
    assert t.rust_type() == "[Vec<U256>; 3]"
    assert canonicalize("address[]").rust_type() == "Vec<Address>"


def test_tuple_components() -> None:
    comps = (Param("maker", "address"), Param("amount", "uint"))
    t = canonicalize("tuple", comps)
    assert t == Tuple((Address(), UnsignedInt(256)))
    assert t.token() == "(address,uint256)"
    assert t.rust_type() == "(Address, U256)"
    assert t.alloy_types() == frozenset({"Address", "U256"})

    arr = canonicalize_param(Param("orders", "tuple[2]", comps))
    assert arr.token() == "(address,uint256)[2]"
    assert arr.rust_type() == "[(Address, U256); 2]"


def test_single_field_tuple_rust_type() -> None:
    t = canonicalize("tuple", (Param("x", "bool"),))
    assert t.rust_type() == "(bool,)"


@pytest.mark.parametrize(
    "declared",
    [
        "fixed128x18",
        "function",
        "Uint256",
        "uint7",
        "uint264",
        "uint0",
        "uint08",
        "bytes0",
        "bytes33",
        "uint256[0]",
        "uint256[02]",
        "tuple",
        "mapping(address => uint256)",
        " uint256",
        "address ",
        "uint256[] ",
        "",
    ],
)
def test_unsupported_types_raise_naming_the_declared_string(declared: str) -> None:
    with pytest.raises(UnsupportedTypeError) as ei:
        canonicalize(declared)
    assert ei.value.declared_type == declared


def test_no_fallback_type_for_unknown_names() -> None:
    with pytest.raises(UnsupportedTypeError) as ei:
        canonicalize("uint256x")
    assert "uint256x" in str(ei.value)
