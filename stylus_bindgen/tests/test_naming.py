from __future__ import annotations

import pytest

from stylus_bindgen.model import FunctionDeclaration, Param
from stylus_bindgen.naming import SEPARATOR, bind, mangle, rust_ident, snake_case


@pytest.mark.parametrize(
    "name, expected",
    [
        ("transfer", "transfer"),
        ("balanceOf", "balance_of"),
        ("safeTransferFrom", "safe_transfer_from"),
        ("isApprovedForAll", "is_approved_for_all"),
        ("supportsInterface", "supports_interface"),
        ("balanceOfBatch", "balance_of_batch"),
        ("onERC721Received", "on_erc721_received"),
        ("DOMAIN_SEPARATOR", "domain_separator"),
        ("totalSupply", "total_supply"),
        ("already_snake", "already_snake"),
    ],
)
def test_snake_case_table(name: str, expected: str) -> None:
    assert snake_case(name) == expected


def test_mangle_joins_base_and_selector() -> None:
    assert mangle("safeTransferFrom", "42842e0e") == "safe_transfer_from__0x42842e0e"
    assert SEPARATOR == "__0x"


@pytest.mark.parametrize(
    "raw, index, expected",
    [
        ("tokenId", 0, "tokenId"),
        ("", 2, "arg2"),
        ("   ", 1, "arg1"),
        ("type", 0, "type_"),
        ("self", 0, "self_"),
        ("1st", 0, "_1st"),
        ("a-b", 0, "a_b"),
    ],
)
def test_rust_ident(raw: str, index: int, expected: str) -> None:
    assert rust_ident(raw, index) == expected


def test_bind_keeps_param_order_and_uniquifies_names() -> None:
    decl = FunctionDeclaration(
        name="swap",
        inputs=(
            Param("amount", "uint256"),
            Param("amount", "uint128"),
            Param("", "address"),
        ),
    )
    b = bind(decl)
    assert b.params == (("amount", "U256"), ("amount_1", "U128"), ("arg2", "Address"))
    assert b.signature == "swap(uint256,uint128,address)"
    assert b.identifier == f"swap{SEPARATOR}{b.selector.hex}"
    assert b.base_name == "swap"


def test_identifier_suffix_is_selector_not_a_counter() -> None:
    three = FunctionDeclaration(
        "safeTransferFrom",
        (Param("from", "address"), Param("to", "address"), Param("tokenId", "uint256")),
    )
    four = FunctionDeclaration(
        "safeTransferFrom",
        three.inputs + (Param("data", "bytes"),),
    )
    assert bind(three).identifier == "safe_transfer_from__0x42842e0e"
    assert bind(four).identifier == "safe_transfer_from__0xb88d4fde"


def test_suffixed_names_skip_names_already_declared() -> None:
    decl = FunctionDeclaration(
        name="f",
        inputs=(Param("a", "uint256"), Param("a", "uint256"), Param("a_1", "bool")),
    )
    names = [n for n, _ in bind(decl).params]
    assert len(set(names)) == len(names)
    assert names == ["a", "a_2", "a_1"]


def test_repeated_duplicates_keep_counting() -> None:
    decl = FunctionDeclaration(
        name="f",
        inputs=(Param("x", "bool"), Param("x", "bool"), Param("x_2", "bool"), Param("x", "bool")),
    )
    assert [n for n, _ in bind(decl).params] == ["x", "x_1", "x_2", "x_3"]
