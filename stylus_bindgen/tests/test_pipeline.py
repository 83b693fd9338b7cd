from __future__ import annotations

import json
import re

import pytest

from stylus_bindgen.config import load_config
from stylus_bindgen.errors import BindgenError, DuplicateSelectorError, UnsupportedTypeError
from stylus_bindgen.packs import available, load_pack
from stylus_bindgen.pipeline import bind, generate

_PUB_FN = re.compile(r"pub fn (\w+)\(")


def _wrappers(src: str) -> list:
    return [n for n in _PUB_FN.findall(src) if n != "new"]


def test_scenario_single_transfer() -> None:
    abi = [
        {
            "type": "function",
            "name": "transfer",
            "inputs": [{"name": "to", "type": "address"}, {"name": "value", "type": "uint256"}],
            "outputs": [{"name": "", "type": "bool"}],
            "stateMutability": "nonpayable",
        }
    ]
    src = generate(abi)
    assert _wrappers(src) == ["transfer__0xa9059cbb"]
    assert "// Original: transfer(address,uint256)" in src
    assert "pub fn transfer__0xa9059cbb(&self, to: Address, value: U256)" in src


def test_scenario_overloads_stay_separate(fixture_text) -> None:
    src = generate(fixture_text("overloads.json"))
    assert _wrappers(src) == [
        "safe_transfer_from__0x42842e0e",
        "safe_transfer_from__0xb88d4fde",
    ]
    assert (
        "safe_transfer_from__0x42842e0e(&self, from: Address, to: Address, tokenId: U256)" in src
    )
    assert (
        "safe_transfer_from__0xb88d4fde(&self, from: Address, to: Address, tokenId: U256, data: Vec<u8>)"
        in src
    )


def test_scenario_supports_interface() -> None:
    src = generate(load_pack("ierc165"))
    assert _wrappers(src) == ["supports_interface__0x01ffc9a7"]
    assert src.count("pub fn new(address: Address) -> Self") == 1
    assert "interfaceId: FixedBytes<4>" in src


@pytest.mark.parametrize("name", available())
def test_generation_is_deterministic(name: str) -> None:
    abi = load_pack(name)
    assert generate(abi) == generate(abi)
    assert generate(abi) == generate(json.loads(abi))


@pytest.mark.parametrize("name", available())
def test_one_wrapper_per_function_with_unique_names(name: str) -> None:
    abi = load_pack(name)
    functions = [e for e in json.loads(abi) if e.get("type", "function") == "function"]
    wrappers = _wrappers(generate(abi))
    assert len(wrappers) == len(functions)
    assert len(set(wrappers)) == len(wrappers)


def test_every_suffix_matches_its_selector() -> None:
    for b in bind(load_pack("erc721")):
        assert b.identifier.endswith("__0x" + b.selector.hex)
        assert b.identifier.startswith(b.base_name)


def test_duplicate_declaration_aborts_the_run(fixture_text) -> None:
    with pytest.raises(DuplicateSelectorError) as ei:
        generate(fixture_text("duplicate.json"))
    err = ei.value
    assert err.selector == "a9059cbb"
    assert err.first == err.second == "transfer(address,uint256)"
    assert "declared more than once" in str(err)


def test_unsupported_type_names_the_declaration(fixture_text) -> None:
    with pytest.raises(UnsupportedTypeError) as ei:
        generate(fixture_text("unsupported.json"))
    err = ei.value
    assert isinstance(err, BindgenError)
    assert err.declared_type == "fixed128x18"
    assert err.function == "scale(uint256,fixed128x18)"
    assert err.parameter == "factor"


def test_tuple_parameters(fixture_text) -> None:
    (b,) = bind(fixture_text("tuple.json"))
    assert b.signature == "submitOrders((address,uint128,bytes32)[],uint64)"
    assert b.params == (
        ("orders", "Vec<(Address, U128, FixedBytes<32>)>"),
        ("deadline", "U64"),
    )
    src = generate(fixture_text("tuple.json"))
    assert "use stylus_sdk::alloy_primitives::{Address, FixedBytes, U128, U64};" in src
    assert "// Original: submitOrders((address,uint128,bytes32)[],uint64)" in src
    # payable functions dispatch through a regular call
    assert "RawCall::new().call" in src


def test_read_only_functions_use_static_calls() -> None:
    src = generate(load_pack("erc20"))
    assert src.count("RawCall::new_static().call") == 1
    assert src.count("RawCall::new().call") == 2


def test_struct_name_from_config() -> None:
    src = generate(load_pack("erc20"), load_config(struct_name="Erc20"))
    assert "pub struct Erc20 {" in src
    assert "impl Erc20 {" in src
    assert "pub struct Contract" not in src


def test_empty_abi_still_emits_the_record_type() -> None:
    src = generate("[]")
    assert _wrappers(src) == []
    assert "use stylus_sdk::alloy_primitives::Address;\n" in src
    assert src.endswith("        Self { address }\n    }\n}\n")


def test_to_dict_view() -> None:
    rows = [b.to_dict() for b in bind(load_pack("erc20"))]
    assert rows[1] == {
        "identifier": "balance_of__0x70a08231",
        "signature": "balanceOf(address)",
        "selector": "0x70a08231",
        "original": "balanceOf(address)",
        "stateMutability": "view",
    }
