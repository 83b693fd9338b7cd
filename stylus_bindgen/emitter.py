"""
stylus_bindgen.emitter
======================

Render bindings as a single Rust module for Stylus contracts.

The emitted unit contains, in order:

- a header and the crate-level allows required by selector-suffixed names;
- `use` lines for exactly the `alloy_primitives` types referenced;
- `pub struct Contract { pub address: Address }` and its `new` constructor;
- one wrapper per binding, in input order:

    // Original: safeTransferFrom(address,address,uint256)
    pub fn safe_transfer_from__0x42842e0e(&self, from: Address, to: Address, tokenId: U256) -> Result<Vec<u8>, Vec<u8>> {
        let calldata = hex::decode("42842e0e").expect("selector hex is valid");
        unsafe { RawCall::new().call(self.address, &calldata) }
    }

The selector hex is written literally into each body, so the generated file
alone shows that every wrapper dispatches on its own suffix. Read-only
functions (view/pure) dispatch through `RawCall::new_static()`.

Argument encoding is left to the runtime crate. Output depends only on the
bindings: no timestamps, no versions, no unordered iteration.
"""

from __future__ import annotations

from typing import List, Sequence

from .model import Binding
from .types import canonicalize_param

__all__ = ["emit_rust", "alloy_imports"]

ALLOY_PATH = "stylus_sdk::alloy_primitives"
RAW_CALL_PATH = "stylus_sdk::call::RawCall"
RESULT_TYPE = "Result<Vec<u8>, Vec<u8>>"

_HEADER = """//! Generated by stylus-bindgen from a Solidity ABI. Do not edit by hand.
//!
//! Every wrapper is named `<snake_name>__0x<selector>`, so overloads never collide.

#![allow(non_snake_case)]
#![allow(unused_variables)]

"""

_STRUCT_TMPL = """
pub struct {struct_name} {{
    pub address: Address,
}}

impl {struct_name} {{
    pub fn new(address: Address) -> Self {{
        Self {{ address }}
    }}
"""

_FN_TMPL = """
    // Original: {original}
    pub fn {identifier}(&self{params}) -> {result} {{
        let calldata = hex::decode("{selector}").expect("selector hex is valid");
        unsafe {{ {call}.call(self.address, &calldata) }}
    }}
"""


def alloy_imports(bindings: Sequence[Binding]) -> List[str]:
    """Sorted alloy_primitives type names referenced by `bindings` (Address always)."""
    names = {"Address"}
    for b in bindings:
        for p in b.declaration.inputs:
            names |= canonicalize_param(p).alloy_types()
    return sorted(names)


def _use_line(names: List[str]) -> str:
    if len(names) == 1:
        return f"use {ALLOY_PATH}::{names[0]};\n"
    return f"use {ALLOY_PATH}::{{{', '.join(names)}}};\n"


def _emit_fn(b: Binding) -> str:
    params = "".join(f", {name}: {ty}" for name, ty in b.params)
    call = "RawCall::new_static()" if b.declaration.is_read_only else "RawCall::new()"
    return _FN_TMPL.format(
        original=b.original_signature,
        identifier=b.identifier,
        params=params,
        result=RESULT_TYPE,
        selector=b.selector.hex,
        call=call,
    )


def emit_rust(bindings: Sequence[Binding], *, struct_name: str = "Contract") -> str:
    """
    Generate the Rust module text for `bindings`.

    Parameters
    ----------
    bindings : output of `naming.bind_all`, in the order to emit.
    struct_name : name of the record type holding the target address.

    Returns
    -------
    str : Rust source, newline-terminated.
    """
    src = _HEADER
    src += _use_line(alloy_imports(bindings))
    src += f"use {RAW_CALL_PATH};\n"
    src += _STRUCT_TMPL.format(struct_name=struct_name)
    src += "".join(_emit_fn(b) for b in bindings)
    src += "}\n"
    return src
