"""
Bundled interface packs.

Standard ABIs shipped with this package so bindings for common interfaces
can be generated without an input file:

- erc20    : fungible tokens (approve, balanceOf, transfer)
- erc721   : non-fungible tokens, including both safeTransferFrom overloads
- erc1155  : multi-tokens
- ierc165  : interface detection

Example:

    from stylus_bindgen.packs import load_pack
    from stylus_bindgen.pipeline import generate

    src = generate(load_pack("erc721"))
"""

from __future__ import annotations

from importlib import resources as _res
from typing import List

__all__ = ["PACKS", "available", "load_pack"]

# Logical names -> package-relative filenames
PACKS = {
    "erc20": "erc20.json",
    "erc721": "erc721.json",
    "erc1155": "erc1155.json",
    "ierc165": "ierc165.json",
}


def available() -> List[str]:
    return sorted(PACKS)


def load_pack(name: str) -> str:
    """Return the raw ABI JSON text of a bundled pack."""
    key = name.strip().lower()
    if key not in PACKS:
        raise KeyError(f"unknown interface pack: {name!r} (available: {', '.join(available())})")
    return _res.files(__package__).joinpath("abis").joinpath(PACKS[key]).read_text(encoding="utf-8")
