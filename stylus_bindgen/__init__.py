"""
stylus-bindgen: overload-safe Stylus bindings from Solidity ABIs.

Public entrypoints:

- generate(abi, config=None) -> str
    Full pipeline: load -> canonicalize -> select -> mangle -> emit Rust.
- bind(abi, config=None) -> tuple[Binding, ...]
    Everything but emission; one Binding per callable function.
- load_declarations(abi, *, entry_policy=EntryPolicy.SKIP)
- compute_selector(signature) -> Selector
- audit_source(rust_text) -> list[Finding]
- load_pack(name) -> str
    Bundled ABIs: erc20, erc721, erc1155, ierc165.

Every failure is a `BindgenError` subclass and aborts the whole run.
"""

from __future__ import annotations

from .version import __version__  # noqa: F401

from .audit import Finding, audit_source  # noqa: F401
from .config import BindgenConfig, EntryPolicy, load_config  # noqa: F401
from .errors import (  # noqa: F401
    BindgenError,
    DuplicateSelectorError,
    MalformedAbiError,
    UnsupportedTypeError,
    WriteError,
)
from .loader import load_declarations  # noqa: F401
from .model import Binding, FunctionDeclaration, Param, Selector  # noqa: F401
from .packs import load_pack  # noqa: F401
from .pipeline import bind, generate  # noqa: F401
from .selector import compute_selector, signature  # noqa: F401

__all__ = [
    "__version__",
    # Pipeline
    "generate", "bind", "load_declarations", "compute_selector", "signature",
    # Model
    "Binding", "FunctionDeclaration", "Param", "Selector",
    # Config
    "BindgenConfig", "EntryPolicy", "load_config",
    # Errors
    "BindgenError", "MalformedAbiError", "UnsupportedTypeError",
    "DuplicateSelectorError", "WriteError",
    # Extras
    "audit_source", "Finding", "load_pack",
]
