from __future__ import annotations

"""
Pipeline value types
====================

These frozen dataclasses are the values passed between pipeline stages:

- `Param` / `FunctionDeclaration` are produced by the loader and mirror one
  callable-function ABI entry. They are never mutated after loading.
- `Selector` is the 4-byte dispatch discriminator derived from a signature.
- `Binding` is what the name mangler hands to the emitter: one per
  declaration, carrying the emitted identifier and the Rust-typed params.

Canonical type variants live in `stylus_bindgen.types`.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

__all__ = [
    "Param",
    "FunctionDeclaration",
    "Selector",
    "Binding",
    "READ_ONLY_MUTABILITY",
    "MUTABILITIES",
    "RUST_KEYWORDS",
]

MUTABILITIES = ("pure", "view", "nonpayable", "payable")
READ_ONLY_MUTABILITY = ("pure", "view")

# strict and reserved Rust keywords; never valid as emitted identifiers
RUST_KEYWORDS = frozenset({
    "as", "break", "const", "continue", "crate", "else", "enum", "extern", "false", "fn", "for",
    "if", "impl", "in", "let", "loop", "match", "mod", "move", "mut", "pub", "ref", "return",
    "self", "Self", "static", "struct", "super", "trait", "true", "type", "unsafe", "use",
    "where", "while", "async", "await", "dyn", "abstract", "become", "box", "do", "final",
    "macro", "override", "priv", "typeof", "unsized", "virtual", "yield", "try",
})


@dataclass(frozen=True)
class Param:
    """
    One declared parameter (or return value).

    `type` is the declared type string exactly as it appears in the ABI
    (e.g. "uint", "address[]", "tuple[2]"). `components` is only non-empty
    for tuple types.
    """

    name: str
    type: str
    components: Tuple["Param", ...] = ()

    def declared_text(self) -> str:
        """Human-readable declared type; tuples spell out their components."""
        if self.components and self.type.startswith("tuple"):
            inner = ",".join(c.declared_text() for c in self.components)
            return f"({inner}){self.type[len('tuple'):]}"
        return self.type


@dataclass(frozen=True)
class FunctionDeclaration:
    name: str
    inputs: Tuple[Param, ...] = ()
    outputs: Tuple[Param, ...] = ()
    state_mutability: str = "nonpayable"

    @property
    def is_read_only(self) -> bool:
        return self.state_mutability in READ_ONLY_MUTABILITY

    def original_signature(self) -> str:
        """Signature text using declared (not canonical) type names."""
        return f"{self.name}(" + ",".join(p.declared_text() for p in self.inputs) + ")"


@dataclass(frozen=True)
class Selector:
    """4-byte dispatch discriminator."""

    value: bytes

    def __post_init__(self) -> None:
        if len(self.value) != 4:
            raise ValueError(f"selector must be 4 bytes, got {len(self.value)}")

    @property
    def hex(self) -> str:
        """8 lowercase hex characters, no 0x prefix."""
        return self.value.hex()

    def __str__(self) -> str:
        return "0x" + self.hex


@dataclass(frozen=True)
class Binding:
    declaration: FunctionDeclaration
    signature: str
    selector: Selector
    base_name: str
    identifier: str
    # (rust_param_name, rust_type) in declaration order
    params: Tuple[Tuple[str, str], ...] = field(default_factory=tuple)

    @property
    def original_signature(self) -> str:
        return self.declaration.original_signature()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "identifier": self.identifier,
            "signature": self.signature,
            "selector": str(self.selector),
            "original": self.original_signature,
            "stateMutability": self.declaration.state_mutability,
        }
