"""
Name mangling
=============

Turns each declaration into a `Binding` whose emitted identifier is

    snake_case(name) + "__0x" + selector_hex

e.g. ``safeTransferFrom(address,address,uint256)`` becomes
``safe_transfer_from__0x42842e0e``. Overloads share the snake-case base but
never the selector, so the suffix alone disambiguates them; no counters are
involved. Two declarations with the same selector abort the run with
`DuplicateSelectorError`.

Parameter names keep their declared spelling (``tokenId`` stays ``tokenId``)
and are only made safe for Rust.
"""

from __future__ import annotations

import logging
import re
from typing import Dict, Iterable, List, Tuple

from .errors import DuplicateSelectorError
from .model import RUST_KEYWORDS, Binding, FunctionDeclaration, Param
from .selector import compute_selector, signature
from .types import canonicalize_param

__all__ = ["SEPARATOR", "snake_case", "rust_ident", "mangle", "bind", "bind_all"]

log = logging.getLogger(__name__)

SEPARATOR = "__0x"

_WORD_RE = re.compile(r"([^_])([A-Z][a-z]+)")
_LOWER_UPPER_RE = re.compile(r"([a-z0-9])([A-Z])")
_NON_ID_CHAR = re.compile(r"[^A-Za-z0-9_]")


def snake_case(name: str) -> str:
    """camelCase / PascalCase -> snake_case (``isApprovedForAll`` -> ``is_approved_for_all``)."""
    s1 = _WORD_RE.sub(r"\1_\2", name)
    return _LOWER_UPPER_RE.sub(r"\1_\2", s1).lower()


def mangle(name: str, selector_hex: str) -> str:
    return f"{snake_case(name)}{SEPARATOR}{selector_hex}"


def rust_ident(name: str, index: int) -> str:
    """Rust-safe parameter name; unnamed parameters become ``arg<index>``."""
    s = _NON_ID_CHAR.sub("_", (name or "").strip())
    if not s:
        return f"arg{index}"
    if s in RUST_KEYWORDS:
        s += "_"
    if s[0].isdigit():
        s = "_" + s
    return s


def _unique_names(names: List[str]) -> List[str]:
    """
    De-duplicate parameter names by appending numeric suffixes.

    The first occurrence of a name keeps it; later ones take the lowest
    `_<k>` not already declared or handed out, so (a, a, a_1) becomes
    (a, a_2, a_1).
    """
    taken = set(names)
    kept: set = set()
    next_k: Dict[str, int] = {}
    out: List[str] = []
    for n in names:
        if n not in kept:
            kept.add(n)
            out.append(n)
            continue
        k = next_k.get(n, 1)
        while f"{n}_{k}" in taken:
            k += 1
        next_k[n] = k + 1
        taken.add(f"{n}_{k}")
        out.append(f"{n}_{k}")
    return out


def _rust_params(inputs: Tuple[Param, ...]) -> Tuple[Tuple[str, str], ...]:
    names = _unique_names([rust_ident(p.name, i) for i, p in enumerate(inputs)])
    return tuple(
        (n, canonicalize_param(p).rust_type()) for n, p in zip(names, inputs)
    )


def bind(decl: FunctionDeclaration) -> Binding:
    sig = signature(decl)
    sel = compute_selector(sig)
    base = snake_case(decl.name)
    return Binding(
        declaration=decl,
        signature=sig,
        selector=sel,
        base_name=base,
        identifier=mangle(decl.name, sel.hex),
        params=_rust_params(decl.inputs),
    )


def bind_all(decls: Iterable[FunctionDeclaration]) -> Tuple[Binding, ...]:
    """
    Bind every declaration, preserving input order.

    Raises:
        DuplicateSelectorError: on the first selector shared by two declarations.
        UnsupportedTypeError: from canonicalization.
    """
    by_selector: Dict[bytes, Binding] = {}
    out: List[Binding] = []
    for decl in decls:
        b = bind(decl)
        prev = by_selector.get(b.selector.value)
        if prev is not None:
            raise DuplicateSelectorError(
                selector=b.selector.hex,
                first=prev.signature,
                second=b.signature,
            )
        by_selector[b.selector.value] = b
        out.append(b)
        log.debug("bound %s -> %s", b.signature, b.identifier)
    return tuple(out)
