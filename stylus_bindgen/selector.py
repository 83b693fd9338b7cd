"""
Selector engine
===============

Builds the canonical signature of a declaration and derives its 4-byte
dispatch selector:

    signature := name "(" token1 "," token2 "," ... ")"
    selector  := keccak256(utf8(signature))[:4]

Keccak-256 here is the original (pre-NIST) padding used by the Ethereum
call-dispatch convention, not hashlib's sha3_256. Return types and
parameter names never take part in the signature.
"""

from __future__ import annotations

import logging

from Crypto.Hash import keccak

from .errors import UnsupportedTypeError
from .model import FunctionDeclaration, Selector
from .types import canonicalize_param

__all__ = ["keccak256", "signature", "compute_selector", "selector_for"]

log = logging.getLogger(__name__)


def keccak256(data: bytes) -> bytes:
    """Return the Keccak-256 digest of `data`."""
    h = keccak.new(digest_bits=256)
    h.update(data)
    return h.digest()


def signature(decl: FunctionDeclaration) -> str:
    """
    Canonical signature for `decl`.

    Raises:
        UnsupportedTypeError: with `function`/`parameter` filled in.
    """
    tokens = []
    for i, param in enumerate(decl.inputs):
        try:
            tokens.append(canonicalize_param(param).token())
        except UnsupportedTypeError as e:
            raise UnsupportedTypeError(
                e.declared_type,
                function=decl.original_signature(),
                parameter=param.name or f"#{i}",
                reason=e.reason,
            ) from e
    return f"{decl.name}(" + ",".join(tokens) + ")"


def compute_selector(sig: str) -> Selector:
    """First 4 bytes of keccak256 over the UTF-8 bytes of `sig`."""
    return Selector(keccak256(sig.encode("utf-8"))[:4])


def selector_for(decl: FunctionDeclaration) -> Selector:
    sig = signature(decl)
    sel = compute_selector(sig)
    log.debug("selector %s for %s", sel, sig)
    return sel
