"""
End-to-end generator pipeline.

    loader -> types -> selector -> naming -> emitter

`generate` returns the complete Rust unit or raises the first
`BindgenError` met; there is no partial result. `bind` stops before the
emitter and is what the `selectors` command and the audit build on.
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from .config import BindgenConfig, load_config
from .emitter import emit_rust
from .loader import AbiSource, load_declarations
from .model import Binding
from .naming import bind_all

__all__ = ["bind", "generate"]

log = logging.getLogger(__name__)


def bind(abi: AbiSource, config: Optional[BindgenConfig] = None) -> Tuple[Binding, ...]:
    cfg = config or load_config()
    decls = load_declarations(abi, entry_policy=cfg.entry_policy)
    return bind_all(decls)


def generate(abi: AbiSource, config: Optional[BindgenConfig] = None) -> str:
    cfg = config or load_config()
    bindings = bind(abi, cfg)
    src = emit_rust(bindings, struct_name=cfg.struct_name)
    log.info("generated %d wrapper(s) for %s", len(bindings), cfg.struct_name)
    return src
