"""
stylus_bindgen.config: generator options.

Configuration precedence:
  1) Explicit overrides (CLI flags / keyword arguments)
  2) Environment variables (STYLUS_BINDGEN_*)
  3) Hardcoded defaults below

Key env vars:
  - STYLUS_BINDGEN_ENTRY_POLICY  (skip|warn|error)  default: skip
  - STYLUS_BINDGEN_STRUCT_NAME   (Rust identifier)  default: Contract
  - STYLUS_BINDGEN_LOG_LEVEL     (logging level)    default: WARNING

`entry_policy` decides what happens to ABI entries that are not callable
functions (events, errors, constructors, fallback/receive): they are never
emitted, but a strict caller may prefer the run to fail instead.

Usage:
    from stylus_bindgen.config import load_config
    cfg = load_config(entry_policy="error")
"""

from __future__ import annotations

import os
import re
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Optional

from .model import RUST_KEYWORDS

__all__ = ["EntryPolicy", "BindgenConfig", "load_config", "ENV_PREFIX"]

ENV_PREFIX = "STYLUS_BINDGEN_"

_RUST_IDENT_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class EntryPolicy(str, Enum):
    SKIP = "skip"
    WARN = "warn"
    ERROR = "error"


@dataclass(frozen=True)
class BindgenConfig:
    entry_policy: EntryPolicy = EntryPolicy.SKIP
    struct_name: str = "Contract"
    log_level: str = "WARNING"

    def as_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["entry_policy"] = self.entry_policy.value
        return d


def _env(key: str) -> Optional[str]:
    v = os.getenv(ENV_PREFIX + key)
    return v if v is not None and v.strip() != "" else None


def _parse_policy(val: Any) -> EntryPolicy:
    if isinstance(val, EntryPolicy):
        return val
    try:
        return EntryPolicy(str(val).strip().lower())
    except ValueError:
        choices = ", ".join(p.value for p in EntryPolicy)
        raise ValueError(f"entry_policy must be one of {choices}; got {val!r}") from None


def _parse_struct_name(val: Any) -> str:
    s = str(val).strip()
    if not _RUST_IDENT_RE.match(s):
        raise ValueError(f"struct_name must be a Rust identifier; got {val!r}")
    if s in RUST_KEYWORDS:
        raise ValueError(f"struct_name must not be a Rust keyword; got {val!r}")
    return s


def _parse_log_level(val: Any) -> str:
    s = str(val).strip().upper()
    if s not in _LOG_LEVELS:
        raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}; got {val!r}")
    return s


def load_config(**overrides: Any) -> BindgenConfig:
    """
    Build a config from defaults, then the environment, then `overrides`.
    Overrides set to None are ignored so CLI options can be passed through
    unconditionally.
    """
    raw: Dict[str, Any] = {}
    for key in ("entry_policy", "struct_name", "log_level"):
        env_val = _env(key.upper())
        if env_val is not None:
            raw[key] = env_val
    for key, val in overrides.items():
        if key not in ("entry_policy", "struct_name", "log_level"):
            raise ValueError(f"unknown config key: {key!r}")
        if val is not None:
            raw[key] = val

    defaults = BindgenConfig()
    return BindgenConfig(
        entry_policy=_parse_policy(raw.get("entry_policy", defaults.entry_policy)),
        struct_name=_parse_struct_name(raw.get("struct_name", defaults.struct_name)),
        log_level=_parse_log_level(raw.get("log_level", defaults.log_level)),
    )
