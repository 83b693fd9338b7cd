"""
Static audit of a generated Rust unit.

Re-derives everything a reviewer would otherwise check by hand, using only
the generated text:

- exactly one `pub fn new(` constructor;
- every other `pub fn` is named `<snake_name>__0x<8 lowercase hex>`;
- its signature line returns `Result<Vec<u8>, Vec<u8>>`;
- its body decodes the same selector hex as its suffix;
- the `// Original:` comment above it re-hashes to that selector and its
  name snake-cases to the identifier base;
- no two wrappers share a suffix.

`audit_source` returns findings instead of raising, so one pass reports
every problem in the file.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from .emitter import RESULT_TYPE
from .errors import UnsupportedTypeError
from .model import Param
from .naming import SEPARATOR, snake_case
from .selector import compute_selector
from .types import canonicalize_param

__all__ = ["Finding", "audit_source", "audit_file", "parse_original_signature"]

_FN_RE = re.compile(r"^\s*pub fn (?P<name>[A-Za-z_][A-Za-z0-9_]*)\(")
_SUFFIX_RE = re.compile(r"^[0-9a-f]{8}$")
_BASE_RE = re.compile(r"^[a-z_][a-z0-9_]*$")
_ORIGINAL_RE = re.compile(r"^\s*// Original: (?P<sig>.+?)\s*$")
_DECODE_RE = re.compile(r'hex::decode\("(?P<sel>[^"]*)"\)')
_SIG_RE = re.compile(r"^(?P<name>[A-Za-z_][A-Za-z0-9_]*)\((?P<args>.*)\)$")

# lines scanned after a wrapper's signature when looking for its selector
BODY_WINDOW = 6


@dataclass(frozen=True)
class Finding:
    line: int
    message: str
    identifier: Optional[str] = None

    def __str__(self) -> str:
        who = f" {self.identifier}:" if self.identifier else ""
        return f"line {self.line}:{who} {self.message}"


def _split_top_level(args: str) -> List[str]:
    parts: List[str] = []
    depth = 0
    cur = ""
    for ch in args:
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
        if ch == "," and depth == 0:
            parts.append(cur)
            cur = ""
            continue
        cur += ch
    if cur or parts:
        parts.append(cur)
    return parts


def _param_from_text(text: str) -> Param:
    """`(uint,address)[]` -> Param(type="tuple[]", components=...)."""
    text = text.strip()
    if text.startswith("("):
        close = text.rfind(")")
        inner = text[1:close]
        components = tuple(_param_from_text(t) for t in _split_top_level(inner))
        return Param(name="", type="tuple" + text[close + 1:], components=components)
    return Param(name="", type=text)


def parse_original_signature(sig: str) -> Tuple[str, Tuple[Param, ...]]:
    """Split `name(type1,type2)` into the name and declared params."""
    m = _SIG_RE.match(sig.strip())
    if not m:
        raise ValueError(f"not a function signature: {sig!r}")
    params = tuple(_param_from_text(t) for t in _split_top_level(m.group("args")))
    return m.group("name"), params


def _check_original(
    lines: List[str], fn_index: int, identifier: str, base: str, suffix: str
) -> List[Finding]:
    line_no = fn_index + 1
    prev = fn_index - 1
    while prev >= 0 and not lines[prev].strip():
        prev -= 1
    m = _ORIGINAL_RE.match(lines[prev]) if prev >= 0 else None
    if not m:
        return [Finding(line_no, "missing '// Original:' signature comment", identifier)]

    try:
        name, params = parse_original_signature(m.group("sig"))
        tokens = [canonicalize_param(p).token() for p in params]
    except (ValueError, UnsupportedTypeError) as e:
        return [Finding(prev + 1, f"unparseable original signature: {e}", identifier)]

    out: List[Finding] = []
    canonical = f"{name}(" + ",".join(tokens) + ")"
    expected = compute_selector(canonical).hex
    if expected != suffix:
        out.append(Finding(line_no, f"{canonical} hashes to 0x{expected}, not 0x{suffix}", identifier))
    if snake_case(name) != base:
        out.append(Finding(line_no, f"base name should be {snake_case(name)!r}", identifier))
    return out


def audit_source(src: str) -> List[Finding]:
    lines = src.splitlines()
    findings: List[Finding] = []
    constructors = 0
    suffixes: Dict[str, int] = {}

    for i, line in enumerate(lines):
        m = _FN_RE.match(line)
        if not m:
            continue
        identifier = m.group("name")
        if identifier == "new":
            constructors += 1
            continue

        base, sep, suffix = identifier.rpartition(SEPARATOR)
        if not sep or not _SUFFIX_RE.match(suffix) or not _BASE_RE.match(base):
            findings.append(Finding(i + 1, "name must be <snake_name>__0x<8 hex>", identifier))
            continue

        if RESULT_TYPE not in line:
            findings.append(Finding(i + 1, f"must return {RESULT_TYPE}", identifier))

        body = "\n".join(lines[i + 1 : i + 1 + BODY_WINDOW])
        dm = _DECODE_RE.search(body)
        if dm is None:
            findings.append(Finding(i + 1, "body does not decode a selector", identifier))
        elif dm.group("sel") != suffix:
            findings.append(
                Finding(i + 1, f"body decodes {dm.group('sel')!r}, name says {suffix!r}", identifier)
            )

        findings.extend(_check_original(lines, i, identifier, base, suffix))

        if suffix in suffixes:
            findings.append(
                Finding(i + 1, f"selector 0x{suffix} already used on line {suffixes[suffix]}", identifier)
            )
        else:
            suffixes[suffix] = i + 1

    if constructors != 1:
        findings.append(Finding(0, f"expected exactly one constructor, found {constructors}"))
    return findings


def audit_file(path: Union[str, Path]) -> List[Finding]:
    return audit_source(Path(path).read_text(encoding="utf-8"))
