"""
Interface loader

Turns raw ABI JSON into an ordered tuple of `FunctionDeclaration`s:

- Accepts JSON text/bytes, an already-parsed list of entries, or a build
  artifact object carrying the list under "abi".
- Validates structure with jsonschema (Draft 7) before reading any field.
- Keeps callable functions only, in original array order. An entry without
  "type" is a function, as in the Solidity ABI.
- Other entry kinds (constructor, event, error, fallback, receive) are
  handled per `EntryPolicy`: skipped, skipped with a warning, or rejected.

Function names are never rewritten: they are hashed into the selector, so a
name that is not an identifier is a malformed input rather than something
to sanitize.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, List, Mapping, Sequence, Tuple, Union

import jsonschema
from jsonschema.exceptions import best_match

from .config import EntryPolicy
from .errors import MalformedAbiError
from .model import FunctionDeclaration, Param

__all__ = ["load_declarations", "parse_abi", "ABI_SCHEMA", "FUNCTION_SCHEMA"]

log = logging.getLogger(__name__)

AbiSource = Union[str, bytes, Sequence[Any], Mapping[str, Any]]

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

_PARAM_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["type"],
    "properties": {
        "name": {"type": "string"},
        "type": {"type": "string"},
        "components": {"type": "array", "items": {"$ref": "#/definitions/param"}},
    },
}

ABI_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "array",
    "items": {
        "type": "object",
        "properties": {"type": {"type": "string"}},
    },
}

FUNCTION_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "definitions": {"param": _PARAM_SCHEMA},
    "type": "object",
    "required": ["name", "inputs"],
    "properties": {
        "type": {"const": "function"},
        "name": {"type": "string"},
        "inputs": {"type": "array", "items": {"$ref": "#/definitions/param"}},
        "outputs": {"type": "array", "items": {"$ref": "#/definitions/param"}},
        "stateMutability": {"enum": ["pure", "view", "nonpayable", "payable"]},
        "constant": {"type": "boolean"},
        "payable": {"type": "boolean"},
    },
}

_ABI_VALIDATOR = jsonschema.Draft7Validator(ABI_SCHEMA)
_FUNCTION_VALIDATOR = jsonschema.Draft7Validator(FUNCTION_SCHEMA)


# ----------------------------
# Public API
# ----------------------------

def parse_abi(source: AbiSource) -> List[Dict[str, Any]]:
    """
    Parse `source` into the raw list of ABI entries and validate its shape.

    Raises:
        MalformedAbiError: if the text is not JSON or the shape is wrong.
    """
    raw = _load_json(source)
    if isinstance(raw, dict):
        if "abi" not in raw:
            raise MalformedAbiError("ABI object must carry an 'abi' array")
        raw = raw["abi"]

    err = best_match(_ABI_VALIDATOR.iter_errors(raw))
    if err is not None:
        index = err.absolute_path[0] if err.absolute_path else None
        raise MalformedAbiError(_describe(err), entry_index=index)
    return raw


def load_declarations(
    source: AbiSource,
    *,
    entry_policy: EntryPolicy = EntryPolicy.SKIP,
) -> Tuple[FunctionDeclaration, ...]:
    """
    Load the callable-function declarations from an ABI, in array order.

    Raises:
        MalformedAbiError: on bad JSON, bad structure, missing fields, or a
            non-function entry under `EntryPolicy.ERROR`.
    """
    entries = parse_abi(source)
    out: List[FunctionDeclaration] = []
    for i, entry in enumerate(entries):
        kind = entry.get("type", "function")
        if kind != "function":
            _handle_other_entry(i, kind, entry, entry_policy)
            continue
        out.append(_load_function(i, entry))
    log.debug("loaded %d function(s) from %d ABI entries", len(out), len(entries))
    return tuple(out)


# ----------------------------
# Internals
# ----------------------------

def _load_json(obj: AbiSource) -> Any:
    if isinstance(obj, (bytes, bytearray)):
        try:
            obj = bytes(obj).decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedAbiError(f"ABI is not valid UTF-8: {e}") from e
    if isinstance(obj, str):
        try:
            return json.loads(obj)
        except json.JSONDecodeError as e:
            raise MalformedAbiError(f"ABI JSON parse error: {e}") from e
    if isinstance(obj, (list, tuple, Mapping)):
        # deep copy; detaches the loader from caller-owned structures
        try:
            return json.loads(json.dumps(obj))
        except (TypeError, ValueError) as e:
            raise MalformedAbiError(f"ABI is not JSON-serializable: {e}") from e
    raise MalformedAbiError(f"Unsupported ABI input type: {type(obj).__name__}")


def _describe(err: jsonschema.ValidationError) -> str:
    path = "/".join(str(p) for p in err.absolute_path)
    return f"{path or '<root>'}: {err.message}"


def _handle_other_entry(index: int, kind: Any, entry: Mapping[str, Any], policy: EntryPolicy) -> None:
    label = f"{kind} {entry.get('name')}" if entry.get("name") else str(kind)
    if policy is EntryPolicy.ERROR:
        raise MalformedAbiError(
            f"entry kind {kind!r} is not a callable function",
            entry_index=index,
            function=entry.get("name") if isinstance(entry.get("name"), str) else None,
        )
    if policy is EntryPolicy.WARN:
        log.warning("skipping ABI entry %d (%s): not a callable function", index, label)
    else:
        log.debug("skipping ABI entry %d (%s)", index, label)


def _load_function(index: int, entry: Dict[str, Any]) -> FunctionDeclaration:
    name = entry.get("name") if isinstance(entry.get("name"), str) else None
    err = best_match(_FUNCTION_VALIDATOR.iter_errors(entry))
    if err is not None:
        raise MalformedAbiError(_describe(err), entry_index=index, function=name)

    if not _IDENTIFIER_RE.match(name or ""):
        raise MalformedAbiError(
            f"function name {name!r} is not an identifier", entry_index=index, function=name
        )

    return FunctionDeclaration(
        name=name,
        inputs=tuple(_param(p) for p in entry["inputs"]),
        outputs=tuple(_param(p) for p in entry.get("outputs") or ()),
        state_mutability=_mutability(entry),
    )


def _param(p: Mapping[str, Any]) -> Param:
    return Param(
        name=p.get("name") or "",
        type=p["type"],
        components=tuple(_param(c) for c in p.get("components") or ()),
    )


def _mutability(entry: Mapping[str, Any]) -> str:
    m = entry.get("stateMutability")
    if m is not None:
        return str(m)
    # pre-0.4.16 ABIs
    if entry.get("constant") is True:
        return "view"
    if entry.get("payable") is True:
        return "payable"
    return "nonpayable"
