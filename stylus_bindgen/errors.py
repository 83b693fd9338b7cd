"""
Typed error classes for the bindings generator.

Every stage of the pipeline raises a subclass of `BindgenError`, so the
driver can report a single failure mode while callers that care can catch
the specific one:

- MalformedAbiError      : input is not parseable, or an entry lacks fields
- UnsupportedTypeError   : a declared type has no canonical mapping
- DuplicateSelectorError : two declarations share a 4-byte selector
- WriteError             : the generated unit could not be written out

The pipeline is fail-fast: the first error aborts the run and no partial
output is produced.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

__all__ = [
    "BindgenError",
    "MalformedAbiError",
    "UnsupportedTypeError",
    "DuplicateSelectorError",
    "WriteError",
]


class BindgenError(Exception):
    """Base class for all generator errors."""


@dataclass(slots=True)
class MalformedAbiError(BindgenError):
    """
    Raised when the interface description is not well-formed JSON, has the
    wrong top-level shape, or a function entry misses required fields.
    """

    message: str
    entry_index: Optional[int] = None
    function: Optional[str] = None

    def __str__(self) -> str:
        where = []
        if self.entry_index is not None:
            where.append(f"entry={self.entry_index}")
        if self.function:
            where.append(f"fn={self.function}")
        where_s = (" [" + ", ".join(where) + "]") if where else ""
        return f"MalformedAbiError{where_s}: {self.message}"


@dataclass(slots=True)
class UnsupportedTypeError(BindgenError):
    """
    Raised when a declared type string cannot be canonicalized.

    `function` and `parameter` are filled in by the caller that knows which
    declaration is being processed; the canonicalizer itself only knows the
    type string.
    """

    declared_type: str
    function: Optional[str] = None
    parameter: Optional[str] = None
    reason: Optional[str] = None

    def __str__(self) -> str:
        where = []
        if self.function:
            where.append(f"fn={self.function}")
        if self.parameter:
            where.append(f"param={self.parameter}")
        where_s = (" [" + ", ".join(where) + "]") if where else ""
        reason = f" ({self.reason})" if self.reason else ""
        return f"UnsupportedTypeError{where_s}: unsupported type {self.declared_type!r}{reason}"


@dataclass(slots=True)
class DuplicateSelectorError(BindgenError):
    """
    Raised when two declarations canonicalize to the same selector, either a
    duplicated declaration in the source or a genuine hash collision.
    """

    selector: str
    first: str
    second: str

    def __str__(self) -> str:
        if self.first == self.second:
            detail = f"{self.first} is declared more than once"
        else:
            detail = f"{self.first} and {self.second} collide"
        return f"DuplicateSelectorError: selector 0x{self.selector}: {detail}"


@dataclass(slots=True)
class WriteError(BindgenError):
    """Raised by the driver when the generated unit cannot be written."""

    path: str
    reason: str

    def __str__(self) -> str:
        return f"WriteError: cannot write {self.path}: {self.reason}"
