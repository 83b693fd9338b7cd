"""
stylus_bindgen.cli
==================

Command-line interface for the bindings generator.

The Typer app lives in `stylus_bindgen.cli.main`; it is loaded lazily so
library users importing `stylus_bindgen` never import Typer.

Quick usage
-----------
- From Python:
    >>> from stylus_bindgen.cli.main import main
    >>> main(["generate", "--standard", "erc20"])

- From shell (installed as a console script):
    $ stylus-bindgen --help
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, List

__all__: List[str] = ["app", "run"]

_SUBMODULE = "stylus_bindgen.cli.main"
_EXPOSE = ("app", "run")


def __getattr__(name: str) -> Any:  # PEP 562 lazy attribute access
    if name in _EXPOSE:
        return getattr(import_module(_SUBMODULE), name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
