"""stylus_bindgen.version: package version string.

Resolution order (first match wins):
- STYLUS_BINDGEN_VERSION environment variable
- installed distribution metadata for 'stylus-bindgen'
- BASE_VERSION + '+dev'
"""

from __future__ import annotations

import os
from importlib import metadata as importlib_metadata
from typing import Optional

BASE_VERSION = "0.1.0"


def _pkg_metadata_version(dist_name: str = "stylus-bindgen") -> Optional[str]:
    try:
        v = importlib_metadata.version(dist_name)
        return v if v and v != "0.0.0" else None
    except importlib_metadata.PackageNotFoundError:
        return None


def compute_version() -> str:
    val = os.getenv("STYLUS_BINDGEN_VERSION")
    if val:
        return val
    meta_v = _pkg_metadata_version()
    if meta_v:
        return meta_v
    return f"{BASE_VERSION}+dev"


__version__ = compute_version()

__all__ = ["__version__", "BASE_VERSION", "compute_version"]
