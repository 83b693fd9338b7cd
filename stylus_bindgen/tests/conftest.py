from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterator

import pytest

HERE = Path(__file__).parent


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    # configuration must come from the test, not the developer's shell
    for key in ("ENTRY_POLICY", "STRUCT_NAME", "LOG_LEVEL", "VERSION"):
        monkeypatch.delenv(f"STYLUS_BINDGEN_{key}", raising=False)
    pkg_log = logging.getLogger("stylus_bindgen")
    level = pkg_log.level
    yield
    # the CLI callback sets the package log level
    pkg_log.setLevel(level)


@pytest.fixture()
def fixtures_dir() -> Path:
    return HERE / "fixtures"


@pytest.fixture()
def expected_dir() -> Path:
    return HERE / "expected"


@pytest.fixture()
def fixture_text(fixtures_dir: Path) -> Callable[[str], str]:
    def _read(name: str) -> str:
        return (fixtures_dir / name).read_text(encoding="utf-8")

    return _read
