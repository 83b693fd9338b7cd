from __future__ import annotations

import pytest

from stylus_bindgen.config import BindgenConfig, EntryPolicy, load_config


def test_defaults() -> None:
    cfg = load_config()
    assert cfg == BindgenConfig()
    assert cfg.entry_policy is EntryPolicy.SKIP
    assert cfg.struct_name == "Contract"
    assert cfg.log_level == "WARNING"


def test_env_overrides_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STYLUS_BINDGEN_ENTRY_POLICY", "WARN")
    monkeypatch.setenv("STYLUS_BINDGEN_STRUCT_NAME", "Token")
    monkeypatch.setenv("STYLUS_BINDGEN_LOG_LEVEL", "debug")
    cfg = load_config()
    assert cfg.entry_policy is EntryPolicy.WARN
    assert cfg.struct_name == "Token"
    assert cfg.log_level == "DEBUG"


def test_explicit_overrides_beat_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STYLUS_BINDGEN_ENTRY_POLICY", "warn")
    cfg = load_config(entry_policy="error", struct_name=None)
    assert cfg.entry_policy is EntryPolicy.ERROR
    assert cfg.struct_name == "Contract"


def test_blank_env_is_ignored(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STYLUS_BINDGEN_STRUCT_NAME", "  ")
    assert load_config().struct_name == "Contract"


@pytest.mark.parametrize(
    "overrides",
    [
        {"entry_policy": "loud"},
        {"struct_name": "not an ident"},
        {"struct_name": "1Contract"},
        {"struct_name": "Self"},
        {"struct_name": "fn"},
        {"struct_name": "impl"},
        {"log_level": "chatty"},
        {"colour": "blue"},
    ],
)
def test_invalid_values(overrides: dict) -> None:
    with pytest.raises(ValueError):
        load_config(**overrides)


def test_as_dict() -> None:
    assert load_config(entry_policy=EntryPolicy.WARN).as_dict() == {
        "entry_policy": "warn",
        "struct_name": "Contract",
        "log_level": "WARNING",
    }
