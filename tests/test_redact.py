from __future__ import annotations

import logging

import pytest

from pyfacet._redact import REDACTED, is_sensitive_key, redact_setting
from pyfacet.store import SettingsStore


def test_redact_setting_walks_nested_values() -> None:
    payload = {
        "host": "db.local",
        "password": "pw",
        "auth": {"api_key": "KEY", "user": "admin"},
        "nested": [{"client_secret": "s3cr3t"}],
    }

    redacted = redact_setting("db", payload)
    assert redacted["host"] == "db.local"
    assert redacted["password"] == REDACTED
    assert redacted["auth"] == {"api_key": REDACTED, "user": "admin"}
    assert redacted["nested"][0]["client_secret"] == REDACTED


def test_redact_setting_hides_secret_paths() -> None:
    assert redact_setting("db.password", "pw") == REDACTED
    assert redact_setting("tokens", ["a", "b"]) == REDACTED


def test_redact_setting_truncates_long_strings() -> None:
    redacted = redact_setting("banner", "x" * 600)
    assert redacted.startswith("x" * 256)
    assert redacted.endswith("<truncated>")


def test_sensitive_key_uses_last_path_segment() -> None:
    assert is_sensitive_key("db.password")
    assert is_sensitive_key("github.Token")
    assert not is_sensitive_key("password_policy.min_length")


def test_write_logs_redacted_value(caplog: pytest.LogCaptureFixture) -> None:
    store = SettingsStore()
    with caplog.at_level(logging.DEBUG, logger="pyfacet.store"):
        store.write("db", {"user": "admin", "password": "pw"})
    assert "admin" in caplog.text
    assert "'pw'" not in caplog.text


def test_write_skips_redaction_when_debug_disabled(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    calls: list[str] = []

    def _record(key: str, value: object) -> object:
        calls.append(key)
        return value

    monkeypatch.setattr("pyfacet.store.redact_setting", _record)
    caplog.set_level(logging.INFO, logger="pyfacet.store")
    SettingsStore().write("db.password", "pw")
    assert calls == []
