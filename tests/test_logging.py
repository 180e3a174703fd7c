from __future__ import annotations

from raspimcu.utils.logging import resolve_level


def test_level_defaults_to_warning(monkeypatch):
    monkeypatch.delenv("LOGLEVEL", raising=False)

    assert resolve_level() == "WARNING"


def test_debug_flag_enables_debug_logs(monkeypatch):
    monkeypatch.delenv("LOGLEVEL", raising=False)
    monkeypatch.setenv("DEBUG", "1")

    assert resolve_level() == "DEBUG"


def test_loglevel_and_explicit_level_take_precedence(monkeypatch):
    monkeypatch.setenv("DEBUG", "1")
    monkeypatch.setenv("LOGLEVEL", "info")

    assert resolve_level() == "INFO"
    assert resolve_level("ERROR") == "ERROR"
