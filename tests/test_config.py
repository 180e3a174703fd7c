from __future__ import annotations

import pytest

from raspimcu.config import (
    DiscoveryConfig,
    Settings,
    ToolConfig,
    get_settings,
    load_settings,
    resolve_config_path,
    write_settings,
)


def test_config_roundtrip(tmp_path):
    path = tmp_path / "config.toml"
    settings = Settings(
        discovery=DiscoveryConfig(search_roots=["/media/pi"], extra_vendor_ids=["0x239a"]),
        picotool=ToolConfig(path="/opt/picotool", timeout=20),
    )
    write_settings(settings, path)

    loaded = load_settings(path)
    assert loaded.discovery.search_roots == ["/media/pi"]
    assert loaded.discovery.extra_vendor_ids == ["239A"]
    assert loaded.picotool.path == "/opt/picotool"
    assert loaded.picotool.timeout == 20
    assert loaded.mpremote.path is None


def test_defaults_when_no_config_file():
    settings = get_settings()

    assert settings == Settings()
    assert settings.picotool.timeout == 10.0


def test_env_var_points_to_missing_file(tmp_path, monkeypatch):
    monkeypatch.setenv("RASPIMCU_CONFIG", str(tmp_path / "nope.toml"))

    with pytest.raises(FileNotFoundError, match="RASPIMCU_CONFIG"):
        resolve_config_path()
    path, exists = resolve_config_path(allow_missing=True)
    assert exists is False


def test_invalid_config_is_reported(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text("[picotool]\ntimeout = -1\n")

    with pytest.raises(ValueError, match="Invalid config file"):
        load_settings(path)

    path.write_text("[picotool\n")
    with pytest.raises(ValueError, match="Invalid TOML"):
        load_settings(path)


def test_invalid_config_names_the_section(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text('[mpremote]\ntimeout = 0\n\n[discovery]\nunknown = "x"\n')

    with pytest.raises(ValueError) as excinfo:
        load_settings(path)

    message = str(excinfo.value)
    assert "[mpremote] timeout" in message
    assert "[discovery] unknown" in message
    assert "\n" not in message


def test_write_settings_refreshes_cached_settings(tmp_path, monkeypatch):
    path = tmp_path / "config.toml"
    monkeypatch.setenv("RASPIMCU_CONFIG", str(path))
    write_settings(Settings(), path)
    assert get_settings().picotool.path is None

    write_settings(Settings(picotool=ToolConfig(path="/opt/picotool")), path)

    assert get_settings().picotool.path == "/opt/picotool"
