"""Tests for runtime configuration loading."""

import json

from sourcevault.config_runtime import DEFAULTS, load_runtime_config


def write_config(root, payload):
    config_dir = root / ".sourcevault"
    config_dir.mkdir(exist_ok=True)
    (config_dir / "config.json").write_text(json.dumps(payload) if not isinstance(payload, str) else payload)


def test_defaults_without_config(tmp_path):
    cfg = load_runtime_config(str(tmp_path))
    assert cfg == DEFAULTS
    assert cfg is not DEFAULTS


def test_config_file_overrides_defaults(tmp_path):
    write_config(tmp_path, {"paths": {"db": "custom.db"}, "limits": {"blame_timeout": 5}})
    cfg = load_runtime_config(str(tmp_path))
    assert cfg["paths"]["db"] == "custom.db"
    assert cfg["limits"]["blame_timeout"] == 5
    assert cfg["limits"]["max_file_size"] == DEFAULTS["limits"]["max_file_size"]


def test_mistyped_and_unknown_keys_ignored(tmp_path):
    write_config(tmp_path, {"limits": {"blame_timeout": "soon", "unknown": 1}, "extra": {}})
    cfg = load_runtime_config(str(tmp_path))
    assert cfg["limits"]["blame_timeout"] == DEFAULTS["limits"]["blame_timeout"]
    assert "unknown" not in cfg["limits"]
    assert "extra" not in cfg


def test_invalid_json_falls_back_to_defaults(tmp_path):
    write_config(tmp_path, "{not json")
    assert load_runtime_config(str(tmp_path)) == DEFAULTS


def test_environment_wins_over_file(tmp_path, monkeypatch):
    write_config(tmp_path, {"limits": {"blame_timeout": 5}})
    monkeypatch.setenv("SOURCEVAULT_LIMITS_BLAME_TIMEOUT", "60")
    monkeypatch.setenv("SOURCEVAULT_SCM_ENABLED", "false")
    monkeypatch.setenv("SOURCEVAULT_PATHS_DB", "/tmp/sources.db")

    cfg = load_runtime_config(str(tmp_path))

    assert cfg["limits"]["blame_timeout"] == 60
    assert cfg["scm"]["enabled"] is False
    assert cfg["paths"]["db"] == "/tmp/sources.db"


def test_invalid_environment_value_keeps_previous(tmp_path, monkeypatch):
    monkeypatch.setenv("SOURCEVAULT_LIMITS_MAX_FILE_SIZE", "huge")
    monkeypatch.setenv("SOURCEVAULT_SCM_ENABLED", "maybe")

    cfg = load_runtime_config(str(tmp_path))

    assert cfg["limits"]["max_file_size"] == DEFAULTS["limits"]["max_file_size"]
    assert cfg["scm"]["enabled"] is True


def test_paths_section_keys(tmp_path):
    write_config(tmp_path, {"paths": {"sv_dir": "elsewhere"}})
    cfg = load_runtime_config(str(tmp_path))
    assert set(cfg["paths"]) == {"db", "report_dir"}
