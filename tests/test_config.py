"""Tests for StoreConfig persistence and environment overrides."""

import json

import pytest

from password_store.config import (
    BACKEND_CLI,
    BACKEND_JSONAPI,
    StoreConfig,
    get_config_path,
    load_config,
    save_config,
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.delenv("PASSWORD_STORE_PROGRAM", raising=False)
    monkeypatch.delenv("PASSWORD_STORE_CLIENT_CONFIG", raising=False)


class TestStoreConfig:
    def test_defaults(self):
        config = StoreConfig()
        assert config.program == "gopass"
        assert config.listen_args == ["jsonapi", "listen"]
        assert config.remove_subcommand == "rm"
        assert config.force_flag == "-f"
        assert config.insert_subcommand == "insert"
        assert config.multiline_flag == "-m"
        assert config.backend == BACKEND_JSONAPI

    def test_listen_args_not_shared(self):
        a, b = StoreConfig(), StoreConfig()
        a.listen_args.append("extra")
        assert b.listen_args == ["jsonapi", "listen"]

    def test_dict_roundtrip(self):
        config = StoreConfig(program="pass-stub", backend=BACKEND_CLI)
        assert StoreConfig.from_dict(config.to_dict()) == config

    def test_from_dict_fills_defaults(self):
        config = StoreConfig.from_dict({"program": "other"})
        assert config.program == "other"
        assert config.listen_args == ["jsonapi", "listen"]


class TestLoadSave:
    def test_missing_file_gives_defaults(self, tmp_path):
        assert load_config(str(tmp_path / "nope.json")) == StoreConfig()

    def test_save_then_load(self, tmp_path):
        path = str(tmp_path / "sub" / "config.json")
        save_config(StoreConfig(program="stub", backend=BACKEND_CLI), path)
        loaded = load_config(path)
        assert loaded.program == "stub"
        assert loaded.backend == BACKEND_CLI

    def test_invalid_json_gives_defaults(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json")
        assert load_config(str(path)) == StoreConfig()

    def test_non_object_gives_defaults(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps(["gopass"]))
        assert load_config(str(path)) == StoreConfig()

    def test_config_path_from_env(self, monkeypatch, tmp_path):
        path = str(tmp_path / "custom.json")
        monkeypatch.setenv("PASSWORD_STORE_CLIENT_CONFIG", path)
        assert get_config_path() == path

    def test_program_env_override(self, monkeypatch, tmp_path):
        path = str(tmp_path / "config.json")
        save_config(StoreConfig(program="from-file"), path)
        monkeypatch.setenv("PASSWORD_STORE_PROGRAM", "/tmp/fake-gopass")
        assert load_config(path).program == "/tmp/fake-gopass"
        assert load_config(str(tmp_path / "missing.json")).program == "/tmp/fake-gopass"


class TestFieldTypes:
    @pytest.mark.parametrize("data", [
        {"program": None},
        {"program": 42},
        {"listen_args": "listen"},
        {"listen_args": ["jsonapi", 1]},
        {"backend": ["cli"]},
        ["gopass"],
    ])
    def test_from_dict_rejects_wrong_types(self, data):
        with pytest.raises(ValueError):
            StoreConfig.from_dict(data)

    def test_null_program_falls_back_to_defaults(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"program": None, "backend": "cli"}))
        assert load_config(str(path)) == StoreConfig()

    def test_string_listen_args_falls_back_to_defaults(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"listen_args": "listen"}))
        assert load_config(str(path)).listen_args == ["jsonapi", "listen"]
