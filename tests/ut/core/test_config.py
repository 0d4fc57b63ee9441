"""配置加载测试"""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

import cargo_update_installed.core.config as cfgmod
from cargo_update_installed.core.config import Config, default_config_path
from cargo_update_installed.core.exceptions import ConfigError


@pytest.fixture(autouse=True)
def _reset_config(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(cfgmod, "_current", None)


def _write(tmp_path: Path, data: object) -> Path:
    path = tmp_path / "config.yml"
    path.write_text(yaml.dump(data, allow_unicode=True))
    return path


class TestConfig:
    def test_missing_file_returns_defaults(self, tmp_path: Path) -> None:
        cfg = Config.from_file(tmp_path / "missing.yml")
        assert cfg == Config()
        assert cfg.cargo == "cargo"

    def test_load(self, tmp_path: Path) -> None:
        path = _write(tmp_path, {
            "cargo": "/opt/cargo/bin/cargo",
            "locked": True,
            "exclude": ["cargo-update-installed"],
            "unknown_key": 1,
        })
        cfg = Config.from_file(path)
        assert cfg.cargo == "/opt/cargo/bin/cargo"
        assert cfg.locked is True
        assert cfg.force is False
        assert cfg.exclude == ["cargo-update-installed"]
        assert cfg.extra == {"unknown_key": 1}

    def test_single_pattern_string(self, tmp_path: Path) -> None:
        cfg = Config.from_file(_write(tmp_path, {"include": "cargo-*"}))
        assert cfg.include == ["cargo-*"]

    def test_bad_bool(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="force"):
            Config.from_file(_write(tmp_path, {"force": "yes please"}))

    def test_bad_list(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="exclude"):
            Config.from_file(_write(tmp_path, {"exclude": {"a": 1}}))

    @pytest.mark.parametrize("key", ["cargo", "crates2_path"])
    def test_bad_string(self, tmp_path: Path, key: str) -> None:
        with pytest.raises(ConfigError, match=key):
            Config.from_file(_write(tmp_path, {key: 5}))

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yml"
        path.write_text("cargo: [unclosed\n")
        with pytest.raises(ConfigError):
            Config.from_file(path)

    def test_env_default_path(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CARGO_UPDATE_INSTALLED_CONFIG", str(tmp_path / "c.yml"))
        assert default_config_path() == tmp_path / "c.yml"

    def test_init_and_get(self, tmp_path: Path) -> None:
        assert cfgmod.get_config() == Config()
        cfgmod.init_config(_write(tmp_path, {"dry_run": True}))
        assert cfgmod.get_config().dry_run is True
