"""元数据文件定位与加载测试"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from cargo_update_installed.core.crates2 import crates2_path, load_crates2
from cargo_update_installed.core.exceptions import MalformedOptionsError, MetadataError

OPTIONS = {
    "version_req": None,
    "bins": ["bat"],
    "features": [],
    "all_features": False,
    "no_default_features": False,
    "profile": "release",
    "target": "x86_64-unknown-linux-gnu",
    "rustc": "rustc 1.70.0",
}


class TestCrates2Path:
    def test_cargo_home(self, tmp_path: Path) -> None:
        assert crates2_path({"CARGO_HOME": str(tmp_path)}) == tmp_path / ".crates2.json"

    def test_default_home(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))
        assert crates2_path({}) == tmp_path / ".cargo" / ".crates2.json"

    def test_empty_cargo_home_ignored(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))
        assert crates2_path({"CARGO_HOME": ""}) == tmp_path / ".cargo" / ".crates2.json"


class TestLoadCrates2:
    def test_load(self, tmp_path: Path) -> None:
        path = tmp_path / ".crates2.json"
        path.write_text(json.dumps({"installs": {
            "bat 0.18.0 (registry+https://github.com/rust-lang/crates.io-index)": OPTIONS,
        }}))
        crates2 = load_crates2(path)
        assert len(crates2.installs) == 1

    def test_load_from_cargo_home(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / ".crates2.json").write_text(json.dumps({"installs": {}}))
        monkeypatch.setenv("CARGO_HOME", str(tmp_path))
        assert load_crates2().installs == {}

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(MetadataError, match="无法打开"):
            load_crates2(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / ".crates2.json"
        path.write_text("{not json")
        with pytest.raises(MetadataError, match="解析"):
            load_crates2(path)

    def test_malformed_options(self, tmp_path: Path) -> None:
        path = tmp_path / ".crates2.json"
        path.write_text(json.dumps({"installs": {"bat 1 (registry+https://e.com)": {}}}))
        with pytest.raises(MalformedOptionsError):
            load_crates2(path)

    @pytest.mark.parametrize("document", [{}, [], {"installs": []}, {"installs": None}])
    def test_missing_installs_object(self, tmp_path: Path, document: object) -> None:
        path = tmp_path / ".crates2.json"
        path.write_text(json.dumps(document))
        with pytest.raises(MetadataError, match="installs"):
            load_crates2(path)
