"""cargo install 参数构建测试"""

from __future__ import annotations

import pytest

from cargo_update_installed.core.args import build_install_args, install_args, options_args
from cargo_update_installed.core.exceptions import MalformedIdentifierError
from cargo_update_installed.core.models import (
    GitSource,
    InstallOptions,
    PathSource,
    RegistrySource,
)

TARGET = "x86_64-unknown-linux-gnu"


def _options(**overrides) -> InstallOptions:
    data = {
        "bins": ("tool",),
        "features": (),
        "all_features": False,
        "no_default_features": False,
        "profile": "release",
        "target": TARGET,
        "rustc": "rustc 1.70.0",
    }
    data.update(overrides)
    return InstallOptions(**data)


class TestEndToEnd:
    def test_registry_minimal(self) -> None:
        args = install_args("bat 0.18.0 (registry+https://example.com/index)", _options())
        assert args == [
            "install", "--target", TARGET, "--index", "https://example.com/index", "bat",
        ]

    def test_git_branch(self) -> None:
        args = install_args(
            "bcut 1.0.2 (git+https://example.com/repo?branch=main#abcdef)", _options(),
        )
        assert args == [
            "install", "--target", TARGET,
            "--git", "https://example.com/repo", "--branch", "main",
            "bcut",
        ]
        assert not any("abcdef" in a for a in args)

    def test_parse_error_propagates(self) -> None:
        with pytest.raises(MalformedIdentifierError):
            install_args("garbage", _options())


class TestOrdering:
    def test_full_order(self) -> None:
        opts = _options(features=("a", "b"), all_features=True, no_default_features=True)
        args = build_install_args(
            "tool", GitSource(url="https://e.com/r", branch="dev", tag="v1"), opts,
            force=True, locked=True,
        )
        assert args == [
            "install", "--force", "--locked",
            "--features", "a,b", "--all-features", "--no-default-features",
            "--target", TARGET,
            "--git", "https://e.com/r", "--branch", "dev", "--tag", "v1",
            "tool",
        ]

    @pytest.mark.parametrize(("force", "locked", "expected"), [
        (False, False, ["install"]),
        (True, False, ["install", "--force"]),
        (False, True, ["install", "--locked"]),
        (True, True, ["install", "--force", "--locked"]),
    ])
    def test_force_locked(self, force: bool, locked: bool, expected: list[str]) -> None:
        args = build_install_args(
            "tool", PathSource(path="/src/tool"), _options(), force=force, locked=locked,
        )
        assert args[:len(expected)] == expected
        assert args[len(expected)] == "--target"

    def test_path_source(self) -> None:
        args = build_install_args("tool", PathSource(path="/src/tool"), _options())
        assert args[-3:] == ["--path", "/src/tool", "tool"]

    def test_registry_source(self) -> None:
        args = build_install_args("tool", RegistrySource(url="https://r.io/idx"), _options())
        assert args[-3:] == ["--index", "https://r.io/idx", "tool"]

    def test_git_tag_only(self) -> None:
        src = GitSource(url="https://e.com/r", tag="v2")
        assert src.install_args() == ["--git", "https://e.com/r", "--tag", "v2"]


class TestOptionsArgs:
    def test_profile_and_rustc_never_emitted(self) -> None:
        args = options_args(_options(profile="dev", rustc="rustc 1.80.0"))
        assert "--profile" not in args
        assert not any("rustc" in a for a in args)
        assert "dev" not in args

    def test_empty_features_omitted(self) -> None:
        assert "--features" not in options_args(_options())

    def test_target_always_emitted(self) -> None:
        assert options_args(_options()) == ["--target", TARGET]
