"""核心数据模型

- PackageSource: 包来源（registry / git / path 三选一）
- PackageIdentifier: "name version (kind+url)" 解析结果
- InstallOptions: .crates2.json 中单个包的安装选项
- Crates2: .crates2.json 顶层文档
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

from cargo_update_installed.core.exceptions import MalformedOptionsError

# =========================================================================
# 包来源
# =========================================================================


@dataclass(frozen=True)
class RegistrySource:
    """从包注册表安装"""

    url: str

    kind = "registry"

    def install_args(self) -> list[str]:
        return ["--index", self.url]


@dataclass(frozen=True)
class GitSource:
    """从 git 仓库安装，branch / tag 来自 URL 查询参数"""

    url: str
    branch: str | None = None
    tag: str | None = None

    kind = "git"

    def install_args(self) -> list[str]:
        args = ["--git", self.url]
        if self.branch is not None:
            args += ["--branch", self.branch]
        if self.tag is not None:
            args += ["--tag", self.tag]
        return args


@dataclass(frozen=True)
class PathSource:
    """从本地目录安装"""

    path: str

    kind = "path"

    def install_args(self) -> list[str]:
        return ["--path", self.path]


PackageSource = Union[RegistrySource, GitSource, PathSource]


@dataclass(frozen=True)
class PackageIdentifier:
    """已安装包的标识"""

    name: str
    version: str
    source: PackageSource


# =========================================================================
# 安装选项
# =========================================================================


def _require(data: dict[str, Any], name: str) -> Any:
    if name not in data:
        raise MalformedOptionsError(name, "缺少字段")
    return data[name]


def _require_str(data: dict[str, Any], name: str) -> str:
    value = _require(data, name)
    if not isinstance(value, str):
        raise MalformedOptionsError(name, f"应为字符串，实际为 {type(value).__name__}")
    return value


def _require_bool(data: dict[str, Any], name: str) -> bool:
    value = _require(data, name)
    if not isinstance(value, bool):
        raise MalformedOptionsError(name, f"应为布尔值，实际为 {type(value).__name__}")
    return value


def _require_str_list(data: dict[str, Any], name: str) -> list[str]:
    value = _require(data, name)
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise MalformedOptionsError(name, "应为字符串列表")
    return value


@dataclass(frozen=True)
class InstallOptions:
    """单个包的安装选项

    profile 与 rustc 仅作记录，不会生成安装参数。
    """

    bins: tuple[str, ...]
    features: tuple[str, ...]
    all_features: bool
    no_default_features: bool
    profile: str
    target: str
    rustc: str
    version_req: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> InstallOptions:
        """从 .crates2.json 的单个选项对象解码

        Raises:
            MalformedOptionsError: 字段缺失或类型不符
        """
        if not isinstance(data, dict):
            raise MalformedOptionsError("<root>", "应为 JSON 对象")

        version_req = data.get("version_req")
        if version_req is not None and not isinstance(version_req, str):
            raise MalformedOptionsError("version_req", "应为字符串或 null")

        return cls(
            version_req=version_req,
            bins=tuple(_require_str_list(data, "bins")),
            # 去重并保留首次出现的顺序，保证生成参数稳定
            features=tuple(dict.fromkeys(_require_str_list(data, "features"))),
            all_features=_require_bool(data, "all_features"),
            no_default_features=_require_bool(data, "no_default_features"),
            profile=_require_str(data, "profile"),
            target=_require_str(data, "target"),
            rustc=_require_str(data, "rustc"),
        )


@dataclass
class Crates2:
    """.crates2.json 顶层文档

    installs 的键为原始标识符字符串，加载时不解析，
    由调用方逐个解析，单个坏键不影响其余包。
    """

    installs: dict[str, InstallOptions] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> Crates2:
        if not isinstance(data, dict) or not isinstance(data.get("installs"), dict):
            raise MalformedOptionsError("installs", "文档缺少 installs 对象")
        installs: dict[str, InstallOptions] = {}
        for key, value in data["installs"].items():
            try:
                installs[key] = InstallOptions.from_dict(value)
            except MalformedOptionsError as e:
                raise MalformedOptionsError(f"{key}.{e.field}", e.reason) from e
        return cls(installs=installs)
