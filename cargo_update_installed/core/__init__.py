"""核心逻辑：标识符解析、安装参数构建、批量更新"""

from cargo_update_installed.core.args import build_install_args, install_args
from cargo_update_installed.core.identifier import parse_identifier
from cargo_update_installed.core.models import (
    Crates2,
    GitSource,
    InstallOptions,
    PackageIdentifier,
    PackageSource,
    PathSource,
    RegistrySource,
)
from cargo_update_installed.core.source import parse_source

__all__ = [
    "Crates2",
    "GitSource",
    "InstallOptions",
    "PackageIdentifier",
    "PackageSource",
    "PathSource",
    "RegistrySource",
    "build_install_args",
    "install_args",
    "parse_identifier",
    "parse_source",
]
