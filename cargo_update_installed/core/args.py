"""cargo install 参数构建

参数顺序固定:
  install [--force] [--locked] [--features a,b] [--all-features]
  [--no-default-features] --target <triple> <来源参数> <name>

profile 不输出（cargo 的 --profile 对 install 不稳定），rustc 仅作记录。
"""

from __future__ import annotations

from cargo_update_installed.core.identifier import parse_identifier
from cargo_update_installed.core.models import InstallOptions, PackageSource

INSTALL_SUBCOMMAND = "install"


def options_args(options: InstallOptions) -> list[str]:
    """特性开关与目标平台参数"""
    args: list[str] = []
    if options.features:
        args += ["--features", ",".join(options.features)]
    if options.all_features:
        args.append("--all-features")
    if options.no_default_features:
        args.append("--no-default-features")
    args += ["--target", options.target]
    return args


def build_install_args(
    name: str,
    source: PackageSource,
    options: InstallOptions,
    *,
    force: bool = False,
    locked: bool = False,
) -> list[str]:
    """构建完整的 cargo 参数列表（不含 cargo 本身）"""
    args = [INSTALL_SUBCOMMAND]
    if force:
        args.append("--force")
    if locked:
        args.append("--locked")
    args += options_args(options)
    args += source.install_args()
    args.append(name)
    return args


def install_args(
    identifier: str,
    options: InstallOptions,
    *,
    force: bool = False,
    locked: bool = False,
) -> list[str]:
    """由原始标识符字符串直接构建参数

    Raises:
        ParseError: 标识符解析失败
    """
    pkg = parse_identifier(identifier)
    return build_install_args(pkg.name, pkg.source, options, force=force, locked=locked)
