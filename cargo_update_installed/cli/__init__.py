"""cargo-update-installed 命令行接口

CLI 按功能拆分为子模块，每个模块注册自己的命令到 main group。
"""

from __future__ import annotations

import os

import click

from cargo_update_installed import __version__
from cargo_update_installed.core.config import get_config, init_config
from cargo_update_installed.core.crates2 import load_crates2
from cargo_update_installed.core.exceptions import CargoUpdateError
from cargo_update_installed.core.filters import PackageFilter
from cargo_update_installed.core.models import Crates2
from cargo_update_installed.utils.logger import setup_logging

COLOR_CHOICES = {"auto": None, "always": True, "never": False}


def _setup(verbose: bool, config_path: str | None) -> None:
    """按环境变量 / --verbose 配置日志，并初始化全局配置"""
    level = "DEBUG" if verbose else os.getenv("CARGO_UPDATE_LOG_LEVEL", "WARNING")
    setup_logging(level=level, json_output=os.getenv("CARGO_UPDATE_LOG_JSON", "") == "1")
    try:
        init_config(config_path)
    except CargoUpdateError as e:
        raise click.ClickException(str(e)) from e


def _load(crates2: str | None) -> Crates2:
    try:
        return load_crates2(crates2 or get_config().crates2_path or None)
    except (CargoUpdateError, ValueError) as e:
        raise click.ClickException(str(e)) from e


def _filter(include: tuple[str, ...], exclude: tuple[str, ...]) -> PackageFilter:
    """命令行给出的模式替换配置文件中的模式"""
    cfg = get_config()
    return PackageFilter(
        include=include or tuple(cfg.include),
        exclude=exclude or tuple(cfg.exclude),
    )


def _echo_error(message: str, color: bool | None) -> None:
    click.echo(click.style(message, fg="red", bold=True), err=True, color=color)


@click.group()
@click.version_option(version=__version__)
def main() -> None:
    """cargo-update-installed - 按原始安装选项重新安装 cargo 包"""


# 注册各子命令
from cargo_update_installed.cli.cmd_update import register as _reg_update  # noqa: E402
from cargo_update_installed.cli.cmd_list import register as _reg_list  # noqa: E402

_reg_update(main)
_reg_list(main)
