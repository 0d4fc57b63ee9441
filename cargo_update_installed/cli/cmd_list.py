"""CLI：查看已安装包与安装参数"""

from __future__ import annotations

import shlex

import click

from cargo_update_installed.cli import COLOR_CHOICES, _echo_error, _filter, _load, _setup
from cargo_update_installed.core.args import install_args
from cargo_update_installed.core.config import get_config
from cargo_update_installed.core.exceptions import ParseError
from cargo_update_installed.core.identifier import parse_identifier
from cargo_update_installed.core.models import PathSource


def register(group: click.Group) -> None:
    group.add_command(list_installed)
    group.add_command(show_args)


@click.command(name="list")
@click.option("--include", "-i", multiple=True, help="只列出匹配的包名（通配符）")
@click.option("--exclude", "-x", multiple=True, help="排除匹配的包名（通配符）")
@click.option("--crates2", default=None, help=".crates2.json 路径（默认自动定位）")
@click.option("--config", "config_path", default=None, help="配置文件路径")
@click.option("--verbose", "-v", is_flag=True, help="输出调试日志")
@click.option("--color", type=click.Choice(list(COLOR_CHOICES)), default="auto", help="彩色输出")
def list_installed(
    include: tuple[str, ...], exclude: tuple[str, ...],
    crates2: str | None, config_path: str | None, verbose: bool, color: str,
) -> None:
    """列出已安装的包"""
    _setup(verbose, config_path)
    data = _load(crates2)
    package_filter = _filter(include, exclude)

    rows = []
    for identifier in data.installs:
        try:
            pkg = parse_identifier(identifier)
        except ParseError as e:
            _echo_error(f"无法解析: {e}", COLOR_CHOICES[color])
            continue
        if package_filter.matches(pkg.name):
            rows.append(pkg)

    if not rows:
        click.echo("没有已安装的包。")
        return
    for pkg in sorted(rows, key=lambda p: p.name):
        where = pkg.source.path if isinstance(pkg.source, PathSource) else pkg.source.url
        click.echo(f"  {pkg.name:24s} {pkg.version:12s} [{pkg.source.kind:8s}] {where}")


@click.command(name="args")
@click.argument("name")
@click.option("--force", "-f", is_flag=True, help="包含 --force")
@click.option("--locked", "-l", is_flag=True, help="包含 --locked")
@click.option("--crates2", default=None, help=".crates2.json 路径（默认自动定位）")
@click.option("--config", "config_path", default=None, help="配置文件路径")
def show_args(
    name: str, force: bool, locked: bool, crates2: str | None, config_path: str | None,
) -> None:
    """打印某个已安装包的 cargo install 参数

    NAME 可以是包名或完整标识符。
    """
    _setup(False, config_path)
    data = _load(crates2)

    # 完整标识符精确匹配优先；仅给包名时必须唯一
    if name in data.installs:
        matches = [name]
    else:
        matches = [i for i in data.installs if i.partition(" ")[0] == name]
    if not matches:
        raise click.ClickException(f"未安装: {name}")
    if len(matches) > 1:
        listing = "\n".join(f"  {m}" for m in matches)
        raise click.ClickException(f"包名 {name} 对应多个安装，请指定完整标识符:\n{listing}")

    identifier = matches[0]
    try:
        args = install_args(identifier, data.installs[identifier], force=force, locked=locked)
    except ParseError as e:
        raise click.ClickException(str(e)) from e
    click.echo(shlex.join([get_config().cargo, *args]))
