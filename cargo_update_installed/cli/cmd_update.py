"""CLI：批量更新命令"""

from __future__ import annotations

import shlex

import click

from cargo_update_installed.cli import (
    COLOR_CHOICES,
    _echo_error,
    _filter,
    _load,
    _setup,
)
from cargo_update_installed.core.config import get_config
from cargo_update_installed.core.updater import InstallStep, Updater


def register(group: click.Group) -> None:
    group.add_command(update)
    # 作为 cargo 子命令调用时，cargo 会把 "update-installed" 作为第一个参数传入
    group.add_command(update, name="update-installed")


@click.command()
@click.option("--force", "-f", is_flag=True, help="传递 --force 给 cargo install")
@click.option("--locked", "-l", is_flag=True, help="传递 --locked 给 cargo install")
@click.option("--dry-run", "-n", is_flag=True, help="只打印命令，不执行")
@click.option("--include", "-i", multiple=True, help="只更新匹配的包名（通配符，可多次指定）")
@click.option("--exclude", "-x", multiple=True, help="排除匹配的包名（通配符，可多次指定）")
@click.option("--cargo", "cargo_bin", default=None, help="cargo 可执行文件")
@click.option("--crates2", default=None, help=".crates2.json 路径（默认自动定位）")
@click.option("--config", "config_path", default=None, help="配置文件路径")
@click.option("--verbose", "-v", is_flag=True, help="输出调试日志")
@click.option("--color", type=click.Choice(list(COLOR_CHOICES)), default="auto", help="彩色输出")
def update(
    force: bool, locked: bool, dry_run: bool,
    include: tuple[str, ...], exclude: tuple[str, ...],
    cargo_bin: str | None, crates2: str | None, config_path: str | None,
    verbose: bool, color: str,
) -> None:
    """按原始安装选项重新安装所有已安装的包"""
    use_color = COLOR_CHOICES[color]
    _setup(verbose, config_path)
    cfg = get_config()
    updater = Updater(_load(crates2), cargo=cargo_bin or cfg.cargo)

    plan = updater.plan(
        _filter(include, exclude),
        force=force or cfg.force,
        locked=locked or cfg.locked,
    )
    for failure in plan.failures:
        _echo_error(f"无法解析: {failure.error}", use_color)
    if not plan.steps:
        click.echo("没有需要更新的包。")

    def _announce(step: InstallStep, cmd: list[str]) -> None:
        click.echo(click.style(f"==> {step.name}", fg="green", bold=True), color=use_color)
        click.echo(f"    {shlex.join(cmd)}")

    summary = updater.run(plan, dry_run=dry_run or cfg.dry_run, on_step=_announce)

    if summary.updated:
        click.echo(f"已更新: {', '.join(summary.updated)}")
    if summary.failed:
        _echo_error(f"更新失败: {', '.join(summary.failed)}", use_color)
    if not summary.success:
        raise SystemExit(1)
