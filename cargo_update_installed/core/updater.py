"""批量更新

对 .crates2.json 中每个已安装包按原始选项重新执行 cargo install。

流程:
  1. plan(): 逐个解析标识符 → 过滤 → 构建参数；
     单个包解析失败只记录，不中断其余包
  2. run():  按包名顺序串行执行（cargo 共享本地缓存与锁文件，不宜并行）
"""

from __future__ import annotations

import logging
import shlex
from collections.abc import Callable
from dataclasses import dataclass, field

from cargo_update_installed.core.args import build_install_args
from cargo_update_installed.core.exceptions import ExecutionError, ParseError
from cargo_update_installed.core.filters import PackageFilter
from cargo_update_installed.core.identifier import parse_identifier
from cargo_update_installed.core.models import Crates2, PackageIdentifier
from cargo_update_installed.utils.shell import CommandExecutor, LocalExecutor

logger = logging.getLogger(__name__)


@dataclass
class PlanFailure:
    """无法解析的标识符"""

    identifier: str
    error: ParseError


@dataclass
class InstallStep:
    """单个包的安装命令"""

    package: PackageIdentifier
    args: list[str]

    @property
    def name(self) -> str:
        return self.package.name


@dataclass
class UpdatePlan:
    steps: list[InstallStep] = field(default_factory=list)
    failures: list[PlanFailure] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)


@dataclass
class UpdateSummary:
    """批量更新结果"""

    updated: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    planned: list[str] = field(default_factory=list)
    errors: list[PlanFailure] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.failed and not self.errors


class Updater:
    """已安装包批量更新器"""

    def __init__(
        self,
        crates2: Crates2,
        executor: CommandExecutor | None = None,
        cargo: str = "cargo",
    ) -> None:
        self.crates2 = crates2
        self.executor = executor or LocalExecutor()
        self.cargo = cargo

    def plan(
        self,
        package_filter: PackageFilter | None = None,
        *,
        force: bool = False,
        locked: bool = False,
    ) -> UpdatePlan:
        package_filter = package_filter or PackageFilter()
        plan = UpdatePlan()
        for identifier, options in self.crates2.installs.items():
            try:
                pkg = parse_identifier(identifier)
            except ParseError as e:
                # 来源无法解析但包名可见时，仍按包名过滤
                name = identifier.partition(" ")[0]
                if name and not package_filter.matches(name):
                    plan.skipped.append(name)
                    continue
                logger.warning("跳过无法解析的包: %s", e)
                plan.failures.append(PlanFailure(identifier=identifier, error=e))
                continue

            if not package_filter.matches(pkg.name):
                logger.debug("已过滤: %s", pkg.name)
                plan.skipped.append(pkg.name)
                continue

            args = build_install_args(
                pkg.name, pkg.source, options, force=force, locked=locked,
            )
            plan.steps.append(InstallStep(package=pkg, args=args))

        plan.steps.sort(key=lambda s: s.name)
        plan.skipped.sort()
        return plan

    def command(self, step: InstallStep) -> list[str]:
        return [self.cargo, *step.args]

    def run(
        self,
        plan: UpdatePlan,
        *,
        dry_run: bool = False,
        on_step: Callable[[InstallStep, list[str]], None] | None = None,
    ) -> UpdateSummary:
        """串行执行计划；on_step 在每条命令执行前回调"""
        summary = UpdateSummary(skipped=list(plan.skipped), errors=list(plan.failures))
        for step in plan.steps:
            cmd = self.command(step)
            if on_step is not None:
                on_step(step, cmd)
            if dry_run:
                logger.info("[dry-run] %s", shlex.join(cmd))
                summary.planned.append(step.name)
                continue

            logger.info("更新 %s: %s", step.name, shlex.join(cmd))
            try:
                result = self.executor.execute(cmd)
            except ExecutionError as e:
                logger.error("%s 执行失败: %s", step.name, e)
                summary.failed.append(step.name)
                continue

            if result.success:
                summary.updated.append(step.name)
            else:
                logger.error("%s 安装失败 (rc=%d)", step.name, result.returncode)
                summary.failed.append(step.name)
        return summary
