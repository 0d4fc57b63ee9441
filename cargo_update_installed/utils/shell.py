"""子进程执行工具

通过 CommandExecutor 协议抽象子进程执行，测试时注入假实现即可，无需 patch subprocess。
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from dataclasses import dataclass
from typing import Protocol

from cargo_update_installed.core.exceptions import ExecutionError

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """命令执行结果（与 subprocess 解耦）"""

    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def success(self) -> bool:
        return self.returncode == 0


class CommandExecutor(Protocol):
    """命令执行器协议"""

    def execute(
        self,
        cmd: list[str],
        *,
        env: dict[str, str] | None = None,
        timeout: int | None = None,
    ) -> CommandResult:
        """执行命令并返回结果"""
        ...


class LocalExecutor:
    """本地命令执行器（默认实现）

    capture_output=False 时子进程直接继承终端，cargo 的编译进度实时可见。
    """

    def __init__(self, capture_output: bool = False) -> None:
        self.capture_output = capture_output

    def execute(
        self,
        cmd: list[str],
        *,
        env: dict[str, str] | None = None,
        timeout: int | None = None,
    ) -> CommandResult:
        logger.debug("执行: %s", shlex.join(cmd))
        try:
            r = subprocess.run(
                cmd, capture_output=self.capture_output, text=True,
                env=env, check=False, timeout=timeout,
            )
        except FileNotFoundError as e:
            raise ExecutionError(f"找不到可执行文件: {cmd[0]}") from e
        except subprocess.TimeoutExpired as e:
            raise ExecutionError(f"命令超时 ({timeout}s): {shlex.join(cmd)}") from e
        return CommandResult(
            returncode=r.returncode,
            stdout=r.stdout or "",
            stderr=r.stderr or "",
        )
