"""cargo 安装元数据 (.crates2.json) 加载

注意：该文件格式并非 cargo 的稳定接口，未来版本可能变化。
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path

from cargo_update_installed.core.exceptions import (
    ConfigError,
    MalformedOptionsError,
    MetadataError,
)
from cargo_update_installed.core.models import Crates2

logger = logging.getLogger(__name__)

CRATES2_FILENAME = ".crates2.json"


def crates2_path(env: Mapping[str, str] | None = None) -> Path:
    """定位 .crates2.json：优先 $CARGO_HOME，否则 ~/.cargo"""
    env = os.environ if env is None else env
    cargo_home = env.get("CARGO_HOME", "")
    if cargo_home:
        return Path(cargo_home) / CRATES2_FILENAME
    try:
        home = Path.home()
    except (RuntimeError, KeyError) as e:
        raise ConfigError("无法确定 home 目录，且未设置 CARGO_HOME") from e
    return home / ".cargo" / CRATES2_FILENAME


def load_crates2(path: str | Path | None = None) -> Crates2:
    """读取并解码 .crates2.json

    Raises:
        MetadataError: 文件不存在、无法读取、不是合法 JSON 或缺少 installs 对象
        MalformedOptionsError: 某个包的安装选项结构无效
    """
    p = Path(path) if path else crates2_path()
    try:
        text = p.read_text(encoding="utf-8")
    except OSError as e:
        raise MetadataError(f"无法打开 '{p}': {e}") from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise MetadataError(f"解析 '{p}' 失败: {e}") from e
    if not isinstance(data, dict) or not isinstance(data.get("installs"), dict):
        raise MetadataError(f"解析 '{p}' 失败: 缺少 installs 对象")

    try:
        crates2 = Crates2.from_dict(data)
    except MalformedOptionsError as e:
        logger.error("元数据结构无效: %s (%s)", p, e)
        raise
    logger.debug("已加载 %d 个已安装包: %s", len(crates2.installs), p)
    return crates2
