"""集中配置管理

支持从 YAML 文件加载 + 命令行覆盖。配置只影响 CLI 与批量更新，
标识符解析和参数构建不读取任何全局状态。
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from cargo_update_installed.core.exceptions import ConfigError
from cargo_update_installed.utils.yaml_io import load_yaml

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "CARGO_UPDATE_INSTALLED_CONFIG"


def default_config_path() -> Path:
    env_path = os.environ.get(CONFIG_ENV_VAR, "")
    if env_path:
        return Path(env_path)
    return Path("~/.config/cargo-update-installed/config.yml").expanduser()


@dataclass
class Config:
    """全局配置"""

    cargo: str = "cargo"
    crates2_path: str = ""  # 为空时自动定位

    # 默认开关，命令行可再打开
    force: bool = False
    locked: bool = False
    dry_run: bool = False

    include: list[str] = field(default_factory=list)
    exclude: list[str] = field(default_factory=list)

    extra: dict = field(default_factory=dict)

    @classmethod
    def from_file(cls, path: str | Path | None = None) -> Config:
        """从 YAML 文件加载配置，不存在则返回默认

        Raises:
            ConfigError: 文件无法解析或字段类型错误
        """
        p = Path(path) if path else default_config_path()
        try:
            data = load_yaml(p)
        except (yaml.YAMLError, OSError, ValueError) as e:
            raise ConfigError(f"无法加载配置文件 {p}: {e}") from e
        if not data:
            return cls()

        known = {f for f in cls.__dataclass_fields__ if f != "extra"}
        matched = {k: v for k, v in data.items() if k in known}
        extra = {k: v for k, v in data.items() if k not in known}
        for key in ("include", "exclude"):
            value = matched.get(key)
            if key in matched and value is None:
                del matched[key]
            elif isinstance(value, str):
                matched[key] = [value]
            elif value is not None and not isinstance(value, list):
                raise ConfigError(f"配置项 {key} 应为列表: {p}")
        for key in ("cargo", "crates2_path"):
            if key in matched and not isinstance(matched[key], str):
                raise ConfigError(f"配置项 {key} 应为字符串: {p}")
        for key in ("force", "locked", "dry_run"):
            if key in matched and not isinstance(matched[key], bool):
                raise ConfigError(f"配置项 {key} 应为布尔值: {p}")

        cfg = cls(**matched)
        cfg.extra = extra
        if extra:
            logger.warning("忽略未知配置项: %s", ", ".join(sorted(extra)))
        return cfg


# 全局单例，由 CLI 入口显式初始化
_current: Config | None = None


def get_config() -> Config:
    """获取当前配置（未初始化则返回默认值）"""
    global _current  # noqa: PLW0603
    if _current is None:
        _current = Config()
    return _current


def init_config(path: str | Path | None = None) -> Config:
    """从文件初始化全局配置"""
    global _current  # noqa: PLW0603
    _current = Config.from_file(path)
    logger.debug("配置已加载: %s", path or default_config_path())
    return _current
