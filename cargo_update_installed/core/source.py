"""包来源解析器

解析标识符括号内的 "kind+url" 片段，例如:
  registry+https://github.com/rust-lang/crates.io-index
  git+https://github.com/aswild/bcut#046894ca312298f260775687a87bd1f3b7df8e55
  git+https://github.com/aswild/bcut?branch=master#046894c
  path+file:///workspace/cargo-update-installed

git URL 的 fragment 是提交哈希，不参与安装，直接丢弃；
查询参数只允许 branch / tag，解析后从 URL 中去掉。
"""

from __future__ import annotations

from urllib.parse import parse_qsl, unquote, urlsplit

from cargo_update_installed.core.exceptions import (
    EmptyUrlError,
    InvalidUrlError,
    MissingSourceKindError,
    UnknownQueryParameterError,
    UnknownSourceKindError,
)
from cargo_update_installed.core.models import (
    GitSource,
    PackageSource,
    PathSource,
    RegistrySource,
)

# 必须带主机名的网络协议
_HOST_REQUIRED_SCHEMES = frozenset(("http", "https", "ws", "wss", "ftp"))

# 主机名中禁止出现的字符（IPv6 字面量的方括号单独处理）
_FORBIDDEN_HOST_CHARS = frozenset("<>^|#?/\\[]")
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


def _strip_url(url: str) -> str:
    """去掉 fragment 和查询串，其余部分原样保留"""
    return url.split("#", 1)[0].split("?", 1)[0]


def _valid_host(netloc: str) -> bool:
    """检查 netloc 中的主机部分：禁止空白、保留字符与非法百分号转义"""
    host = netloc.rpartition("@")[2]
    if host.startswith("["):
        # IPv6 字面量，方括号配对已由 urlsplit 校验
        return True
    host = host.partition(":")[0]
    for i, c in enumerate(host):
        if c.isspace() or c in _FORBIDDEN_HOST_CHARS:
            return False
        if c == "%" and not (len(host) >= i + 3 and set(host[i + 1:i + 3]) <= _HEX_DIGITS):
            return False
    return True


def _check_url(text: str, url: str) -> tuple[str, str]:
    """校验 URL，返回 (path, query)

    Raises:
        InvalidUrlError: urlsplit 拒绝、缺少 scheme、端口非法、缺少主机名或主机名含非法字符
    """
    try:
        parts = urlsplit(url)
        # 端口仅在访问时校验
        parts.port  # noqa: B018
    except ValueError as e:
        raise InvalidUrlError(text, str(e)) from e

    if not parts.scheme:
        raise InvalidUrlError(text, "relative URL without a base")
    if parts.scheme.lower() in _HOST_REQUIRED_SCHEMES and not parts.hostname:
        raise InvalidUrlError(text, "empty host")
    if parts.netloc and not _valid_host(parts.netloc):
        raise InvalidUrlError(text, "invalid host")
    return parts.path, parts.query


def parse_source(text: str) -> PackageSource:
    """解析 "kind+url" 形式的包来源

    Raises:
        MissingSourceKindError: 没有 '+' 分隔符
        EmptyUrlError: '+' 之后为空
        InvalidUrlError: URL 无效
        UnknownQueryParameterError: 出现 branch / tag 以外的查询参数
        UnknownSourceKindError: kind 不是 registry / git / path
    """
    kind, sep, url = text.partition("+")
    if not sep:
        raise MissingSourceKindError(text)
    if not url:
        raise EmptyUrlError(text)

    path, query = _check_url(text, url)

    # 查询参数对所有类型统一校验，先于 kind 分派
    branch: str | None = None
    tag: str | None = None
    for key, value in parse_qsl(query, keep_blank_values=True):
        if key == "branch":
            branch = value
        elif key == "tag":
            tag = value
        else:
            raise UnknownQueryParameterError(text, key)

    stripped = _strip_url(url)
    if kind == "registry":
        return RegistrySource(url=stripped)
    if kind == "git":
        return GitSource(url=stripped, branch=branch, tag=tag)
    if kind == "path":
        return PathSource(path=unquote(path))
    raise UnknownSourceKindError(text, kind)
