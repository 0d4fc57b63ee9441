"""包标识符解析器

标识符格式为 "name version (kind+url)"，例如:
  bat 0.18.0 (registry+https://github.com/rust-lang/crates.io-index)
  bcut 1.0.2 (git+https://github.com/aswild/bcut#046894ca312298f260775687a87bd1f3b7df8e55)
  cargo-update-installed 0.1.0 (path+file:///workspace/cargo-update-installed)
"""

from __future__ import annotations

from cargo_update_installed.core.exceptions import MalformedIdentifierError, ParseError
from cargo_update_installed.core.models import PackageIdentifier
from cargo_update_installed.core.source import parse_source


def _is_token(s: str) -> bool:
    return bool(s) and not any(c.isspace() for c in s)


def split_identifier(text: str) -> tuple[str, str, str]:
    """拆分为 (name, version, source_text)，不解析来源

    name 与 version 各为一个不含空白的词，以单个空格分隔；
    其后是一直延伸到字符串末尾的括号段，括号内不能为空。

    Raises:
        MalformedIdentifierError: 结构不符
    """
    name, sep1, rest = text.partition(" ")
    version, sep2, paren = rest.partition(" ")
    if not (sep1 and sep2 and _is_token(name) and _is_token(version)):
        raise MalformedIdentifierError(text)
    if len(paren) < 3 or not paren.startswith("(") or not paren.endswith(")"):
        raise MalformedIdentifierError(text)
    source_text = paren[1:-1]
    if "\n" in source_text:
        raise MalformedIdentifierError(text)
    return name, version, source_text


def parse_identifier(text: str) -> PackageIdentifier:
    """解析完整标识符

    来源解析失败时原样抛出来源异常，并在 identifier 属性中记录完整标识符。

    Raises:
        MalformedIdentifierError: 结构不符
        ParseError: 来源片段解析失败（见 parse_source）
    """
    name, version, source_text = split_identifier(text)
    try:
        source = parse_source(source_text)
    except ParseError as e:
        e.identifier = text
        raise
    return PackageIdentifier(name=name, version=version, source=source)
