"""统一异常体系

所有业务异常继承 CargoUpdateError，CLI 层据此输出友好提示。
解析类异常同时继承 ValueError，调用方可按单个包捕获后继续处理其余包。
"""

from __future__ import annotations


class CargoUpdateError(Exception):
    """基础异常"""

    code: str = "UNKNOWN"

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ConfigError(CargoUpdateError):
    """配置文件缺失或内容无效"""

    code = "CONFIG_ERROR"


class MetadataError(CargoUpdateError):
    """.crates2.json 无法读取或结构无效"""

    code = "METADATA_ERROR"


class ExecutionError(CargoUpdateError):
    """外部命令无法执行"""

    code = "EXECUTION_ERROR"


# =========================================================================
# 解析异常
# =========================================================================


class ParseError(CargoUpdateError, ValueError):
    """包标识符或来源串解析失败

    text 为出错的原始片段；identifier 由标识符解析器补充，
    指明该片段属于哪个完整标识符。
    """

    code = "PARSE_ERROR"

    def __init__(self, message: str, text: str) -> None:
        super().__init__(message)
        self.message = message
        self.text = text
        self.identifier: str | None = None

    def __str__(self) -> str:
        if self.identifier is not None and self.identifier != self.text:
            return f"{self.message} (标识符 '{self.identifier}')"
        return self.message


class MalformedIdentifierError(ParseError):
    """标识符不符合 "name version (source)" 结构"""

    code = "MALFORMED_IDENTIFIER"

    def __init__(self, text: str) -> None:
        super().__init__(f"无法解析包标识符 '{text}'", text)


class MissingSourceKindError(ParseError):
    code = "MISSING_SOURCE_KIND"

    def __init__(self, text: str) -> None:
        super().__init__(f"包来源缺少类型前缀 (kind+url): '{text}'", text)


class EmptyUrlError(ParseError):
    code = "EMPTY_URL"

    def __init__(self, text: str) -> None:
        super().__init__(f"包来源 URL 为空: '{text}'", text)


class InvalidUrlError(ParseError):
    """URL 解析失败，detail 为底层诊断信息"""

    code = "INVALID_URL"

    def __init__(self, text: str, detail: str) -> None:
        super().__init__(f"包来源 URL 无效 '{text}': {detail}", text)
        self.detail = detail


class UnknownQueryParameterError(ParseError):
    code = "UNKNOWN_QUERY_PARAMETER"

    def __init__(self, text: str, key: str) -> None:
        super().__init__(f"未知的 URL 查询参数 '{key}': '{text}'", text)
        self.key = key


class UnknownSourceKindError(ParseError):
    code = "UNKNOWN_SOURCE_KIND"

    def __init__(self, text: str, kind: str) -> None:
        super().__init__(f"未知的包来源类型 '{kind}': '{text}'", text)
        self.kind = kind


class MalformedOptionsError(CargoUpdateError, ValueError):
    """安装选项文档缺少字段或字段类型错误"""

    code = "MALFORMED_OPTIONS"

    def __init__(self, field: str, reason: str) -> None:
        super().__init__(f"安装选项字段 '{field}' 无效: {reason}")
        self.field = field
        self.reason = reason
