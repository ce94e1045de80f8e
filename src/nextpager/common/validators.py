"""输入验证工具

提供 URL、文件路径、数值参数等输入的验证功能。
"""

from __future__ import annotations

from pathlib import Path
from urllib.parse import urlparse

from .constants import MAX_URL_LENGTH, VALID_URL_SCHEMES
from .exceptions import URLValidationError, ValidationError


def validate_url(url: str, allow_empty: bool = False) -> str:
    """验证并清理 URL

    Args:
        url: 待验证的 URL 字符串
        allow_empty: 是否允许空 URL

    Returns:
        清理后的 URL

    Raises:
        URLValidationError: 当 URL 格式无效时
    """
    url = url.strip() if url else ""

    if not url:
        if allow_empty:
            return ""
        raise URLValidationError("", "URL 不能为空")

    if len(url) > MAX_URL_LENGTH:
        raise URLValidationError(url, f"URL 长度超过 {MAX_URL_LENGTH} 字符")

    try:
        result = urlparse(url)
    except ValueError as e:
        raise URLValidationError(url, f"URL 解析失败: {e}") from e

    if not result.scheme:
        raise URLValidationError(url, "缺少协议 (http/https)")

    if result.scheme.lower() not in VALID_URL_SCHEMES:
        raise URLValidationError(url, f"不支持的协议: {result.scheme}")

    if not result.netloc:
        raise URLValidationError(url, "缺少域名")

    return url


def is_http_url(value: str) -> bool:
    """判断输入是否像一个 http(s) 地址（CLI 用于区分 URL 与本地文件）"""
    scheme = urlparse(value.strip()).scheme.lower()
    return scheme in VALID_URL_SCHEMES


def validate_positive_integer(
    value: int,
    name: str,
    min_value: int = 1,
    max_value: int | None = None,
) -> int:
    """验证正整数参数

    Args:
        value: 待验证的值
        name: 参数名称（用于错误消息）
        min_value: 最小值（包含）
        max_value: 最大值（包含），None 表示无上限

    Returns:
        验证后的值

    Raises:
        ValidationError: 当值无效时
    """
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValidationError(f"{name} 必须是整数")

    if value < min_value:
        raise ValidationError(f"{name} 必须至少为 {min_value}")

    if max_value is not None and value > max_value:
        raise ValidationError(f"{name} 不能超过 {max_value}")

    return value


def validate_file_path(path: str, must_exist: bool = True) -> str:
    """验证文件路径

    Args:
        path: 文件路径
        must_exist: 是否必须存在

    Returns:
        验证后的绝对路径

    Raises:
        ValidationError: 当路径无效时
    """
    if not path or not path.strip():
        raise ValidationError("文件路径不能为空")

    path = path.strip()
    p = Path(path)

    if must_exist and not p.exists():
        raise ValidationError(f"文件不存在: {path}")

    if must_exist and not p.is_file():
        raise ValidationError(f"路径不是文件: {path}")

    return str(p.resolve())
