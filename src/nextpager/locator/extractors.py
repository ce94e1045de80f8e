"""元素文本与 URL 提取"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING
from urllib.parse import urljoin

if TYPE_CHECKING:
    from ..dom.base import DomElement

# 内联 onclick 中的 location.href = '...' / window.location = '...'
ONCLICK_URL_RE = re.compile(r"""(?:location\.href|window\.location)\s*=\s*['"]([^'"]+)['"]""")

DATA_URL_ATTRIBUTES = ("data-href", "data-url", "data-link")

TEXT_ATTRIBUTES = ("title", "alt", "value")


def extract_text(element: "DomElement | None") -> str:
    """元素文本 + title/alt/value 属性，去除首尾空白

    标签文字可能在子节点、title 或按钮 value 上，统一拼接后再做匹配。
    """
    if element is None:
        return ""
    parts = [element.text_content() or ""]
    parts.extend(element.get_attribute(name) or "" for name in TEXT_ATTRIBUTES)
    return " ".join(parts).strip()


def _is_navigable(url: str) -> bool:
    stripped = url.strip()
    return bool(stripped) and stripped != "#" and not stripped.lower().startswith("javascript:")


def extract_url(element: "DomElement | None", base_url: str = "") -> str | None:
    """解析元素的目标地址

    顺序：原生 href -> data-href/data-url/data-link -> onclick 中的跳转语句。
    相对地址按 base_url 解析；javascript: 与单独的 "#" 不视为可导航地址。
    """
    if element is None:
        return None

    href = element.href
    if href:
        # 以原始属性值判断：href="" 会被解析成当前页地址
        raw_href = element.get_attribute("href")
        if _is_navigable(href if raw_href is None else raw_href):
            return href

    for name in DATA_URL_ATTRIBUTES:
        value = element.get_attribute(name)
        if value and _is_navigable(value):
            return urljoin(base_url, value.strip()) if base_url else value.strip()

    onclick = element.get_attribute("onclick")
    if onclick:
        match = ONCLICK_URL_RE.search(onclick)
        if match and _is_navigable(match.group(1)):
            return urljoin(base_url, match.group(1)) if base_url else match.group(1)

    return None
