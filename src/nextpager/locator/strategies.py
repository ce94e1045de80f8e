"""下一页识别策略

每个策略是一个 ``MatchStrategy`` 值（名称、类型、置信度、检测函数），
按 ``DEFAULT_STRATEGIES`` 的顺序组成级联，由 PaginationLocator 依次尝试。
检测函数只读文档，未命中返回 None。
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, NamedTuple

from ..common.constants import (
    ARIA_LABEL_CONFIDENCE,
    CLASS_ID_CONFIDENCE,
    INFINITE_SCROLL_CONFIDENCE,
    NUMBERED_PAGINATION_CONFIDENCE,
    REL_ATTRIBUTE_CONFIDENCE,
    TEXT_CONTENT_CONFIDENCE,
)
from ..common.logger import get_locator_logger
from ..common.types import CandidateType, NextPageCandidate
from .extractors import extract_text, extract_url
from .validator import is_valid_element

if TYPE_CHECKING:
    from ..dom.base import Document, DomElement
    from .patterns import PatternSet

logger = get_locator_logger()


# ============================================================================
# XPath 工具
# ============================================================================


def xpath_literal(value: str) -> str:
    """把任意字符串转成 XPath 字面量"""
    if "'" not in value:
        return f"'{value}'"
    if '"' not in value:
        return f'"{value}"'
    parts = value.split("'")
    return "concat(" + ", \"'\", ".join(f"'{part}'" for part in parts) + ")"


def has_class(name: str) -> str:
    """等价于 CSS 的 .name"""
    return f"contains(concat(' ', normalize-space(@class), ' '), ' {name} ')"


# a[href], button[onclick], button[data-href]（并集按文档顺序返回）
CLICKABLE_XPATH = "//a[@href] | //button[@onclick] | //button[@data-href]"

# button, a[href], [role="button"]
LOAD_MORE_XPATH = "//button | //a[@href] | //*[@role='button']"

# 分页容器，按顺序探测，每个选择器只取第一个匹配
PAGINATION_CONTAINER_XPATHS = (
    f"//*[{has_class('pagination')}]",
    f"//*[{has_class('pager')}]",
    f"//*[{has_class('page-navigation')}]",
    f"//*[{has_class('nav-links')}]",
    "//*[@role='navigation']",
    "//nav",
    f"//*[{has_class('paginator')}]",
    f"//*[{has_class('page-numbers')}]",
    f"//*[{has_class('wp-pagenavi')}]",
    f"//*[{has_class('pagination-wrapper')}]",
)

_PURE_INTEGER_RE = re.compile(r"[0-9]+")


# ============================================================================
# 策略定义
# ============================================================================


class StrategyHit(NamedTuple):
    """检测函数的命中结果"""

    element: "DomElement"
    url: str | None
    is_load_more: bool = False


DetectFn = Callable[["Document", "PatternSet"], "StrategyHit | None"]


@dataclass(frozen=True)
class MatchStrategy:
    """级联中的一个识别策略"""

    name: str
    type: CandidateType
    confidence: float
    detect: DetectFn

    def attempt(self, document: "Document", patterns: "PatternSet") -> NextPageCandidate | None:
        hit = self.detect(document, patterns)
        if hit is None:
            return None

        logger.debug(f"策略 {self.name} 命中: {hit.element!r} -> {hit.url}")
        return NextPageCandidate(
            element=hit.element,
            url=hit.url,
            type=self.type,
            confidence=self.confidence,
            click_only=hit.url is None,
            is_load_more=hit.is_load_more,
            text=" ".join(extract_text(hit.element).split()),
        )


def find_by_rel_attribute(document: "Document", patterns: "PatternSet") -> StrategyHit | None:
    """rel="next" 语义标记，最可靠"""
    for rel in patterns.rel_values:
        literal = xpath_literal(rel)
        for element in document.xpath(f"//a[@rel={literal}] | //link[@rel={literal}]"):
            if is_valid_element(element):
                return StrategyHit(element, extract_url(element, document.base_url))
    return None


def find_by_text_content(document: "Document", patterns: "PatternSet") -> StrategyHit | None:
    """按可点击元素的文本匹配多语言"下一页"词"""
    for element in document.xpath(CLICKABLE_XPATH):
        text = extract_text(element)
        if not any(regex.search(text) for regex in patterns.text_regexes):
            continue
        if is_valid_element(element):
            return StrategyHit(element, extract_url(element, document.base_url))
    return None


def find_by_class_id(document: "Document", patterns: "PatternSet") -> StrategyHit | None:
    """按 class/id 匹配，规则优先，其次文档顺序"""
    elements = document.xpath(CLICKABLE_XPATH)
    for regex in patterns.class_id_regexes:
        for element in elements:
            class_id = f"{element.get_attribute('class') or ''} {element.get_attribute('id') or ''}"
            if regex.search(class_id) and is_valid_element(element):
                return StrategyHit(element, extract_url(element, document.base_url))
    return None


def _aria_label_text(document: "Document", element: "DomElement") -> str:
    label = element.get_attribute("aria-label") or ""
    labelled_by = element.get_attribute("aria-labelledby")
    if labelled_by:
        for ref_id in labelled_by.split():
            referenced = document.get_element_by_id(ref_id)
            label += " " + (referenced.text_content() if referenced is not None else "")
    return label


def find_by_aria_label(document: "Document", patterns: "PatternSet") -> StrategyHit | None:
    """按 aria-label / aria-labelledby 匹配"""
    for element in document.xpath("//*[@aria-label or @aria-labelledby]"):
        label = _aria_label_text(document, element)
        if not any(regex.search(label) for regex in patterns.aria_regexes):
            continue
        if is_valid_element(element):
            return StrategyHit(element, extract_url(element, document.base_url))
    return None


def _is_current_page_link(element: "DomElement") -> bool:
    classes = element.class_list()
    return (
        "current" in classes
        or "active" in classes
        or element.get_attribute("aria-current") == "page"
        or element.has_attribute("disabled")
    )


def find_numbered_pagination(document: "Document", patterns: "PatternSet") -> StrategyHit | None:
    """数字分页：取标记为当前页的链接之后紧邻的链接"""
    for container_xpath in PAGINATION_CONTAINER_XPATHS:
        container = document.first(f"({container_xpath})[1]")
        if container is None:
            continue

        links = container.xpath(".//a[@href]")
        current_index = next(
            (i for i, link in enumerate(links) if _is_current_page_link(link)), -1
        )
        if current_index < 0 or current_index >= len(links) - 1:
            continue

        next_link = links[current_index + 1]
        next_text = extract_text(next_link)
        looks_like_next = bool(
            _PURE_INTEGER_RE.fullmatch(next_text)
            or patterns.numbered_next_regex.search(next_text)
        )
        if looks_like_next and is_valid_element(next_link):
            return StrategyHit(next_link, extract_url(next_link, document.base_url))
    return None


def find_infinite_scroll_button(document: "Document", patterns: "PatternSet") -> StrategyHit | None:
    """加载更多按钮：点击后在当前页追加内容"""
    for element in document.xpath(LOAD_MORE_XPATH):
        text = extract_text(element).lower()
        if not any(phrase in text for phrase in patterns.load_more_lowered):
            continue
        if is_valid_element(element):
            url = extract_url(element, document.base_url) or document.url
            return StrategyHit(element, url, is_load_more=True)
    return None


DEFAULT_STRATEGIES: tuple[MatchStrategy, ...] = (
    MatchStrategy("rel", CandidateType.REL_ATTRIBUTE, REL_ATTRIBUTE_CONFIDENCE, find_by_rel_attribute),
    MatchStrategy("text", CandidateType.TEXT_CONTENT, TEXT_CONTENT_CONFIDENCE, find_by_text_content),
    MatchStrategy("class-id", CandidateType.CLASS_ID, CLASS_ID_CONFIDENCE, find_by_class_id),
    MatchStrategy("aria", CandidateType.ARIA_LABEL, ARIA_LABEL_CONFIDENCE, find_by_aria_label),
    MatchStrategy(
        "numbered",
        CandidateType.NUMBERED_PAGINATION,
        NUMBERED_PAGINATION_CONFIDENCE,
        find_numbered_pagination,
    ),
    MatchStrategy(
        "load-more",
        CandidateType.INFINITE_SCROLL,
        INFINITE_SCROLL_CONFIDENCE,
        find_infinite_scroll_button,
    ),
)
