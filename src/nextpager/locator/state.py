"""分页状态检查"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from ..common.types import PaginationState
from .extractors import extract_text
from .locator import PaginationLocator
from .strategies import has_class

if TYPE_CHECKING:
    from ..common.types import NextPageCandidate
    from ..dom.base import Document
    from .patterns import PatternSet

# .current, .active, [aria-current="page"]
CURRENT_PAGE_XPATH = (
    f"//*[{has_class('current')} or {has_class('active')} or @aria-current='page']"
)

# .pagination a, .pager a, .page-numbers a
PAGE_LINKS_XPATH = (
    f"//*[{has_class('pagination')}]//a"
    f" | //*[{has_class('pager')}]//a"
    f" | //*[{has_class('page-numbers')}]//a"
)

# a[rel="prev"], .prev, .previous
PREVIOUS_XPATH = f"//a[@rel='prev'] | //*[{has_class('prev')}] | //*[{has_class('previous')}]"

_LEADING_INT_RE = re.compile(r"\s*([+-]?[0-9]+)")

# 未传入候选时表示需要重新运行级联
_UNSET = object()


def parse_leading_int(text: str) -> int | None:
    """与 JS parseInt 一致：解析开头的整数，否则返回 None"""
    match = _LEADING_INT_RE.match(text)
    return int(match.group(1)) if match else None


class PaginationStateInspector:
    """计算当前页码、总页数和上一页/下一页是否存在"""

    def __init__(
        self,
        document: "Document",
        patterns: "PatternSet | None" = None,
        locator: PaginationLocator | None = None,
    ):
        self.document = document
        self.locator = locator or PaginationLocator(document, patterns=patterns)

    def inspect(self, candidate: "NextPageCandidate | None | object" = _UNSET) -> PaginationState:
        """生成分页状态

        Args:
            candidate: 同一轮已经调用过 locate() 时传入其结果（可以是 None），
                避免再跑一遍完整级联
        """
        state = PaginationState()

        current = self.document.first(f"({CURRENT_PAGE_XPATH})[1]")
        if current is not None:
            page_num = parse_leading_int(extract_text(current))
            if page_num is not None:
                state.current_page = page_num

        parsed = (parse_leading_int(extract_text(link)) for link in self.document.xpath(PAGE_LINKS_XPATH))
        page_numbers = [num for num in parsed if num is not None]
        if page_numbers:
            state.total_pages = max(page_numbers)

        if candidate is _UNSET:
            candidate = self.locator.locate()
        state.has_next = candidate is not None
        state.has_previous = self.document.first(f"({PREVIOUS_XPATH})[1]") is not None

        return state
