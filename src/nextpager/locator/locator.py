"""分页定位器 - 按固定优先级级联识别下一页控件"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from ..common.config import config
from ..common.logger import get_locator_logger
from .patterns import load_patterns
from .strategies import DEFAULT_STRATEGIES, has_class

if TYPE_CHECKING:
    from ..common.types import NextPageCandidate
    from ..dom.base import Document
    from .patterns import PatternSet
    from .strategies import MatchStrategy

logger = get_locator_logger()

# 显式的无限滚动标记：[data-infinite-scroll], .infinite-scroll, [data-auto-pager]
INFINITE_SCROLL_MARKUP_XPATH = (
    f"//*[@data-infinite-scroll] | //*[{has_class('infinite-scroll')}] | //*[@data-auto-pager]"
)


class PaginationLocator:
    """下一页定位器

    策略顺序决定胜者，置信度只作参考，不参与比较。
    每次调用都重新扫描文档，不缓存任何结果。
    """

    def __init__(
        self,
        document: "Document",
        patterns: "PatternSet | None" = None,
        strategies: "Sequence[MatchStrategy] | None" = None,
    ):
        self.document = document
        self.patterns = patterns or load_patterns(config.pagination.patterns_file)
        self.strategies = tuple(strategies) if strategies is not None else DEFAULT_STRATEGIES

    def locate(self) -> "NextPageCandidate | None":
        """返回第一个命中策略的候选，全部未命中返回 None"""
        for strategy in self.strategies:
            candidate = strategy.attempt(self.document, self.patterns)
            if candidate is not None:
                logger.debug(
                    f"下一页: 策略={candidate.type.value} url={candidate.url} "
                    f"置信度={candidate.confidence}"
                )
                return candidate

        logger.debug(f"未找到下一页: {self.document.url}")
        return None

    def locate_all(self) -> "list[NextPageCandidate]":
        """运行全部策略，按级联顺序返回每个策略的候选（诊断用）"""
        candidates = []
        for strategy in self.strategies:
            candidate = strategy.attempt(self.document, self.patterns)
            if candidate is not None:
                candidates.append(candidate)
        return candidates

    def probe_infinite_scroll_markup(self) -> bool:
        """页面是否带有显式的无限滚动标记（与按钮文本无关）"""
        return self.document.first(f"({INFINITE_SCROLL_MARKUP_XPATH})[1]") is not None
