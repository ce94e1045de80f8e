"""NextPager - 下一页控件识别与翻页"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

__version__ = "0.1.0"

if TYPE_CHECKING:
    from .dom.html_document import HtmlDocument as HtmlDocument
    from .dom.playwright_host import PlaywrightPageHost as PlaywrightPageHost
    from .locator import PaginationLocator as PaginationLocator
    from .locator import PaginationStateInspector as PaginationStateInspector
    from .traversal import TraversalController as TraversalController

__all__ = [
    "__version__",
    "HtmlDocument",
    "PlaywrightPageHost",
    "PaginationLocator",
    "PaginationStateInspector",
    "TraversalController",
]


def __getattr__(name: str) -> Any:
    """Lazy exports to avoid importing playwright at package import time."""
    if name == "HtmlDocument":
        from .dom.html_document import HtmlDocument

        return HtmlDocument
    if name == "PlaywrightPageHost":
        from .dom.playwright_host import PlaywrightPageHost

        return PlaywrightPageHost
    if name in {"PaginationLocator", "PaginationStateInspector"}:
        from .locator import PaginationLocator, PaginationStateInspector

        return PaginationLocator if name == "PaginationLocator" else PaginationStateInspector
    if name == "TraversalController":
        from .traversal import TraversalController

        return TraversalController
    raise AttributeError(f"module 'nextpager' has no attribute '{name}'")
