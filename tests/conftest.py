"""pytest 全局配置和 fixtures

提供测试所需的基础设施和 Mock 对象。
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

# 添加项目路径
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from nextpager.dom.html_document import HtmlDocument  # noqa: E402

LIST_URL = "https://example.com/list"


# ============================================================================
# 文档 Fixtures
# ============================================================================

@pytest.fixture
def make_document():
    """用 body 片段构建 HtmlDocument"""

    def _make(body: str, url: str = LIST_URL, head: str = "") -> HtmlDocument:
        return HtmlDocument.from_html(
            f"<html><head>{head}</head><body>{body}</body></html>",
            url=url,
        )

    return _make


# ============================================================================
# 宿主页面 Fakes
# ============================================================================

class FakePageHost:
    """内存中的 PageHost

    click 之后 grow_after 秒 body 高度增加 grow_by；
    grow_after 为 None 时高度保持不变。
    增长在读取高度时按事件循环时间结算，不创建后台任务。
    """

    def __init__(
        self,
        initial_height: int = 1000,
        grow_after: float | None = None,
        grow_by: int = 500,
        location: str = LIST_URL,
    ):
        self.height = initial_height
        self.grow_after = grow_after
        self.grow_by = grow_by
        self._location = location
        self.clicks: list = []
        self.navigations: list[str] = []
        self.click_error: Exception | None = None
        self.navigate_error: Exception | None = None
        self._grow_at: float | None = None

    @property
    def location(self) -> str:
        return self._location

    async def snapshot(self):
        raise NotImplementedError

    async def click(self, element) -> None:
        if self.click_error is not None:
            raise self.click_error
        self.clicks.append(element)
        if self.grow_after is not None:
            self._grow_at = asyncio.get_running_loop().time() + self.grow_after

    async def navigate(self, url: str) -> None:
        if self.navigate_error is not None:
            raise self.navigate_error
        self.navigations.append(url)
        self._location = url

    async def body_scroll_height(self) -> int:
        if self._grow_at is not None and asyncio.get_running_loop().time() >= self._grow_at:
            self.height += self.grow_by
            self._grow_at = None
        return self.height


@pytest.fixture
def fake_host():
    """高度不变的宿主页面"""
    return FakePageHost()


@pytest.fixture
def growing_host():
    """点击 50ms 后追加内容的宿主页面"""
    return FakePageHost(grow_after=0.05)


# ============================================================================
# Playwright Mock
# ============================================================================

@pytest.fixture
def mock_page():
    """模拟 Playwright Page 对象"""
    page = AsyncMock()
    page.url = LIST_URL
    page.goto = AsyncMock()
    page.evaluate = AsyncMock(return_value=None)
    page.locator = MagicMock()
    page.locator.return_value.count = AsyncMock(return_value=1)
    page.locator.return_value.first.click = AsyncMock()
    return page
