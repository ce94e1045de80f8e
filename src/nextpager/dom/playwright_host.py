"""Playwright 宿主页面

把 Document / PageHost 能力绑定到实时的 Playwright Page：

- snapshot：在浏览器中克隆 DOM，把计算样式、几何、disabled、元素序号写到克隆节点上，
  返回序列化结果交给 HtmlDocument 解析。实时页面不被修改。
- click：根据快照中的元素序号定位实时元素并点击。
- navigate / body_scroll_height：直接委托给 Page。
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeout

from ..common.config import config
from ..common.constants import SNAPSHOT_ATTR_PREFIX, SNAPSHOT_INDEX_ATTR
from ..common.exceptions import (
    ElementNotClickableError,
    ElementNotFoundError,
    NavigationError,
    SnapshotError,
)
from ..common.logger import get_logger
from .html_document import HtmlDocument

if TYPE_CHECKING:
    from playwright.async_api import Page

    from .base import DomElement

logger = get_logger(__name__)


# 元素序号与 document.querySelectorAll('*') 的顺序一致（包含 <html> 自身），
# 因此 XPath (//*)[index + 1] 能定位到同一个实时元素。
SNAPSHOT_SCRIPT = """
(prefix) => {
    const root = document.documentElement;
    const clone = root.cloneNode(true);
    const live = [root, ...root.querySelectorAll('*')];
    const copies = [clone, ...clone.querySelectorAll('*')];
    for (let i = 0; i < live.length && i < copies.length; i++) {
        const el = live[i];
        const copy = copies[i];
        const style = window.getComputedStyle(el);
        const rect = el.getBoundingClientRect();
        copy.setAttribute(prefix + 'index', String(i));
        copy.setAttribute(prefix + 'display', style.display);
        copy.setAttribute(prefix + 'visibility', style.visibility);
        copy.setAttribute(prefix + 'opacity', style.opacity);
        copy.setAttribute(prefix + 'x', String(rect.x));
        copy.setAttribute(prefix + 'y', String(rect.y));
        copy.setAttribute(prefix + 'width', String(rect.width));
        copy.setAttribute(prefix + 'height', String(rect.height));
        copy.setAttribute(prefix + 'disabled', el.disabled === true ? 'true' : 'false');
    }
    return { url: window.location.href, html: clone.outerHTML };
}
"""

BODY_HEIGHT_SCRIPT = "() => (document.body ? document.body.scrollHeight : 0)"


def element_xpath(index: int) -> str:
    """快照序号对应的实时 XPath"""
    return f"(//*)[{index + 1}]"


class PlaywrightPageHost:
    """Playwright Page 的 PageHost 实现"""

    def __init__(
        self,
        page: "Page",
        click_timeout_ms: int | None = None,
        navigation_timeout_ms: int | None = None,
        wait_until: str | None = None,
    ):
        self.page = page
        self.click_timeout_ms = click_timeout_ms or config.browser.click_timeout_ms
        self.navigation_timeout_ms = navigation_timeout_ms or config.browser.timeout_ms
        self.wait_until = wait_until or config.browser.wait_until

    @property
    def location(self) -> str:
        return self.page.url

    async def snapshot(self) -> HtmlDocument:
        """获取带计算样式标注的只读快照

        Raises:
            SnapshotError: 页面脚本执行失败（页面已关闭、正在跳转等）
        """
        try:
            payload = await self.page.evaluate(SNAPSHOT_SCRIPT, SNAPSHOT_ATTR_PREFIX)
        except PlaywrightError as e:
            raise SnapshotError(f"页面快照失败: {e}") from e

        url = payload.get("url") or self.page.url
        logger.debug(f"已获取页面快照: {url}")
        return HtmlDocument.from_html(payload.get("html") or "", url=url)

    async def click(self, element: "DomElement") -> None:
        """点击快照元素对应的实时元素

        Raises:
            ElementNotFoundError: 元素不是来自快照，或实时页面中已不存在
            ElementNotClickableError: 点击超时或被拦截
        """
        raw_index = element.get_attribute(SNAPSHOT_INDEX_ATTR)
        if raw_index is None or not raw_index.isdigit():
            raise ElementNotFoundError(repr(element), "元素缺少快照序号")

        selector = element_xpath(int(raw_index))
        locator = self.page.locator(f"xpath={selector}")
        if await locator.count() == 0:
            raise ElementNotFoundError(selector)

        try:
            await locator.first.click(timeout=self.click_timeout_ms)
        except PlaywrightTimeout as e:
            raise ElementNotClickableError(selector, "点击超时") from e
        except PlaywrightError as e:
            raise ElementNotClickableError(selector, str(e)) from e

    async def navigate(self, url: str) -> None:
        """导航到目标地址

        Raises:
            NavigationError: 导航失败或超时
        """
        try:
            await self.page.goto(
                url,
                wait_until=self.wait_until,
                timeout=self.navigation_timeout_ms,
            )
        except PlaywrightError as e:
            raise NavigationError(url, f"页面导航失败 ({e})") from e

    async def body_scroll_height(self) -> int:
        height = await self.page.evaluate(BODY_HEIGHT_SCRIPT)
        return int(height or 0)
