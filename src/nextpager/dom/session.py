"""浏览器会话管理"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from playwright.async_api import Browser, Page, Playwright, async_playwright
from playwright.async_api import Error as PlaywrightError

from ..common.config import config
from ..common.exceptions import BrowserLaunchError
from ..common.logger import get_logger

logger = get_logger(__name__)


class BrowserSession:
    """浏览器会话管理器"""

    def __init__(
        self,
        headless: bool | None = None,
        viewport_width: int | None = None,
        viewport_height: int | None = None,
    ):
        self.headless = headless if headless is not None else config.browser.headless
        self.viewport_width = viewport_width or config.browser.viewport_width
        self.viewport_height = viewport_height or config.browser.viewport_height

        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._page: Page | None = None

    async def start(self) -> Page:
        """启动浏览器并返回 Page

        Raises:
            BrowserLaunchError: Playwright 或 Chromium 启动失败
        """
        try:
            self._playwright = await async_playwright().start()
            self._browser = await self._playwright.chromium.launch(headless=self.headless)
            context = await self._browser.new_context(
                viewport={"width": self.viewport_width, "height": self.viewport_height},
            )
            context.set_default_timeout(config.browser.timeout_ms)
            self._page = await context.new_page()
        except PlaywrightError as e:
            raise BrowserLaunchError(str(e)) from e
        return self._page

    async def stop(self) -> None:
        """关闭浏览器会话"""
        if self._browser:
            try:
                await self._browser.close()
            except Exception as e:  # noqa: BLE001
                logger.debug(f"关闭浏览器失败: {e}")
        if self._playwright:
            await self._playwright.stop()

        self._page = None
        self._browser = None
        self._playwright = None

    @property
    def page(self) -> Page | None:
        return self._page


@asynccontextmanager
async def create_browser_session(
    headless: bool | None = None,
    viewport_width: int | None = None,
    viewport_height: int | None = None,
) -> AsyncGenerator[BrowserSession, None]:
    """创建浏览器会话的上下文管理器"""
    session = BrowserSession(
        headless=headless,
        viewport_width=viewport_width,
        viewport_height=viewport_height,
    )
    try:
        await session.start()
        yield session
    finally:
        await session.stop()
