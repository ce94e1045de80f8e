"""翻页执行模块 - 负责执行下一页候选并等待新内容"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from ..common.config import config
from ..common.logger import get_traversal_logger
from ..common.validators import validate_positive_integer

if TYPE_CHECKING:
    from ..common.types import NextPageCandidate
    from ..dom.base import PageHost

logger = get_traversal_logger()


class TraversalController:
    """执行下一页候选

    - 加载更多：点击后等待 body 高度增长；
    - 有 URL：整页导航，导航即视为成功；
    - 仅可点击（SPA 路由等）：点击后等待 body 高度增长。

    同一时间只能有一个 advance 在执行：整页导航会使之前的文档失效。
    """

    def __init__(
        self,
        host: "PageHost",
        max_wait_ms: int | None = None,
        poll_interval_ms: int | None = None,
    ):
        self.host = host
        self.max_wait_ms = validate_positive_integer(
            max_wait_ms if max_wait_ms is not None else config.pagination.max_wait_ms,
            "max_wait_ms",
            min_value=0,
        )
        self.poll_interval_ms = validate_positive_integer(
            poll_interval_ms if poll_interval_ms is not None else config.pagination.poll_interval_ms,
            "poll_interval_ms",
        )

    async def advance(
        self,
        candidate: "NextPageCandidate | None",
        cancel_event: asyncio.Event | None = None,
    ) -> bool:
        """执行候选，返回是否成功翻页

        任何点击、导航或等待中的异常都会被记录并转换为 False，不会向上抛出。
        """
        if candidate is None or candidate.element is None:
            return False

        try:
            if candidate.is_load_more:
                logger.info(f"点击加载更多: {candidate.text or candidate.type.value}")
                await self.host.click(candidate.element)
                return await self._wait_and_report(cancel_event)

            if candidate.url:
                logger.info(f"导航到下一页: {candidate.url}")
                await self.host.navigate(candidate.url)
                return True

            logger.info(f"点击下一页控件: {candidate.text or candidate.type.value}")
            await self.host.click(candidate.element)
            return await self._wait_and_report(cancel_event)
        except Exception as e:  # noqa: BLE001
            logger.warning(f"翻页失败 ({candidate.type.value}): {e}")
            return False

    async def _wait_and_report(self, cancel_event: asyncio.Event | None) -> bool:
        grown = await self.await_content_materialization(cancel_event=cancel_event)
        if grown:
            logger.info("新内容已加载")
        else:
            logger.info(f"{self.max_wait_ms}ms 内未检测到新内容")
        return grown

    async def await_content_materialization(
        self,
        max_wait_ms: int | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> bool:
        """等待 body 滚动高度增长

        每 poll_interval_ms 检查一次；高度超过初始值立即返回 True，
        超过 max_wait_ms 仍未增长返回 False。cancel_event 被设置时提前返回 False。

        只能发现追加式加载，替换式加载（高度不变）会被判为未加载。
        """
        max_wait_ms = self.max_wait_ms if max_wait_ms is None else max_wait_ms
        loop = asyncio.get_running_loop()
        started = loop.time()
        deadline = started + max_wait_ms / 1000
        interval = self.poll_interval_ms / 1000

        initial_height = await self.host.body_scroll_height()

        while True:
            if await self._sleep_or_cancel(interval, cancel_event):
                logger.debug("等待新内容已取消")
                return False

            if await self.host.body_scroll_height() > initial_height:
                logger.debug(f"body 高度增长，用时 {(loop.time() - started) * 1000:.0f}ms")
                return True

            if loop.time() >= deadline:
                return False

    @staticmethod
    async def _sleep_or_cancel(seconds: float, cancel_event: asyncio.Event | None) -> bool:
        """休眠一个轮询间隔，期间被取消返回 True"""
        if cancel_event is None:
            await asyncio.sleep(seconds)
            return False
        if cancel_event.is_set():
            return True
        try:
            await asyncio.wait_for(cancel_event.wait(), timeout=seconds)
        except asyncio.TimeoutError:
            return False
        return True
