"""翻页执行单元测试"""

import asyncio

import pytest

from nextpager.common.exceptions import ElementNotClickableError, NavigationError, ValidationError
from nextpager.common.types import CandidateType, NextPageCandidate
from nextpager.traversal import TraversalController


def _candidate(url=None, is_load_more=False, candidate_type=CandidateType.TEXT_CONTENT):
    return NextPageCandidate(
        element=object(),
        url=url,
        type=candidate_type,
        confidence=0.9,
        click_only=url is None,
        is_load_more=is_load_more,
        text="Next",
    )


class TestConstruction:
    """参数校验"""

    def test_explicit_values(self, fake_host):
        controller = TraversalController(fake_host, max_wait_ms=300, poll_interval_ms=20)

        assert controller.max_wait_ms == 300
        assert controller.poll_interval_ms == 20

    def test_defaults_from_config(self, fake_host):
        from nextpager.common.config import config

        controller = TraversalController(fake_host)

        assert controller.max_wait_ms == config.pagination.max_wait_ms
        assert controller.poll_interval_ms == config.pagination.poll_interval_ms

    @pytest.mark.parametrize("kwargs", [{"max_wait_ms": -1}, {"poll_interval_ms": 0}, {"max_wait_ms": 1.5}])
    def test_invalid_values(self, fake_host, kwargs):
        with pytest.raises(ValidationError):
            TraversalController(fake_host, **kwargs)


class TestAwaitContentMaterialization:
    """等待新内容"""

    @pytest.mark.asyncio
    async def test_growth_detected_promptly(self, growing_host):
        """高度在 50ms 后增长时远早于 max_wait 返回 True"""
        controller = TraversalController(growing_host, max_wait_ms=2000, poll_interval_ms=10)
        loop = asyncio.get_running_loop()

        await growing_host.click(object())
        started = loop.time()
        grown = await controller.await_content_materialization()
        elapsed = loop.time() - started

        assert grown is True
        assert elapsed < 1.0

    @pytest.mark.asyncio
    async def test_no_growth_waits_full_duration(self, fake_host):
        """高度不变时至少等满 max_wait 才返回 False"""
        controller = TraversalController(fake_host, max_wait_ms=300, poll_interval_ms=20)
        loop = asyncio.get_running_loop()

        started = loop.time()
        grown = await controller.await_content_materialization()
        elapsed = loop.time() - started

        assert grown is False
        assert elapsed >= 0.3

    @pytest.mark.asyncio
    async def test_override_max_wait(self, fake_host):
        controller = TraversalController(fake_host, max_wait_ms=5000, poll_interval_ms=10)

        assert await controller.await_content_materialization(max_wait_ms=50) is False

    @pytest.mark.asyncio
    async def test_cancel_returns_early(self, fake_host):
        """取消事件被设置后提前返回 False"""
        controller = TraversalController(fake_host, max_wait_ms=5000, poll_interval_ms=50)
        cancel_event = asyncio.Event()
        loop = asyncio.get_running_loop()
        loop.call_later(0.05, cancel_event.set)

        started = loop.time()
        grown = await controller.await_content_materialization(cancel_event=cancel_event)

        assert grown is False
        assert loop.time() - started < 1.0

    @pytest.mark.asyncio
    async def test_already_cancelled(self, growing_host):
        controller = TraversalController(growing_host, max_wait_ms=1000, poll_interval_ms=10)
        cancel_event = asyncio.Event()
        cancel_event.set()

        assert await controller.await_content_materialization(cancel_event=cancel_event) is False


class TestAdvance:
    """执行候选"""

    @pytest.mark.asyncio
    async def test_none_candidate(self, fake_host):
        controller = TraversalController(fake_host, max_wait_ms=100, poll_interval_ms=10)

        assert await controller.advance(None) is False
        assert fake_host.clicks == []

    @pytest.mark.asyncio
    async def test_candidate_without_element(self, fake_host):
        controller = TraversalController(fake_host, max_wait_ms=100, poll_interval_ms=10)
        candidate = _candidate(url="https://example.com/p/2")
        candidate.element = None

        assert await controller.advance(candidate) is False

    @pytest.mark.asyncio
    async def test_url_candidate_navigates(self, fake_host):
        """有 URL 的候选整页导航，导航即成功"""
        controller = TraversalController(fake_host, max_wait_ms=100, poll_interval_ms=10)

        ok = await controller.advance(_candidate(url="https://example.com/p/2"))

        assert ok is True
        assert fake_host.navigations == ["https://example.com/p/2"]
        assert fake_host.clicks == []
        assert fake_host.location == "https://example.com/p/2"

    @pytest.mark.asyncio
    async def test_load_more_clicks_and_waits(self, growing_host):
        """加载更多即使带 URL 也只点击"""
        controller = TraversalController(growing_host, max_wait_ms=2000, poll_interval_ms=10)
        candidate = _candidate(
            url=growing_host.location,
            is_load_more=True,
            candidate_type=CandidateType.INFINITE_SCROLL,
        )

        ok = await controller.advance(candidate)

        assert ok is True
        assert growing_host.clicks == [candidate.element]
        assert growing_host.navigations == []

    @pytest.mark.asyncio
    async def test_load_more_without_new_content(self, fake_host):
        """加载更多后没有新内容返回 False"""
        controller = TraversalController(fake_host, max_wait_ms=100, poll_interval_ms=10)
        candidate = _candidate(is_load_more=True, candidate_type=CandidateType.INFINITE_SCROLL)

        assert await controller.advance(candidate) is False
        assert len(fake_host.clicks) == 1

    @pytest.mark.asyncio
    async def test_click_only_candidate(self, growing_host):
        controller = TraversalController(growing_host, max_wait_ms=2000, poll_interval_ms=10)

        assert await controller.advance(_candidate()) is True
        assert len(growing_host.clicks) == 1

    @pytest.mark.asyncio
    async def test_click_error_becomes_false(self, fake_host):
        fake_host.click_error = ElementNotClickableError("xpath=(//*)[3]")
        controller = TraversalController(fake_host, max_wait_ms=100, poll_interval_ms=10)

        assert await controller.advance(_candidate()) is False

    @pytest.mark.asyncio
    async def test_navigation_error_becomes_false(self, fake_host):
        fake_host.navigate_error = NavigationError("https://other.example/2")
        controller = TraversalController(fake_host, max_wait_ms=100, poll_interval_ms=10)

        assert await controller.advance(_candidate(url="https://other.example/2")) is False

    @pytest.mark.asyncio
    async def test_advance_cancelled(self, fake_host):
        controller = TraversalController(fake_host, max_wait_ms=5000, poll_interval_ms=20)
        cancel_event = asyncio.Event()
        asyncio.get_running_loop().call_later(0.05, cancel_event.set)

        assert await controller.advance(_candidate(), cancel_event=cancel_event) is False

    @pytest.mark.asyncio
    async def test_no_tasks_left_behind(self, growing_host):
        """advance 返回后不遗留未完成的任务"""
        controller = TraversalController(growing_host, max_wait_ms=2000, poll_interval_ms=10)

        await controller.advance(_candidate())

        pending = [t for t in asyncio.all_tasks() if t is not asyncio.current_task() and not t.done()]
        assert pending == []
