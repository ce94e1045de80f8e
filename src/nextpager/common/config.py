"""配置管理"""

from __future__ import annotations

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .constants import (
    DEFAULT_CLICK_TIMEOUT_MS,
    DEFAULT_MAX_WAIT_MS,
    DEFAULT_PAGE_TIMEOUT_MS,
    DEFAULT_POLL_INTERVAL_MS,
    DEFAULT_WAIT_UNTIL,
)

# 加载 .env 文件
load_dotenv()


class PaginationConfig(BaseModel):
    """翻页配置"""

    # 点击后等待新内容出现的最长时间（毫秒）
    max_wait_ms: int = Field(
        default_factory=lambda: int(os.getenv("NEXTPAGER_MAX_WAIT_MS", str(DEFAULT_MAX_WAIT_MS)))
    )
    # 轮询 body 高度的间隔（毫秒）
    poll_interval_ms: int = Field(
        default_factory=lambda: int(
            os.getenv("NEXTPAGER_POLL_INTERVAL_MS", str(DEFAULT_POLL_INTERVAL_MS))
        )
    )
    # 自定义多语言匹配规则文件（为空则使用内置 patterns.yaml）
    patterns_file: str | None = Field(
        default_factory=lambda: os.getenv("NEXTPAGER_PATTERNS_FILE") or None
    )


class BrowserConfig(BaseModel):
    """浏览器配置"""

    headless: bool = Field(default_factory=lambda: os.getenv("HEADLESS", "true").lower() == "true")
    viewport_width: int = Field(default_factory=lambda: int(os.getenv("VIEWPORT_WIDTH", "1280")))
    viewport_height: int = Field(default_factory=lambda: int(os.getenv("VIEWPORT_HEIGHT", "720")))
    timeout_ms: int = Field(
        default_factory=lambda: int(os.getenv("STEP_TIMEOUT_MS", str(DEFAULT_PAGE_TIMEOUT_MS)))
    )
    click_timeout_ms: int = Field(
        default_factory=lambda: int(os.getenv("CLICK_TIMEOUT_MS", str(DEFAULT_CLICK_TIMEOUT_MS)))
    )
    # page.goto 的 wait_until 参数
    wait_until: str = Field(default_factory=lambda: os.getenv("WAIT_UNTIL", DEFAULT_WAIT_UNTIL))


class Config(BaseModel):
    """全局配置"""

    pagination: PaginationConfig = Field(default_factory=PaginationConfig)
    browser: BrowserConfig = Field(default_factory=BrowserConfig)

    @classmethod
    def load(cls) -> "Config":
        """加载配置"""
        return cls()


# 全局配置实例
config = Config.load()
