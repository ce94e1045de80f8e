"""核心数据类型定义"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# 元素几何与样式
# ============================================================================


class BoundingBox(BaseModel):
    """元素边界框（视口坐标）"""

    x: float = 0.0
    y: float = 0.0
    width: float
    height: float

    @property
    def is_empty(self) -> bool:
        """宽高同时为 0 视为折叠元素"""
        return self.width == 0 and self.height == 0


class ComputedStyle(BaseModel):
    """校验器关心的计算样式"""

    display: str = "inline"
    visibility: str = "visible"
    opacity: str = "1"


# ============================================================================
# 识别结果
# ============================================================================


class CandidateType(str, Enum):
    """下一页候选的识别策略"""

    REL_ATTRIBUTE = "rel-attribute"
    TEXT_CONTENT = "text-content"
    CLASS_ID = "class-id"
    ARIA_LABEL = "aria-label"
    NUMBERED_PAGINATION = "numbered-pagination"
    INFINITE_SCROLL = "infinite-scroll"


class NextPageCandidate(BaseModel):
    """一次识别得到的下一页候选

    element 是对文档的非持有引用，页面导航后不再有效。
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    element: Any = Field(default=None, exclude=True, description="文档中的元素引用")
    url: str | None = Field(default=None, description="解析出的目标地址")
    type: CandidateType = Field(..., description="识别策略")
    confidence: float = Field(..., gt=0, le=1, description="策略置信度（仅供参考）")
    click_only: bool = Field(default=False, description="无法解析 URL，只能点击")
    is_load_more: bool = Field(default=False, description="加载更多（AJAX 追加内容）")
    text: str = Field(default="", description="元素文本（用于展示）")


class PaginationState(BaseModel):
    """分页状态摘要（每次调用重新计算）"""

    current_page: int = Field(default=1, description="当前页码")
    total_pages: int | None = Field(default=None, description="总页数（可能无法获取）")
    has_next: bool = Field(default=False, description="是否存在下一页")
    has_previous: bool = Field(default=False, description="是否存在上一页")
