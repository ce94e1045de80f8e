"""候选元素可用性校验"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..dom.base import DomElement


def _is_zero_opacity(opacity: str) -> bool:
    try:
        return float(opacity) == 0
    except ValueError:
        return False


def is_valid_element(element: "DomElement | None") -> bool:
    """判断元素能否作为下一页控件

    只做样式层面的检查：display/visibility/opacity、尺寸、disabled。
    不检查元素是否真正位于视口内或被遮挡。
    """
    if element is None:
        return False

    style = element.computed_style()
    if style.display == "none" or style.visibility == "hidden" or _is_zero_opacity(style.opacity):
        return False

    # 宽高同时为 0（折叠元素）
    if element.bounding_box().is_empty:
        return False

    if element.disabled or element.get_attribute("disabled") == "true":
        return False

    return True
