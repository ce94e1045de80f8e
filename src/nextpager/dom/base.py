"""文档能力接口

识别逻辑只依赖这里定义的抽象接口：

- ``Document`` / ``DomElement``：同步、只读的查询接口（XPath 查询、属性、文本、样式、几何）。
- ``PageHost``：异步的交互接口（点击、导航、测量 body 高度、获取快照）。

测试中使用 ``HtmlDocument`` 和假的 ``PageHost`` 即可完整覆盖定位与翻页流程，
不需要真实浏览器。
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..common.types import BoundingBox, ComputedStyle


@runtime_checkable
class DomElement(Protocol):
    """文档中的一个元素"""

    @property
    def tag(self) -> str: ...

    @property
    def href(self) -> str | None:
        """原生 href 属性（a/area/link），已按文档地址解析为绝对地址"""
        ...

    @property
    def disabled(self) -> bool:
        """表单控件的 disabled 属性"""
        ...

    def get_attribute(self, name: str) -> str | None: ...

    def has_attribute(self, name: str) -> bool: ...

    def text_content(self) -> str: ...

    def class_list(self) -> list[str]: ...

    def computed_style(self) -> "ComputedStyle": ...

    def bounding_box(self) -> "BoundingBox": ...

    def xpath(self, expression: str) -> list["DomElement"]:
        """以当前元素为上下文执行 XPath"""
        ...


@runtime_checkable
class Document(Protocol):
    """可查询的文档"""

    @property
    def url(self) -> str:
        """当前页面地址（location.href）"""
        ...

    @property
    def base_url(self) -> str:
        """解析相对地址使用的基准地址（考虑 <base href>）"""
        ...

    def xpath(self, expression: str) -> list[DomElement]: ...

    def first(self, expression: str) -> DomElement | None: ...

    def get_element_by_id(self, element_id: str) -> DomElement | None: ...


@runtime_checkable
class PageHost(Protocol):
    """宿主页面的交互能力"""

    @property
    def location(self) -> str: ...

    async def snapshot(self) -> Document:
        """获取当前页面的只读文档"""
        ...

    async def click(self, element: DomElement) -> None: ...

    async def navigate(self, url: str) -> None: ...

    async def body_scroll_height(self) -> int: ...
