"""基于 lxml 的文档实现

两种来源共用同一实现：

1. 静态 HTML：计算样式由内联 style、hidden 属性和不可渲染标签近似推断；
2. 浏览器快照：PlaywrightPageHost 在克隆 DOM 上写入 ``data-nextpager-*`` 标注
   （计算样式、几何、disabled、元素序号），这里优先读取标注值。
"""

from __future__ import annotations

import re
from urllib.parse import urljoin

from lxml import etree
from lxml import html as lxml_html

from ..common.constants import SNAPSHOT_ATTR_PREFIX
from ..common.exceptions import DocumentParseError
from ..common.types import BoundingBox, ComputedStyle

# 浏览器中默认 display:none 的标签
NON_RENDERED_TAGS = frozenset(
    {"head", "title", "meta", "link", "script", "style", "template", "base"}
)

# 拥有 disabled 属性语义的表单控件
FORM_CONTROL_TAGS = frozenset(
    {"button", "input", "select", "textarea", "option", "optgroup", "fieldset"}
)

# 拥有原生 href 属性的标签
HREF_TAGS = frozenset({"a", "area", "link"})

# 静态推断时未声明尺寸的元素使用的名义尺寸
NOMINAL_SIZE = 1.0

_PX_RE = re.compile(r"^(-?\d+(?:\.\d+)?)(?:px)?$")


def _inline_style(node: etree._Element) -> dict[str, str]:
    """解析内联 style 为 {属性: 值}"""
    declarations: dict[str, str] = {}
    for chunk in (node.get("style") or "").split(";"):
        if ":" not in chunk:
            continue
        name, _, value = chunk.partition(":")
        value = value.replace("!important", "").strip().lower()
        declarations[name.strip().lower()] = value
    return declarations


def _parse_px(value: str | None) -> float | None:
    if value is None:
        return None
    match = _PX_RE.match(value.strip())
    return float(match.group(1)) if match else None


def _parse_float(value: str | None, default: float) -> float:
    try:
        return float(value) if value is not None else default
    except ValueError:
        return default


def _static_display(node: etree._Element) -> str:
    if not isinstance(node.tag, str):
        return "none"
    if node.tag.lower() in NON_RENDERED_TAGS or node.get("hidden") is not None:
        return "none"
    return _inline_style(node).get("display", "inline")


def _static_visibility(node: etree._Element) -> str:
    # visibility 可继承：取最近一层显式声明
    current = node
    while current is not None:
        visibility = _inline_style(current).get("visibility")
        if visibility:
            return visibility
        current = current.getparent()
    return "visible"


class HtmlElement:
    """lxml 节点的 DomElement 实现"""

    __slots__ = ("_node", "_document")

    def __init__(self, node: etree._Element, document: "HtmlDocument"):
        self._node = node
        self._document = document

    def __eq__(self, other: object) -> bool:
        return isinstance(other, HtmlElement) and other._node is self._node

    def __hash__(self) -> int:
        return id(self._node)

    def __repr__(self) -> str:
        text = " ".join(self.text_content().split())[:40]
        return f"<HtmlElement {self.tag} {text!r}>"

    @property
    def node(self) -> etree._Element:
        return self._node

    @property
    def tag(self) -> str:
        return str(self._node.tag).lower()

    @property
    def href(self) -> str | None:
        if self.tag not in HREF_TAGS:
            return None
        raw = self._node.get("href")
        if raw is None:
            return None
        raw = raw.strip()
        base = self._document.base_url
        resolved = urljoin(base, raw) if base else raw
        return resolved or None

    @property
    def disabled(self) -> bool:
        annotated = self._annotation("disabled")
        if annotated is not None:
            return annotated == "true"
        return self.tag in FORM_CONTROL_TAGS and self._node.get("disabled") is not None

    def get_attribute(self, name: str) -> str | None:
        return self._node.get(name)

    def has_attribute(self, name: str) -> bool:
        return name in self._node.attrib

    def text_content(self) -> str:
        return self._node.text_content()

    def class_list(self) -> list[str]:
        return (self._node.get("class") or "").split()

    def computed_style(self) -> ComputedStyle:
        if self._annotation("display") is not None:
            return ComputedStyle(
                display=self._annotation("display") or "inline",
                visibility=self._annotation("visibility") or "visible",
                opacity=self._annotation("opacity") or "1",
            )
        return ComputedStyle(
            display=_static_display(self._node),
            visibility=_static_visibility(self._node),
            opacity=_inline_style(self._node).get("opacity", "1"),
        )

    def bounding_box(self) -> BoundingBox:
        if self._annotation("width") is not None:
            return BoundingBox(
                x=_parse_float(self._annotation("x"), 0.0),
                y=_parse_float(self._annotation("y"), 0.0),
                width=_parse_float(self._annotation("width"), 0.0),
                height=_parse_float(self._annotation("height"), 0.0),
            )

        # 自身或祖先 display:none 时不参与布局
        current = self._node
        while current is not None:
            if _static_display(current) == "none":
                return BoundingBox(width=0, height=0)
            current = current.getparent()

        style = _inline_style(self._node)
        width = _parse_px(style.get("width"))
        height = _parse_px(style.get("height"))
        return BoundingBox(
            width=NOMINAL_SIZE if width is None else width,
            height=NOMINAL_SIZE if height is None else height,
        )

    def xpath(self, expression: str) -> list["HtmlElement"]:
        return self._document._wrap(self._node.xpath(expression))

    def _annotation(self, name: str) -> str | None:
        return self._node.get(SNAPSHOT_ATTR_PREFIX + name)


class HtmlDocument:
    """lxml 文档的 Document 实现"""

    def __init__(self, root: etree._Element, url: str = ""):
        self._root = root
        self._url = url
        base = root.xpath("//base[@href]")
        self._base_url = urljoin(url, base[0].get("href").strip()) if base else url

    @classmethod
    def from_html(cls, html: str, url: str = "") -> "HtmlDocument":
        """从 HTML 文本构建文档

        Raises:
            DocumentParseError: 内容为空或无法解析
        """
        if not html or not html.strip():
            raise DocumentParseError(url or "<string>", "内容为空")
        try:
            root = lxml_html.document_fromstring(html)
        except (etree.ParserError, ValueError) as e:
            raise DocumentParseError(url or "<string>", str(e)) from e
        return cls(root, url=url)

    @property
    def url(self) -> str:
        return self._url

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def root(self) -> etree._Element:
        return self._root

    def xpath(self, expression: str) -> list[HtmlElement]:
        return self._wrap(self._root.xpath(expression))

    def first(self, expression: str) -> HtmlElement | None:
        found = self.xpath(expression)
        return found[0] if found else None

    def get_element_by_id(self, element_id: str) -> HtmlElement | None:
        found = self._wrap(self._root.xpath("//*[@id=$element_id]", element_id=element_id))
        return found[0] if found else None

    def _wrap(self, nodes) -> list[HtmlElement]:
        if not isinstance(nodes, list):
            return []
        return [
            HtmlElement(node, self)
            for node in nodes
            if isinstance(node, etree._Element) and isinstance(node.tag, str)
        ]
