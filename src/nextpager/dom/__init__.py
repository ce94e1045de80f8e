"""文档与宿主页面能力"""

from .base import Document, DomElement, PageHost
from .html_document import HtmlDocument, HtmlElement

__all__ = [
    "Document",
    "DomElement",
    "PageHost",
    "HtmlDocument",
    "HtmlElement",
]
