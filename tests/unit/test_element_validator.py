"""元素校验与提取单元测试"""

import pytest

from nextpager.locator.extractors import extract_text, extract_url
from nextpager.locator.validator import is_valid_element


class TestIsValidElement:
    """可用性校验测试"""

    def test_none_is_invalid(self):
        assert is_valid_element(None) is False

    def test_plain_link_is_valid(self, make_document):
        link = make_document('<a href="/2">2</a>').first("//a")
        assert is_valid_element(link) is True

    @pytest.mark.parametrize(
        "markup",
        [
            '<a href="/2" style="display: none">2</a>',
            '<a href="/2" style="visibility:hidden">2</a>',
            '<a href="/2" style="opacity:0">2</a>',
            '<a href="/2" style="width:0;height:0px">2</a>',
            '<a href="/2" hidden>2</a>',
            '<a href="/2" disabled="true">2</a>',
            '<button disabled>2</button>',
        ],
    )
    def test_rejected(self, make_document, markup):
        element = make_document(markup).first("//body/*")
        assert is_valid_element(element) is False

    def test_hidden_ancestor_visibility_is_inherited(self, make_document):
        element = make_document('<div style="visibility:hidden"><a href="/2">2</a></div>').first("//a")
        assert is_valid_element(element) is False

    def test_display_none_ancestor_collapses_box(self, make_document):
        element = make_document('<div style="display:none"><a href="/2">2</a></div>').first("//a")
        assert is_valid_element(element) is False

    def test_disabled_attribute_on_link_is_ignored(self, make_document):
        """a 标签没有 disabled 属性语义，只有 disabled="true" 才会被拒绝"""
        element = make_document('<a href="/2" disabled>2</a>').first("//a")
        assert is_valid_element(element) is True

    def test_only_one_zero_dimension(self, make_document):
        element = make_document('<a href="/2" style="width:0">2</a>').first("//a")
        assert is_valid_element(element) is True


class TestExtractText:
    """文本提取测试"""

    def test_concatenates_attributes(self, make_document):
        element = make_document('<a href="/2" title="Next">  <b>go</b> </a>').first("//a")
        assert extract_text(element) == "go  Next"

    def test_value_attribute(self, make_document):
        element = make_document('<input type="button" value="Siguiente">').first("//input")
        assert extract_text(element) == "Siguiente"

    def test_none(self):
        assert extract_text(None) == ""


class TestExtractUrl:
    """URL 提取测试"""

    def test_href_resolved_against_document(self, make_document):
        element = make_document('<a href="?page=2">2</a>', url="https://example.com/list?page=1").first("//a")
        assert extract_url(element) == "https://example.com/list?page=2"

    def test_base_href_is_respected(self, make_document):
        document = make_document('<a href="p/2">2</a>', head='<base href="https://cdn.example.org/root/">')
        assert extract_url(document.first("//a"), document.base_url) == "https://cdn.example.org/root/p/2"

    @pytest.mark.parametrize("attr", ["data-href", "data-url", "data-link"])
    def test_data_attributes(self, make_document, attr):
        document = make_document(f'<button {attr}="/p/2">Next</button>')
        assert extract_url(document.first("//button"), document.base_url) == "https://example.com/p/2"

    def test_window_location_in_onclick(self, make_document):
        document = make_document("""<span onclick='window.location = "https://x.test/3"'>3</span>""")
        assert extract_url(document.first("//span"), document.base_url) == "https://x.test/3"

    @pytest.mark.parametrize("href", ["javascript:void(0)", "#", "JavaScript:next()", "", "  "])
    def test_non_navigable_href(self, make_document, href):
        document = make_document(f'<a href="{href}">Next</a>')
        assert extract_url(document.first("//a"), document.base_url) is None

    def test_hash_route_is_navigable(self, make_document):
        document = make_document('<a href="#/page/2">Next</a>')
        assert extract_url(document.first("//a"), document.base_url) == "https://example.com/list#/page/2"

    def test_nothing_resolves(self, make_document):
        document = make_document("<button>Next</button>")
        assert extract_url(document.first("//button"), document.base_url) is None

    def test_empty_href_falls_back_to_onclick(self, make_document):
        """href 为空时继续检查 onclick"""
        document = make_document("""<a href="" onclick="location.href='/p/3'">Next</a>""")
        assert extract_url(document.first("//a"), document.base_url) == "https://example.com/p/3"
