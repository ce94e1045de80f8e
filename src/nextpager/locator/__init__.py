"""下一页定位模块"""

from .extractors import extract_text, extract_url
from .locator import PaginationLocator
from .patterns import PatternSet, load_patterns
from .state import PaginationStateInspector
from .strategies import DEFAULT_STRATEGIES, MatchStrategy
from .validator import is_valid_element

__all__ = [
    "PaginationLocator",
    "PaginationStateInspector",
    "PatternSet",
    "load_patterns",
    "MatchStrategy",
    "DEFAULT_STRATEGIES",
    "extract_text",
    "extract_url",
    "is_valid_element",
]
