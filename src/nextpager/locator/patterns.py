"""多语言匹配规则

规则以 YAML 数据形式维护（默认使用包内的 patterns.yaml），
加载后经 pydantic 校验并预编译为正则。
"""

from __future__ import annotations

import re
from functools import cached_property, lru_cache
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError as PydanticValidationError

from ..common.exceptions import ConfigFileNotFoundError, PatternConfigError

DEFAULT_PATTERNS_FILE = Path(__file__).with_name("patterns.yaml")


def _compile_all(patterns: list[str]) -> tuple[re.Pattern[str], ...]:
    return tuple(re.compile(p, re.IGNORECASE) for p in patterns)


class PatternSet(BaseModel):
    """一组下一页识别规则"""

    rel_values: list[str] = Field(..., min_length=1, description="rel 属性取值（按顺序）")
    text_patterns: list[str] = Field(..., min_length=1, description="文本正则")
    class_id_patterns: list[str] = Field(..., min_length=1, description="class/id 正则")
    aria_patterns: list[str] = Field(..., min_length=1, description="aria-label 正则")
    numbered_next_pattern: str = Field(..., description="数字分页中的下一页符号正则")
    load_more_phrases: list[str] = Field(..., min_length=1, description="加载更多短语")

    @cached_property
    def text_regexes(self) -> tuple[re.Pattern[str], ...]:
        return _compile_all(self.text_patterns)

    @cached_property
    def class_id_regexes(self) -> tuple[re.Pattern[str], ...]:
        return _compile_all(self.class_id_patterns)

    @cached_property
    def aria_regexes(self) -> tuple[re.Pattern[str], ...]:
        return _compile_all(self.aria_patterns)

    @cached_property
    def numbered_next_regex(self) -> re.Pattern[str]:
        return re.compile(self.numbered_next_pattern, re.IGNORECASE)

    @cached_property
    def load_more_lowered(self) -> tuple[str, ...]:
        return tuple(phrase.lower() for phrase in self.load_more_phrases)

    def compile(self) -> "PatternSet":
        """预编译全部正则，规则无效时尽早失败"""
        _ = (
            self.text_regexes,
            self.class_id_regexes,
            self.aria_regexes,
            self.numbered_next_regex,
        )
        return self


@lru_cache(maxsize=16)
def load_patterns(file_path: str | None = None) -> PatternSet:
    """加载并缓存规则文件

    Args:
        file_path: YAML 文件路径，为 None 时使用内置规则

    Raises:
        ConfigFileNotFoundError: 文件不存在
        PatternConfigError: YAML 结构无效或正则无法编译
    """
    path = Path(file_path) if file_path else DEFAULT_PATTERNS_FILE
    if not path.is_file():
        raise ConfigFileNotFoundError(str(path))

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise PatternConfigError(str(path), f"YAML 解析失败: {e}") from e

    if not isinstance(data, dict):
        raise PatternConfigError(str(path), "顶层必须是映射")

    try:
        return PatternSet.model_validate(data).compile()
    except PydanticValidationError as e:
        raise PatternConfigError(str(path), str(e)) from e
    except re.error as e:
        raise PatternConfigError(str(path), f"正则无法编译: {e}") from e


def clear_patterns_cache() -> None:
    """清除规则文件缓存"""
    load_patterns.cache_clear()
