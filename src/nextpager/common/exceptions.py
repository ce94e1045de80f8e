"""自定义异常类

定义项目中使用的所有自定义异常，用于更精细的错误处理。

注意：识别阶段（locate / inspect）不抛出异常，未命中返回 None；
翻页阶段（advance）会捕获这里的所有异常并转换为 False。
"""

from __future__ import annotations


class NextPagerError(Exception):
    """NextPager 基础异常类

    所有自定义异常的基类。
    """
    pass


class DocumentError(NextPagerError):
    """文档相关错误的基类"""
    pass


class DocumentParseError(DocumentError):
    """HTML 解析失败"""
    def __init__(self, source: str, reason: str = "无法解析"):
        super().__init__(f"文档解析失败: {source}, 原因: {reason}")
        self.source = source
        self.reason = reason


class BrowserError(NextPagerError):
    """浏览器相关错误的基类"""
    pass


class NavigationError(BrowserError):
    """页面导航失败

    跨域限制、超时或目标地址无效时抛出。
    """
    def __init__(self, url: str, message: str = "页面导航失败"):
        super().__init__(f"{message}: {url}")
        self.url = url


class ElementNotFoundError(BrowserError):
    """元素未找到错误

    快照中的元素在实时页面中已不存在（页面已变化）时抛出。
    """
    def __init__(self, selector: str, message: str = "元素未找到"):
        super().__init__(f"{message}: {selector}")
        self.selector = selector


class ElementNotClickableError(BrowserError):
    """元素不可点击错误"""
    def __init__(self, selector: str, reason: str = "元素被遮挡或不可见"):
        super().__init__(f"元素不可点击: {selector}, 原因: {reason}")
        self.selector = selector
        self.reason = reason


class BrowserLaunchError(BrowserError):
    """浏览器启动失败

    Chromium 未安装或启动参数无效时抛出。
    """
    def __init__(self, reason: str):
        super().__init__(f"浏览器启动失败: {reason}")
        self.reason = reason


class SnapshotError(BrowserError):
    """页面快照失败"""
    pass


class ValidationError(NextPagerError):
    """验证失败错误"""
    pass


class URLValidationError(ValidationError):
    """URL 验证失败"""
    def __init__(self, url: str, reason: str = "格式无效"):
        super().__init__(f"URL 验证失败: {url}, 原因: {reason}")
        self.url = url
        self.reason = reason


class ConfigError(NextPagerError):
    """配置相关错误"""
    pass


class ConfigFileNotFoundError(ConfigError):
    """配置文件未找到"""
    def __init__(self, path: str):
        super().__init__(f"配置文件未找到: {path}")
        self.path = path


class PatternConfigError(ConfigError):
    """匹配规则配置无效（YAML 结构错误或正则无法编译）"""
    def __init__(self, path: str, reason: str):
        super().__init__(f"匹配规则配置无效: {path}, 原因: {reason}")
        self.path = path
        self.reason = reason
