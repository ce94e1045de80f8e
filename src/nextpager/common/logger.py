"""统一日志系统

所有模块通过 ``get_logger`` 获取日志器，控制台输出统一交给 Rich。
级别取 ``NEXTPAGER_LOG_LEVEL``，未设置时取 ``LOG_LEVEL``，默认 INFO。

CLI 的 ``--log-file`` 通过 ``setup_file_logging`` 把同一份文件处理器挂到
所有已创建（以及之后创建）的 nextpager 日志器上。
"""

from __future__ import annotations

import logging
import os

from rich.console import Console
from rich.logging import RichHandler


# 全局控制台实例
console = Console()

LOG_LEVEL_MAP = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

FILE_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s"

# 经 get_logger 配置过的日志器名称
_configured: set[str] = set()

# 当前生效的文件处理器（新建的日志器也会挂上）
_file_handlers: list[logging.Handler] = []


def get_log_level() -> int:
    """从环境变量获取日志级别，无法识别时回落到 INFO"""
    level_str = os.getenv("NEXTPAGER_LOG_LEVEL") or os.getenv("LOG_LEVEL", "INFO")
    return LOG_LEVEL_MAP.get(level_str.strip().upper(), logging.INFO)


def _rich_handler(level: int) -> RichHandler:
    handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        rich_tracebacks=True,
        tracebacks_show_locals=os.getenv("LOG_SHOW_LOCALS", "false").lower() == "true",
        markup=True,
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    return handler


def get_logger(name: str) -> logging.Logger:
    """获取统一配置的日志器

    Args:
        name: 日志器名称，通常使用 __name__

    Example:
        >>> from nextpager.common.logger import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("开始识别下一页")
    """
    logger = logging.getLogger(name)
    if name in _configured:
        return logger

    level = get_log_level()
    logger.setLevel(level)
    logger.addHandler(_rich_handler(level))
    for handler in _file_handlers:
        logger.addHandler(handler)

    # 各模块日志器互相独立，不向 root 传播
    logger.propagate = False
    _configured.add(name)
    return logger


def setup_file_logging(log_file: str, level: int = logging.DEBUG) -> logging.Handler:
    """把日志同时写入文件

    文件处理器挂到所有 nextpager 日志器上。文件级别可以低于控制台级别，
    但受日志器自身级别限制。

    Returns:
        新建的文件处理器（传给 remove_file_logging 以卸载）
    """
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    _file_handlers.append(handler)
    for name in _configured:
        logging.getLogger(name).addHandler(handler)
    return handler


def remove_file_logging(handler: logging.Handler) -> None:
    """卸载并关闭 setup_file_logging 创建的处理器"""
    if handler in _file_handlers:
        _file_handlers.remove(handler)
    for name in _configured:
        logging.getLogger(name).removeHandler(handler)
    handler.close()


def get_locator_logger() -> logging.Logger:
    """获取定位模块日志器"""
    return get_logger("nextpager.locator")


def get_traversal_logger() -> logging.Logger:
    """获取翻页执行模块日志器"""
    return get_logger("nextpager.traversal")
