"""翻页执行模块"""

from .controller import TraversalController

__all__ = ["TraversalController"]
