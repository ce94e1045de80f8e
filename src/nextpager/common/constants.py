"""常量定义"""

from __future__ import annotations

# ============================================================================
# 策略置信度（仅供参考，不参与跨策略比较）
# ============================================================================

REL_ATTRIBUTE_CONFIDENCE = 1.0
NUMBERED_PAGINATION_CONFIDENCE = 0.95
TEXT_CONTENT_CONFIDENCE = 0.9
ARIA_LABEL_CONFIDENCE = 0.85
CLASS_ID_CONFIDENCE = 0.8
INFINITE_SCROLL_CONFIDENCE = 0.7

# ============================================================================
# 内容加载等待
# ============================================================================

# 等待新内容出现的最长时间（毫秒）
DEFAULT_MAX_WAIT_MS = 5000
# 轮询 body 高度的间隔（毫秒）
DEFAULT_POLL_INTERVAL_MS = 100

# ============================================================================
# 浏览器
# ============================================================================

DEFAULT_PAGE_TIMEOUT_MS = 30000
DEFAULT_CLICK_TIMEOUT_MS = 5000
DEFAULT_WAIT_UNTIL = "domcontentloaded"

# ============================================================================
# 快照标注属性（写在克隆 DOM 上，不修改实时页面）
# ============================================================================

SNAPSHOT_ATTR_PREFIX = "data-nextpager-"
SNAPSHOT_INDEX_ATTR = SNAPSHOT_ATTR_PREFIX + "index"

# ============================================================================
# 输入验证
# ============================================================================

MAX_URL_LENGTH = 2048
VALID_URL_SCHEMES = ("http", "https")
