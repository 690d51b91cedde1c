"""
Lightweight logging helpers with privacy-aware defaults.
"""
# 说明：轻量级日志工具，提供隐私友好的默认配置与统一的 logger 获取入口。
# 职责：
# - PrivacyFilter：对日志记录中携带的未加噪中间值（partial_sum 等）进行脱敏
# - configure_logging(...)：初始化 logging 基本配置并为根 logger 挂载隐私过滤器
# - get_logger(...)：按名称获取 logger，必要时自动完成日志系统初始化
# 约定：
# - 日志级别优先级：显式参数 level > 环境变量 DPAGG_LOG_LEVEL > 运行时配置的 log_level

from __future__ import annotations

import logging
import os
from typing import Optional

from .config import get_config

SENSITIVE_RECORD_FIELDS = ("partial_sum", "raw_value", "payload")


class PrivacyFilter(logging.Filter):
    """Mask unnoised aggregates attached to log records via ``extra``."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not get_config().mask_sensitive_fields:
            return True
        for attr in SENSITIVE_RECORD_FIELDS:
            if hasattr(record, attr):
                setattr(record, attr, "***")
        return True


def configure_logging(level: Optional[str] = None) -> None:
    log_level = level or os.environ.get("DPAGG_LOG_LEVEL", get_config().log_level)
    logging.basicConfig(
        level=log_level,
        format="[%(levelname)s] %(name)s %(asctime)s | %(message)s",
    )
    root = logging.getLogger()
    # basicConfig 可能被多次调用，避免重复挂载过滤器
    if not any(isinstance(f, PrivacyFilter) for f in root.filters):
        root.addFilter(PrivacyFilter())


def get_logger(name: str) -> logging.Logger:
    # 获取指定名称的 logger；尚无 handler 时懒加载初始化日志系统，并在 logger 自身挂载过滤器
    logger = logging.getLogger(name)
    if not logger.handlers:
        configure_logging()
    if not any(isinstance(f, PrivacyFilter) for f in logger.filters):
        logger.addFilter(PrivacyFilter())
    return logger
