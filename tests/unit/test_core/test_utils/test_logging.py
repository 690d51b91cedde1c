"""
Unit tests for logging utilities.
"""
# 说明：日志配置与隐私脱敏过滤相关的单元测试。
# 覆盖：
# - configure_logging(...)：根据给定日志级别初始化 logging 系统
# - get_logger(...)：获取带 PrivacyFilter 的 logger 实例
# - 验证 partial_sum 等未加噪中间值在日志输出中被掩码，关闭掩码后保留原值

import logging

from dpagg.core.utils import configure, configure_logging, get_logger


def test_configure_logging_sets_privacy_filter(caplog) -> None:
    # 验证日志配置后，partial_sum 会被 PrivacyFilter 掩码
    configure_logging(level="INFO")
    logger = get_logger("dpagg.test")
    with caplog.at_level(logging.INFO):
        logger.info("message %s", "shown", extra={"partial_sum": 123.5})
    assert "message shown" in caplog.text
    assert caplog.records[-1].partial_sum == "***"


def test_masking_can_be_disabled(caplog) -> None:
    configure(mask_sensitive_fields=False)
    logger = get_logger("dpagg.test.unmasked")
    with caplog.at_level(logging.INFO):
        logger.info("message", extra={"raw_value": 4.0})
    assert caplog.records[-1].raw_value == 4.0


def test_get_logger_attaches_single_filter() -> None:
    logger = get_logger("dpagg.test.filters")
    get_logger("dpagg.test.filters")
    assert len(logger.filters) == 1
