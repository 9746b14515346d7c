from __future__ import annotations

import logging

from config import LOG_LEVEL
from utils.logger import get_logger


def test_get_logger_uses_configured_level() -> None:
    logger = get_logger("tests.logger")

    assert logger.name == "tests.logger"
    assert logging.getLogger().level == getattr(logging, LOG_LEVEL, logging.INFO)
    assert get_logger("tests.logger") is logger
