"""Unit tests for core/utils/logging.py"""

import pytest
from structlog.testing import capture_logs

from mdedit.core.utils.logging import configure_logging, get_logger


@pytest.mark.parametrize("level,expected", [
    ("ERROR", ["failed"]),
    ("warning", ["clamped", "failed"]),
    ("DEBUG", ["applied", "saved", "clamped", "failed"]),
    ("LOUD", ["clamped", "failed"]),      # unknown names fall back to WARNING
])
def test_configure_logging_filters_by_level(level, expected):
    configure_logging(level)
    logger = get_logger("mdedit.test")
    with capture_logs() as logs:
        logger.debug("applied")
        logger.info("saved")
        logger.warning("clamped")
        logger.error("failed")
    assert [entry["event"] for entry in logs] == expected
