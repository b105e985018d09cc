"""Root test configuration: quiet, per-test structlog setup"""

import pytest

from mdedit.core.utils.logging import configure_logging


@pytest.fixture(autouse=True)
def quiet_logging():
    """Route structlog to the current test's stderr at WARNING level."""
    configure_logging("WARNING")
    yield
