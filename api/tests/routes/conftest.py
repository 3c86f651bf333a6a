"""Route test configuration: rate limiting off for every route test."""

from unittest.mock import patch

import pytest


@pytest.fixture(autouse=True)
def _disable_rate_limiter():
    """slowapi otherwise counts requests across tests sharing one client address."""
    with patch("core.ratelimit.limiter.enabled", False):
        yield
