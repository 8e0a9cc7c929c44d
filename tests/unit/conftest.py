"""Pytest configuration for unit tests."""

import pytest

from filegate.core.events import StorageSourceEventChannel
from filegate.domain.services import FilterRuleCache


@pytest.fixture
def event_channel() -> StorageSourceEventChannel:
    """Fresh event channel, independent of the process-wide one."""
    return StorageSourceEventChannel()


@pytest.fixture
def rule_cache() -> FilterRuleCache:
    return FilterRuleCache(ttl_seconds=300)
