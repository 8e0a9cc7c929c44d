"""Unit tests for FilterRuleCache."""

import time

from filegate.domain.entities import FilterMode, FilterRule
from filegate.domain.services import ALL_RULES, FilterRuleCache


def _rules(*expressions):
    return [FilterRule(expression=expression) for expression in expressions]


class TestFilterRuleCache:
    """Test suite for FilterRuleCache."""

    def test_cache_initialization(self):
        cache = FilterRuleCache(ttl_seconds=300)
        assert cache.ttl_seconds == 300
        assert cache.size() == 0

    def test_set_and_get(self, rule_cache):
        rule_cache.set(1, ALL_RULES, _rules("*.tmp", "*.log"))

        cached = rule_cache.get(1, ALL_RULES)
        assert [rule.expression for rule in cached] == ["*.tmp", "*.log"]

    def test_cache_miss(self, rule_cache):
        assert rule_cache.get(1, ALL_RULES) is None

    def test_views_are_separate(self, rule_cache):
        rule_cache.set(1, FilterMode.HIDDEN, _rules("*.tmp"))

        assert rule_cache.get(1, FilterMode.INACCESSIBLE) is None
        assert rule_cache.get(1, "hidden") is not None

    def test_returned_list_is_a_copy(self, rule_cache):
        rule_cache.set(1, ALL_RULES, _rules("*.tmp"))

        rule_cache.get(1, ALL_RULES).clear()

        assert len(rule_cache.get(1, ALL_RULES)) == 1

    def test_empty_list_is_cached(self, rule_cache):
        rule_cache.set(1, ALL_RULES, [])
        assert rule_cache.get(1, ALL_RULES) == []

    def test_cache_expiration(self):
        cache = FilterRuleCache(ttl_seconds=1)
        cache.set(1, ALL_RULES, _rules("*.tmp"))

        assert cache.get(1, ALL_RULES) is not None

        time.sleep(1.1)

        assert cache.get(1, ALL_RULES) is None
        assert cache.size() == 0

    def test_zero_ttl_disables_caching(self):
        cache = FilterRuleCache(ttl_seconds=0)
        cache.set(1, ALL_RULES, _rules("*.tmp"))
        assert cache.get(1, ALL_RULES) is None

    def test_invalidate_storage(self, rule_cache):
        rule_cache.set(1, ALL_RULES, _rules("a"))
        rule_cache.set(1, FilterMode.HIDDEN, _rules("a"))
        rule_cache.set(2, ALL_RULES, _rules("b"))

        assert rule_cache.invalidate_storage(1) == 2
        assert rule_cache.get(1, ALL_RULES) is None
        assert rule_cache.get(2, ALL_RULES) is not None

    def test_invalidate_all(self, rule_cache):
        rule_cache.set(1, ALL_RULES, _rules("a"))
        rule_cache.set(2, ALL_RULES, _rules("b"))

        rule_cache.invalidate_all()

        assert rule_cache.size() == 0

    def test_cleanup_expired(self):
        cache = FilterRuleCache(ttl_seconds=1)
        cache.set(1, ALL_RULES, _rules("a"))
        time.sleep(1.1)
        cache.ttl_seconds = 300
        cache.set(2, ALL_RULES, _rules("b"))

        assert cache.cleanup_expired() == 1
        assert cache.size() == 1

    def test_set_with_stale_generation_is_dropped(self, rule_cache):
        generation = rule_cache.generation(1)
        rule_cache.invalidate_storage(1)

        assert rule_cache.set(1, ALL_RULES, _rules("old"), generation) is False
        assert rule_cache.get(1, ALL_RULES) is None

    def test_set_with_current_generation(self, rule_cache):
        generation = rule_cache.generation(1)
        rule_cache.invalidate_storage(2)

        assert rule_cache.set(1, ALL_RULES, _rules("a"), generation) is True
        assert rule_cache.get(1, ALL_RULES) is not None

    def test_invalidate_all_moves_every_generation(self, rule_cache):
        generation = rule_cache.generation(7)

        rule_cache.invalidate_all()

        assert rule_cache.set(7, ALL_RULES, _rules("old"), generation) is False
