"""
Unit tests for the analysis and scenario caches.

Tests cover:
- TTLCache store/retrieve, hit/miss metrics
- Lazy TTL expiry with physical removal
- FIFO eviction by insertion order
- Near-duplicate lookup over stored token sets
- Scenario cache key derivation
"""

from journal_insight.analysis_cache import AnalysisCache, ScenarioCache, TTLCache


class TestTTLCache:
    """Tests for the generic TTLCache."""

    def test_store_and_retrieve(self, clock):
        """A stored value is returned by key."""
        cache = TTLCache(ttl_seconds=60, clock=clock)

        cache.set("key1", "value1")

        assert cache.get("key1") == "value1"

    def test_miss_returns_none(self, clock):
        """Unknown keys miss."""
        cache = TTLCache(ttl_seconds=60, clock=clock)

        assert cache.get("nonexistent_key") is None

    def test_hit_tracking(self, clock):
        """Hits and misses are counted for the hit rate."""
        cache = TTLCache(ttl_seconds=60, clock=clock)

        cache.get("key1")
        cache.set("key1", "value1")
        cache.get("key1")
        cache.get("key1")

        stats = cache.get_stats()
        assert stats["hits"] == 2
        assert stats["misses"] == 1
        assert stats["hit_rate"] == 2 / 3

    def test_expired_entry_is_removed(self, clock):
        """An entry read at its TTL is removed and counted as expired."""
        cache = TTLCache(ttl_seconds=60, clock=clock)
        cache.set("key1", "value1")

        clock.advance(59)
        assert cache.get("key1") == "value1"

        clock.advance(1)
        assert cache.get("key1") is None
        assert len(cache) == 0
        assert cache.get("key1") is None
        assert cache.get_stats()["expirations"] == 1

    def test_contains_is_freshness_aware(self, clock):
        """Membership ignores expired entries."""
        cache = TTLCache(ttl_seconds=10, clock=clock)
        cache.set("key1", "value1")

        assert "key1" in cache
        clock.advance(10)
        assert "key1" not in cache

    def test_fifo_eviction_removes_first_inserted(self, clock):
        """At capacity the oldest insertion is evicted."""
        cache = TTLCache(ttl_seconds=60, max_entries=3, clock=clock)

        for i in range(4):
            cache.set(f"key{i}", i)

        assert cache.get("key0") is None
        assert [cache.get(f"key{i}") for i in range(1, 4)] == [1, 2, 3]
        assert cache.get_stats()["evictions"] == 1

    def test_reads_do_not_protect_from_eviction(self, clock):
        """Eviction is FIFO, not LRU."""
        cache = TTLCache(ttl_seconds=60, max_entries=2, clock=clock)
        cache.set("a", 1)
        cache.set("b", 2)

        cache.get("a")
        cache.set("c", 3)

        assert cache.get("a") is None
        assert cache.get("b") == 2

    def test_overwrite_replaces_value_and_timestamp(self, clock):
        """Overwriting refreshes both position and timestamp."""
        cache = TTLCache(ttl_seconds=60, max_entries=2, clock=clock)
        cache.set("a", 1)
        clock.advance(30)
        cache.set("b", 2)
        cache.set("a", 10)

        # "a" moved to the back of the queue, so "b" is now oldest
        cache.set("c", 3)
        assert cache.get("b") is None
        assert cache.get("a") == 10

        clock.advance(45)
        assert cache.get("a") == 10

    def test_unbounded(self, clock):
        """No max_entries means no eviction."""
        cache = TTLCache(ttl_seconds=60, max_entries=None, clock=clock)

        for i in range(500):
            cache.set(f"key{i}", i)

        assert len(cache) == 500

    def test_evict_and_clear(self, clock):
        """Explicit eviction reports whether the key existed."""
        cache = TTLCache(ttl_seconds=60, clock=clock)
        cache.set("a", 1)
        cache.set("b", 2)

        assert cache.evict("a") is True
        assert cache.evict("a") is False
        cache.clear()
        assert len(cache) == 0


class TestAnalysisCache:
    """Tests for AnalysisCache."""

    def test_defaults(self):
        """Seven-day TTL and 100 entries by default."""
        cache = AnalysisCache()

        assert cache.ttl_seconds == 7 * 24 * 60 * 60
        assert cache.max_entries == 100

    def test_key_normalisation(self):
        """Keys ignore case and whitespace but keep the title boundary."""
        assert AnalysisCache.make_key("My Day", "Felt  good\n today") == AnalysisCache.make_key(
            "my day", "felt good today"
        )
        assert AnalysisCache.make_key("a", "bc") != AnalysisCache.make_key("ab", "c")

    def test_set_for_and_get_for(self, analysis_cache, sample_result):
        """Results are stored and read by title and content."""
        analysis_cache.set_for("Work", "Deadline tomorrow", sample_result)

        assert analysis_cache.get_for("Work", "Deadline tomorrow") is sample_result

    def test_eviction_at_capacity(self, clock, sample_result):
        """The 101st entry evicts the first."""
        cache = AnalysisCache(max_entries=100, clock=clock)

        for i in range(101):
            cache.set_for(f"title {i}", f"content {i}", sample_result)

        assert cache.get_for("title 0", "content 0") is None
        assert all(cache.get_for(f"title {i}", f"content {i}") for i in range(1, 101))

    def test_tokenize(self):
        """Tokens are lowercase words longer than three characters."""
        tokens = AnalysisCache.tokenize("Work Stress!", "The deadline, again... and again.")

        assert tokens == frozenset({"work", "stress", "deadline", "again"})

    def test_find_similar_hit(self, analysis_cache, sample_result):
        """A near-duplicate entry is found and counted."""
        content = "Another stressful meeting about the quarterly deadline with my manager today"
        analysis_cache.set_for("Work stress", content, sample_result)

        found = analysis_cache.find_similar("Work stress", content + " again")

        assert found is sample_result
        assert analysis_cache.get_stats()["similar_hits"] == 1

    def test_find_similar_below_threshold(self, analysis_cache, sample_result):
        """Unrelated entries are not matched."""
        analysis_cache.set_for("Work stress", "Quarterly deadline meeting manager", sample_result)

        assert analysis_cache.find_similar("Weekend", "Hiking with friends near the lake") is None

    def test_find_similar_skips_long_content(self, analysis_cache, sample_result):
        """Long content never uses the similarity lookup."""
        content = "deadline " * 200
        analysis_cache.set_for("Work", content, sample_result)

        assert len(content) > 1000
        assert analysis_cache.find_similar("Work", content) is None

    def test_find_similar_ignores_expired(self, analysis_cache, clock, sample_result):
        """Expired entries are not candidates."""
        content = "Quarterly deadline meeting with manager"
        analysis_cache.set_for("Work", content, sample_result)

        clock.advance(7 * 24 * 60 * 60)

        assert analysis_cache.find_similar("Work", content) is None

    def test_find_similar_does_not_refresh_ttl(self, analysis_cache, clock, sample_result):
        """A similarity hit leaves the entry's expiry unchanged."""
        content = "Quarterly deadline meeting with manager"
        analysis_cache.set_for("Work", content, sample_result)

        clock.advance(6 * 24 * 60 * 60)
        assert analysis_cache.find_similar("Work", content) is sample_result

        clock.advance(24 * 60 * 60)
        assert analysis_cache.get_for("Work", content) is None


class TestScenarioCache:
    """Tests for ScenarioCache."""

    def test_defaults(self):
        """One-day TTL and no size bound by default."""
        cache = ScenarioCache()

        assert cache.ttl_seconds == 24 * 60 * 60
        assert cache.max_entries is None

    def test_key_ignores_distortion_order_and_duplicates(self):
        """Distortion order and repeats do not change the key."""
        key1 = ScenarioCache.make_key("I always fail", ["labeling", "overgeneralization"], "Sadness", None)
        key2 = ScenarioCache.make_key("I always fail", ["overgeneralization", "labeling", "labeling"], "Sadness", "")

        assert key1 == key2

    def test_key_depends_on_instructions(self):
        """Custom instructions are part of the key."""
        key1 = ScenarioCache.make_key("I always fail", ["labeling"], "Sadness", None)
        key2 = ScenarioCache.make_key("I always fail", ["labeling"], "Sadness", "Focus on work")

        assert key1 != key2

    def test_expires_after_a_day(self, scenario_cache, clock, sample_session):
        """Sessions expire after 24 hours."""
        scenario_cache.set_for("thought", ["labeling"], "Sadness", None, sample_session)
        assert scenario_cache.get_for("thought", ["labeling"], "Sadness") is sample_session

        clock.advance(24 * 60 * 60)
        assert scenario_cache.get_for("thought", ["labeling"], "Sadness") is None
