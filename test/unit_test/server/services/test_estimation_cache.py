"""Unit tests for the in-memory estimation cache."""

from sassify.server.services.estimation_cache import EstimationCache


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


class TestEstimationCache:
    def test_get_returns_copy(self):
        cache = EstimationCache(clock=FakeClock())
        cache.set("k", {"optimization": {"fromCache": False}})

        first = cache.get("k")
        first["optimization"]["fromCache"] = True

        assert cache.get("k") == {"optimization": {"fromCache": False}}

    def test_set_stores_copy(self):
        cache = EstimationCache(clock=FakeClock())
        result = {"total": 1}
        cache.set("k", result)

        result["total"] = 2

        assert cache.get("k") == {"total": 1}

    def test_entries_expire_after_ttl(self):
        clock = FakeClock()
        cache = EstimationCache(ttl=1800, clock=clock)
        cache.set("k", {"total": 1})

        clock.now += 1800
        assert cache.get("k") == {"total": 1}

        clock.now += 1
        assert cache.get("k") is None
        assert "k" not in cache

    def test_oldest_entry_is_evicted(self):
        cache = EstimationCache(max_entries=2, clock=FakeClock())
        cache.set("a", {})
        cache.set("b", {})
        cache.set("c", {})

        assert len(cache) == 2
        assert "a" not in cache
        assert "c" in cache

    def test_clear(self):
        cache = EstimationCache(clock=FakeClock())
        cache.set("a", {})

        cache.clear()

        assert len(cache) == 0
