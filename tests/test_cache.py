from forecaster.cache import TTLCache


def test_get_returns_value_within_ttl(clock):
    cache = TTLCache(60, time_func=clock)
    cache.set("k", {"v": 1})
    clock.advance(59)
    assert cache.get("k") == {"v": 1}
    assert cache.exists("k")


def test_entry_expires_after_ttl(clock):
    cache = TTLCache(60, time_func=clock)
    cache.set("k", "value")
    clock.advance(60)
    assert cache.get("k") is None
    assert not cache.exists("k")


def test_set_restarts_ttl(clock):
    cache = TTLCache(60, time_func=clock)
    cache.set("k", "old")
    clock.advance(50)
    cache.set("k", "new")
    clock.advance(50)
    assert cache.get("k") == "new"


def test_delete_and_clear(clock):
    cache = TTLCache(60, time_func=clock)
    cache.set("a", 1)
    cache.set("b", 2)
    cache.delete("a")
    cache.delete("missing")
    assert cache.get("a") is None
    assert cache.get("b") == 2
    cache.clear()
    assert not cache.exists("b")
