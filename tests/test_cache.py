from bball_api.services.cache import TTLCache, make_cache_key


class FakeClock:
    def __init__(self, now: float = 1_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


def test_set_then_get_returns_value():
    cache = TTLCache(clock=FakeClock())
    cache.set("game:E2025:1", {"gameCode": 1}, ttl_seconds=60)

    assert cache.get("game:E2025:1") == {"gameCode": 1}
    assert cache.has("game:E2025:1")


def test_expired_entry_is_absent_and_evicted_on_read():
    clock = FakeClock()
    cache = TTLCache(clock=clock)
    cache.set("games:E2025", ["a"], ttl_seconds=300)

    clock.now += 300
    # still listed until something reads it
    assert "games:E2025" in cache.stats()["keys"]

    assert cache.get("games:E2025") is None
    assert "games:E2025" not in cache.stats()["keys"]
    assert cache.stats()["entries"] == 0


def test_entry_alive_just_before_expiry():
    clock = FakeClock()
    cache = TTLCache(clock=clock)
    cache.set("k", "v", ttl_seconds=60)

    clock.now += 59.9
    assert cache.get("k") == "v"


def test_set_overwrites_previous_entry_and_ttl():
    clock = FakeClock()
    cache = TTLCache(clock=clock)
    cache.set("k", "old", ttl_seconds=10)
    clock.now += 5
    cache.set("k", "new", ttl_seconds=10)

    clock.now += 8
    assert cache.get("k") == "new"
    assert cache.stats() == {"entries": 1, "keys": ["k"]}


def test_missing_key_and_clear():
    cache = TTLCache()
    assert cache.get("nope") is None

    cache.set("a", 1)
    cache.set("b", 2)
    cache.clear()
    assert cache.stats() == {"entries": 0, "keys": []}


def test_make_cache_key():
    assert make_cache_key("game", "E", "E2025", "12") == "game:E:E2025:12"
    assert make_cache_key("player", "E", "ABC", "none", False) == "player:E:ABC:none:False"
