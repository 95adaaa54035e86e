"""Tests for the in-memory session store and the proxy reply cache."""

from salesbot.conversation.response_cache import ResponseCache
from salesbot.conversation.session_store import SessionStore, session_key
from salesbot.schemas.session_schema import Flow


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class TestSessionStore:
    def setup_method(self):
        self.clock = FakeClock()
        self.store = SessionStore(ttl_seconds=60, clock=self.clock)

    def test_key_format(self):
        assert session_key("A", "abc") == "A::abc"

    def test_same_session_returns_same_state(self):
        first = self.store.get_or_create("A", "s1", "es")
        first.start(Flow.CITA_FECHA)
        again = self.store.get_or_create("A", "s1", "es")
        assert again is first
        assert again.flow == Flow.CITA_FECHA

    def test_tenants_are_isolated(self):
        a = self.store.get_or_create("A", "s1", "es")
        b = self.store.get_or_create("B", "s1", "es")
        assert a is not b
        assert len(self.store) == 2

    def test_language_change_resets_flow(self):
        state = self.store.get_or_create("A", "s1", "es")
        state.start(Flow.CITA_FECHA)
        state.put("cita_motivo", "Asesoria")

        switched = self.store.get_or_create("A", "s1", "en")
        assert switched.lang == "en"
        assert switched.flow == Flow.NONE
        assert switched.fields == {}

    def test_idle_session_expires(self):
        state = self.store.get_or_create("A", "s1", "es")
        state.start(Flow.CITA_FECHA)
        self.clock.advance(61)
        fresh = self.store.get_or_create("A", "s1", "es")
        assert fresh is not state
        assert fresh.flow == Flow.NONE

    def test_access_refreshes_idle_timer(self):
        state = self.store.get_or_create("A", "s1", "es")
        self.clock.advance(50)
        self.store.get_or_create("A", "s1", "es")
        self.clock.advance(50)
        assert self.store.get_or_create("A", "s1", "es") is state

    def test_purge_expired(self):
        self.store.get_or_create("A", "old", "es")
        self.clock.advance(61)
        self.store.get_or_create("A", "new", "es")
        assert self.store.purge_expired() == 1
        assert len(self.store) == 1

    def test_zero_ttl_never_expires(self):
        store = SessionStore(ttl_seconds=0, clock=self.clock)
        state = store.get_or_create("A", "s1", "es")
        self.clock.advance(10 ** 6)
        assert store.get_or_create("A", "s1", "es") is state
        assert store.purge_expired() == 0

    def test_clear(self):
        self.store.get_or_create("A", "s1", "es")
        self.store.clear("A", "s1")
        self.store.clear("A", "missing")
        assert len(self.store) == 0


class TestResponseCache:
    def setup_method(self):
        self.clock = FakeClock()
        self.cache = ResponseCache(ttl_seconds=45, clock=self.clock)

    def test_hit_within_ttl(self):
        self.cache.put("A::es::hola", "Hola!")
        self.clock.advance(45)
        assert self.cache.get("A::es::hola") == "Hola!"

    def test_expired_entry_is_removed_on_read(self):
        self.cache.put("A::es::hola", "Hola!")
        self.clock.advance(46)
        assert self.cache.get("A::es::hola") is None
        assert len(self.cache) == 0

    def test_miss(self):
        assert self.cache.get("unknown") is None

    def test_ttl_has_floor_of_one_second(self):
        assert ResponseCache(ttl_seconds=0, clock=self.clock).ttl_seconds == 1

    def test_write_sweeps_unread_expired_entries(self):
        for n in range(5):
            self.cache.put(f"A::es::pregunta {n}", "respuesta")
        self.clock.advance(46)
        self.cache.put("A::es::hola", "Hola!")
        assert len(self.cache) == 1
        assert self.cache.get("A::es::hola") == "Hola!"

    def test_purge_expired_keeps_live_entries(self):
        self.cache.put("old", "viejo")
        self.clock.advance(30)
        self.cache.put("new", "nuevo")
        self.clock.advance(20)
        assert self.cache.purge_expired() == 1
        assert self.cache.get("new") == "nuevo"
