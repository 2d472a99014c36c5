import threading
from datetime import datetime, timedelta

import pytest

from utils.basket import CatalogItemRef
from utils.sessions import Role, SessionStore


class FakeClock:
    def __init__(self):
        self.now = datetime(2026, 1, 1, 12, 0, 0)

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)

    def __call__(self):
        return self.now


class TestSessionStore:
    def test_create_and_lookup(self):
        store = SessionStore()
        token = store.create_session(5, "alice", "Customer")

        session = store.get_session(token)
        assert session.token == token
        assert session.user_id == 5
        assert session.username == "alice"
        assert session.role is Role.CUSTOMER
        assert session.basket.is_empty()

    def test_token_is_long_and_random(self):
        store = SessionStore()
        tokens = {store.create_session(1, "alice", Role.CUSTOMER) for _ in range(50)}
        assert len(tokens) == 50
        # 128 bits need at least 22 url-safe base64 characters
        assert all(len(t) >= 22 for t in tokens)

    def test_two_logins_get_independent_baskets(self):
        store = SessionStore()
        first = store.create_session(5, "alice", "Customer")
        second = store.create_session(5, "alice", "Customer")
        assert first != second

        store.get_session(first).basket.add_item(CatalogItemRef(id=1, unit_price=10))

        assert store.get_session(first).basket.get_total_price() == 10
        assert store.get_session(second).basket.is_empty()
        assert store.get_session(first).basket is not store.get_session(second).basket

    @pytest.mark.parametrize("token", [None, "", "no-such-token"])
    def test_missing_token_is_absent(self, token):
        store = SessionStore()
        store.create_session(1, "alice", "Customer")
        assert store.get_session(token) is None

    def test_end_session_is_idempotent(self):
        store = SessionStore()
        token = store.create_session(1, "root", "Admin")

        store.end_session(token)
        store.end_session(token)
        store.end_session(None)
        store.end_session("never-existed")

        assert store.get_session(token) is None
        assert len(store) == 0

    def test_unknown_role_is_rejected(self):
        store = SessionStore()
        with pytest.raises(ValueError):
            store.create_session(1, "eve", "Superuser")
        assert len(store) == 0

    def test_concurrent_logins(self):
        store = SessionStore()
        tokens = []
        tokens_lock = threading.Lock()
        start = threading.Barrier(8)

        def worker(user_id):
            start.wait()
            created = [store.create_session(user_id, f"user{user_id}", "Customer") for _ in range(50)]
            with tokens_lock:
                tokens.extend(created)

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(store) == 400
        assert len(set(tokens)) == 400
        assert all(store.get_session(t) is not None for t in tokens)

    def test_default_clock_is_timezone_aware(self):
        store = SessionStore()
        session = store.get_session(store.create_session(1, "alice", "Customer"))
        assert session.created_at.tzinfo is not None
        assert session.last_seen.tzinfo is not None


class TestIdleTimeout:
    def test_activity_keeps_session_alive(self):
        clock = FakeClock()
        store = SessionStore(idle_timeout=timedelta(minutes=30), clock=clock)
        token = store.create_session(1, "alice", "Customer")

        clock.advance(minutes=20)
        assert store.get_session(token) is not None
        clock.advance(minutes=20)
        assert store.get_session(token) is not None

        clock.advance(minutes=31)
        assert store.get_session(token) is None
        assert len(store) == 0

    def test_evict_idle_drops_only_stale_sessions(self):
        clock = FakeClock()
        store = SessionStore(idle_timeout=timedelta(minutes=30), clock=clock)
        stale = store.create_session(1, "alice", "Customer")
        clock.advance(minutes=20)
        fresh = store.create_session(2, "bob", "Customer")
        clock.advance(minutes=15)

        assert store.evict_idle() == 1
        assert store.get_session(stale) is None
        assert store.get_session(fresh) is not None

    def test_without_timeout_sessions_never_expire(self):
        clock = FakeClock()
        store = SessionStore(clock=clock)
        token = store.create_session(1, "alice", "Customer")

        clock.advance(days=365)

        assert store.evict_idle() == 0
        assert store.get_session(token) is not None
