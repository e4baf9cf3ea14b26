"""
Test suite for InMemorySessionStore.

Covers session id resolution, history appends, scope file tracking,
per-session locks and LRU eviction.

System role: Verification of conversation state handling
"""

import asyncio
import uuid

import pytest
from pydantic import ValidationError

from ragchat.core.session_store import (
    InMemorySessionStore,
    is_well_formed_session_id,
)


class TestSessionIdValidation:
    """Test suite for session token validation."""

    @pytest.mark.parametrize(
        "session_id",
        ["abc", str(uuid.uuid4()), "user-1.session_2:x", "a" * 128],
    )
    def test_well_formed_ids_accepted(self, session_id: str) -> None:
        assert is_well_formed_session_id(session_id)

    @pytest.mark.parametrize(
        "session_id",
        [None, "", "has space", "a" * 129, "semi;colon", 42, "new\nline", "trailing\n"],
    )
    def test_malformed_ids_rejected(self, session_id) -> None:
        assert not is_well_formed_session_id(session_id)


class TestGetOrCreate:
    """Test suite for InMemorySessionStore.get_or_create."""

    def test_absent_id_generates_new_token(self, session_store: InMemorySessionStore) -> None:
        # Act
        session_id, session = session_store.get_or_create(None)

        # Assert
        assert is_well_formed_session_id(session_id)
        assert session.session_id == session_id
        assert session.history == []
        assert session.current_file is None

    def test_malformed_id_is_replaced(self, session_store: InMemorySessionStore) -> None:
        session_id, _ = session_store.get_or_create("not a token")

        assert session_id != "not a token"
        assert session_id in session_store

    def test_unknown_well_formed_id_is_kept(self, session_store: InMemorySessionStore) -> None:
        # Act
        session_id, session = session_store.get_or_create("client-chosen-id")

        # Assert
        assert session_id == "client-chosen-id"
        assert session.history == []
        assert len(session_store) == 1

    def test_known_id_returns_existing_session(self, session_store: InMemorySessionStore) -> None:
        # Arrange
        session_id, first = session_store.get_or_create("s1")
        session_store.append_exchange(session_id, "hi", "hello")

        # Act
        _, second = session_store.get_or_create("s1")

        # Assert
        assert second is first
        assert len(second.history) == 2

    def test_generated_ids_are_unique(self, session_store: InMemorySessionStore) -> None:
        ids = {session_store.get_or_create()[0] for _ in range(50)}
        assert len(ids) == 50


class TestHistory:
    """Test suite for history appends."""

    def test_history_grows_by_two_per_exchange_in_order(
        self, session_store: InMemorySessionStore
    ) -> None:
        # Arrange
        session_id, session = session_store.get_or_create("s1")

        # Act
        for i in range(3):
            session_store.append_exchange(session_id, f"q{i}", f"a{i}")

        # Assert
        assert len(session.history) == 6
        assert [t.role for t in session.history] == ["user", "assistant"] * 3
        assert [t.content for t in session.history] == ["q0", "a0", "q1", "a1", "q2", "a2"]

    def test_turns_are_immutable(self, session_store: InMemorySessionStore) -> None:
        session_id, session = session_store.get_or_create("s1")
        session_store.append_exchange(session_id, "q", "a")

        with pytest.raises(ValidationError):
            session.history[0].content = "changed"


class TestScopeFile:
    """Test suite for retrieval scope tracking."""

    def test_scope_file_absent_by_default(self, session_store: InMemorySessionStore) -> None:
        session_id, _ = session_store.get_or_create("s1")
        assert session_store.get_scope_file(session_id) is None

    def test_set_scope_file_replaces_previous(self, session_store: InMemorySessionStore) -> None:
        session_id, _ = session_store.get_or_create("s1")

        session_store.set_scope_file(session_id, "first.pdf")
        session_store.set_scope_file(session_id, "second.pdf")

        assert session_store.get_scope_file(session_id) == "second.pdf"

    def test_scope_file_of_unknown_session_is_none(self, session_store: InMemorySessionStore) -> None:
        assert session_store.get_scope_file("nobody") is None


class TestLocks:
    """Test suite for per-session serialization."""

    def test_same_session_shares_lock(self, session_store: InMemorySessionStore) -> None:
        assert session_store.lock("s1") is session_store.lock("s1")

    def test_different_sessions_have_different_locks(
        self, session_store: InMemorySessionStore
    ) -> None:
        assert session_store.lock("s1") is not session_store.lock("s2")

    @pytest.mark.asyncio
    async def test_lock_serializes_critical_sections(
        self, session_store: InMemorySessionStore
    ) -> None:
        # Arrange
        events: list[str] = []

        async def worker(name: str) -> None:
            async with session_store.lock("s1"):
                events.append(f"{name}-start")
                await asyncio.sleep(0.01)
                events.append(f"{name}-end")

        # Act
        await asyncio.gather(worker("a"), worker("b"))

        # Assert
        assert events == ["a-start", "a-end", "b-start", "b-end"]


class TestEviction:
    """Test suite for the optional LRU bound."""

    def test_unbounded_by_default(self, session_store: InMemorySessionStore) -> None:
        for i in range(100):
            session_store.get_or_create(f"s{i}")
        assert len(session_store) == 100

    def test_least_recently_used_session_is_evicted(self) -> None:
        # Arrange
        store = InMemorySessionStore(max_sessions=2)
        store.get_or_create("a")
        store.get_or_create("b")
        store.get_or_create("a")  # a is now most recent

        # Act
        store.get_or_create("c")

        # Assert
        assert "a" in store
        assert "c" in store
        assert "b" not in store

    def test_invalid_bound_rejected(self) -> None:
        with pytest.raises(ValueError):
            InMemorySessionStore(max_sessions=0)

    def test_idle_lock_dropped_with_session(self) -> None:
        store = InMemorySessionStore(max_sessions=1)
        store.get_or_create("a")
        lock = store.lock("a")

        store.get_or_create("b")

        assert store.lock("a") is not lock

    @pytest.mark.asyncio
    async def test_held_lock_survives_eviction(self) -> None:
        # Arrange
        store = InMemorySessionStore(max_sessions=1)
        store.get_or_create("a")
        lock = store.lock("a")
        await lock.acquire()

        # Act
        store.get_or_create("b")

        # Assert
        assert store.lock("a") is lock
        lock.release()

    @pytest.mark.asyncio
    async def test_lock_with_woken_waiter_survives_eviction(self) -> None:
        # Arrange
        store = InMemorySessionStore(max_sessions=1)
        store.get_or_create("a")
        lock = store.lock("a")
        await lock.acquire()
        waiter = asyncio.create_task(lock.acquire())
        await asyncio.sleep(0)
        lock.release()
        assert not lock.locked()

        # Act
        store.get_or_create("b")

        # Assert
        assert store.lock("a") is lock
        await waiter
        assert lock.locked()
        lock.release()
