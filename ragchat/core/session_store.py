"""
Session store.

Holds per-conversation state keyed by an opaque session token. The store
is an interface so the orchestrator does not depend on how sessions are
kept; the only implementation lives in process memory and is lost on
restart.

Each session owns an asyncio.Lock. The orchestrator holds it for the whole
retrieve -> complete -> append sequence so concurrent requests for one
session id are applied strictly one after another.

Dependencies: asyncio, ragchat.models.session
System role: Conversation state and per-session serialization
"""

import asyncio
import logging
import re
import uuid
from abc import ABC, abstractmethod
from collections import OrderedDict

from ragchat.models.session import Session, Turn

logger = logging.getLogger(__name__)

SESSION_ID_PATTERN = re.compile(r"[A-Za-z0-9._:-]{1,128}")


def is_well_formed_session_id(session_id: object) -> bool:
    """Check whether a client-supplied token can be used as a session id."""
    return isinstance(session_id, str) and bool(SESSION_ID_PATTERN.fullmatch(session_id))


def new_session_id() -> str:
    """Generate a fresh session token."""
    return str(uuid.uuid4())


def _lock_in_use(lock: asyncio.Lock) -> bool:
    """Held, or with queued waiters, including one woken but not yet running."""
    return lock.locked() or bool(getattr(lock, "_waiters", None))


class SessionStore(ABC):
    """Keyed conversation state."""

    @abstractmethod
    def get_or_create(self, session_id: str | None = None) -> tuple[str, Session]:
        """
        Resolve a session, creating it when needed.

        Absent or malformed ids are replaced by a generated one. A
        well-formed id that is not known yet gets a fresh empty session
        under that exact id.

        Args:
            session_id: Client-supplied token, if any

        Returns:
            tuple[str, Session]: Effective session id and its state
        """

    @abstractmethod
    def append_exchange(self, session_id: str, user_content: str, assistant_content: str) -> None:
        """Append a user turn immediately followed by an assistant turn."""

    @abstractmethod
    def get_scope_file(self, session_id: str) -> str | None:
        """Filename that scopes retrieval for the session, if any."""

    @abstractmethod
    def set_scope_file(self, session_id: str, filename: str) -> None:
        """Replace the session's scoping filename."""

    @abstractmethod
    def lock(self, session_id: str) -> asyncio.Lock:
        """Serialization point for requests on one session."""


class InMemorySessionStore(SessionStore):
    """
    Process-local session store.

    Sessions are kept in access order. When ``max_sessions`` is set the
    least recently used session is evicted once the bound is exceeded;
    without it sessions live until the process exits.
    """

    def __init__(self, max_sessions: int | None = None) -> None:
        """
        Initialize empty store.

        Args:
            max_sessions: Optional upper bound on retained sessions
        """
        if max_sessions is not None and max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")
        self._max_sessions = max_sessions
        self._sessions: OrderedDict[str, Session] = OrderedDict()
        self._locks: dict[str, asyncio.Lock] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    def get(self, session_id: str) -> Session | None:
        """Look up a session without creating it."""
        return self._sessions.get(session_id)

    def get_or_create(self, session_id: str | None = None) -> tuple[str, Session]:
        if not is_well_formed_session_id(session_id):
            session_id = new_session_id()

        session = self._sessions.get(session_id)
        if session is None:
            session = Session(session_id=session_id)
            self._sessions[session_id] = session
            logger.info(
                f"{__name__}:get_or_create - Created session",
                extra={"session_id": session_id},
            )
            self._evict_if_needed()
        else:
            self._sessions.move_to_end(session_id)

        session.touch()
        return session_id, session

    def append_exchange(self, session_id: str, user_content: str, assistant_content: str) -> None:
        session = self._require(session_id)
        session.history.append(Turn(role="user", content=user_content))
        session.history.append(Turn(role="assistant", content=assistant_content))
        session.touch()

    def get_scope_file(self, session_id: str) -> str | None:
        session = self._sessions.get(session_id)
        return session.current_file if session else None

    def set_scope_file(self, session_id: str, filename: str) -> None:
        session = self._require(session_id)
        session.current_file = filename
        session.touch()

    def lock(self, session_id: str) -> asyncio.Lock:
        lock = self._locks.get(session_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[session_id] = lock
        return lock

    def _require(self, session_id: str) -> Session:
        session = self._sessions.get(session_id)
        if session is None:
            # Evicted between resolution and use; recreate under the same id
            _, session = self.get_or_create(session_id)
        return session

    def _evict_if_needed(self) -> None:
        if self._max_sessions is None:
            return
        while len(self._sessions) > self._max_sessions:
            evicted_id, _ = self._sessions.popitem(last=False)
            lock = self._locks.get(evicted_id)
            if lock is not None and not _lock_in_use(lock):
                del self._locks[evicted_id]
            logger.info(
                f"{__name__}:_evict_if_needed - Evicted least recently used session",
                extra={"session_id": evicted_id},
            )
