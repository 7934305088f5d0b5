"""In-memory implementation of Session"""

import asyncio
import secrets
import time
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from oid4vp_frontend.port.output import Session
from oid4vp_frontend.port.output.session import check_session_key, check_session_value


class InMemorySession(Session):
    """
    In-memory implementation of Session.

    Values are checked against ``SESSION_SCHEMA`` on write. Batch writes are
    all-or-nothing. Safe for concurrent coroutines using asyncio.Lock; the
    lock is never held across anything but dictionary access.
    """

    def __init__(self) -> None:
        self._data: Dict[str, Any] = {}
        self._lock = asyncio.Lock()

    async def get(self, key: str) -> Optional[Any]:
        check_session_key(key)
        async with self._lock:
            return self._data.get(key)

    async def get_batch(self, *keys: str) -> Dict[str, Any]:
        for key in keys:
            check_session_key(key)
        async with self._lock:
            return {key: self._data[key] for key in keys if key in self._data}

    async def set(self, key: str, value: Any) -> None:
        check_session_value(key, value)
        async with self._lock:
            self._data[key] = value

    async def set_batch(self, batch: Mapping[str, Any]) -> None:
        for key, value in batch.items():
            check_session_value(key, value)
        async with self._lock:
            self._data.update(batch)

    async def delete(self, key: str) -> Optional[Any]:
        check_session_key(key)
        async with self._lock:
            return self._data.pop(key, None)

    async def delete_batch(self, *keys: str) -> Dict[str, Optional[Any]]:
        for key in keys:
            check_session_key(key)
        async with self._lock:
            return {key: self._data.pop(key, None) for key in keys}

    async def clear(self) -> None:
        async with self._lock:
            self._data.clear()

    async def has(self, key: str) -> bool:
        check_session_key(key)
        async with self._lock:
            return key in self._data

    async def keys(self) -> List[str]:
        async with self._lock:
            return list(self._data.keys())

    async def size(self) -> int:
        async with self._lock:
            return len(self._data)


class InMemorySessionStore:
    """
    Hands out one InMemorySession per browser session id.

    Sessions idle for longer than ``max_age_seconds`` are dropped on next
    access; a transaction that never got its wallet response goes with them.
    """

    def __init__(
        self,
        max_age_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_age_seconds = max_age_seconds
        self.clock = clock
        self._sessions: Dict[str, Tuple[InMemorySession, float]] = {}

    @staticmethod
    def new_session_id() -> str:
        return secrets.token_urlsafe(32)

    def get_or_create(self, session_id: Optional[str]) -> Tuple[str, InMemorySession]:
        """
        Return the live session for ``session_id``, or a fresh one.

        Returns:
            (session id, session); the id differs from the argument when a
            new session had to be created
        """
        self.evict_expired()
        now = self.clock()
        if session_id and session_id in self._sessions:
            session, _ = self._sessions[session_id]
            self._sessions[session_id] = (session, now)
            return session_id, session

        new_id = self.new_session_id()
        session = InMemorySession()
        self._sessions[new_id] = (session, now)
        return new_id, session

    def drop(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)

    def evict_expired(self) -> int:
        """Drop idle sessions and return how many were dropped"""
        if self.max_age_seconds is None:
            return 0
        cutoff = self.clock() - self.max_age_seconds
        expired = [sid for sid, (_, seen) in self._sessions.items() if seen < cutoff]
        for sid in expired:
            del self._sessions[sid]
        return len(expired)

    def __len__(self) -> int:
        return len(self._sessions)
