"""
In-memory store of per-session dialogue state.

Sessions are keyed by ``tenant::session_id``. Entries idle for longer than
the configured TTL are replaced on their next access and can be dropped in
bulk with ``purge_expired``. All access goes through an internal lock, so
the store can be shared between request threads.
"""

import logging
import threading
import time
from typing import Callable, Optional

from salesbot.config import settings
from salesbot.schemas.session_schema import ConversationState

logger = logging.getLogger(__name__)


def session_key(tenant: str, session_id: str) -> str:
    return f"{tenant}::{session_id}"


class SessionStore:
    """Keyed ``ConversationState`` map with idle expiry."""

    def __init__(
        self,
        ttl_seconds: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl_seconds = settings.session.ttl_seconds if ttl_seconds is None else ttl_seconds
        self._clock = clock
        self._states: dict[str, ConversationState] = {}
        self._lock = threading.Lock()

    def _expired(self, state: ConversationState, now: float) -> bool:
        return self.ttl_seconds > 0 and now - state.touched_at > self.ttl_seconds

    def get_or_create(self, tenant: str, session_id: str, lang: str) -> ConversationState:
        """Return the session's state, starting fresh when absent, expired or the language changed."""
        key = session_key(tenant, session_id)
        now = self._clock()
        with self._lock:
            state = self._states.get(key)
            if state is not None and self._expired(state, now):
                logger.info("Session %s expired after %ss idle", key, int(now - state.touched_at))
                state = None
            if state is None:
                state = ConversationState(tenant=tenant, lang=lang, touched_at=now)
                self._states[key] = state
            elif state.lang.lower() != lang.lower():
                logger.debug("Session %s switched language %s -> %s, resetting", key, state.lang, lang)
                state.reset(tenant, lang)
            state.touched_at = now
            return state

    def put(self, tenant: str, session_id: str, state: ConversationState) -> None:
        with self._lock:
            state.touched_at = self._clock()
            self._states[session_key(tenant, session_id)] = state

    def clear(self, tenant: str, session_id: str) -> None:
        with self._lock:
            self._states.pop(session_key(tenant, session_id), None)

    def purge_expired(self) -> int:
        """Drop every expired session and return how many were removed."""
        now = self._clock()
        with self._lock:
            expired = [k for k, s in self._states.items() if self._expired(s, now)]
            for key in expired:
                del self._states[key]
        if expired:
            logger.info("Purged %d expired sessions", len(expired))
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._states)
