"""In-memory form sessions, one state tree and one writer lock each.

The engine is single-writer: every command against a session runs while
holding that session's lock, so requests on the same form apply one after
another. Nothing here persists; a discarded, expired or restarted session
starts from a blank form.

The store is bounded: sessions idle for longer than ``idle_timeout`` are
dropped, and once ``max_sessions`` are live the least recently used one
makes room for a new session.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Optional

from product_engine.commands.registry import CommandRegistry, build_form_registry
from product_engine.config import EngineConfig
from product_engine.form.product_form import ProductForm

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class FormSession:
    """A form state tree plus the registry and lock that guard it."""

    session_id: str
    form: ProductForm
    registry: CommandRegistry
    lock: threading.Lock = field(default_factory=threading.Lock)
    created_at: datetime = field(default_factory=_utcnow)
    last_access: datetime = field(default_factory=_utcnow)


class FormSessionStore:
    """Session ID -> FormSession, capped and expired on idle."""

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        max_sessions: int = 1000,
        idle_timeout: float = 3600.0,
    ):
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")
        self.config = config or EngineConfig.default()
        self.max_sessions = max_sessions
        self.idle_timeout = timedelta(seconds=idle_timeout)
        self._sessions: dict[str, FormSession] = {}
        self._guard = threading.Lock()

    def new_session(self, session_id: str) -> FormSession:
        """Build a session with a blank form without storing it."""
        form = ProductForm(config=self.config)
        return FormSession(session_id=session_id, form=form, registry=build_form_registry(form))

    def get(self, session_id: str) -> Optional[FormSession]:
        """Look up a live session. Never creates one."""
        with self._guard:
            self._expire_idle(_utcnow())
            session = self._sessions.get(session_id)
            if session is not None:
                session.last_access = _utcnow()
            return session

    def get_or_create(self, session_id: str) -> FormSession:
        with self._guard:
            now = _utcnow()
            self._expire_idle(now)
            session = self._sessions.get(session_id)
            if session is None:
                if len(self._sessions) >= self.max_sessions:
                    self._evict_least_recent()
                session = self.new_session(session_id)
                self._sessions[session_id] = session
                logger.info(f"Created form session {session_id}")
            session.last_access = now
            return session

    def discard(self, session_id: str) -> bool:
        with self._guard:
            removed = self._sessions.pop(session_id, None) is not None
        if removed:
            logger.info(f"Discarded form session {session_id}")
        return removed

    @property
    def session_count(self) -> int:
        return len(self._sessions)

    # --- Internals (caller holds _guard) ---

    def _expire_idle(self, now: datetime):
        expired = [sid for sid, s in self._sessions.items() if now - s.last_access > self.idle_timeout]
        for sid in expired:
            del self._sessions[sid]
        if expired:
            logger.info(f"Expired {len(expired)} idle form sessions")

    def _evict_least_recent(self):
        oldest = min(self._sessions.values(), key=lambda s: s.last_access)
        del self._sessions[oldest.session_id]
        logger.warning(f"Session cap {self.max_sessions} reached, evicted {oldest.session_id}")
