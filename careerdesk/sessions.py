"""
Per-session state: the model rate windows and the proposal version history.

Each session owns its state exclusively; nothing here is shared between
sessions or persisted. Sessions that stay idle for SESSION_IDLE_SECONDS
(default one hour, 0 disables) are dropped on the next lookup.
"""
import os
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional

from .rate_limiter import RateLimiter

DEFAULT_SESSION = "default"
DEFAULT_IDLE_SECONDS = 3600


@dataclass(frozen=True)
class ProposalVersion:
    id: int
    content: str
    created_at: datetime
    revision_notes: Optional[str] = None


class ProposalHistory:
    """Append-only list of proposal versions with a cursor over it."""

    def __init__(self):
        self._versions: List[ProposalVersion] = []
        self.cursor = -1

    @property
    def versions(self) -> List[ProposalVersion]:
        return list(self._versions)

    def __len__(self) -> int:
        return len(self._versions)

    @property
    def current(self) -> Optional[ProposalVersion]:
        if self.cursor < 0:
            return None
        return self._versions[self.cursor]

    def append(self, content: str, revision_notes: Optional[str] = None) -> ProposalVersion:
        version = ProposalVersion(
            id=len(self._versions) + 1,
            content=content,
            created_at=datetime.now(timezone.utc),
            revision_notes=revision_notes,
        )
        self._versions.append(version)
        self.cursor = len(self._versions) - 1
        return version

    def navigate(self, direction: str) -> Optional[ProposalVersion]:
        if direction == "prev":
            if self.cursor > 0:
                self.cursor -= 1
        elif direction == "next":
            if self.cursor < len(self._versions) - 1:
                self.cursor += 1
        else:
            raise ValueError(f"direction must be 'prev' or 'next', got {direction!r}")
        return self.current


@dataclass
class SessionState:
    rate_limiter: RateLimiter = field(default_factory=RateLimiter)
    proposals: ProposalHistory = field(default_factory=ProposalHistory)


class SessionStore:
    """Process-local session registry; sessions idle longer than idle_seconds are dropped."""

    def __init__(self, idle_seconds: Optional[float] = None, clock: Optional[Callable[[], float]] = None):
        self._sessions: Dict[str, SessionState] = {}
        self._last_seen: Dict[str, float] = {}
        self._clock = clock or time.time
        if idle_seconds is None:
            idle_seconds = float(os.getenv("SESSION_IDLE_SECONDS", str(DEFAULT_IDLE_SECONDS)))
        self.idle_seconds = idle_seconds

    def __len__(self) -> int:
        return len(self._sessions)

    def _expire_idle(self, now: float) -> None:
        if self.idle_seconds <= 0:
            return
        stale = [key for key, seen in self._last_seen.items() if now - seen > self.idle_seconds]
        for key in stale:
            del self._sessions[key]
            del self._last_seen[key]

    def get(self, session_id: Optional[str]) -> SessionState:
        key = session_id or DEFAULT_SESSION
        now = self._clock()
        self._expire_idle(now)
        if key not in self._sessions:
            self._sessions[key] = SessionState()
        self._last_seen[key] = now
        return self._sessions[key]

    def reset(self, session_id: Optional[str]) -> SessionState:
        key = session_id or DEFAULT_SESSION
        self._sessions[key] = SessionState()
        self._last_seen[key] = self._clock()
        return self._sessions[key]

    def clear(self) -> None:
        self._sessions.clear()
        self._last_seen.clear()


SESSIONS = SessionStore()
