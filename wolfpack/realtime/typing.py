"""Server-side view of who is typing in each session.

A ``isTyping=true`` signal (re)arms an expiry for that user; ``isTyping=false``
removes the user at once. Expired entries are pruned on every update and read,
and trackers left empty are dropped from the registry.
"""
import time
from collections.abc import Callable

from wolfpack.core.config import settings


class TypingTracker:
    def __init__(self, ttl: float | None = None, clock: Callable[[], float] = time.monotonic):
        self.ttl = settings.TYPING_INDICATOR_TTL_SECONDS if ttl is None else ttl
        self._clock = clock
        # user_id -> (display_name, expires_at)
        self._entries: dict[str, tuple[str, float]] = {}

    def update(self, user_id: str, display_name: str, is_typing: bool, now: float | None = None) -> None:
        now = self._clock() if now is None else now
        self.prune(now)
        if is_typing:
            self._entries[user_id] = (display_name, now + self.ttl)
        else:
            self._entries.pop(user_id, None)

    def prune(self, now: float | None = None) -> None:
        now = self._clock() if now is None else now
        expired = [user_id for user_id, (_, expires_at) in self._entries.items() if expires_at <= now]
        for user_id in expired:
            del self._entries[user_id]

    def typing_users(self, now: float | None = None) -> list[str]:
        """Display names currently typing, sorted."""
        self.prune(now)
        return sorted(name for name, _ in self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)


class TypingRegistry:
    """One tracker per session id, created on first use."""

    def __init__(self, ttl: float | None = None, clock: Callable[[], float] = time.monotonic):
        self._ttl = ttl
        self._clock = clock
        self._trackers: dict[str, TypingTracker] = {}

    def tracker(self, session_id: str) -> TypingTracker:
        self.sweep(exclude=session_id)
        tracker = self._trackers.get(session_id)
        if tracker is None:
            tracker = TypingTracker(self._ttl, self._clock)
            self._trackers[session_id] = tracker
        return tracker

    def sweep(self, now: float | None = None, exclude: str | None = None) -> None:
        """Drop trackers with nobody left typing."""
        now = self._clock() if now is None else now
        for session_id, tracker in list(self._trackers.items()):
            if session_id == exclude:
                continue
            tracker.prune(now)
            if not tracker:
                del self._trackers[session_id]

    def discard(self, session_id: str) -> None:
        self._trackers.pop(session_id, None)

    def typing_users(self, session_id: str, now: float | None = None) -> list[str]:
        tracker = self._trackers.get(session_id)
        if tracker is None:
            return []
        users = tracker.typing_users(now)
        if not tracker:
            del self._trackers[session_id]
        return users

    def __len__(self) -> int:
        return len(self._trackers)
