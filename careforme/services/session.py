"""Explicit session provider with a subscribe/unsubscribe contract."""
from typing import Callable, List, Optional

from careforme.core.logging import get_logger
from careforme.models.session import Session

logger = get_logger(__name__)

SessionCallback = Callable[[Optional[Session]], None]


class SessionProvider:
    """Holds the current admin session and notifies subscribers of changes.

    Components receive the provider at construction, subscribe, and must
    call the returned unsubscribe function when they are disposed.
    """

    def __init__(self, session: Optional[Session] = None):
        self._current = session
        self._subscribers: List[SessionCallback] = []

    @property
    def current(self) -> Optional[Session]:
        return self._current

    @property
    def is_authenticated(self) -> bool:
        return self._current is not None

    def subscribe(self, callback: SessionCallback, replay: bool = True) -> Callable[[], None]:
        """Register ``callback``; returns a function that unsubscribes it.

        With ``replay`` the callback immediately receives the current session.
        """
        self._subscribers.append(callback)
        if replay:
            self._notify(callback, self._current)
        return lambda: self.unsubscribe(callback)

    def unsubscribe(self, callback: SessionCallback) -> None:
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    def publish(self, session: Optional[Session]) -> None:
        """Replace the current session and notify every subscriber."""
        self._current = session
        for callback in list(self._subscribers):
            self._notify(callback, session)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def _notify(self, callback: SessionCallback, session: Optional[Session]) -> None:
        try:
            callback(session)
        except Exception:
            logger.exception("Session subscriber failed")
