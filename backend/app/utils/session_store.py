"""
Session Store - Process-wide observable auth session

One SessionState is created when a client process starts, initialized by
asking the auth provider for the current session, and injected into every
component that needs to know who is signed in. Components subscribe to
change events instead of polling, and unsubscribe when they go away.
"""
import logging
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

# Event names follow the auth provider's own change events
INITIAL_SESSION = "INITIAL_SESSION"
SIGNED_IN = "SIGNED_IN"
SIGNED_OUT = "SIGNED_OUT"

SessionListener = Callable[[str, Optional[Dict[str, Any]]], None]


class SessionState:
    """Shared, observable holder of the current auth session"""

    def __init__(self):
        self._session: Optional[Dict[str, Any]] = None
        self._listeners: List[SessionListener] = []
        self._initialized = False

    @property
    def session(self) -> Optional[Dict[str, Any]]:
        return self._session

    @property
    def access_token(self) -> Optional[str]:
        return self._session.get("access_token") if self._session else None

    @property
    def user_id(self) -> Optional[str]:
        return self._session.get("user_id") if self._session else None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.access_token)

    @property
    def initialized(self) -> bool:
        return self._initialized

    def initialize(self, fetch_session: Callable[[], Optional[Dict[str, Any]]]) -> None:
        """
        Load the current session from the auth provider

        Args:
            fetch_session: Callable returning the provider's current session dict,
                           or None when nobody is signed in. Errors are logged and
                           treated as signed out.
        """
        try:
            session = fetch_session()
        except Exception as e:
            logger.warning(f"[SESSION] Could not load current session: {e}")
            session = None

        self._initialized = True
        self.publish(INITIAL_SESSION, session)

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """
        Register a change listener

        Args:
            listener: Called with (event, session) on every change

        Returns:
            Callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def publish(self, event: str, session: Optional[Dict[str, Any]]) -> None:
        """
        Replace the current session and notify listeners

        Args:
            event: One of INITIAL_SESSION, SIGNED_IN, SIGNED_OUT
            session: New session dict, or None when signed out
        """
        self._session = session
        logger.info(f"[SESSION] {event} (user={self.user_id})")

        for listener in list(self._listeners):
            try:
                listener(event, session)
            except Exception as e:
                logger.error(f"[SESSION] Listener failed on {event}: {e}", exc_info=True)

    def close(self) -> None:
        """Tear down: drop all listeners and forget the session"""
        self._listeners.clear()
        self._session = None
        self._initialized = False

    def listener_count(self) -> int:
        return len(self._listeners)
