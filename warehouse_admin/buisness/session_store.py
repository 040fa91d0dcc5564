"""
Session Store
Single owner of the Session for one request.

Consumers get:
- a read-only snapshot (`session`)
- change notifications (`subscribe`)
- one narrow mutation capability (`logout`)

The auth collaborator drives `resolve()`; nothing else writes the state.
"""

from typing import Callable, List, Optional

from warehouse_admin.data.session import Session, SessionUser
from warehouse_admin.utils.logger import get_logger

logger = get_logger("warehouse_admin.buisness.session_store")

SessionListener = Callable[[Session], None]


class SessionStore:
    """
    Publish/subscribe holder for the current Session.

    Starts in the booting state (no identity, loading). Listeners are called
    with the new snapshot only when the state actually changes.
    """

    def __init__(self, on_logout: Optional[Callable[[], None]] = None):
        """
        Args:
            on_logout: Hook run by logout() before the state is reset,
                e.g. to revoke tokens with the auth backend
        """
        self._session = Session.booting()
        self._listeners: List[SessionListener] = []
        self._on_logout = on_logout

    @property
    def session(self) -> Session:
        """Current snapshot (immutable)"""
        return self._session

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """
        Register a listener.

        Returns:
            Callable that removes the listener; calling it again is a no-op
        """
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def resolve(self, identity: Optional[SessionUser]) -> Session:
        """Finish resolution with a user or with no user"""
        return self._set(Session(identity=identity, loading=False))

    def logout(self) -> Session:
        """End the session: run the logout hook, then clear the identity"""
        username = self._session.identity.username if self._session.identity else None
        if self._on_logout is not None:
            self._on_logout()
        logger.info(f"Session ended for user: {username}")
        return self._set(Session(identity=None, loading=False))

    def _set(self, session: Session) -> Session:
        if session == self._session:
            return self._session
        self._session = session
        for listener in list(self._listeners):
            listener(session)
        return session
