"""Authenticated session context.

The token and user id live in a persistent key-value store (Streamlit's
``st.session_state`` in the app, a plain dict in tests). ``SessionStore`` is
the only code that reads or writes those keys; everything that needs an
authenticated call is handed the store explicitly.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, List, MutableMapping, Optional

logger = logging.getLogger(__name__)

TOKEN_KEY = "token"
USER_ID_KEY = "userId"
USER_KEY = "user"


@dataclass(frozen=True)
class Session:
    token: str
    user_id: str

    @property
    def auth_header(self):
        return {"Authorization": f"Bearer {self.token}"}


class SessionStore:
    def __init__(self, storage: MutableMapping[str, Any]):
        self._storage = storage
        self._teardown: List[Callable[[], None]] = []

    def load(self) -> Optional[Session]:
        token = self._storage.get(TOKEN_KEY)
        user_id = self._storage.get(USER_ID_KEY)
        if not token or not user_id:
            return None
        return Session(token=token, user_id=str(user_id))

    @property
    def user(self):
        return self._storage.get(USER_KEY)

    def begin(self, session: Session, user=None) -> None:
        self._storage[TOKEN_KEY] = session.token
        self._storage[USER_ID_KEY] = session.user_id
        if user is not None:
            self._storage[USER_KEY] = user
        logger.info("session started for user %s", session.user_id)

    def on_end(self, callback: Callable[[], None]) -> None:
        """Register a callback run once when the session ends."""
        self._teardown.append(callback)

    def end(self) -> None:
        callbacks, self._teardown = self._teardown, []
        for callback in callbacks:
            try:
                callback()
            except Exception as e:
                logger.warning("session teardown callback failed: %s", e)
        for key in (TOKEN_KEY, USER_ID_KEY, USER_KEY):
            self._storage.pop(key, None)
        logger.info("session ended")
