"""
In-memory registry of search controllers, one per browser session.

Sessions are identified by a random token kept in a cookie. Nothing is
written to disk; restarting the server starts everyone afresh. When
more than ``MAX_SESSIONS`` are held, the least recently used one is
dropped.
"""

from __future__ import annotations

import secrets
import threading
from collections import OrderedDict
from typing import Optional, Tuple

from ..config import MAX_SESSIONS
from .controller import SearchController


class SessionStore:
    def __init__(self, max_sessions: int = MAX_SESSIONS) -> None:
        self.max_sessions = max(1, max_sessions)
        self._sessions: "OrderedDict[str, SearchController]" = OrderedDict()
        self._lock = threading.Lock()

    def get_or_create(self, session_id: Optional[str]) -> Tuple[str, SearchController]:
        """Return the controller for ``session_id``.

        Parameters
        ----------
        session_id : Optional[str]
            The token read from the session cookie, if any.

        Returns
        -------
        Tuple[str, SearchController]
            The session id to send back in the cookie and its controller.
            A missing or unknown id starts a new session with a fresh id.
        """
        with self._lock:
            if session_id and session_id in self._sessions:
                self._sessions.move_to_end(session_id)
                return session_id, self._sessions[session_id]
            new_id = secrets.token_urlsafe(16)
            controller = SearchController()
            self._sessions[new_id] = controller
            while len(self._sessions) > self.max_sessions:
                self._sessions.popitem(last=False)
            return new_id, controller

    def clear(self) -> None:
        with self._lock:
            self._sessions.clear()

    def __len__(self) -> int:
        return len(self._sessions)


sessions = SessionStore()
