"""Registry of known accounts and characters and who is online."""

from __future__ import annotations

import threading
import weakref
from typing import Any, Iterable, Protocol


class UserSource(Protocol):
    def users(self) -> Iterable[Any]: ...

    def players(self) -> Iterable[Any]: ...


class UserAccess:
    """Known accounts and characters, and the sessions logged in as them.

    Sessions are held weakly: a session that has been dropped no longer
    counts as online.
    """

    def __init__(self) -> None:
        self.users: dict[int, Any] = {}
        self.players: dict[int, Any] = {}
        self.player_names: dict[str, int] = {}
        self._user_sessions: dict[int, weakref.ref] = {}
        self._player_sessions: dict[int, weakref.ref] = {}
        self._lock = threading.RLock()

    def clear(self) -> None:
        """Forget every online session."""
        with self._lock:
            self._user_sessions.clear()
            self._player_sessions.clear()

    def load(self, store: UserSource) -> None:
        """Register every account and character that ``store`` yields."""
        for user in store.users():
            self.add_user(user)
        for player in store.players():
            self.add_player(player)

    def add_user(self, user: Any) -> None:
        with self._lock:
            self.users.setdefault(user.account_code, user)

    def add_player(self, player: Any) -> None:
        with self._lock:
            self.players.setdefault(player.player_code, player)
            self.player_names.setdefault(player.name, player.player_code)

    @staticmethod
    def _claim(sessions: dict[int, weakref.ref], code: int, session: Any) -> bool:
        current = sessions.get(code)
        if current is not None and current() is not None:
            return False
        sessions[code] = weakref.ref(session)
        return True

    def access_user(self, account_code: int, session: Any) -> bool:
        """Log ``session`` in to an account; False if one is already in."""
        with self._lock:
            return self._claim(self._user_sessions, account_code, session)

    def access_player(self, player_code: int, session: Any) -> bool:
        """Attach ``session`` to a character; False if one already is."""
        with self._lock:
            return self._claim(self._player_sessions, player_code, session)

    def is_player_online(self, player_code: int) -> bool:
        with self._lock:
            ref = self._player_sessions.get(player_code)
            return ref is not None and ref() is not None

    def is_user_online(self, account_code: int) -> bool:
        with self._lock:
            ref = self._user_sessions.get(account_code)
            return ref is not None and ref() is not None

    def has_player_name(self, name: str) -> bool:
        return name in self.player_names