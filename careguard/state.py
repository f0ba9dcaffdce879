"""
Observable auth state – the session snapshot the guards watch.

The store owns {user, loading} and the access token; the identity
client that talks to the auth service is injected.
"""

import sys
from typing import Callable, List, Optional

from careguard.models import AuthState, Session

Listener = Callable[[AuthState], None]


class TokenStore:
    """In-memory holder for the current access token."""

    def __init__(self, token: Optional[str] = None):
        self._token = token

    def get(self) -> Optional[str]:
        return self._token

    def set(self, token: str) -> None:
        self._token = token

    def remove(self) -> None:
        self._token = None


class AuthStore:
    """Holds the current AuthState and notifies subscribers when it changes."""

    def __init__(self, identity_client, token_store: Optional[TokenStore] = None):
        self.identity = identity_client
        self.tokens = token_store if token_store is not None else TokenStore()
        self._state = AuthState(user=None, loading=True)
        self._listeners: List[Listener] = []

    # ── Observation ──────────────────────────────────────────────────

    @property
    def state(self) -> AuthState:
        return self._state

    @property
    def user(self) -> Optional[Session]:
        return self._state.user

    @property
    def is_loading(self) -> bool:
        return self._state.loading

    @property
    def is_authenticated(self) -> bool:
        return self._state.is_authenticated

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register *listener*; returns a callable that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set_state(self, user: Optional[Session], loading: bool) -> None:
        new_state = AuthState(user=user, loading=loading)
        if new_state == self._state:
            return
        self._state = new_state
        for listener in list(self._listeners):
            try:
                listener(new_state)
            except Exception as e:
                print(f"[auth] Listener failed: {e}", file=sys.stderr)

    # ── Lifecycle ────────────────────────────────────────────────────

    def begin_loading(self) -> None:
        self._set_state(self._state.user, True)

    def set_user(self, user: Optional[Session]) -> None:
        """Replace the user directly and finish loading."""
        self._set_state(user, False)

    def load(self) -> None:
        """Resolve the current user from the stored token, if any."""
        if not self.tokens.get():
            self._set_state(None, False)
            return

        try:
            user = self.identity.current_user()
        except Exception as e:
            print(f"[auth] Failed to load user: {e}", file=sys.stderr)
            self.tokens.remove()
            self._set_state(None, False)
            return
        self._set_state(user, False)

    def login(self, email: str, password: str) -> Session:
        user, access_token = self.identity.login(email, password)
        self.tokens.set(access_token)
        self._set_state(user, False)
        return user

    def register(self, email: str, password: str, first_name: str,
                 last_name: str, role: str) -> Session:
        user, access_token = self.identity.register(
            email, password, first_name, last_name, role)
        self.tokens.set(access_token)
        self._set_state(user, False)
        return user

    def logout(self) -> None:
        try:
            self.identity.logout()
        except Exception as e:
            print(f"[auth] Logout error: {e}", file=sys.stderr)
        finally:
            self.tokens.remove()
            self._set_state(None, False)

    def refresh_user(self) -> None:
        try:
            user = self.identity.current_user()
        except Exception as e:
            print(f"[auth] Failed to refresh user: {e}", file=sys.stderr)
            user = None
        self._set_state(user, self._state.loading)
