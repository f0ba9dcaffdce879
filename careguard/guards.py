"""
Reactive guards – re-run the gate whenever the watched inputs change and
send at most one navigation per change to the router.
"""

import sys
from typing import Any, List, Optional

from careguard.gate import authenticated, destination_for, evaluate
from careguard.models import AccessPolicy, AuthState, Decision


class HistoryRouter:
    """Router that records every navigation request."""

    def __init__(self, verbose: bool = False):
        self.history: List[str] = []
        self.verbose = verbose

    def push(self, path: str) -> None:
        self.history.append(path)
        if self.verbose:
            print(f"[router] -> {path}", file=sys.stderr)

    @property
    def current(self) -> Optional[str]:
        return self.history[-1] if self.history else None


class AuthGuard:
    """
    Baseline guard: requires any authenticated session.

    With ``watch=False`` the guard does not subscribe to the store, so it
    only navigates when ``refresh`` is called. RoleGuard keeps such a guard
    as its baseline and only calls its ``decide``.
    """

    def __init__(self, store, router, watch: bool = True):
        self.store = store
        self.router = router
        self.decision: Decision = Decision.PENDING
        self._last_inputs: Any = None
        self._unsubscribe = None
        if watch:
            self._unsubscribe = store.subscribe(self._on_change)
            self._on_change(store.state)

    def decide(self, state: AuthState) -> Decision:
        return authenticated(state.user, state.loading)

    def _inputs(self, state: AuthState) -> Any:
        return (state.user, state.loading)

    def _on_change(self, state: AuthState) -> None:
        inputs = self._inputs(state)
        if inputs == self._last_inputs:
            return
        self._last_inputs = inputs

        self.decision = self.decide(state)
        path = destination_for(self.decision)
        if path is not None:
            self.router.push(path)

    def refresh(self) -> Decision:
        """Re-run against the store's current state (no-op if unchanged)."""
        self._on_change(self.store.state)
        return self.decision

    def render(self, content):
        """Return *content* when access is allowed, else None."""
        return content if self.decision is Decision.ALLOW else None

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None


class RoleGuard(AuthGuard):
    """Role gate layered on a non-navigating baseline AuthGuard."""

    def __init__(self, store, router, allowed_roles, watch: bool = True):
        self.policy = AccessPolicy.coerce(allowed_roles)
        self.inner = AuthGuard(store, router, watch=False)
        super().__init__(store, router, watch=watch)

    def decide(self, state: AuthState) -> Decision:
        baseline = self.inner.decide(state)
        if baseline is not Decision.ALLOW:
            return baseline
        return evaluate(state.user, state.loading, self.policy)

    def _inputs(self, state: AuthState) -> Any:
        return (state.user, state.loading, self.policy)

    def set_allowed_roles(self, allowed_roles) -> Decision:
        self.policy = AccessPolicy.coerce(allowed_roles)
        return self.refresh()
