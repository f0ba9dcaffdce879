"""
Authorization gate – decide whether a protected surface may render.

Both functions here are pure: they read the session snapshot they are
given and return a Decision. Navigation happens in careguard.guards.
"""

from typing import Optional

from careguard.config import LOGIN_PATH, UNAUTHORIZED_PATH
from careguard.models import AccessPolicy, Decision, Session, role_name


def authenticated(session: Optional[Session], loading: bool) -> Decision:
    """Baseline gate: any authenticated session may pass."""
    if loading:
        return Decision.PENDING
    if session is None:
        return Decision.REDIRECT_LOGIN
    return Decision.ALLOW


def evaluate(session: Optional[Session], loading: bool, allowed_roles) -> Decision:
    """
    Role gate layered on the baseline gate. First match wins:

      loading                          -> PENDING
      no session                       -> REDIRECT_LOGIN
      role present, not in allow-list  -> REDIRECT_UNAUTHORIZED
      otherwise                        -> ALLOW

    A session without a role is let through. An empty allow-list sends
    every role-bearing session to the unauthorized page.
    """
    baseline = authenticated(session, loading)
    if baseline is not Decision.ALLOW:
        return baseline

    policy = AccessPolicy.coerce(allowed_roles)
    if role_name(session.role) is not None and not policy.allows(session.role):
        return Decision.REDIRECT_UNAUTHORIZED
    return Decision.ALLOW


def destination_for(decision: Decision) -> Optional[str]:
    """Path to navigate to for a decision, or None when nothing should happen."""
    if decision is Decision.REDIRECT_LOGIN:
        return LOGIN_PATH
    if decision is Decision.REDIRECT_UNAUTHORIZED:
        return UNAUTHORIZED_PATH
    return None
