"""
Server-side role guard for Flask views.

Applies the same gate as the client-side guards; a redirect decision
becomes a 401 or 403 JSON error instead of a navigation.
"""

from functools import wraps
from typing import Any, Dict, Optional

import jwt
from flask import g, jsonify, request

from careguard.config import JWT_ALGORITHM, SECRET_KEY
from careguard.gate import evaluate
from careguard.models import AccessPolicy, Decision, Session, role_name


def verify_token(token: str, secret: str = SECRET_KEY) -> Optional[Dict[str, Any]]:
    """Verify a JWT and return the decoded payload (or None)."""
    try:
        return jwt.decode(token, secret, algorithms=[JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        return None
    except jwt.InvalidTokenError:
        return None


def bearer_session() -> Optional[Session]:
    """Build a Session from the request's Bearer token, if it is valid."""
    auth_header = request.headers.get("Authorization", "")
    parts = auth_header.split(" ")
    if len(parts) != 2 or parts[0].lower() != "bearer" or not parts[1]:
        return None

    payload = verify_token(parts[1])
    if not payload:
        return None

    user_id = payload.get("id") or payload.get("sub")
    if user_id is None:
        return None
    return Session(
        user_id=str(user_id),
        email=str(payload.get("email") or ""),
        role=role_name(payload.get("role")),
    )


def role_required(*roles, session_loader=bearer_session):
    """Decorator that lets a view run only for sessions allowed by *roles*."""
    policy = AccessPolicy.of(*roles)

    def decorator(f):
        @wraps(f)
        def decorated(*args, **kwargs):
            session = session_loader()
            decision = evaluate(session, False, policy)

            if decision is Decision.REDIRECT_LOGIN:
                if request.headers.get("Authorization"):
                    message = "Unauthorized - Invalid or expired token"
                else:
                    message = "Unauthorized - Please login first"
                return jsonify({"error": message, "code": "UNAUTHORIZED"}), 401

            # The API requires a role claim; role-less sessions are only
            # tolerated by the client-side gate.
            if decision is Decision.REDIRECT_UNAUTHORIZED or role_name(session.role) is None:
                return jsonify({
                    "error": f"Forbidden - Required role: {policy.describe()}",
                    "code": "FORBIDDEN",
                }), 403

            g.session = session
            return f(*args, **kwargs)

        return decorated

    return decorator
