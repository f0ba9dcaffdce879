"""
Identity collaborators – where Session objects come from.

The gate never calls these directly; they feed AuthStore (HTTP client)
or server-side session loaders (database lookup).
"""

from typing import Optional, Tuple

import requests
from sqlalchemy import text

from careguard.config import API_BASE_URL, REQUEST_TIMEOUT_SECONDS
from careguard.models import Session, role_name


class IdentityError(RuntimeError):
    """The identity service rejected a request or could not be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class HttpIdentityClient:
    """Thin client for the auth service's /api/auth endpoints."""

    def __init__(self, token_store, base_url: str = API_BASE_URL,
                 http=None, timeout: float = REQUEST_TIMEOUT_SECONDS):
        self.tokens = token_store
        self.base_url = base_url.rstrip("/")
        self.http = http if http is not None else requests.Session()
        self.timeout = timeout

    def _headers(self) -> dict:
        token = self.tokens.get()
        return {"Authorization": f"Bearer {token}"} if token else {}

    def _call(self, method: str, path: str, json=None) -> dict:
        url = f"{self.base_url}{path}"
        try:
            resp = self.http.request(method, url, json=json,
                                     headers=self._headers(), timeout=self.timeout)
        except requests.RequestException as e:
            raise IdentityError(f"{method} {path} failed: {e}") from e

        if resp.status_code >= 400:
            try:
                detail = resp.json().get("error", resp.text)
            except ValueError:
                detail = resp.text
            raise IdentityError(f"{method} {path} -> {resp.status_code}: {detail}",
                                status_code=resp.status_code)
        if not resp.content:
            return {}
        return resp.json()

    def _signed_in(self, path: str, payload: dict) -> Tuple[Session, str]:
        body = self._call("POST", path, json=payload)
        data = body.get("data") or {}
        if "user" not in data or "accessToken" not in data:
            raise IdentityError(f"{path} response is missing user or accessToken.")
        return Session.from_dict(data["user"]), data["accessToken"]

    def login(self, email: str, password: str) -> Tuple[Session, str]:
        return self._signed_in("/api/auth/login",
                               {"email": email, "password": password})

    def register(self, email: str, password: str, first_name: str,
                 last_name: str, role: str) -> Tuple[Session, str]:
        """Create an account; the service signs the new user in."""
        return self._signed_in("/api/auth/register", {
            "email": email,
            "password": password,
            "firstName": first_name,
            "lastName": last_name,
            "role": role_name(role),
        })

    def current_user(self) -> Session:
        body = self._call("GET", "/api/auth/me")
        user = (body.get("data") or {}).get("user")
        if not user:
            raise IdentityError("No user in /api/auth/me response.")
        return Session.from_dict(user)

    def logout(self) -> None:
        self._call("POST", "/api/auth/logout")


def load_session(engine, user_id: str) -> Optional[Session]:
    """Look up a user row by id and return it as a Session (or None)."""
    sql = text("""
        SELECT id, email, first_name, last_name, role
        FROM users
        WHERE id = :id
    """)
    with engine.connect() as conn:
        row = conn.execute(sql, {"id": user_id}).mappings().first()

    if not row:
        return None

    return Session(
        user_id=str(row["id"]),
        email=str(row["email"] or ""),
        first_name=str(row["first_name"] or ""),
        last_name=str(row["last_name"] or ""),
        role=role_name(row["role"]),
    )
