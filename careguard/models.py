"""
Domain types shared by the gate, the auth state and the guards.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Tuple


class Role(str, Enum):
    CLINICIAN = "CLINICIAN"
    ADMIN = "ADMIN"
    CAREGIVER = "CAREGIVER"
    PATIENT = "PATIENT"


class Decision(str, Enum):
    """Outcome of one gate evaluation."""
    PENDING = "PENDING"
    ALLOW = "ALLOW"
    REDIRECT_LOGIN = "REDIRECT_LOGIN"
    REDIRECT_UNAUTHORIZED = "REDIRECT_UNAUTHORIZED"


def role_name(role) -> Optional[str]:
    """Role member or raw string to its name, unchanged; None and '' -> None."""
    if role is None:
        return None
    if isinstance(role, Role):
        return role.value
    value = str(role)
    return value or None


@dataclass(frozen=True)
class Session:
    """An authenticated principal as reported by the identity service."""
    user_id: str
    email: str = ""
    first_name: str = ""
    last_name: str = ""
    role: Optional[str] = None   # may be absent or an unrecognised value

    @classmethod
    def from_dict(cls, data: dict) -> "Session":
        """Build a Session from an identity-service user payload."""
        return cls(
            user_id=str(data["id"]),
            email=str(data.get("email") or ""),
            first_name=str(data.get("firstName") or data.get("first_name") or ""),
            last_name=str(data.get("lastName") or data.get("last_name") or ""),
            role=role_name(data.get("role")),
        )

    @property
    def display_name(self) -> str:
        name = f"{self.first_name} {self.last_name}".strip()
        return name or self.email or self.user_id


@dataclass(frozen=True)
class AccessPolicy:
    """Ordered allow-list of roles for one protected surface."""
    allowed_roles: Tuple[str, ...] = ()

    @classmethod
    def of(cls, *roles) -> "AccessPolicy":
        names = []
        for r in roles:
            name = role_name(r)
            if name is not None and name not in names:
                names.append(name)
        return cls(allowed_roles=tuple(names))

    @classmethod
    def coerce(cls, roles) -> "AccessPolicy":
        """Accept an AccessPolicy or any iterable of roles."""
        if isinstance(roles, AccessPolicy):
            return roles
        if roles is None:
            return cls()
        if isinstance(roles, (str, Role)):
            return cls.of(roles)
        return cls.of(*roles)

    def allows(self, role) -> bool:
        return role_name(role) in self.allowed_roles

    def describe(self) -> str:
        return " or ".join(self.allowed_roles) if self.allowed_roles else "(none)"


@dataclass(frozen=True)
class AuthState:
    """Snapshot of the observed session state."""
    user: Optional[Session] = None
    loading: bool = True

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None


def parse_roles(text: str) -> Iterable[str]:
    """Split 'CLINICIAN, admin' into upper-cased role names."""
    return [p.strip().upper() for p in text.split(",") if p.strip()]
