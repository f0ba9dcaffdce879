"""
Unit tests for the domain types and configuration helpers.
"""

import pytest

from careguard.config import get_env
from careguard.models import AccessPolicy, AuthState, Role, Session, parse_roles


# ── Tests: get_env ───────────────────────────────────────────────────

def test_get_env_ok(monkeypatch):
    monkeypatch.setenv("API_BASE_URL", "http://identity:3001")
    assert get_env("API_BASE_URL") == "http://identity:3001"


def test_get_env_missing_exits(monkeypatch, capsys):
    monkeypatch.delenv("MISSING_ENV", raising=False)
    with pytest.raises(SystemExit) as e:
        get_env("MISSING_ENV")
    assert e.value.code == 1
    err = capsys.readouterr().err
    assert "ERROR: env var MISSING_ENV is not set" in err


# ── Tests: AccessPolicy ──────────────────────────────────────────────

def test_policy_keeps_order_and_drops_duplicates():
    policy = AccessPolicy.of("CLINICIAN", Role.ADMIN, "CLINICIAN", None, "")
    assert policy.allowed_roles == ("CLINICIAN", "ADMIN")
    assert policy.describe() == "CLINICIAN or ADMIN"


def test_policy_allows_by_name():
    policy = AccessPolicy.of(Role.CAREGIVER)
    assert policy.allows("CAREGIVER")
    assert policy.allows(Role.CAREGIVER)
    assert not policy.allows("PATIENT")
    assert not policy.allows(None)


def test_empty_policy_describes_none():
    assert AccessPolicy.coerce(None).describe() == "(none)"


def test_parse_roles():
    assert parse_roles(" clinician, ADMIN ,,") == ["CLINICIAN", "ADMIN"]
    assert parse_roles("") == []


# ── Tests: Session ───────────────────────────────────────────────────

def test_session_from_identity_payload():
    s = Session.from_dict({
        "id": 42, "email": "sarah@example.com",
        "firstName": "Sarah", "lastName": "Johnson", "role": "CLINICIAN",
    })
    assert s.user_id == "42"
    assert s.role == "CLINICIAN"
    assert s.display_name == "Sarah Johnson"


def test_session_from_payload_without_role():
    s = Session.from_dict({"id": "7", "email": "x@example.com", "role": None})
    assert s.role is None
    assert s.display_name == "x@example.com"


def test_auth_state_defaults_to_loading():
    state = AuthState()
    assert state.loading is True
    assert state.is_authenticated is False
