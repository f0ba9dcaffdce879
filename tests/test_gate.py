"""
Unit tests for the authorization gate decision functions.
"""

import pytest

from careguard.config import LOGIN_PATH, UNAUTHORIZED_PATH
from careguard.gate import authenticated, destination_for, evaluate
from careguard.models import AccessPolicy, Decision, Role, Session


STAFF = ["CLINICIAN", "ADMIN"]


def user(role):
    return Session(user_id="u1", email="u1@example.com", role=role)


# ── Tests: evaluate ──────────────────────────────────────────────────

@pytest.mark.parametrize("session", [None, user("ADMIN"), user("PATIENT"), user(None)])
def test_loading_is_always_pending(session):
    assert evaluate(session, True, STAFF) is Decision.PENDING
    assert evaluate(session, True, []) is Decision.PENDING


def test_no_session_redirects_to_login():
    assert evaluate(None, False, STAFF) is Decision.REDIRECT_LOGIN
    assert evaluate(None, False, []) is Decision.REDIRECT_LOGIN


def test_role_outside_allow_list_is_unauthorized():
    assert evaluate(user("PATIENT"), False, STAFF) is Decision.REDIRECT_UNAUTHORIZED
    assert evaluate(user("CAREGIVER"), False, STAFF) is Decision.REDIRECT_UNAUTHORIZED


def test_role_in_allow_list_is_allowed():
    assert evaluate(user("ADMIN"), False, STAFF) is Decision.ALLOW
    assert evaluate(user("CLINICIAN"), False, STAFF) is Decision.ALLOW


def test_empty_allow_list_locks_everyone_out():
    assert evaluate(user("ADMIN"), False, []) is Decision.REDIRECT_UNAUTHORIZED
    assert evaluate(user("ADMIN"), False, AccessPolicy()) is Decision.REDIRECT_UNAUTHORIZED


def test_session_without_role_falls_through_to_allow():
    assert evaluate(user(None), False, STAFF) is Decision.ALLOW
    assert evaluate(user(""), False, []) is Decision.ALLOW


def test_unknown_role_value_is_unauthorized_not_an_error():
    assert evaluate(user("nurse"), False, STAFF) is Decision.REDIRECT_UNAUTHORIZED
    assert evaluate(user("admin"), False, STAFF) is Decision.REDIRECT_UNAUTHORIZED


def test_allow_list_accepts_enum_members_and_policies():
    assert evaluate(user("ADMIN"), False, [Role.ADMIN]) is Decision.ALLOW
    assert evaluate(user(Role.PATIENT), False, AccessPolicy.of(Role.PATIENT)) is Decision.ALLOW
    assert evaluate(user("ADMIN"), False, "ADMIN") is Decision.ALLOW


def test_evaluate_is_repeatable():
    session = user("PATIENT")
    first = evaluate(session, False, STAFF)
    assert evaluate(session, False, STAFF) is first


# ── Tests: baseline gate ─────────────────────────────────────────────

def test_authenticated_ignores_roles():
    assert authenticated(None, True) is Decision.PENDING
    assert authenticated(None, False) is Decision.REDIRECT_LOGIN
    assert authenticated(user("PATIENT"), False) is Decision.ALLOW
    assert authenticated(user(None), False) is Decision.ALLOW


# ── Tests: destination_for ───────────────────────────────────────────

def test_destination_for_redirects_only():
    assert destination_for(Decision.REDIRECT_LOGIN) == LOGIN_PATH == "/login"
    assert destination_for(Decision.REDIRECT_UNAUTHORIZED) == UNAUTHORIZED_PATH == "/unauthorized"
    assert destination_for(Decision.ALLOW) is None
    assert destination_for(Decision.PENDING) is None


# ── Tests: raw role matching ─────────────────────────────────────────

def test_whitespace_only_role_is_present_and_unauthorized():
    assert evaluate(user("   "), False, STAFF) is Decision.REDIRECT_UNAUTHORIZED


def test_padded_role_does_not_match_allow_list():
    assert evaluate(user(" ADMIN "), False, ["ADMIN"]) is Decision.REDIRECT_UNAUTHORIZED
