"""
Centralised configuration constants and environment helpers.
"""

import os
import sys

from dotenv import load_dotenv

load_dotenv()

# ── Roles ────────────────────────────────────────────────────────────
# Surfaces that create clinical records (new patient, new assessment).
CLINICAL_STAFF_ROLES = ("CLINICIAN", "ADMIN")

# ── Navigation destinations ──────────────────────────────────────────
LOGIN_PATH = "/login"
UNAUTHORIZED_PATH = "/unauthorized"

# ── Identity service ─────────────────────────────────────────────────
API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:3001")
REQUEST_TIMEOUT_SECONDS = 10

# ── Bearer tokens (verified, never issued here) ──────────────────────
SECRET_KEY = os.getenv("JWT_SECRET_KEY", "dev-secret-key-change-in-production")
JWT_ALGORITHM = "HS256"


def get_env(name: str) -> str:
    """Return an environment variable or exit with an error message."""
    value = os.getenv(name)
    if not value:
        print(f"ERROR: env var {name} is not set", file=sys.stderr)
        sys.exit(1)
    return value
