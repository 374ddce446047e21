"""Root conftest — shared test configuration and identities."""

import os

import pytest

# Must be set before backoffice.main builds the gate from settings
os.environ.setdefault("ADMIN_EMAILS", "admin@example.com")
os.environ.setdefault("IDENTITY_HEADER", "X-Forwarded-Email")
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)

from backoffice.core.authorization import Identity, build_authorization_gate  # noqa: E402

ADMIN_EMAIL = "admin@example.com"


@pytest.fixture
def admin_identity() -> Identity:
    return Identity(email=ADMIN_EMAIL, name="Admin")


@pytest.fixture
def outsider_identity() -> Identity:
    return Identity(email="visitor@example.com")


@pytest.fixture
def gate():
    return build_authorization_gate([ADMIN_EMAIL])
