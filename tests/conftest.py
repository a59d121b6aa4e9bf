import itertools
import os
import tempfile
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

TEST_DB = Path(tempfile.mkdtemp(prefix="dashboard-tests-")) / "test.db"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{TEST_DB}"
# Empty values keep a local .env from enabling the external services
for name in ("GOOGLE_SHEET_ID", "GOOGLE_CLIENT_EMAIL", "GOOGLE_PRIVATE_KEY", "STRIPE_SECRET_KEY", "STRIPE_PRO_PRICE_ID"):
    os.environ[name] = ""

from dashboard.main import app  # noqa: E402

PASSWORD = "correct-horse-battery"
_emails = itertools.count(1)


@pytest.fixture()
def client():
    """Client against a fresh local store seeded with the sample rows."""
    TEST_DB.unlink(missing_ok=True)
    with TestClient(app) as test_client:
        yield test_client
    TEST_DB.unlink(missing_ok=True)


def register(client: TestClient, email: str | None = None, **fields) -> dict:
    body = {
        "name": "Test Owner",
        "email": email or f"user{next(_emails)}@example.com",
        "password": PASSWORD,
        **fields,
    }
    response = client.post("/users/register", json=body)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture()
def login_as(client):
    """
    Register a profile holding `role` and return its Authorization headers.

    Roles other than owner are chosen through onboarding.
    """
    def _login_as(role: str = "owner") -> dict[str, str]:
        token = register(client)["accessToken"]
        headers = {"Authorization": f"Bearer {token}"}
        if role != "owner":
            response = client.post("/users/me/onboarding", json={"role": role}, headers=headers)
            assert response.status_code == 200, response.text
        return headers

    return _login_as
