import os
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Ensure predictable environment variables for tests before importing the app.
BASE_DIR = Path(__file__).resolve().parents[1]

if str(BASE_DIR) not in sys.path:
    sys.path.insert(0, str(BASE_DIR))

os.environ.setdefault("USER_STORE_BACKEND", "memory")
os.environ.setdefault("TOKEN_BACKEND", "jwt")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("EXPOSE_ERROR_DETAILS", "false")

import app.main as main  # noqa: E402  (import after env vars are set)
from app.database import InMemoryUserStore  # noqa: E402
from app.services.account_flow import AccountVerificationFlow, get_account_flow  # noqa: E402
from app.services.auth_service import JwtTokenService  # noqa: E402

TEST_SECRET = "test-secret"


class FakeClock:
    def __init__(self):
        self.now = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, seconds: int):
        self.now += timedelta(seconds=seconds)


class RecordingCodeSender:
    def __init__(self):
        self.sent = []

    def send(self, phone_number: str, code: str) -> None:
        self.sent.append((phone_number, code))

    def last_code(self, phone_number: str) -> str:
        codes = [code for number, code in self.sent if number == phone_number]
        return codes[-1]


@pytest.fixture()
def store():
    return InMemoryUserStore()


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def code_sender():
    return RecordingCodeSender()


@pytest.fixture()
def flow(store, clock, code_sender):
    return AccountVerificationFlow(
        store=store,
        token_service=JwtTokenService(secret=TEST_SECRET),
        code_sender=code_sender,
        clock=clock,
        otp_ttl_seconds=60,
    )


@pytest.fixture()
def client(flow):
    """Provide a TestClient wired to an in-memory flow."""
    main.app.dependency_overrides[get_account_flow] = lambda: flow
    with TestClient(main.app) as test_client:
        yield test_client
    main.app.dependency_overrides.pop(get_account_flow, None)
