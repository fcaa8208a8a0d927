"""Test configuration and fixtures."""

import json
import os
from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock

import pytest
import requests

from core.settings import Settings
from payu.client import PayU

CLIENT_ID = 145227
CLIENT_SECRET = "12f071174cb7eb79d4aac5bc2f07563f"
MERCHANT_POS_ID = 145227
SECOND_KEY = "13a980d4f851f3d9a1cfc792fb1f5e50"


class FakeClock:
    """Manually advanced UTC clock."""

    def __init__(self, start=None):
        self.now = start or datetime(2024, 1, 1, 12, 0, 0, tzinfo=UTC)

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now = self.now + timedelta(seconds=seconds)


def build_response(status_code, json_data=None, text=""):
    """Build a real ``requests.Response`` so raise_for_status behaves."""
    response = requests.Response()
    response.status_code = status_code
    response.url = "https://secure.snd.payu.com/test"
    response.encoding = "utf-8"
    if json_data is not None:
        response._content = json.dumps(json_data).encode("utf-8")
        response.headers["Content-Type"] = "application/json"
    else:
        response._content = text.encode("utf-8")
    return response


def token_body(access_token="test_access_token", expires_in=43199):
    return {
        "access_token": access_token,
        "token_type": "bearer",
        "expires_in": expires_in,
        "grant_type": "client_credentials",
    }


@pytest.fixture(autouse=True)
def setup_test_environment():
    """Setup test environment variables before each test."""
    original_env = dict(os.environ)

    os.environ.update(
        {
            "PAYU_CLIENT_ID": str(CLIENT_ID),
            "PAYU_CLIENT_SECRET": CLIENT_SECRET,
            "PAYU_MERCHANT_POS_ID": str(MERCHANT_POS_ID),
            "PAYU_SECOND_KEY": SECOND_KEY,
            "PAYU_SANDBOX": "true",
            "APP_NAME": "Test PayU Client",
            "ENVIRONMENT": "development",
            "DISABLE_TRACING": "true",
        }
    )

    yield

    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def make_response():
    return build_response


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def session(make_response):
    """Mocked requests session answering the token endpoint successfully."""
    session = MagicMock(spec=requests.Session)
    session.post.return_value = make_response(200, token_body())
    return session


@pytest.fixture
def payu(session):
    return PayU(
        CLIENT_ID,
        CLIENT_SECRET,
        MERCHANT_POS_ID,
        SECOND_KEY,
        sandbox=True,
        session=session,
    )


@pytest.fixture
def mock_settings():
    return Settings(
        PAYU_CLIENT_ID=CLIENT_ID,
        PAYU_CLIENT_SECRET=CLIENT_SECRET,
        PAYU_MERCHANT_POS_ID=MERCHANT_POS_ID,
        PAYU_SECOND_KEY=SECOND_KEY,
        PAYU_SANDBOX=True,
        APP_NAME="Test PayU Client",
        ENVIRONMENT="development",
    )
