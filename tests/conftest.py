import json
from typing import Any, Optional
from unittest.mock import MagicMock

import pytest

from zendesk_client.auth import ZendeskAuth
from zendesk_client.client import Client
from zendesk_client.monitoring import reset_api_tracking

BASE_URL = "https://acme.zendesk.com/api/v2"


def make_response(json_data: Optional[Any] = None, status_code: int = 200, text: Optional[str] = None) -> MagicMock:
    """Build a mock requests response."""
    resp = MagicMock()
    resp.status_code = status_code
    resp.url = BASE_URL

    if text is not None:
        resp.text = text
        resp.content = text.encode()
        resp.json.side_effect = ValueError("Expecting value: line 1 column 1 (char 0)")
    elif json_data is None:
        resp.text = ""
        resp.content = b""
    else:
        body = json.dumps(json_data)
        resp.text = body
        resp.content = body.encode()
        resp.json.return_value = json_data
    return resp


@pytest.fixture(autouse=True)
def _reset_tracking():
    reset_api_tracking()
    yield
    reset_api_tracking()


@pytest.fixture
def auth():
    return ZendeskAuth(
        email="agent@acme.com",
        api_token="test-api-token",
        base_url=BASE_URL,
        timeout=30.0,
    )


@pytest.fixture
def session():
    """Mock requests.Session; set session.request.return_value per test."""
    mock_session = MagicMock()
    mock_session.headers = {}
    return mock_session


@pytest.fixture
def client(auth, session):
    return Client(auth, session=session)
