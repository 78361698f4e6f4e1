from unittest.mock import patch

import requests

from conftest import BASE_URL, make_response
from zendesk_client.auth import ZendeskAuth
from zendesk_client.config import ZendeskSettings


def test_auth_object_uses_token_username(auth):
    basic = auth.get_auth_object()

    assert basic.username == "agent@acme.com/token"
    assert basic.password == "test-api-token"


def test_auth_header():
    auth = ZendeskAuth(email="a@b.c", api_token="tok", base_url=BASE_URL)

    # base64("a@b.c/token:tok")
    assert auth.get_auth_header() == "Basic YUBiLmMvdG9rZW46dG9r"


def test_from_settings_reads_secret():
    settings = ZendeskSettings(subdomain="acme", email="a@b.c", api_token="tok", timeout=5, _env_file=None)

    auth = ZendeskAuth.from_settings(settings)

    assert auth.api_token == "tok"
    assert auth.base_url == "https://acme.zendesk.com/api/v2"
    assert auth.timeout == 5


@patch("zendesk_client.auth.requests.get")
def test_validate_credentials_success(mock_get, auth):
    mock_get.return_value = make_response({"user": {"id": 1, "name": "Agent"}})

    assert auth.validate_credentials() == (True, None)
    assert mock_get.call_args.args[0] == f"{BASE_URL}/users/me.json"


@patch("zendesk_client.auth.requests.get")
def test_validate_credentials_anonymous_user(mock_get, auth):
    mock_get.return_value = make_response({"user": {"id": None, "name": "Anonymous user"}})

    is_valid, error = auth.validate_credentials()

    assert is_valid is False
    assert error == "Credentials were not accepted"


@patch("zendesk_client.auth.requests.get")
def test_validate_credentials_http_error(mock_get, auth):
    mock_get.return_value = make_response({"error": "Couldn't authenticate you"}, status_code=401)

    is_valid, error = auth.validate_credentials()

    assert is_valid is False
    assert error.startswith("401")


@patch("zendesk_client.auth.requests.get")
def test_validate_credentials_transport_error(mock_get, auth):
    mock_get.side_effect = requests.Timeout("timed out")

    assert auth.validate_credentials() == (False, "timed out")


def test_validate_credentials_missing_token():
    auth = ZendeskAuth(email="a@b.c", api_token="", base_url=BASE_URL)

    assert auth.validate_credentials() == (False, "Missing Zendesk email or API token")


@patch("zendesk_client.auth.requests.get")
def test_validate_credentials_non_json_body(mock_get, auth):
    mock_get.return_value = make_response(text="<html>Help Center closed</html>")

    assert auth.validate_credentials() == (False, "Invalid JSON from users/me")
