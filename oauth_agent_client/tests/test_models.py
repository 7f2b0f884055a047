"""Tests for request encoding and response validation."""
from urllib.parse import parse_qsl

import pytest
from pydantic import ValidationError

from oauth_agent_client.errors import OAuthAgentRemoteError
from oauth_agent_client.models import (
    EndLoginRequest,
    LogoutResponse,
    SessionResponse,
    StartLoginRequest,
    StartLoginResponse,
)


def test_start_login_form_round_trip():
    params = {"ui_locales": "sv en", "login_hint": "tomas@example.com", "acr_values": "urn:se:curity:pwd"}
    form = StartLoginRequest(extra_authorization_parameters=params).to_form()
    assert dict(parse_qsl(form)) == params


def test_start_login_form_empty():
    assert StartLoginRequest().to_form() == ""
    assert StartLoginRequest(extra_authorization_parameters={}).to_form() == ""


def test_end_login_request_strips_question_mark():
    assert EndLoginRequest.from_query_string("?state=a&code=b").search_params == "state=a&code=b"
    assert EndLoginRequest.from_query_string("state=a&code=b").search_params == "state=a&code=b"


def test_end_login_request_from_params():
    assert EndLoginRequest.from_params({"response": "ey.jwt"}).search_params == "response=ey.jwt"
    pairs = (p for p in [("state", "a"), ("error", "access_denied")])
    assert EndLoginRequest.from_params(pairs).search_params == "state=a&error=access_denied"


def test_session_response_scenario():
    r = SessionResponse.model_validate(
        {"is_logged_in": True, "id_token_claims": {"sub": "x"}, "access_token_expires_in": 300}
    )
    assert r.is_logged_in is True
    assert r.id_token_claims["sub"] == "x"
    assert r.access_token_expires_in == 300
    assert r.csrf_token is None


def test_session_response_requires_is_logged_in():
    with pytest.raises(ValidationError):
        SessionResponse.model_validate({"id_token_claims": {"sub": "x"}})


def test_session_response_rejects_non_object_claims():
    with pytest.raises(ValidationError):
        SessionResponse.model_validate({"is_logged_in": True, "id_token_claims": "sub=x"})


def test_session_response_null_fields_are_absent():
    r = SessionResponse.model_validate({"is_logged_in": False, "id_token_claims": None})
    assert r.id_token_claims is None


def test_start_login_response_requires_authorization_url():
    with pytest.raises(ValidationError):
        StartLoginResponse.model_validate({})


def test_responses_are_frozen():
    r = LogoutResponse.model_validate({"logout_url": "https://idsvr/logout"})
    with pytest.raises(ValidationError):
        r.logout_url = "https://elsewhere"


def test_remote_error_to_dict():
    assert OAuthAgentRemoteError(400, "invalid_request", "bad param").to_dict() == {
        "error_code": "invalid_request",
        "detailed_error": "bad param",
    }
    assert OAuthAgentRemoteError(500, "server_error").to_dict() == {"error_code": "server_error"}
