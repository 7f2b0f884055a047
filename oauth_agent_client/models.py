"""
Request and response types for the OAuth Agent API.
Responses are validated at the boundary: field names match the Agent's JSON, unknown fields are ignored,
and optional fields stay None unless the Agent sent them.
"""
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlencode

from pydantic import BaseModel, ConfigDict, NonNegativeInt


@dataclass(frozen=True)
class StartLoginRequest:
    """
    Extra authorization request parameters (scope, login_hint, ui_locales, ...).
    Each one must be allowed in the token handler application's configuration.
    """

    extra_authorization_parameters: Mapping[str, str] | None = None

    def to_form(self) -> str:
        """URL-encoded form body; empty string when there are no parameters."""
        if not self.extra_authorization_parameters:
            return ""
        return urlencode(dict(self.extra_authorization_parameters))


@dataclass(frozen=True)
class EndLoginRequest:
    """The current page's query string (authorization response parameters), without a leading "?"."""

    search_params: str

    @classmethod
    def from_query_string(cls, query: str) -> "EndLoginRequest":
        return cls(search_params=query.removeprefix("?"))

    @classmethod
    def from_params(cls, params: Mapping[str, str] | Iterable[tuple[str, str]]) -> "EndLoginRequest":
        pairs = params if isinstance(params, Mapping) else list(params)
        return cls(search_params=urlencode(pairs))


class AgentResponse(BaseModel):
    model_config = ConfigDict(frozen=True, strict=True, extra="ignore")


class StartLoginResponse(AgentResponse):
    """Where the SPA must send the user to authenticate."""

    authorization_url: str


class SessionResponse(AgentResponse):
    """
    Returned by session, end_login and on_page_load.

    id_token_claims is None when logged out, or logged in without an ID token.
    access_token_expires_in is None when the authorization server sent no expires_in.
    csrf_token is only present when the Agent issues one for this session.
    """

    is_logged_in: bool
    id_token_claims: dict[str, Any] | None = None
    access_token_expires_in: NonNegativeInt | None = None
    csrf_token: str | None = None


class RefreshResponse(AgentResponse):
    access_token_expires_in: NonNegativeInt | None = None


class LogoutResponse(AgentResponse):
    """logout_url is set when single logout is configured; the SPA must redirect the user there."""

    logout_url: str | None = None
