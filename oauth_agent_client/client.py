"""
OAuth Agent client: the SPA-side half of the Token Handler pattern.
Each operation is one HTTP call to the Agent; tokens never leave the Agent's cookies.
Endpoints: POST login/start, POST login/end, GET session, POST refresh, POST logout.
"""
import logging
from typing import Any, TypeVar

import httpx

from oauth_agent_client.config import TOKEN_HANDLER_VERSION, Configuration
from oauth_agent_client.errors import GENERIC_ERROR_CODE, OAuthAgentRemoteError
from oauth_agent_client.models import (
    AgentResponse,
    EndLoginRequest,
    LogoutResponse,
    RefreshResponse,
    SessionResponse,
    StartLoginRequest,
    StartLoginResponse,
)
from oauth_agent_client.redirect import is_oauth_response, query_from_url

logger = logging.getLogger(__name__)

PATH_LOGIN_START = "login/start"
PATH_LOGIN_END = "login/end"
PATH_SESSION = "session"
PATH_REFRESH = "refresh"
PATH_LOGOUT = "logout"

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
JSON_CONTENT_TYPE = "application/json"

# Only these endpoints take a form body
_FORM_PATHS = {PATH_LOGIN_START, PATH_LOGIN_END}

ResponseT = TypeVar("ResponseT", bound=AgentResponse)


class OAuthAgentClient:
    """
    Talks to the OAuth Agent that issues the SPA's cookies.

    The httpx.AsyncClient's cookie jar stands in for the browser: cookies the Agent sets are sent
    on every later call. Pass http_client to share a pool or jar; it is then left open for its owner.
    """

    def __init__(self, config: Configuration, http_client: httpx.AsyncClient | None = None):
        self.config = config
        self._owns_http_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=config.timeout)

    async def __aenter__(self) -> "OAuthAgentClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http_client:
            await self._http.aclose()

    async def refresh(self) -> RefreshResponse:
        """
        Refresh the access token (POST /refresh).
        Returns the new access token's lifetime when the authorization server reported one.
        Raises OAuthAgentRemoteError when the Agent responds with an error.
        """
        return await self._call("POST", PATH_REFRESH, RefreshResponse)

    async def session(self) -> SessionResponse:
        """
        Current login state and ID token claims (GET /session).
        on_page_load is the more general entry point.
        """
        return await self._call("GET", PATH_SESSION, SessionResponse)

    async def start_login(self, request: StartLoginRequest | None = None) -> StartLoginResponse:
        """
        Start a login (POST /login/start) with optional extra authorization parameters.
        Returns the authorization URL; redirecting the user there is up to the caller.
        """
        body = request.to_form() if request is not None else ""
        return await self._call("POST", PATH_LOGIN_START, StartLoginResponse, body=body or None)

    async def end_login(self, request: EndLoginRequest | str) -> SessionResponse:
        """
        Finish a login (POST /login/end) with the authorization response from the page's query string.
        Call only when the page really holds an authorization response; on_page_load checks that.
        """
        if isinstance(request, str):
            request = EndLoginRequest.from_query_string(request)
        return await self._call("POST", PATH_LOGIN_END, SessionResponse, body=request.search_params)

    async def logout(self) -> LogoutResponse:
        """
        Log out (POST /logout); the Agent clears its cookies.
        A logout_url in the response means the user must be redirected there to finish single logout.
        """
        return await self._call("POST", PATH_LOGOUT, LogoutResponse)

    async def on_page_load(self, page_url: str) -> SessionResponse:
        """
        Call when the SPA page loads. Finishes the login if the URL carries an authorization response,
        otherwise just reads the session.
        """
        query = query_from_url(page_url)
        if is_oauth_response(query):
            logger.debug("Page URL holds an authorization response; ending login")
            return await self.end_login(EndLoginRequest.from_query_string(query))
        logger.debug("No authorization response in page URL; reading session")
        return await self.session()

    def _headers(self, path: str) -> dict[str, str]:
        headers = {
            "Accept": JSON_CONTENT_TYPE,
            "token-handler-version": TOKEN_HANDLER_VERSION,
        }
        if path in _FORM_PATHS:
            headers["Content-Type"] = FORM_CONTENT_TYPE
        if self.config.web_origin:
            headers["Origin"] = self.config.web_origin
        return headers

    async def _call(
        self,
        method: str,
        path: str,
        response_model: type[ResponseT],
        *,
        body: str | None = None,
    ) -> ResponseT:
        """One request to the Agent; JSON success body validated into response_model."""
        url = self.config.url_for(path)
        logger.debug("OAuth Agent request: %s %s", method, url)
        r = await self._http.request(method, url, headers=self._headers(path), content=body)
        if r.is_success:
            return response_model.model_validate(r.json())
        raise _remote_error(r)


def _remote_error(r: httpx.Response) -> OAuthAgentRemoteError:
    """Normalize a non-2xx Agent response."""
    content_type = r.headers.get("content-type", "")
    if content_type.startswith(JSON_CONTENT_TYPE):
        err: Any = r.json()
        if not isinstance(err, dict):
            err = {}
        code = err.get("error_code")
        details = err.get("detailed_error")
        error = OAuthAgentRemoteError(
            r.status_code,
            code if isinstance(code, str) else GENERIC_ERROR_CODE,
            details if isinstance(details, str) else None,
        )
    else:
        error = OAuthAgentRemoteError(r.status_code, GENERIC_ERROR_CODE)
    logger.warning("OAuth Agent error: status=%s code=%s", error.status, error.code)
    return error
