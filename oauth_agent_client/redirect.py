"""
Classify a page's query string: did the SPA just come back from the authorization server?
Plain (state + code), JARM (a lone response parameter) and error (state + error) responses count.
"""
from typing import Any

import httpx

PARAM_STATE = "state"
PARAM_CODE = "code"
PARAM_ERROR = "error"
# JARM: the whole authorization response is a JWT in this single parameter
PARAM_RESPONSE = "response"


def is_oauth_response(params: Any) -> bool:
    """
    True if params look like an authorization response.
    params: raw query string (with or without "?"), mapping or list of pairs; anything httpx.QueryParams takes.
    """
    if isinstance(params, str):
        params = params.removeprefix("?")
    query = params if isinstance(params, httpx.QueryParams) else httpx.QueryParams(params)

    is_plain = PARAM_STATE in query and PARAM_CODE in query
    # Repeated keys and blank values all count toward "exactly one"
    is_jarm = PARAM_RESPONSE in query and len(query.multi_items()) == 1
    is_error = PARAM_STATE in query and PARAM_ERROR in query
    return is_plain or is_jarm or is_error


def query_from_url(page_url: str) -> str:
    """Raw query string of a page URL, without the leading "?". Raises httpx.InvalidURL on bad URLs."""
    return httpx.URL(page_url).query.decode("ascii")
