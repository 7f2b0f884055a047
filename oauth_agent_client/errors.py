"""
Normalized error for failed OAuth Agent calls.
Raised from every OAuthAgentClient operation when the Agent answers with a non-2xx status.
"""

# Code used when the Agent's error response carries no error_code (e.g. a proxy's HTML error page)
GENERIC_ERROR_CODE = "server_error"


class OAuthAgentRemoteError(Exception):
    """
    The OAuth Agent responded with an error.

    status: HTTP status from the Agent.
    code: error_code from the Agent's JSON body, or server_error when there was none.
    details: detailed_error, only sent when the Agent is configured to expose detailed errors.
    """

    def __init__(self, status: int, code: str, details: str | None = None):
        super().__init__(f"{status}: {code}")
        self.status = status
        self.code = code
        self.details = details

    def to_dict(self) -> dict:
        """Wire-style view of the error (same keys the Agent uses)."""
        body = {"error_code": self.code}
        if self.details is not None:
            body["detailed_error"] = self.details
        return body

    def __repr__(self) -> str:
        return f"OAuthAgentRemoteError(status={self.status!r}, code={self.code!r}, details={self.details!r})"
