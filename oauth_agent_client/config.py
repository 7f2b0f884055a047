"""
OAuth Agent Client configuration.
Defaults come from the environment; Configuration holds the normalized values used per client.
"""
import os
from dataclasses import dataclass

# OAuth Agent base URL: <host>/<app-anonymous-endpoint>/<token-handler-app-id>
OAUTH_AGENT_BASE_URL = os.environ.get("OAUTH_AGENT_BASE_URL", "http://127.0.0.1:8080/oauth-agent")

# Web origin of the SPA; sent as Origin so the Agent's CORS checks pass outside a browser
WEB_ORIGIN = os.environ.get("OAUTH_AGENT_WEB_ORIGIN", "").strip() or None

# Transport timeout in seconds; empty means wait indefinitely
_timeout_env = os.environ.get("OAUTH_AGENT_TIMEOUT", "10.0").strip()
DEFAULT_TIMEOUT = float(_timeout_env) if _timeout_env else None

# Token handler API version announced on every request
TOKEN_HANDLER_VERSION = "1"


@dataclass(frozen=True)
class Configuration:
    """
    Where the OAuth Agent lives. The base URL must be in the same parent site as the SPA's
    web origin, e.g. https://api.example.com/apps/oauth-agent1 for an SPA at https://www.example.com.
    """

    oauth_agent_base_url: str
    web_origin: str | None = None
    timeout: float | None = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        base_url = (self.oauth_agent_base_url or "").strip()
        if not base_url:
            raise ValueError("oauth_agent_base_url must not be empty")
        # Exactly one trailing slash so relative paths join cleanly
        object.__setattr__(self, "oauth_agent_base_url", base_url.rstrip("/") + "/")

    def url_for(self, path: str) -> str:
        """Absolute URL of an Agent endpoint, e.g. url_for("login/start")."""
        return f"{self.oauth_agent_base_url}{path.lstrip('/')}"

    @classmethod
    def from_env(cls) -> "Configuration":
        return cls(
            oauth_agent_base_url=OAUTH_AGENT_BASE_URL,
            web_origin=WEB_ORIGIN,
            timeout=DEFAULT_TIMEOUT,
        )
