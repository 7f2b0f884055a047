"""
Access token lifetime bookkeeping for callers that refresh ahead of expiry.
Built from access_token_expires_in on session, end_login, on_page_load and refresh responses.
The library starts no timers; scheduling the refresh() call is up to the caller.
"""
import time
from dataclasses import dataclass, field

from oauth_agent_client.models import RefreshResponse, SessionResponse


@dataclass(frozen=True)
class AccessTokenExpiry:
    expires_in: int
    received_at: float = field(default_factory=time.time)

    @classmethod
    def from_response(cls, response: SessionResponse | RefreshResponse) -> "AccessTokenExpiry | None":
        """None when the Agent sent no access_token_expires_in."""
        if response.access_token_expires_in is None:
            return None
        return cls(expires_in=response.access_token_expires_in)

    def seconds_remaining(self) -> float:
        return max(0.0, self.expires_in - (time.time() - self.received_at))

    def expired_or_soon(self, buffer_seconds: int = 60) -> bool:
        """
        True if the access token is expired or within buffer_seconds of expiry.
        When the lifetime is shorter than buffer_seconds, only True once actually expired.
        """
        elapsed = time.time() - self.received_at
        if elapsed >= self.expires_in:
            return True
        # "Expiring soon" only when lifetime is longer than buffer (else every check would say refresh)
        if self.expires_in > buffer_seconds and elapsed >= (self.expires_in - buffer_seconds):
            return True
        return False
