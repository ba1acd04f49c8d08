from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from requests_oauthlib import OAuth2Session

from league_heatmap.core.config import settings

logger = logging.getLogger(__name__)

# ---- OAuth / Yahoo config ----
# Read-only scope
AUTH_SCOPE = ["fspt-r"]

# Refresh a minute before Yahoo says the token dies
EXPIRY_SKEW_SECONDS = 60


def build_oauth(token: dict | None = None) -> OAuth2Session:
    return OAuth2Session(
        client_id=settings.YAHOO_CLIENT_ID,
        scope=AUTH_SCOPE,
        token=token,
    )


class RefreshTokenCredentials:
    """
    Supplies a currently-valid bearer token. The access token is held in memory
    only and re-minted from the configured refresh token when it is about to expire.
    """

    def __init__(
        self,
        refresh_token: Optional[str] = None,
        *,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        token_url: Optional[str] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.refresh_token = refresh_token or settings.YAHOO_REFRESH_TOKEN
        self.client_id = client_id or settings.YAHOO_CLIENT_ID
        self.client_secret = client_secret or settings.YAHOO_CLIENT_SECRET
        self.token_url = token_url or settings.YAHOO_TOKEN_URL
        self._clock = clock
        self._access_token: Optional[str] = None
        self._expires_at: float = 0.0
        self.latest_refresh_token: Optional[str] = None

    def _refresh(self) -> str:
        if not self.refresh_token:
            raise RuntimeError(
                "Missing YAHOO_REFRESH_TOKEN. Complete the Yahoo login once and put the refresh_token in .env"
            )
        oauth = build_oauth()
        token = oauth.refresh_token(
            self.token_url,
            refresh_token=self.refresh_token,
            auth=(self.client_id, self.client_secret),
        )
        # token: {"access_token","refresh_token","expires_in","token_type",...}
        self._access_token = token["access_token"]
        expires_in = token.get("expires_in") or 3600
        self._expires_at = self._clock() + float(expires_in) - EXPIRY_SKEW_SECONDS

        rotated = token.get("refresh_token")
        if rotated and rotated != self.refresh_token:
            self.latest_refresh_token = rotated
            # later refreshes use the rotated token; .env still holds the old one until updated
            self.refresh_token = rotated
            logger.warning("Yahoo rotated refresh_token. Update YAHOO_REFRESH_TOKEN in .env")
        return self._access_token

    def access_token(self) -> str:
        if not self._access_token or self._clock() >= self._expires_at:
            return self._refresh()
        return self._access_token


class StaticCredentials:
    """Fixed bearer token (scripts, tests)."""

    def __init__(self, token: str):
        self.token = token

    def access_token(self) -> str:
        return self.token
