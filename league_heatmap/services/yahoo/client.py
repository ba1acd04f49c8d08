from __future__ import annotations

from typing import Any, Dict, Optional, Protocol
from urllib.parse import quote

import requests

from league_heatmap.core.config import settings
from league_heatmap.services.yahoo.errors import UpstreamUnavailable


class CredentialProvider(Protocol):
    def access_token(self) -> str: ...


def _auth_headers(access_token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {access_token}"}


def _raise_with_yahoo_body(resp: requests.Response) -> None:
    # Include upstream body to see *why* Yahoo said 400/401/… in logs & response
    try:
        msg = resp.text[:2000]  # keep it sane
    except Exception:
        msg = "<no-body>"
    raise UpstreamUnavailable(resp.status_code, str(resp.url), msg)


def league_path(league_key: str, resource: str) -> str:
    """/league/{key}/{resource} with the key URL-encoded."""
    return f"/league/{quote(league_key, safe='')}/{resource.lstrip('/')}"


class YahooClient:
    """
    Bearer-authenticated GET against the Yahoo Fantasy v2 API.
    Every failure (transport, non-2xx, non-JSON) surfaces as UpstreamUnavailable;
    callers decide whether that is fatal. Nothing is retried here.
    """

    def __init__(
        self,
        credentials: CredentialProvider,
        *,
        api_base: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.credentials = credentials
        self.api_base = (api_base or settings.YAHOO_API_BASE).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.YAHOO_HTTP_TIMEOUT
        self.session = session or requests.Session()

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        rel = path.lstrip("/")  # e.g., league/453.l.1520/scoreboard;week=3
        url = f"{self.api_base}/{rel}"
        q = dict(params or {})
        q.setdefault("format", "json")

        access_token = self.credentials.access_token()
        try:
            resp = self.session.get(url, headers=_auth_headers(access_token), params=q, timeout=self.timeout)
        except requests.RequestException as e:
            raise UpstreamUnavailable(None, url, str(e)) from e

        if not resp.ok:
            _raise_with_yahoo_body(resp)

        try:
            return resp.json()
        except ValueError:
            _raise_with_yahoo_body(resp)
