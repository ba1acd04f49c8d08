from __future__ import annotations

from typing import Optional

from fastapi import HTTPException


class UpstreamUnavailable(HTTPException):
    """
    Yahoo answered non-2xx, the transport failed, or the body was not JSON.
    `upstream_status` is None when no HTTP response came back at all.
    """

    def __init__(self, upstream_status: Optional[int], url: str, body: str = ""):
        self.upstream_status = upstream_status
        self.url = url
        self.body = body
        status = upstream_status if upstream_status and upstream_status >= 400 else 502
        super().__init__(
            status_code=status,
            detail=f"Yahoo error {upstream_status} on {url} :: {body}",
        )

    @property
    def is_not_found(self) -> bool:
        return self.upstream_status == 404


class NoData(HTTPException):
    """Every applicable week was fetched but no decided matchup was found."""

    def __init__(self, detail: str = "no data"):
        super().__init__(status_code=404, detail=detail)
