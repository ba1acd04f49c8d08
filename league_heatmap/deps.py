from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from fastapi import HTTPException, Query

from league_heatmap.core.config import settings
from league_heatmap.services.cache import TTLCache
from league_heatmap.services.yahoo.client import YahooClient
from league_heatmap.services.yahoo.oauth import RefreshTokenCredentials


@dataclass
class LeagueCaches:
    """One TTL cache per role; injected so tests can swap them out."""

    categories: TTLCache
    season: TTLCache
    matrix: TTLCache


@lru_cache(maxsize=1)
def get_caches() -> LeagueCaches:
    return LeagueCaches(
        categories=TTLCache(settings.CATEGORY_CACHE_TTL),
        season=TTLCache(settings.SEASON_CACHE_TTL),
        matrix=TTLCache(settings.MATRIX_CACHE_TTL),
    )


@lru_cache(maxsize=1)
def get_yahoo_client() -> YahooClient:
    return YahooClient(RefreshTokenCredentials())


@dataclass
class SeasonQuery:
    year: int
    league_key: str
    from_week: int
    to_week: int


def get_season_query(
    year: int | None = Query(None, description="Season start year, e.g. 2024 for 2024-25"),
    min_week: int = Query(1, alias="min", description="First week (inclusive)"),
    max_week: int = Query(40, alias="max", description="Last week (inclusive)"),
) -> SeasonQuery:
    yr = year or settings.DEFAULT_YEAR
    try:
        league_key = settings.league_key_for_year(yr)
    except ValueError as ve:
        raise HTTPException(status_code=400, detail=str(ve))
    from_week = max(1, min_week)
    to_week = max(from_week, max_week)
    return SeasonQuery(year=yr, league_key=league_key, from_week=from_week, to_week=to_week)
