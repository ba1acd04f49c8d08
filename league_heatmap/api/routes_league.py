# league_heatmap/api/routes_league.py
# No `from __future__ import annotations` here: cache_route wraps the handlers and
# FastAPI resolves string annotations against the wrapper module, not this one.
import logging
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Response

from league_heatmap.deps import LeagueCaches, SeasonQuery, get_caches, get_season_query, get_yahoo_client
from league_heatmap.schemas.analytics import CategoryStats, SeasonAnalytics, WeeklyMatrix
from league_heatmap.services.analytics import build_season_analytics
from league_heatmap.services.cache import cache_route, key_tuple
from league_heatmap.services.reports import build_category_stats, get_weekly_matrix
from league_heatmap.services.season import collect_season_stats
from league_heatmap.services.yahoo.client import YahooClient
from league_heatmap.services.yahoo.scoreboard import clamp_week_range
from league_heatmap.services.yahoo.standings import get_league_standings_raw, get_team_standings_summary

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["league"])


def _fail(what: str, e: Exception) -> HTTPException:
    logger.exception("%s failed", what)
    return HTTPException(status_code=500, detail=f"Failed to build {what}: {e}")


# ---------------- STANDINGS (raw passthrough, no cache) ----------------
@router.get("/standings")
def standings(
    q: SeasonQuery = Depends(get_season_query),
    client: YahooClient = Depends(get_yahoo_client),
) -> Any:
    """Untouched Yahoo standings payload for the selected season."""
    try:
        return get_league_standings_raw(client, q.league_key)
    except HTTPException as he:
        raise he
    except ValueError as ve:
        raise HTTPException(status_code=400, detail=str(ve))
    except Exception as e:
        raise _fail("standings", e)


# ---------------- WEEKLY MATRIX (cache 60s) ----------------
@router.get("/weekly-matrix", response_model=WeeklyMatrix)
@cache_route(
    cache=lambda *args, **kwargs: kwargs["caches"].matrix,
    key_builder=lambda *args, **kwargs: key_tuple(
        "weekly_matrix",
        kwargs["q"].league_key,
        *clamp_week_range(kwargs["q"].from_week, kwargs["q"].to_week),
    ),
)
def weekly_matrix(
    q: SeasonQuery = Depends(get_season_query),
    client: YahooClient = Depends(get_yahoo_client),
    caches: LeagueCaches = Depends(get_caches),
    response: Response = None,
) -> Dict[str, Any]:
    """
    Category-wins per team per week: teams x weeks grids for points, outcome,
    opponent points and opponent name.
    """
    try:
        data = get_weekly_matrix(client, q.league_key, q.from_week, q.to_week)
    except HTTPException as he:
        raise he
    except ValueError as ve:
        raise HTTPException(status_code=400, detail=str(ve))
    except Exception as e:
        raise _fail("weekly matrix", e)
    return {"season_year": q.year, **data}


# ---------------- CATEGORY STATS (season cache 5m) ----------------
@router.get("/category-stats", response_model=CategoryStats)
def category_stats(
    q: SeasonQuery = Depends(get_season_query),
    client: YahooClient = Depends(get_yahoo_client),
    caches: LeagueCaches = Depends(get_caches),
) -> Dict[str, Any]:
    """Season totals and category win/loss/tie records per team."""
    try:
        stats = collect_season_stats(
            client, q.league_key, q.from_week, q.to_week,
            season_cache=caches.season, category_cache=caches.categories,
        )
        data = build_category_stats(stats)
    except HTTPException as he:
        raise he
    except ValueError as ve:
        raise HTTPException(status_code=400, detail=str(ve))
    except Exception as e:
        raise _fail("category stats", e)

    return {
        "season_year": q.year,
        "league_key": q.league_key,
        **data,
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "from_week": stats.from_week,
        "to_week": stats.to_week,
    }


# ---------------- SEASON ANALYTICS (season cache 5m) ----------------
@router.get("/season-analytics", response_model=SeasonAnalytics)
def season_analytics(
    q: SeasonQuery = Depends(get_season_query),
    client: YahooClient = Depends(get_yahoo_client),
    caches: LeagueCaches = Depends(get_caches),
) -> Dict[str, Any]:
    """
    sharpe: per-category margin consistency
    ebitda: actual vs volume-expected category wins
    contributionTree: win-equivalents per category
    rosterMoves: moves/trades next to the overall record
    """
    try:
        stats = collect_season_stats(
            client, q.league_key, q.from_week, q.to_week,
            season_cache=caches.season, category_cache=caches.categories,
        )
        summary = get_team_standings_summary(client, q.league_key)
        data = build_season_analytics(stats, summary)
    except HTTPException as he:
        raise he
    except ValueError as ve:
        raise HTTPException(status_code=400, detail=str(ve))
    except Exception as e:
        raise _fail("season analytics", e)

    return {
        "season_year": q.year,
        "league_key": q.league_key,
        "from": stats.from_week,
        "to": stats.to_week,
        **data,
    }
