from __future__ import annotations

import logging
from typing import Any, Dict, List

from league_heatmap.core.config import settings
from league_heatmap.services.yahoo.client import league_path
from league_heatmap.services.yahoo.errors import UpstreamUnavailable
from league_heatmap.services.yahoo.matchups import find_matchups

logger = logging.getLogger(__name__)

# consecutive matchup-less weeks (after a populated one) that mean the season is over
EMPTY_WEEKS_TO_STOP = 2


def clamp_week_range(from_week: int, to_week: int, max_weeks: int | None = None) -> tuple[int, int]:
    """from >= 1, to >= from, and never more than max_weeks weeks probed."""
    cap = max_weeks or settings.MAX_WEEKS
    lo = max(1, int(from_week))
    hi = max(lo, int(to_week))
    return lo, min(hi, lo + cap - 1)


def fetch_scoreboard_weeks(client, league_key: str, from_week: int = 1, to_week: int = 40) -> List[Dict[str, Any]]:
    """
    Fetch /scoreboard;week=N for each week in range and keep weeks that carry matchups:
    [{"week": N, "matchups": [...]}, ...]

    There is no season-length signal, so probing stops on:
      - a 404 (the week does not exist yet); weeks already collected are kept
      - EMPTY_WEEKS_TO_STOP consecutive empty weeks after at least one populated week
    Any other failure or unparsable body skips that week only.
    """
    lo, hi = clamp_week_range(from_week, to_week)
    weeks: List[Dict[str, Any]] = []
    saw_any = False
    empty_run = 0

    for w in range(lo, hi + 1):
        try:
            payload = client.get(league_path(league_key, f"scoreboard;week={w}"))
        except UpstreamUnavailable as e:
            if e.is_not_found:
                logger.info("scoreboard %s week %s: 404, stop probing", league_key, w)
                break
            logger.debug("scoreboard %s week %s skipped: %s", league_key, w, e.detail)
            continue

        matchups = find_matchups(payload)
        if matchups:
            weeks.append({"week": w, "matchups": matchups})
            saw_any = True
            empty_run = 0
            continue

        if saw_any:
            empty_run += 1
            if empty_run >= EMPTY_WEEKS_TO_STOP:
                logger.info("scoreboard %s: %s empty weeks after week %s, stop probing", league_key, empty_run, w - empty_run)
                break

    return weeks
