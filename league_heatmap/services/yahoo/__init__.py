"""
Yahoo service package: HTTP client, credentials, and the shape-agnostic extractors
for scoreboard / teams / settings / standings payloads.
"""

from .errors import NoData, UpstreamUnavailable
from .oauth import RefreshTokenCredentials, StaticCredentials
from .client import YahooClient, league_path

# --- Normalization primitives ---
from .tree import first_match, list_of, scalar_of, value_by_key

# --- Extractors / fetchers ---
from .matchups import (
    decided_counts,
    find_matchups,
    stat_nodes_of,
    stat_values_of,
    stat_winners,
    team_keys_of,
    team_node,
)
from .teams import build_team_directory, parse_team_directory, resolve_team_name
from .categories import get_stat_categories, normalize_categories, order_categories
from .scoreboard import fetch_scoreboard_weeks
from .standings import get_league_standings_raw, get_team_standings_summary, summarize_standings
