from __future__ import annotations

import json
from typing import Dict, List, Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


EnvType = Literal["local", "dev", "staging", "prod"]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # App
    APP_NAME: str = "LeagueHeatmapAPI"
    APP_ENV: EnvType = "local"

    # CORS
    CORS_ORIGINS: str | List[str] = Field(
        default='["http://localhost:5173","http://127.0.0.1:5173"]',
        description='JSON list or comma-separated origins',
    )

    # Yahoo OAuth (refresh-token grant only; the login flow lives elsewhere)
    YAHOO_CLIENT_ID: Optional[str] = None
    YAHOO_CLIENT_SECRET: Optional[str] = None
    YAHOO_REFRESH_TOKEN: Optional[str] = None
    YAHOO_TOKEN_URL: str = "https://api.login.yahoo.com/oauth2/get_token"
    YAHOO_API_BASE: str = "https://fantasysports.yahooapis.com/fantasy/v2"
    # None = no timeout on upstream calls
    YAHOO_HTTP_TIMEOUT: Optional[float] = None

    # League
    LEAGUE_ID: str = "1520"  # numeric part after .l.
    DEFAULT_YEAR: int = 2024  # 2024 -> 2024-25
    GAME_KEYS: Dict[int, int] = Field(
        default={
            2014: 206, 2015: 236, 2016: 267, 2017: 308, 2018: 331,
            2019: 342, 2020: 363, 2021: 380, 2022: 395, 2023: 410,
            2024: 453,
        },
        description="season year -> Yahoo game id (JSON object in env)",
    )
    MAX_WEEKS: int = 40

    # Cache TTLs (seconds)
    CATEGORY_CACHE_TTL: int = 30 * 60
    SEASON_CACHE_TTL: int = 5 * 60
    MATRIX_CACHE_TTL: int = 60

    # Derived / convenience flags
    @property
    def IS_LOCAL(self) -> bool:
        return self.APP_ENV == "local"

    def league_key_for_year(self, year: int) -> str:
        game = self.GAME_KEYS.get(int(year))
        if not game:
            raise ValueError(f"No game_key configured for year {year}")
        return f"{game}.l.{self.LEAGUE_ID}"

    # ---------- Validators ----------

    @field_validator("CORS_ORIGINS")
    @classmethod
    def _parse_cors(cls, v):
        # Accept JSON list or comma-separated string
        if isinstance(v, list):
            return v
        s = str(v).strip()
        if not s:
            return []
        try:
            parsed = json.loads(s)
            if isinstance(parsed, list):
                return parsed
        except ValueError:
            pass
        # fallback: comma-separated
        return [p.strip() for p in s.split(",") if p.strip()]

    @field_validator("LEAGUE_ID")
    @classmethod
    def _strip_league_id(cls, v: str) -> str:
        raw = str(v).strip().strip('"').strip("'")
        if not raw.isdigit():
            raise ValueError("LEAGUE_ID must be the numeric league id (the part after '.l.')")
        return raw

    # ---------- Runtime validations ----------

    def validate_at_startup(self) -> None:
        """Fail fast with clear messages for misconfigurations."""
        problems: list[str] = []

        if not self.YAHOO_CLIENT_ID:
            problems.append("YAHOO_CLIENT_ID is required.")
        if not self.YAHOO_CLIENT_SECRET:
            problems.append("YAHOO_CLIENT_SECRET is required.")
        if not self.YAHOO_REFRESH_TOKEN:
            problems.append("YAHOO_REFRESH_TOKEN is required (complete the Yahoo login flow once).")

        if self.DEFAULT_YEAR not in self.GAME_KEYS:
            problems.append(f"DEFAULT_YEAR={self.DEFAULT_YEAR} has no entry in GAME_KEYS.")

        # CORS must not be empty outside local
        if not self.IS_LOCAL and not self.CORS_ORIGINS:
            problems.append("CORS_ORIGINS must contain at least one allowed origin in non-local env.")

        if problems:
            # Collapse to one helpful error line
            raise RuntimeError("Config validation failed: " + " ".join(problems))


settings = Settings()
