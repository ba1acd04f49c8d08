from __future__ import annotations
from typing import Dict, List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field

Number = Union[int, float]


class StatCategory(BaseModel):
    id: str
    name: str
    display_name: str
    sort_order: Optional[Number] = None
    decimal_places: Optional[Number] = None
    position_type: Optional[str] = None
    is_only_display: bool = False


# ---- weekly matrix: every grid is teams x weeks, index-aligned ----
class WeeklyMatrix(BaseModel):
    season_year: int
    league_key: str
    teams: List[str]
    weeks: List[int]
    points: List[List[Optional[int]]]
    outcome: List[List[Optional[str]]]   # W / L / T
    oppPoints: List[List[Optional[int]]]
    oppName: List[List[str]]


# ---- category stats ----
class CategoryOutcome(BaseModel):
    wins: int
    losses: int
    ties: int
    winPct: Optional[float] = None
    played: int


class TeamCategoryStats(BaseModel):
    key: str
    name: str
    totals: Dict[str, float]
    outcomes: Dict[str, CategoryOutcome]


class CategoryStats(BaseModel):
    season_year: int
    league_key: str
    categories: List[StatCategory]
    teams: List[TeamCategoryStats]
    generated_at: str
    from_week: int
    to_week: int


# ---- season analytics ----
class SharpeCategory(BaseModel):
    statId: str
    label: str
    mean: float
    stdDev: float
    sharpe: Optional[float] = None
    samples: int


class SharpeRow(BaseModel):
    teamKey: str
    teamName: str
    categories: List[SharpeCategory]


class EbitdaCategory(BaseModel):
    statId: str
    label: str
    actual: float
    expected: float
    delta: float


class EbitdaRow(BaseModel):
    teamKey: str
    teamName: str
    totalDelta: float
    categories: List[EbitdaCategory]


class ContributionCategory(BaseModel):
    statId: str
    label: str
    value: float


class ContributionRow(BaseModel):
    teamKey: str
    teamName: str
    total: float
    categories: List[ContributionCategory]


class RosterMovesRow(BaseModel):
    teamKey: str
    teamName: str
    moves: Number
    trades: Number
    wins: int
    losses: int
    ties: int
    winPct: Optional[float] = None


class SeasonAnalytics(BaseModel):
    season_year: int
    league_key: str
    # "from" is a keyword, hence the alias
    from_: int = Field(alias="from")
    to: int
    sharpe: List[SharpeRow]
    ebitda: List[EbitdaRow]
    contributionTree: List[ContributionRow]
    rosterMoves: List[RosterMovesRow]

    model_config = ConfigDict(populate_by_name=True)
