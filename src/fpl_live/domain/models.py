"""Domain models for fpl_live — per-player, per-event live performance.

Expected-* statistics arrive from the feed as decimal strings ("0.45") and
are kept that way; the GraphQL layer exposes them as floats.
"""

from pydantic import Field

from src.fpl_common.models import CamelModel


class LivePerformance(CamelModel):
    event_id: int
    player_id: int
    minutes: int | None = None
    goals_scored: int | None = None
    assists: int | None = None
    clean_sheets: int | None = None
    goals_conceded: int | None = None
    own_goals: int | None = None
    penalties_saved: int | None = None
    penalties_missed: int | None = None
    yellow_cards: int | None = None
    red_cards: int | None = None
    saves: int | None = None
    bonus: int | None = None
    bps: int | None = None
    starts: bool | None = None
    expected_goals: str | None = None
    expected_assists: str | None = None
    expected_goal_involvements: str | None = None
    expected_goals_conceded: str | None = None
    in_dream_team: bool | None = None
    total_points: int = 0


class LiveScoresFilter(CamelModel):
    in_dream_team: bool | None = None
    min_total_points: int | None = None
    max_total_points: int | None = None


class EventLive(CamelModel):
    event_id: int
    performances: list[LivePerformance] = Field(default_factory=list)

    def dream_team(self) -> list[LivePerformance]:
        return [p for p in self.performances if p.in_dream_team is True]

    def top_performers(self, limit: int = 10) -> list[LivePerformance]:
        """Highest total points first; ties keep feed order."""
        ranked = sorted(self.performances, key=lambda p: p.total_points, reverse=True)
        return ranked[: max(limit, 0)]
