from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple

from chronogrid.vocab import DefensivePlayType, EraId, PlayType, ScoreType, Side


@dataclass(frozen=True, slots=True)
class ScoreChange:
    team: Side
    points: int
    type: ScoreType


@dataclass(frozen=True, slots=True)
class PlayResult:
    type: PlayType
    offense: Side               # side that snapped (before any change of possession)
    description: str
    time_elapsed: int           # seconds, >= 0
    yards_gained: int = 0
    defensive_play: Optional[DefensivePlayType] = None
    score_change: Optional[ScoreChange] = None
    turnover: bool = False
    possession_change: bool = False


@dataclass(frozen=True, slots=True)
class GameState:
    era: EraId
    home_team: str
    away_team: str
    quarter: int                # 1..4, 5 = OT
    time_left: int              # seconds left in the quarter
    possession: Side
    down: int                   # 1..4
    distance: int               # yards to the line to gain
    ball_location: int          # 0 = possessor's goal line, 100 = opponent's
    home_score: int = 0
    away_score: int = 0
    is_kickoff: bool = False
    is_point_after: bool = False
    is_game_over: bool = False
    play_log: Tuple[PlayResult, ...] = ()   # newest first

    def score_of(self, side: Side) -> int:
        return self.home_score if side == "home" else self.away_score

    @property
    def score_diff(self) -> int:
        """Possessing team's score minus the opponent's."""
        defense = "away" if self.possession == "home" else "home"
        return self.score_of(self.possession) - self.score_of(defense)

    @property
    def distance_to_goal(self) -> int:
        return 100 - self.ball_location
