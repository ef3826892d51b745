from __future__ import annotations

from chronogrid.config import get_era
from chronogrid.constants import FIRST_AND_TEN_YTG, QUARTER_SECONDS
from chronogrid.state import GameState
from chronogrid.vocab import EraId


def initialize_game(era: EraId | str, home_team: str, away_team: str) -> GameState:
    """Fresh game: scoreless, first quarter, home kicking off from the era's kickoff line."""
    cfg = get_era(era)
    return GameState(
        era=cfg.id,
        home_team=home_team,
        away_team=away_team,
        quarter=1,
        time_left=QUARTER_SECONDS,
        possession="home",
        down=1,
        distance=FIRST_AND_TEN_YTG,
        ball_location=cfg.rules.kickoff_line,
        is_kickoff=True,
    )
