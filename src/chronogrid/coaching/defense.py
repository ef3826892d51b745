from __future__ import annotations

from chronogrid import rng as rnd
from chronogrid.config import get_era
from chronogrid.constants import MAX_DOWN, SHORT_YTG, THIRD_AND_LONG_YTG
from chronogrid.state import GameState
from chronogrid.vocab import DefensivePlayType, EraId

PRE_MODERN_ERAS = frozenset({EraId.GENESIS, EraId.IRON_MAN, EraId.BREAKOUT, EraId.DEAD_BALL})


def recommend_defense(s: GameState, rng=None) -> DefensivePlayType:
    rng = rnd.resolve(rng)
    if s.is_kickoff:
        return DefensivePlayType.RETURN_SAFE
    if s.is_point_after:
        if get_era(s.era).scoring.two_pt_available:
            return DefensivePlayType.GOAL_LINE
        return DefensivePlayType.FG_BLOCK
    if (s.down == 3 and s.distance > THIRD_AND_LONG_YTG) or s.down == MAX_DOWN:
        return DefensivePlayType.PASS_DEFENSE
    if s.distance <= SHORT_YTG:
        return DefensivePlayType.RUN_DEFENSE

    u = rng.random()
    if s.era in PRE_MODERN_ERAS:
        return DefensivePlayType.RUN_DEFENSE if u < 0.7 else DefensivePlayType.STANDARD
    if u < 0.2:
        return DefensivePlayType.BLITZ
    if u < 0.6:
        return DefensivePlayType.STANDARD
    return DefensivePlayType.PASS_DEFENSE
