from __future__ import annotations

from chronogrid import rng as rnd
from chronogrid.config import get_era
from chronogrid.constants import (
    CHIP_SHOT_YARDS,
    DESPERATION_RANGE_YARDS,
    DESPERATION_SECONDS,
    FG_RANGE_YARDS,
    MAX_DOWN,
    TWO_POINT_CHART,
)
from chronogrid.state import GameState
from chronogrid.vocab import EraId, PlayType

GO_FOR_TWO_WHEN_TRAILING = 0.10
LATERAL_SHARE_OF_RUNS = 0.05


def _point_after(s: GameState, rng) -> PlayType:
    if not get_era(s.era).scoring.two_pt_available:
        return PlayType.XP
    diff = s.score_diff
    if diff < 0 and (-diff in TWO_POINT_CHART or rnd.roll(rng, GO_FOR_TWO_WHEN_TRAILING)):
        return PlayType.TWO_PT
    return PlayType.XP


def _fourth_down(s: GameState, rng) -> PlayType:
    to_goal = s.distance_to_goal
    if to_goal <= FG_RANGE_YARDS:
        if s.era == EraId.GENESIS:
            attempt = 0.9
        elif to_goal <= CHIP_SHOT_YARDS:
            attempt = 0.95
        else:
            attempt = 0.5
        return PlayType.FG if rnd.roll(rng, attempt) else PlayType.RUN  # go for it
    if to_goal < DESPERATION_RANGE_YARDS and s.score_diff < 0 and s.time_left < DESPERATION_SECONDS:
        return PlayType.PASS
    return PlayType.PUNT


def recommend_offense(s: GameState, rng=None) -> PlayType:
    """
    What the offensive coach calls in this situation.

    Kickoffs and point-after tries are forced phases; 4th down weighs the kick
    against going for it; earlier downs draw once against the era's run/pass bands.
    """
    rng = rnd.resolve(rng)
    if s.is_kickoff:
        return PlayType.KICKOFF
    if s.is_point_after:
        return _point_after(s, rng)
    if s.down == MAX_DOWN:
        return _fourth_down(s, rng)

    era = get_era(s.era)
    # no hash marks: burn a down to get off the sideline
    if s.era == EraId.IRON_MAN and rnd.roll(rng, era.probs.waste):
        return PlayType.WASTE

    u = rng.random()
    if u < era.probs.run:
        return PlayType.LATERAL if rnd.roll(rng, LATERAL_SHARE_OF_RUNS) else PlayType.RUN
    if u < era.probs.run + era.probs.pass_:
        return PlayType.PASS
    return PlayType.PUNT if s.era == EraId.GENESIS else PlayType.RUN
