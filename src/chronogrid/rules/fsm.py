from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Optional

import numpy as np

from chronogrid.config import get_era
from chronogrid.constants import (
    FIRST_AND_TEN_YTG,
    LAST_REGULATION_QUARTER,
    OVERTIME_QUARTER,
    QUARTER_SECONDS,
)
from chronogrid.state import GameState, PlayResult
from chronogrid.vocab import (
    DEFENSE_PLAYS,
    OFFENSE_PLAYS,
    DefensivePlayType as D,
    EraId,
    PlayType as P,
    other_side,
)


@dataclass(frozen=True, slots=True)
class ClockUpdate:
    quarter: int
    time_left: int
    is_game_over: bool = False
    note: Optional[str] = None


def _mask(vocab: tuple, allowed) -> np.ndarray:
    m = np.zeros(len(vocab), dtype=bool)
    m[[vocab.index(x) for x in allowed]] = True
    return m


def allowed(mask: np.ndarray, vocab: tuple) -> list:
    return [vocab[i] for i, ok in enumerate(mask) if ok]


class RulesFSM:
    def legal_actions(self, s: GameState) -> dict[str, np.ndarray]:
        """Plays a caller may offer each side in the current phase."""
        era = get_era(s.era)
        if s.is_kickoff:
            off = [P.KICKOFF]
            dfn = [D.RETURN_SAFE, D.RETURN_AGGRESSIVE]
        elif s.is_point_after:
            off = [P.XP, P.TWO_PT] if era.scoring.two_pt_available else [P.XP]
            dfn = [D.FG_BLOCK, D.GOAL_LINE]
        else:
            off = [P.RUN, P.LATERAL, P.FG, P.PUNT]
            # pass stays on the card in the earliest era; it draws a flag most of the time
            if era.rules.pass_legal or s.era == EraId.GENESIS:
                off.append(P.PASS)
            if s.era == EraId.IRON_MAN:
                off.append(P.WASTE)
            dfn = [D.STANDARD, D.RUN_DEFENSE, D.PASS_DEFENSE, D.BLITZ]
        return {"offense": _mask(OFFENSE_PLAYS, off), "defense": _mask(DEFENSE_PLAYS, dfn)}

    def run_clock(self, s: GameState, elapsed: int, *, tied: bool) -> ClockUpdate:
        """Quarter/overtime machine; fires once per resolved play."""
        left = s.time_left - elapsed
        if left > 0:
            return ClockUpdate(s.quarter, left)
        if s.quarter < LAST_REGULATION_QUARTER:
            return ClockUpdate(s.quarter + 1, QUARTER_SECONDS, note=f"End of Quarter {s.quarter}.")
        if s.quarter == LAST_REGULATION_QUARTER and tied and get_era(s.era).rules.ot_enabled:
            return ClockUpdate(
                OVERTIME_QUARTER, QUARTER_SECONDS, note="End of Regulation. Going to Overtime!"
            )
        return ClockUpdate(s.quarter, 0, is_game_over=True, note="GAME OVER.")

    def apply_outcome(self, s: GameState, result: PlayResult, *, clock: ClockUpdate,
                      ball_location: int, down: int, distance: int,
                      is_kickoff: bool, is_point_after: bool) -> GameState:
        """
        Fold a resolved play into a new state.

        Ball location arrives already re-based for the side that will have the
        ball; a change of possession only flips the side and resets the chains.
        """
        ns = replace(s, quarter=clock.quarter, time_left=clock.time_left,
                     is_game_over=clock.is_game_over, ball_location=ball_location,
                     down=down, distance=distance, is_kickoff=is_kickoff,
                     is_point_after=is_point_after)
        if result.possession_change and not ns.is_game_over:
            ns = replace(ns, possession=other_side(s.possession), down=1,
                         distance=ns.distance if is_point_after else FIRST_AND_TEN_YTG)
        sc = result.score_change
        if sc is not None:
            if sc.team == "home":
                ns = replace(ns, home_score=ns.home_score + sc.points)
            else:
                ns = replace(ns, away_score=ns.away_score + sc.points)
        return replace(ns, play_log=(result,) + s.play_log)
