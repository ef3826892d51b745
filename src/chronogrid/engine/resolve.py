from __future__ import annotations
import logging
from typing import Optional, Tuple

from chronogrid import rng as rnd
from chronogrid.coaching.defense import recommend_defense
from chronogrid.coaching.offense import recommend_offense
from chronogrid.config import EraConfig, get_era
from chronogrid.constants import (
    FG_SNAP_YARDS,
    FIRST_AND_TEN_YTG,
    MAX_DOWN,
    MAX_YARDLINE,
    SAFETY_KICK_YARD,
    TOUCHBACK_YARD,
)
from chronogrid.engine.modifiers import modifiers_for
from chronogrid.rules.fsm import RulesFSM
from chronogrid.state import GameState, PlayResult, ScoreChange
from chronogrid.vocab import (
    DefensivePlayType as D,
    EraId,
    PlayType as P,
    ScoreType,
    Side,
    other_side,
)

_log = logging.getLogger("chronogrid.engine")

# clock cost per outcome, seconds (inclusive ranges)
KICK_SECONDS = (10, 20)
TURNOVER_SECONDS = (10, 20)
STOPPED_CLOCK_SECONDS = (5, 10)
PASS_SECONDS = (25, 40)
RUN_SECONDS = (30, 45)
ILLEGAL_PASS_SECONDS = 10

ILLEGAL_PASS_FLAG = 0.8
ILLEGAL_PASS_YARDS = -5
GENESIS_INCOMPLETION = 0.6
INCOMPLETION_PENALTY_YARDS = -15
BASE_COMPLETION = 0.60
TWO_POINT_VALUE = 2

GAIN, TURNOVER, INCOMPLETE = "gain", "turnover", "incomplete"

_fsm = RulesFSM()


def _coerce(enum_cls, value):
    if value is None:
        return None
    try:
        return enum_cls(value)
    except ValueError:
        return None


def select_plays(s: GameState, user_play=None, user_side: Side = "home",
                 rng=None) -> Tuple[P, D]:
    """
    Pair the user's call with the coach policy's call for the other side.

    The user's pick counts only for the side they are on; anything missing or
    unrecognised falls back to the coach.
    """
    rng = rnd.resolve(rng)
    on_offense = s.possession == user_side
    user_off = _coerce(P, user_play) if on_offense else None
    user_def = None if on_offense else _coerce(D, user_play)

    if s.is_kickoff:
        off = P.KICKOFF
    else:
        off = user_off if user_off is not None else recommend_offense(s, rng)
    dfn = user_def if user_def is not None else recommend_defense(s, rng)

    # the coach never throws where passing is banned; a human may try
    if off == P.PASS and user_off is None and not get_era(s.era).rules.pass_legal:
        off = P.RUN
    return off, dfn


class PlayResolver:
    """
    Resolves one snap. Holds the in-progress field position and result pieces,
    then hands them to the rules FSM to build the next state.
    """

    def __init__(self, s: GameState, rng):
        self.s = s
        self.rng = rng
        self.era: EraConfig = get_era(s.era)
        self.offense: Side = s.possession
        self.loc = s.ball_location
        self.down = s.down
        self.distance = s.distance
        self.is_kickoff = s.is_kickoff
        self.is_point_after = s.is_point_after
        self.clauses: list[str] = []
        self.yards = 0
        self.score: Optional[ScoreChange] = None
        self.turnover = False
        self.possession_change = False
        self.play_time = 0

    # -- helpers ---------------------------------------------------------

    def _randint(self, low: int, high: int) -> int:
        return rnd.randint(self.rng, low, high)

    def _roll(self, p: float) -> bool:
        return rnd.roll(self.rng, p)

    def _clock(self, span: Tuple[int, int]) -> None:
        self.play_time = self._randint(*span)

    def _say(self, text: str) -> None:
        self.clauses.append(text)

    def _first_and_ten(self) -> None:
        self.down, self.distance = 1, FIRST_AND_TEN_YTG

    def _award(self, team: Side, points: int, kind: ScoreType) -> None:
        self.score = ScoreChange(team=team, points=points, type=kind)

    def _set_up_kickoff(self, line: int) -> None:
        self.is_point_after = False
        self.is_kickoff = True
        self.loc = line
        self._first_and_ten()

    def _set_up_point_after(self) -> None:
        self.is_point_after = True
        self.loc = self.era.rules.extra_point_line
        self.down, self.distance = 1, MAX_YARDLINE - self.loc

    def _move(self, yards: int) -> None:
        self.yards = yards
        self.loc += yards
        self.distance -= yards

    def _next_down(self) -> None:
        if self.loc <= 0:
            return  # pinned in the end zone: the safety check scores it
        if self.down == MAX_DOWN:
            self._say("TURNOVER ON DOWNS.")
            self.possession_change = True
            self.loc = MAX_YARDLINE - self.loc
        else:
            self.down += 1

    # -- branches --------------------------------------------------------

    def _kickoff(self, dfn: D) -> None:
        kick = self._randint(45, 75)
        self.yards = kick
        landing = self.loc + kick
        self.is_kickoff = False
        self._first_and_ten()
        self._clock(KICK_SECONDS)
        if landing >= MAX_YARDLINE:
            self._say("Kickoff - Touchback.")
            self.loc = TOUCHBACK_YARD
            self.possession_change = True
            return

        ret = self._randint(10, 25)
        risk = self.era.rules.fumble_rate * 1.5
        if dfn == D.RETURN_SAFE:
            ret -= 5
            risk = 0.0
        elif dfn == D.RETURN_AGGRESSIVE:
            ret += 10
            risk *= 3
            if self._roll(0.05):
                ret += self._randint(20, 60)

        spot = landing - ret
        if spot <= 0:
            self._say(f"Kickoff of {kick} yards. Returned all the way for a TOUCHDOWN!")
            self.possession_change = True
            self._award(other_side(self.offense), self.era.scoring.td, ScoreType.TD)
            self._set_up_point_after()
            return
        if risk and self._roll(risk):
            self._say(f"Kickoff of {kick} yards. FUMBLE on the return! Kicking team recovers.")
            self.turnover = True
            self.loc = spot
            return

        self.possession_change = True
        self._say(f"Kickoff of {kick} yards. Returned {ret} yards.")
        self.loc = MAX_YARDLINE - spot

    def _extra_point(self, dfn: D) -> None:
        chance = self.era.rules.xp_accuracy
        blocked = dfn == D.FG_BLOCK and self._roll(0.05)
        if blocked:
            self._say("Extra point BLOCKED!")
        elif self._roll(chance):
            self._say("Extra point is GOOD.")
            self._award(self.offense, self.era.scoring.xp, ScoreType.XP)
        else:
            self._say("Extra point is NO GOOD.")
        self._set_up_kickoff(self.era.rules.kickoff_line)

    def _two_point(self, dfn: D) -> None:
        if self._roll(0.5):
            good = self._randint(1, 100) + (-20 if dfn == D.GOAL_LINE else 0) > 40
            attempt = "Two-point try on the ground"
        else:
            good = self._randint(1, 100) + (-20 if dfn == D.PASS_DEFENSE else 0) > 45
            attempt = "Two-point try through the air"
        if good:
            self._say(f"{attempt} is GOOD!")
            self._award(self.offense, TWO_POINT_VALUE, ScoreType.TWO_PT)
        else:
            self._say(f"{attempt} fails.")
        self._set_up_kickoff(self.era.rules.kickoff_line)

    def _waste(self, dfn: D) -> None:
        self._say("Ball carrier dives to center the ball away from the sideline.")
        self._next_down()
        self._clock(RUN_SECONDS)

    def _punt(self, dfn: D) -> None:
        dist = self._randint(30, 50)
        self.yards = dist
        self._say(f"Punt of {dist} yards.")
        self.loc = MAX_YARDLINE - (self.loc + dist)
        if self.loc < 0:
            self._say("Touchback.")
            self.loc = TOUCHBACK_YARD
        self.possession_change = True
        self._first_and_ten()
        self._clock(KICK_SECONDS)

    def _field_goal(self, dfn: D) -> None:
        to_goal = MAX_YARDLINE - self.loc
        chance = self.era.rules.fg_accuracy - (to_goal - 20) * 0.01
        if dfn == D.FG_BLOCK and self._roll(0.10):
            chance = 0.0
            self._say("Kick is BLOCKED!")
        kick_len = to_goal + FG_SNAP_YARDS
        if chance > 0 and self._roll(chance):
            self._say(f"Field Goal from {kick_len} yards is GOOD!")
            self._award(self.offense, self.era.scoring.fg, ScoreType.FG)
            self._set_up_kickoff(self.era.rules.kickoff_line)
        else:
            self._say(f"Field Goal from {kick_len} yards is NO GOOD.")
            self.possession_change = True
            self.loc = MAX_YARDLINE - self.loc
            self._first_and_ten()
        self._clock(STOPPED_CLOCK_SECONDS)

    def _snap_outcome(self, play: P, dfn: D) -> Tuple[str, int, str]:
        rules = self.era.rules
        mods = modifiers_for(dfn)
        fumble = rules.fumble_rate * (1.5 if play == P.LATERAL else 1.0)
        if play != P.PASS and self._roll(fumble):
            return TURNOVER, 0, "FUMBLE! Turnover."
        if play == P.PASS and self._roll(rules.interception_rate):
            return TURNOVER, 0, "INTERCEPTED!"
        if play == P.PASS and self.s.era == EraId.GENESIS and self._roll(GENESIS_INCOMPLETION):
            if rules.incompletion_penalty:
                return GAIN, INCOMPLETION_PENALTY_YARDS, "Incomplete pass! 15 yard penalty."
            return INCOMPLETE, 0, "Incomplete pass."

        if play == P.RUN:
            yards = self._randint(-2, 12) - mods.run_yards
            if self._roll(0.05 + mods.big_play):
                yards += self._randint(10, 40)
            return GAIN, yards, f"Run for {yards} yards."

        if play == P.LATERAL:
            u = self.rng.random()
            if u < 0.25:
                yards = self._randint(-7, -2) - mods.run_yards
                return GAIN, yards, f"Toss play stuffed for {yards} yards."
            if u < 0.40:
                yards = self._randint(-1, 2) - mods.run_yards
                return GAIN, yards, f"Lateral goes for {yards} yards."
            yards = self._randint(5, 20)
            if self._roll(0.15 + mods.big_play):
                yards += self._randint(20, 50)
            yards -= mods.run_yards
            return GAIN, yards, f"Toss to the outside for {yards} yards."

        if self._roll(BASE_COMPLETION - mods.pass_mod):
            yards = self._randint(5, 20)
            if self._roll(0.10 + mods.big_play):
                yards += self._randint(20, 60)
            return GAIN, yards, f"Pass complete for {yards} yards."
        return INCOMPLETE, 0, "Pass incomplete."

    def _snap(self, play: P, dfn: D) -> None:
        if play == P.PASS and not self.era.rules.pass_legal and self._roll(ILLEGAL_PASS_FLAG):
            self._say("Illegal Forward Pass! Penalty.")
            self._move(ILLEGAL_PASS_YARDS)
            self._next_down()
            self.play_time = ILLEGAL_PASS_SECONDS
            return

        sack = modifiers_for(dfn).sack_chance
        if play == P.PASS and sack > 0 and self._roll(sack):
            loss = self._randint(-8, -1)
            self._say(f"SACKED for {loss} yards.")
            self._move(loss)
            self._next_down()
            self._clock(PASS_SECONDS)
            return

        kind, yards, text = self._snap_outcome(play, dfn)
        self._say(text)
        if kind == TURNOVER:
            self.turnover = True
            self.possession_change = True
            self.loc = MAX_YARDLINE - (self.loc + yards)
            self._first_and_ten()
            self._clock(TURNOVER_SECONDS)
            return
        if kind == INCOMPLETE:
            self._next_down()
            self._clock(STOPPED_CLOCK_SECONDS)
            return

        self._move(yards)
        self._clock(PASS_SECONDS if play == P.PASS else RUN_SECONDS)
        if self.loc >= MAX_YARDLINE:
            self._say("TOUCHDOWN!")
            self._award(self.offense, self.era.scoring.td, ScoreType.TD)
            self._set_up_point_after()
            self._clock(STOPPED_CLOCK_SECONDS)
        elif self.distance <= 0:
            self._say("FIRST DOWN!")
            self._first_and_ten()
        else:
            self._next_down()

    def _safety_check(self) -> None:
        if self.possession_change or self.loc > 0:
            return
        self._say("SAFETY!")
        self._award(other_side(self.offense), self.era.scoring.safety, ScoreType.SAFETY)
        # free kick from the 20 by the team that gave it up
        self._set_up_kickoff(SAFETY_KICK_YARD)
        self._clock(STOPPED_CLOCK_SECONDS)

    # -- entry point -----------------------------------------------------

    def resolve(self, play: P, dfn: D) -> Tuple[GameState, PlayResult]:
        branch = {
            P.KICKOFF: self._kickoff,
            P.XP: self._extra_point,
            P.TWO_PT: self._two_point,
            P.WASTE: self._waste,
            P.PUNT: self._punt,
            P.FG: self._field_goal,
        }.get(play, lambda d: self._snap(play, d))
        branch(dfn)
        if play != P.KICKOFF:
            self._safety_check()

        s = self.s
        # tie is judged on the score before this play's points land
        clock = _fsm.run_clock(s, self.play_time, tied=s.home_score == s.away_score)
        if clock.note:
            self._say(clock.note)

        result = PlayResult(
            type=play,
            offense=self.offense,
            description=" ".join(self.clauses),
            time_elapsed=self.play_time,
            yards_gained=self.yards,
            defensive_play=dfn,
            score_change=self.score,
            turnover=self.turnover,
            possession_change=self.possession_change,
        )
        ns = _fsm.apply_outcome(
            s, result, clock=clock, ball_location=self.loc, down=self.down,
            distance=self.distance, is_kickoff=self.is_kickoff,
            is_point_after=self.is_point_after,
        )
        _log.debug("Q%d %s vs %s: %s", s.quarter, play.value, dfn.value, result.description)
        return ns, result


def resolve_play(s: GameState, user_play=None, user_side: Side = "home",
                 rng=None) -> Tuple[GameState, PlayResult]:
    """
    Resolve one play and return ``(new_state, result)``.

    ``s`` is never modified. Callers must not pass a finished game.
    """
    rng = rnd.resolve(rng)
    play, dfn = select_plays(s, user_play, user_side, rng)
    return PlayResolver(s, rng).resolve(play, dfn)
