"""
Centralized enums so play and era names aren't duplicated.
Import from here instead of redefining in multiple modules.
"""
from __future__ import annotations
from enum import Enum
from typing import Literal

Side = Literal["home", "away"]


class EraId(str, Enum):
    GENESIS = "1869_1919"
    IRON_MAN = "1920_1932"
    BREAKOUT = "1933_1949"
    DEAD_BALL = "1950_1977"
    AIR_CORYELL = "1978_1992"
    STRATEGY = "1993_2010"
    SPREAD = "2011_PRES"


class PlayType(str, Enum):
    RUN = "RUN"
    PASS = "PASS"
    LATERAL = "LATERAL"
    WASTE = "WASTE"  # centering the ball
    PUNT = "PUNT"
    FG = "FG"
    XP = "XP"
    TWO_PT = "TWO_PT"
    KICKOFF = "KICKOFF"


class DefensivePlayType(str, Enum):
    STANDARD = "STANDARD"
    RUN_DEFENSE = "RUN_DEFENSE"
    PASS_DEFENSE = "PASS_DEFENSE"
    BLITZ = "BLITZ"
    FG_BLOCK = "FG_BLOCK"
    GOAL_LINE = "GOAL_LINE"
    RETURN_SAFE = "RETURN_SAFE"
    RETURN_AGGRESSIVE = "RETURN_AGGRESSIVE"


class ScoreType(str, Enum):
    TD = "TD"
    FG = "FG"
    SAFETY = "SAFETY"
    XP = "XP"
    TWO_PT = "2PT"


OFFENSE_PLAYS = tuple(PlayType)
DEFENSE_PLAYS = tuple(DefensivePlayType)

SNAP_PLAYS = (PlayType.RUN, PlayType.PASS, PlayType.LATERAL)


def other_side(side: Side) -> Side:
    return "away" if side == "home" else "home"
