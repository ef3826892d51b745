from __future__ import annotations
from dataclasses import dataclass

from chronogrid.vocab import DefensivePlayType as D


@dataclass(frozen=True, slots=True)
class DefenseModifiers:
    run_yards: int = 0        # subtracted from every run/lateral gain
    pass_mod: float = 0.0     # subtracted from the base completion rate
    sack_chance: float = 0.0
    big_play: float = 0.0     # added to breakout / deep-ball chances


NEUTRAL = DefenseModifiers()

_STACKED_BOX = DefenseModifiers(run_yards=3, pass_mod=-0.15, big_play=0.05)

MODIFIERS: dict[D, DefenseModifiers] = {
    D.STANDARD: NEUTRAL,
    D.RUN_DEFENSE: _STACKED_BOX,
    D.GOAL_LINE: _STACKED_BOX,
    D.PASS_DEFENSE: DefenseModifiers(run_yards=-2, pass_mod=0.15, big_play=-0.05),
    D.BLITZ: DefenseModifiers(run_yards=1, sack_chance=0.15, big_play=0.10),
    # masks never offer this on a scrimmage down
    D.FG_BLOCK: DefenseModifiers(run_yards=-5, pass_mod=0.30),
}


def modifiers_for(defense: D | None) -> DefenseModifiers:
    return MODIFIERS.get(defense, NEUTRAL)
