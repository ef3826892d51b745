from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Iterator, Optional, Tuple

import pandas as pd

from chronogrid import rng as rnd
from chronogrid.config import RunConfig, get_era, load_config
from chronogrid.constants import TEAMS
from chronogrid.engine.resolve import resolve_play
from chronogrid.game import initialize_game
from chronogrid.rules.fsm import RulesFSM, allowed
from chronogrid.scoragami import ScoragamiBook
from chronogrid.state import GameState, PlayResult
from chronogrid.vocab import DEFENSE_PLAYS, OFFENSE_PLAYS, EraId, Side

_log = logging.getLogger("chronogrid.sim")
_fsm = RulesFSM()


def random_user_play(s: GameState, user_side: Side, rng):
    """A stand-in human: any play the playbook would offer right now."""
    masks = _fsm.legal_actions(s)
    if s.possession == user_side:
        options = allowed(masks["offense"], OFFENSE_PLAYS)
    else:
        options = allowed(masks["defense"], DEFENSE_PLAYS)
    return options[int(rng.integers(0, len(options)))]


def iter_game(era: EraId, home: str, away: str, *, rng=None, user_side: Side = "home",
              user_strategy: str = "coach") -> Iterator[Tuple[GameState, PlayResult, GameState]]:
    """Auto-play one game, yielding (before, result, after) for every snap."""
    rng = rnd.resolve(rng)
    s = initialize_game(era, home, away)
    while not s.is_game_over:
        user_play = random_user_play(s, user_side, rng) if user_strategy == "random" else None
        ns, result = resolve_play(s, user_play, user_side, rng)
        yield s, result, ns
        s = ns


def play_game(era: EraId, home: str, away: str, **kwargs) -> GameState:
    final = initialize_game(era, home, away)
    for _, _, final in iter_game(era, home, away, **kwargs):
        pass
    return final


def pick_teams(rng) -> Tuple[str, str]:
    h, a = rng.choice(len(TEAMS), size=2, replace=False)
    return TEAMS[int(h)], TEAMS[int(a)]


def play_row(game: int, before: GameState, r: PlayResult, after: GameState) -> dict:
    sc = r.score_change
    return {
        "game": game,
        "era": before.era.value,
        "qtr": before.quarter,
        "secs": before.time_left,
        "offense": r.offense,
        "down": before.down,
        "ydstogo": before.distance,
        "ball_location": before.ball_location,
        "play_type": r.type.value,
        "defense": r.defensive_play.value if r.defensive_play else None,
        "yards": r.yards_gained,
        "score_type": sc.type.value if sc else None,
        "points": sc.points if sc else 0,
        "scoring_team": sc.team if sc else None,
        "turnover": r.turnover,
        "possession_change": r.possession_change,
        "time_elapsed": r.time_elapsed,
        "home_score": after.home_score,
        "away_score": after.away_score,
        "game_over": after.is_game_over,
        "description": r.description,
    }


def simulate(cfg: RunConfig, book: Optional[ScoragamiBook] = None) -> Tuple[pd.DataFrame, ScoragamiBook]:
    rng = rnd.seed(cfg.seed)
    book = ScoragamiBook() if book is None else book
    rows = []
    game = 0
    for era in cfg.eras:
        era_name = get_era(era).name
        for _ in range(cfg.games_per_era):
            home, away = pick_teams(rng)
            final = initialize_game(era, home, away)
            for before, result, final in iter_game(era, home, away, rng=rng,
                                                   user_side=cfg.user_side,
                                                   user_strategy=cfg.user_strategy):
                rows.append(play_row(game, before, result, final))
            fresh = book.record(final.home_score, final.away_score, era_name)
            _log.info("game %d (%s) %s %d - %s %d%s", game, era_name, home, final.home_score,
                      away, final.away_score, "  ** SCORAGAMI **" if fresh else "")
            game += 1
    return pd.DataFrame(rows), book


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--config", type=str, default=None)
    ap.add_argument("--n_games", type=int, default=None, help="games per era")
    ap.add_argument("--era", action="append", choices=[e.value for e in EraId], default=None)
    ap.add_argument("--seed", type=int, default=None)
    ap.add_argument("--user_side", choices=["home", "away"], default=None)
    ap.add_argument("--user_strategy", choices=["coach", "random"], default=None)
    ap.add_argument("--out", type=str, default=None)
    ap.add_argument("--scoragami", type=str, default=None)
    ap.add_argument("--log-level", default="WARNING")
    args = ap.parse_args()

    logging.basicConfig(level=args.log_level.upper(), format="%(name)s %(levelname)s %(message)s")

    cfg = load_config(args.config) if args.config else RunConfig()
    overrides = {
        "games_per_era": args.n_games,
        "eras": [EraId(e) for e in args.era] if args.era else None,
        "seed": args.seed,
        "user_side": args.user_side,
        "user_strategy": args.user_strategy,
        "out": args.out,
        "scoragami": args.scoragami,
    }
    cfg = RunConfig.model_validate({**cfg.model_dump(), **{k: v for k, v in overrides.items() if v is not None}})

    book = ScoragamiBook.load(cfg.scoragami)
    before = len(book)
    plays, book = simulate(cfg, book)

    Path(cfg.out).parent.mkdir(parents=True, exist_ok=True)
    plays.to_parquet(cfg.out, index=False)
    book.save(cfg.scoragami)
    n_games = int(plays["game"].nunique()) if len(plays) else 0
    print(f"Simulated {n_games} games, {len(plays)} plays")
    print(f"Scoragami: {len(book) - before} new, {len(book)} total")
    print("Saved", cfg.out)


if __name__ == "__main__":
    main()
