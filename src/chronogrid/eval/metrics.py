from __future__ import annotations
import numpy as np
import pandas as pd

from chronogrid.vocab import SNAP_PLAYS, PlayType, ScoreType

PT_ORDER = [p.value for p in PlayType]
SCORE_ORDER = [s.value for s in ScoreType]


def play_type_shares(plays: pd.DataFrame) -> pd.Series:
    """Share of snaps by play type, in vocabulary order (missing types -> 0)."""
    return plays["play_type"].value_counts(normalize=True).reindex(PT_ORDER).fillna(0.0)


def final_scores(plays: pd.DataFrame) -> pd.DataFrame:
    """One row per game: era and the score after its last play."""
    last = plays.groupby("game", sort=True).tail(1)
    out = last[["game", "era", "home_score", "away_score"]].reset_index(drop=True)
    out["total"] = out["home_score"] + out["away_score"]
    out["margin"] = (out["home_score"] - out["away_score"]).abs()
    return out


def points_per_game(plays: pd.DataFrame) -> pd.Series:
    """Mean combined points per game, by era."""
    return final_scores(plays).groupby("era")["total"].mean()


def scoring_mix(plays: pd.DataFrame) -> pd.Series:
    """Points by scoring type as a share of all points."""
    pts = plays.loc[plays["score_type"].notna()].groupby("score_type")["points"].sum()
    total = pts.sum()
    if total == 0:
        return pd.Series(0.0, index=SCORE_ORDER)
    return (pts / total).reindex(SCORE_ORDER).fillna(0.0)


def yards_stats(x: pd.Series) -> dict:
    x = x.dropna()
    if len(x) == 0:
        return dict(n=0, mean=np.nan, std=np.nan, p10=np.nan, p50=np.nan, p90=np.nan)
    return dict(
        n=len(x),
        mean=float(x.mean()),
        std=float(x.std()),
        p10=float(x.quantile(0.1)),
        p50=float(x.quantile(0.5)),
        p90=float(x.quantile(0.9)),
    )


def turnover_rate(plays: pd.DataFrame) -> float:
    snaps = plays[plays["play_type"].isin([p.value for p in SNAP_PLAYS])]
    if len(snaps) == 0:
        return float("nan")
    return float(snaps["turnover"].mean())
