from __future__ import annotations
import argparse
from pathlib import Path

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from chronogrid.config import get_era
from chronogrid.eval.metrics import (
    final_scores,
    play_type_shares,
    scoring_mix,
    turnover_rate,
    yards_stats,
)
from chronogrid.scoragami import ScoragamiBook
from chronogrid.vocab import SNAP_PLAYS


def plot_points_by_era(finals: pd.DataFrame, out_png: Path) -> None:
    plt.figure(figsize=(7, 4))
    bins = np.arange(0, finals["total"].max() + 8, 4)
    for era, grp in finals.groupby("era"):
        plt.hist(grp["total"], bins=bins, alpha=0.45, density=True, label=get_era(era).name)
    plt.xlabel("combined points"); plt.ylabel("density"); plt.title("Points per game by era")
    plt.legend(fontsize=7)
    plt.tight_layout(); plt.savefig(out_png); plt.close()


def era_table(plays: pd.DataFrame) -> pd.DataFrame:
    finals = final_scores(plays)
    rows = {}
    for era, grp in plays.groupby("era"):
        f = finals[finals["era"] == era]
        snaps = grp.loc[grp["play_type"].isin([p.value for p in SNAP_PLAYS]), "yards"]
        rows[get_era(era).name] = {
            "games": len(f),
            "pts/game": f["total"].mean(),
            "avg margin": f["margin"].mean(),
            "yds/snap": yards_stats(snaps)["mean"],
            "turnover rate": turnover_rate(grp),
            "plays/game": len(grp) / max(len(f), 1),
        }
    return pd.DataFrame(rows).T.round(3)


def write_report(plays: pd.DataFrame, out: Path, book: ScoragamiBook | None = None) -> Path:
    out.parent.mkdir(parents=True, exist_ok=True)
    finals = final_scores(plays)
    points_png = out.parent / "points_by_era.png"
    if len(finals) > 0:
        plot_points_by_era(finals, points_png)

    shares = pd.DataFrame(
        {get_era(era).name: play_type_shares(grp) for era, grp in plays.groupby("era")}
    ).round(3)

    with open(out, "w") as f:
        f.write("# Era Simulation Report\n\n")
        f.write(f"- Games: **{len(finals):,}**, plays: **{len(plays):,}**\n\n")

        f.write("## By era\n\n")
        f.write(era_table(plays).to_markdown() + "\n\n")

        f.write("## Play-type distribution\n\n")
        f.write(shares.to_markdown() + "\n\n")

        f.write("## Scoring mix (share of points)\n\n")
        f.write(scoring_mix(plays).round(3).to_frame("share").to_markdown() + "\n\n")

        if points_png.exists():
            f.write("## Points per game\n\n")
            f.write(f"![Points per game]({points_png.name})\n\n")

        if book is not None and len(book) > 0:
            f.write("## Scoragami\n\n")
            f.write(f"{len(book)} distinct final scores discovered.\n\n")
            f.write(book.to_frame().drop(columns=["first_discovered"]).to_markdown(index=False) + "\n\n")
    return out


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--sims", required=True)
    ap.add_argument("--scoragami", default=None)
    ap.add_argument("--out", default="runs/report.md")
    args = ap.parse_args()

    plays = pd.read_parquet(args.sims)
    book = ScoragamiBook.load(args.scoragami) if args.scoragami else None
    out = write_report(plays, Path(args.out), book)
    print("Wrote", out)


if __name__ == "__main__":
    main()
